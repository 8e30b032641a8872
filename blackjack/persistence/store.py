"""Save file management for a single game snapshot."""

import logging
from pathlib import Path

from blackjack.errors import SaveNotFoundError
from blackjack.game.engine import BlackjackGame
from blackjack.persistence.codec import SnapshotSigner, decode_game, encode_game
from config import config

logger = logging.getLogger(__name__)


class SaveManager:
    """Saves and loads the whole game to one snapshot file.

    Loading never touches the caller's current game: it either returns a
    new engine or raises, leaving the old one in place.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        signer: SnapshotSigner | None = None,
    ) -> None:
        """Initialize the save manager.

        Args:
            path: Snapshot file. Defaults to config.persistence.save_file
            signer: Snapshot signer. Defaults to one keyed from config
        """
        self.path = Path(path or config.persistence.save_file)
        self._signer = signer or SnapshotSigner()

    @property
    def temp_path(self) -> Path:
        """Return the scratch file used while writing a save."""
        return self.path.with_name(self.path.name + ".tmp")

    def exists(self) -> bool:
        """Check if a saved game is present."""
        return self.path.is_file()

    def save(self, game: BlackjackGame) -> Path:
        """
        Write the game snapshot, creating the save directory if needed.

        The snapshot goes to a sibling temp file first and then replaces
        the save file, so a failed write leaves the previous save intact.

        Raises:
            SnapshotEncodeError: If the game cannot be snapshotted
        """
        data = encode_game(game, signer=self._signer)
        self.path.parent.mkdir(parents=True, exist_ok=True)

        temp_path = self.temp_path
        try:
            temp_path.write_bytes(data)
            temp_path.replace(self.path)
        except OSError:
            logger.warning("Failed to write save file %s", self.path)
            temp_path.unlink(missing_ok=True)
            raise

        logger.info("Saved game for %s to %s", game.player.name, self.path)
        return self.path

    def load(self) -> BlackjackGame:
        """
        Read the game snapshot.

        Raises:
            SaveNotFoundError: If no save file exists
            SnapshotDecodeError: If the file is corrupt or not a snapshot
        """
        try:
            data = self.path.read_bytes()
        except FileNotFoundError as exc:
            raise SaveNotFoundError(f"No saved game at {self.path}") from exc

        game = decode_game(data, signer=self._signer)
        logger.info("Loaded game for %s from %s", game.player.name, self.path)
        return game

    def delete(self) -> bool:
        """Remove the save file. Returns True if one was removed."""
        if not self.exists():
            return False
        self.path.unlink()
        logger.info("Deleted save file %s", self.path)
        return True
