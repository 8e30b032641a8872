"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field

DEFAULT_SAVE_FILE = os.path.join("saves", "gamestate.dat")
DEFAULT_SECRET_KEY = "blackjack-table-save"

# The table only ever deals from one or two standard decks
SUPPORTED_DECKS = (1, 2)


@dataclass(frozen=True)
class GameConfig:
    """Table rules that are fixed for the session."""

    num_decks: int = field(default_factory=lambda: int(os.getenv("NUM_DECKS", "1")))
    allowed_decks: tuple[int, ...] = SUPPORTED_DECKS
    history_size: int = 10
    dealer_stands_on: int = 17
    natural: int = 21

    def __post_init__(self) -> None:
        """Validate deck and history configuration."""
        if not self.allowed_decks:
            raise ValueError("allowed_decks must not be empty")
        if not set(self.allowed_decks) <= set(SUPPORTED_DECKS):
            raise ValueError(
                f"allowed_decks must be drawn from {SUPPORTED_DECKS}, got {self.allowed_decks}"
            )
        if self.num_decks not in self.allowed_decks:
            raise ValueError(
                f"num_decks must be one of {self.allowed_decks}, got {self.num_decks}"
            )
        if self.history_size < 1:
            raise ValueError("history_size must be at least 1")

    @property
    def max_cards(self) -> int:
        """Return the size of the largest deck the table can build."""
        return 52 * max(self.allowed_decks)


@dataclass(frozen=True)
class PersistenceConfig:
    """Save file configuration."""

    save_file: str = field(
        default_factory=lambda: os.getenv("SAVE_FILE", DEFAULT_SAVE_FILE)
    )
    # Must be stable across processes or older saves stop verifying
    secret_key: str = field(
        default_factory=lambda: os.getenv("SAVE_SECRET_KEY", DEFAULT_SECRET_KEY)
    )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper())

    game: GameConfig = field(default_factory=GameConfig)
    persistence: PersistenceConfig = field(default_factory=PersistenceConfig)

    @property
    def effective_log_level(self) -> int:
        """Resolve the logging level, forcing DEBUG in debug mode."""
        if self.debug:
            return logging.DEBUG
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.WARNING


def configure_logging(app_config: AppConfig | None = None) -> None:
    """Configure the root logger from the application configuration."""
    app_config = app_config or config
    logging.basicConfig(
        level=app_config.effective_log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("transitions").setLevel(logging.WARNING)


# Global configuration instance
config = AppConfig()
