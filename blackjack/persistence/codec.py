"""Encode and decode complete engine state as signed snapshot bytes."""

import logging
from random import Random

from itsdangerous import BadSignature, Signer
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from blackjack.cards import Deck
from blackjack.errors import SnapshotDecodeError, SnapshotEncodeError
from blackjack.game.engine import BlackjackGame
from blackjack.game.state import GameState
from blackjack.persistence.schemas import CardModel, GameSnapshot, RoundResultModel
from config import config

logger = logging.getLogger(__name__)

SIGNER_SALT = "blackjack.gamestate"


class SnapshotSigner:
    """Sign and verify snapshot payloads using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._signer = Signer(secret_key or config.persistence.secret_key, salt=SIGNER_SALT)

    def sign(self, payload: bytes) -> bytes:
        return self._signer.sign(payload)

    def unsign(self, data: bytes) -> bytes:
        """
        Verify and strip the signature.

        Raises:
            SnapshotDecodeError: If the signature is missing or does not match
        """
        try:
            return self._signer.unsign(data)
        except BadSignature as exc:
            raise SnapshotDecodeError("Snapshot signature does not match") from exc


def snapshot_game(game: BlackjackGame) -> GameSnapshot:
    """Capture the full engine state."""
    return GameSnapshot(
        player_name=game.player.name,
        number_of_decks=game.number_of_decks,
        game_over=game.is_game_over,
        player_turn=game.is_player_turn,
        deck=[CardModel.from_card(c) for c in game.deck],
        player_hand=[CardModel.from_card(c) for c in game.player.hand],
        dealer_hand=[CardModel.from_card(c) for c in game.dealer.hand],
        history=[RoundResultModel.from_result(r) for r in game.results_history],
    )


def restore_game(snapshot: GameSnapshot, rng: Random | None = None) -> BlackjackGame:
    """Build a new engine equal to the snapshot."""
    game = BlackjackGame(
        snapshot.player_name,
        num_decks=snapshot.number_of_decks,
        rng=rng,
    )

    # Restore state machine state without firing transition callbacks
    state = GameState.from_flags(snapshot.game_over, snapshot.player_turn)
    game._machine_state = state.name.lower()

    game.deck = Deck(
        num_decks=snapshot.number_of_decks,
        cards=[c.to_card() for c in snapshot.deck],
    )
    for card in snapshot.player_hand:
        game.player.add_card(card.to_card())
    for card in snapshot.dealer_hand:
        game.dealer.add_card(card.to_card())

    game._history.extend(r.to_result() for r in snapshot.history)
    return game


def encode_game(game: BlackjackGame, signer: SnapshotSigner | None = None) -> bytes:
    """
    Serialize a game to signed snapshot bytes.

    Raises:
        SnapshotEncodeError: If the game state does not fit the snapshot schema
    """
    signer = signer or SnapshotSigner()
    try:
        payload = snapshot_game(game).model_dump_json().encode("utf-8")
    except (ValidationError, PydanticSerializationError, UnicodeEncodeError) as exc:
        logger.warning("Could not snapshot game for %r: %s", game.player.name, exc)
        raise SnapshotEncodeError(f"Game cannot be saved: {exc}") from exc
    return signer.sign(payload)


def decode_game(
    data: bytes,
    signer: SnapshotSigner | None = None,
    rng: Random | None = None,
) -> BlackjackGame:
    """
    Rebuild a game from snapshot bytes.

    Raises:
        SnapshotDecodeError: If the payload is corrupt, unsigned, or not a snapshot
    """
    signer = signer or SnapshotSigner()
    payload = signer.unsign(data)
    try:
        snapshot = GameSnapshot.model_validate_json(payload)
    except ValidationError as exc:
        logger.warning("Rejected snapshot with %d validation error(s)", exc.error_count())
        raise SnapshotDecodeError(f"Invalid snapshot: {exc}") from exc
    return restore_game(snapshot, rng=rng)
