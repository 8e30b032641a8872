"""Snapshot encoding and save file storage."""

from blackjack.persistence.schemas import GameSnapshot, SNAPSHOT_VERSION
from blackjack.persistence.codec import (
    SnapshotSigner,
    decode_game,
    encode_game,
    restore_game,
    snapshot_game,
)
from blackjack.persistence.store import SaveManager

__all__ = [
    "GameSnapshot",
    "SNAPSHOT_VERSION",
    "SnapshotSigner",
    "decode_game",
    "encode_game",
    "restore_game",
    "snapshot_game",
    "SaveManager",
]
