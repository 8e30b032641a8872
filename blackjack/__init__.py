"""Single-table blackjack rules engine - UI-agnostic."""

from blackjack.cards import Card, Deck, Rank, Suit
from blackjack.dealer import DealerPolicy, should_hit
from blackjack.errors import (
    BlackjackError,
    DeckExhaustedError,
    SaveNotFoundError,
    SnapshotDecodeError,
    SnapshotEncodeError,
)
from blackjack.hand import Hand, Participant, score
from blackjack.results import Outcome, RoundResult, determine_outcome

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "DealerPolicy",
    "should_hit",
    "BlackjackError",
    "DeckExhaustedError",
    "SaveNotFoundError",
    "SnapshotDecodeError",
    "SnapshotEncodeError",
    "Hand",
    "Participant",
    "score",
    "Outcome",
    "RoundResult",
    "determine_outcome",
]
