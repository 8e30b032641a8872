"""Pydantic schemas for saved game snapshots."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from blackjack.cards import Card, Rank, Suit
from blackjack.results import RoundResult
from config import config

SNAPSHOT_VERSION = 1


class CardModel(BaseModel):
    """Card as stored in a snapshot."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    rank: Rank
    suit: Suit

    @classmethod
    def from_card(cls, card: Card) -> "CardModel":
        return cls(rank=card.rank, suit=card.suit)

    def to_card(self) -> Card:
        return Card(self.rank, self.suit)


class RoundResultModel(BaseModel):
    """Round result as stored in a snapshot."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    winner: str
    player_score: int = Field(..., ge=0)
    dealer_score: int = Field(..., ge=0)
    player_hand: list[str]
    dealer_hand: list[str]

    @classmethod
    def from_result(cls, result: RoundResult) -> "RoundResultModel":
        return cls(
            winner=result.winner,
            player_score=result.player_score,
            dealer_score=result.dealer_score,
            player_hand=list(result.player_hand),
            dealer_hand=list(result.dealer_hand),
        )

    def to_result(self) -> RoundResult:
        return RoundResult(
            winner=self.winner,
            player_score=self.player_score,
            dealer_score=self.dealer_score,
            player_hand=tuple(self.player_hand),
            dealer_hand=tuple(self.dealer_hand),
        )


class GameSnapshot(BaseModel):
    """
    Complete engine state.

    The on-disk layout is defined here rather than by the engine's
    in-memory attributes, so either can change without the other.
    """

    model_config = ConfigDict(extra="forbid")

    version: Literal[1] = SNAPSHOT_VERSION
    player_name: str
    number_of_decks: int
    game_over: bool
    player_turn: bool
    deck: list[CardModel] = Field(..., max_length=config.game.max_cards)
    player_hand: list[CardModel]
    dealer_hand: list[CardModel]
    history: list[RoundResultModel] = Field(
        default_factory=list, max_length=config.game.history_size
    )

    @field_validator("number_of_decks")
    @classmethod
    def check_number_of_decks(cls, value: int) -> int:
        if value not in config.game.allowed_decks:
            raise ValueError(f"number_of_decks must be one of {config.game.allowed_decks}")
        return value

    @model_validator(mode="after")
    def check_turn_flags(self) -> "GameSnapshot":
        """A finished round cannot still be on the player's turn."""
        if self.game_over and self.player_turn:
            raise ValueError("game_over and player_turn cannot both be set")
        return self
