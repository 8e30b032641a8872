"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterable, Iterator

from blackjack.errors import DeckExhaustedError


class Suit(Enum):
    """Card suits. Display identity only, no effect on scoring."""

    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def display_name(self) -> str:
        """Return the suit name, e.g. 'Hearts'."""
        return self.name.title()


class Rank(Enum):
    """Card ranks with blackjack values."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the base point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        """Check if this rank has a value of 10."""
        return self.blackjack_value == 10


_RANKS_BY_SYMBOL = {str(rank): rank for rank in Rank}
_RANKS_BY_SYMBOL["T"] = Rank.TEN

_SUITS_BY_SYMBOL = {str(suit): suit for suit in Suit}
_SUITS_BY_SYMBOL.update({suit.name[0]: suit for suit in Suit})


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the base point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @property
    def is_ten_value(self) -> bool:
        """Check if this card has a value of 10."""
        return self.rank.is_ten_value

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str not in _RANKS_BY_SYMBOL:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUITS_BY_SYMBOL:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANKS_BY_SYMBOL[rank_str], _SUITS_BY_SYMBOL[suit_str])


def standard_cards(num_decks: int = 1) -> list[Card]:
    """Return num_decks unshuffled 52-card decks."""
    return [
        Card(rank, suit)
        for _ in range(num_decks)
        for suit in Suit
        for rank in Rank
    ]


class Deck:
    """Cards from one or more standard decks, dealt by removal."""

    def __init__(
        self,
        num_decks: int = 1,
        rng: Random | None = None,
        cards: Iterable[Card] | None = None,
    ) -> None:
        """
        Initialize a deck.

        Args:
            num_decks: Number of 52-card decks combined
            rng: Random number generator for shuffling
            cards: Exact cards in deal order; skips building and shuffling
        """
        if num_decks < 1:
            raise ValueError("Deck must have at least 1 deck")

        self._num_decks = num_decks
        self._rng = rng or Random()
        # Top of the deck is the end of the list
        self._cards: list[Card] = []

        if cards is None:
            self.shuffle()
        else:
            self._cards = list(cards)[::-1]

    def shuffle(self) -> None:
        """Rebuild the full deck and shuffle it."""
        self._cards = standard_cards(self._num_decks)
        self._rng.shuffle(self._cards)

    def deal(self) -> Card:
        """Remove and return the next card."""
        if not self._cards:
            raise DeckExhaustedError("Cannot deal from an exhausted deck")
        return self._cards.pop()

    def size(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def num_decks(self) -> int:
        """Return the number of decks this deck was built from."""
        return self._num_decks

    @property
    def total_cards(self) -> int:
        """Return the number of cards in a full deck."""
        return self._num_decks * 52

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        """Iterate remaining cards in deal order."""
        return reversed(self._cards)
