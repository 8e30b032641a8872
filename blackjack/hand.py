"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from blackjack.cards import Card

BUST_LIMIT = 21


def score(cards: Iterable[Card]) -> int:
    """
    Calculate the best total for a set of cards.

    Aces count 11 and are demoted to 1 one at a time while the total is
    over 21. Returns the highest total that doesn't bust, or the lowest
    bust total when every ace has been demoted.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        total += card.value

    while total > BUST_LIMIT and aces > 0:
        total -= 10
        aces -= 1

    return total


@dataclass
class Hand:
    """An ordered blackjack hand with value calculation."""

    cards: list[Card] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def clear(self) -> None:
        """Remove all cards from the hand."""
        self.cards.clear()

    @property
    def value(self) -> int:
        """Return the best hand value."""
        return score(self.cards)

    @property
    def is_soft(self) -> bool:
        """
        Check if the hand is soft (has an ace counted as 11).

        A hand is soft if it contains an ace that can be counted as 11
        without busting.
        """
        if not any(card.is_ace for card in self.cards):
            return False

        total_hard = sum(1 if card.is_ace else card.value for card in self.cards)
        return total_hard + 10 <= BUST_LIMIT

    @property
    def is_hard(self) -> bool:
        """Check if the hand is hard (not soft)."""
        return not self.is_soft

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural (21 with 2 cards)."""
        return len(self.cards) == 2 and self.value == BUST_LIMIT

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > BUST_LIMIT

    def display(self) -> list[str]:
        """Return the cards as display strings, in deal order."""
        return [str(card) for card in self.cards]

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(self.display())
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


@dataclass
class Participant:
    """A named seat at the table holding one hand."""

    name: str
    hand: Hand = field(default_factory=Hand)

    @property
    def cards(self) -> list[Card]:
        """Return a copy of the held cards, in deal order."""
        return list(self.hand.cards)

    @property
    def score(self) -> int:
        """Return the derived hand score."""
        return self.hand.value

    def add_card(self, card: Card) -> None:
        """Add a card to this participant's hand."""
        self.hand.add_card(card)

    def clear_hand(self) -> None:
        """Discard the hand for a new round."""
        self.hand.clear()

    def __str__(self) -> str:
        return f"{self.name}: {self.hand}"
