"""Dealer drawing rule."""

from dataclasses import dataclass

from blackjack.hand import Hand
from config import config


@dataclass(frozen=True)
class DealerPolicy:
    """Mandatory-hit rule: the dealer draws below the stand threshold.

    There is no soft-17 distinction and no peeking for a natural.
    """

    stand_threshold: int = config.game.dealer_stands_on

    def should_hit(self, hand: Hand) -> bool:
        """Check if the dealer must take another card."""
        return hand.value < self.stand_threshold


DEFAULT_POLICY = DealerPolicy()


def should_hit(hand: Hand) -> bool:
    """Apply the default stand-on-17 rule to a hand."""
    return DEFAULT_POLICY.should_hit(hand)
