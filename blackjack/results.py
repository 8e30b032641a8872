"""Round outcomes and the immutable result record kept in history."""

from dataclasses import dataclass
from enum import Enum, auto

from blackjack.hand import BUST_LIMIT, Participant

DEALER_LABEL = "Dealer"
TIE_LABEL = "Tie"


class Outcome(Enum):
    """How a finished round was decided."""

    PLAYER_BUST = auto()
    DEALER_BUST = auto()
    PLAYER_WINS = auto()
    DEALER_WINS = auto()
    PUSH = auto()

    @property
    def player_won(self) -> bool:
        return self in (Outcome.DEALER_BUST, Outcome.PLAYER_WINS)

    @property
    def dealer_won(self) -> bool:
        return self in (Outcome.PLAYER_BUST, Outcome.DEALER_WINS)


def determine_outcome(player_score: int, dealer_score: int) -> Outcome:
    """
    Compare final scores.

    Evaluated in order, first match wins: a player bust loses regardless
    of the dealer's hand, then a dealer bust, then the higher score.
    Equal scores are a push, including natural against natural.
    """
    if player_score > BUST_LIMIT:
        return Outcome.PLAYER_BUST
    if dealer_score > BUST_LIMIT:
        return Outcome.DEALER_BUST
    if player_score > dealer_score:
        return Outcome.PLAYER_WINS
    if dealer_score > player_score:
        return Outcome.DEALER_WINS
    return Outcome.PUSH


@dataclass(frozen=True)
class RoundResult:
    """Snapshot of one completed round."""

    winner: str
    player_score: int
    dealer_score: int
    player_hand: tuple[str, ...]
    dealer_hand: tuple[str, ...]

    @classmethod
    def from_participants(cls, player: Participant, dealer: Participant) -> "RoundResult":
        """Build a result labelling the winner by name."""
        outcome = determine_outcome(player.score, dealer.score)
        if outcome.player_won:
            winner = player.name
        elif outcome.dealer_won:
            winner = DEALER_LABEL
        else:
            winner = TIE_LABEL

        return cls(
            winner=winner,
            player_score=player.score,
            dealer_score=dealer.score,
            player_hand=tuple(player.hand.display()),
            dealer_hand=tuple(dealer.hand.display()),
        )

    @property
    def is_tie(self) -> bool:
        return self.winner == TIE_LABEL

    def summary(self) -> str:
        """One-line description for history listings."""
        if self.is_tie:
            return f"Tie ({self.player_score} - {self.dealer_score})"
        return f"{self.winner} won ({self.player_score} - {self.dealer_score})"

    def details(self) -> str:
        """Multi-line description of both hands."""
        return "\n".join(
            [
                f"Winner: {self.winner}",
                f"Player Score: {self.player_score}",
                f"Player Hand: {', '.join(self.player_hand)}",
                f"Dealer Score: {self.dealer_score}",
                f"Dealer Hand: {', '.join(self.dealer_hand)}",
            ]
        )

    def __str__(self) -> str:
        return self.summary()
