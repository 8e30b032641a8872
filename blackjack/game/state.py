"""Game state enumeration."""

from enum import Enum, auto


class GameState(Enum):
    """
    Round state machine states.

    Flow: NOT_STARTED → PLAYER_TURN → DEALER_TURN → ROUND_OVER

    DEALER_TURN is never observable from outside the engine: the dealer's
    whole turn runs inside a single stand call.
    """

    # Engine created, no cards dealt yet
    NOT_STARTED = auto()

    # Player may hit or stand
    PLAYER_TURN = auto()

    # Dealer draws to its stand threshold
    DEALER_TURN = auto()

    # Result decided and recorded
    ROUND_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def is_game_over(self) -> bool:
        return self is GameState.ROUND_OVER

    @property
    def is_player_turn(self) -> bool:
        return self is GameState.PLAYER_TURN

    @classmethod
    def from_flags(cls, game_over: bool, player_turn: bool) -> "GameState":
        """
        Map the public flag pair back to a state.

        Raises:
            ValueError: If both flags are set
        """
        if game_over and player_turn:
            raise ValueError("A finished round cannot be on the player's turn")
        if game_over:
            return cls.ROUND_OVER
        if player_turn:
            return cls.PLAYER_TURN
        return cls.NOT_STARTED
