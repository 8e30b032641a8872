"""Blackjack game engine with state machine."""

import logging
from collections import deque
from random import Random
from typing import Callable

from transitions import Machine

from blackjack.cards import Card, Deck
from blackjack.dealer import DEFAULT_POLICY, DealerPolicy
from blackjack.game.events import EventEmitter, EventType, GameEvent
from blackjack.game.state import GameState
from blackjack.hand import Participant
from blackjack.results import DEALER_LABEL, Outcome, RoundResult, determine_outcome
from config import config

logger = logging.getLogger(__name__)

DeckFactory = Callable[[int], Deck]

IN_PROGRESS_MESSAGE = "Game in progress"


class BlackjackGame:
    """
    Single-table blackjack engine using a state machine.

    Owns one deck, the player and the dealer, and the bounded result
    history. Turn actions called outside their state are ignored and
    return False, so duplicate or late calls never corrupt a round.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal_round", "source": "*", "dest": "player_turn"},
        {"trigger": "end_player_turn", "source": "player_turn", "dest": "dealer_turn"},
        {
            "trigger": "bust",
            "source": "player_turn",
            "dest": "round_over",
            "after": "_record_result",
        },
        {
            "trigger": "finish_dealer_turn",
            "source": "dealer_turn",
            "dest": "round_over",
            "after": "_record_result",
        },
    ]

    def __init__(
        self,
        player_name: str,
        num_decks: int | None = None,
        rng: Random | None = None,
        deck_factory: DeckFactory | None = None,
        dealer_policy: DealerPolicy | None = None,
    ) -> None:
        """
        Initialize a new game. No cards are dealt until start_new_round.

        Args:
            player_name: Name of the human player
            num_decks: Number of decks per round (uses config default if not provided)
            rng: Random number generator for reproducible games
            deck_factory: Builds the deck for each round from the deck count
            dealer_policy: Dealer drawing rule

        Raises:
            ValueError: If the deck count is not allowed or the name cannot be saved
        """
        num_decks = config.game.num_decks if num_decks is None else num_decks
        self._validate_num_decks(num_decks)
        self._validate_player_name(player_name)

        self._rng = rng or Random()
        self._deck_factory = deck_factory or self._shuffled_deck
        self._num_decks = num_decks
        self.dealer_policy = dealer_policy or DEFAULT_POLICY

        self.deck = self._deck_factory(num_decks)
        self.player = Participant(player_name)
        self.dealer = Participant(DEALER_LABEL)
        self._history: deque[RoundResult] = deque(maxlen=config.game.history_size)
        self.events = EventEmitter()

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="not_started",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    def _shuffled_deck(self, num_decks: int) -> Deck:
        return Deck(num_decks=num_decks, rng=self._rng)

    @staticmethod
    def _validate_num_decks(num_decks: int) -> None:
        if num_decks not in config.game.allowed_decks:
            raise ValueError(
                f"Number of decks must be one of {config.game.allowed_decks}, got {num_decks}"
            )

    @staticmethod
    def _validate_player_name(player_name: str) -> None:
        # Save files are UTF-8; lone surrogates have no encoding
        try:
            player_name.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError(f"Player name is not valid text: {player_name!r}") from exc

    @property
    def state(self) -> GameState:
        """Get current game state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore

    @property
    def is_game_over(self) -> bool:
        """Check if the round has ended."""
        return self.state.is_game_over

    @property
    def is_player_turn(self) -> bool:
        """Check if the player can hit or stand."""
        return self.state.is_player_turn

    @property
    def number_of_decks(self) -> int:
        """Return the deck count used for the next round."""
        return self._num_decks

    def set_number_of_decks(self, num_decks: int) -> None:
        """
        Change the deck count.

        The deck in play is left alone; the change applies from the next
        start_new_round.

        Raises:
            ValueError: If num_decks is not an allowed deck count
        """
        self._validate_num_decks(num_decks)
        self._num_decks = num_decks
        self.events.emit_new(EventType.DECKS_CHANGED, num_decks=num_decks)

    @property
    def results_history(self) -> list[RoundResult]:
        """Return up to the last 10 round results, newest first."""
        return list(self._history)

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def start_new_round(self) -> bool:
        """
        Deal a fresh round.

        Builds a new deck with the current deck count, clears both hands
        and deals player, dealer, player, dealer. A player natural stands
        automatically, so the round is already over when this returns.
        """
        self.deck = self._deck_factory(self._num_decks)
        self.player.clear_hand()
        self.dealer.clear_hand()

        self._deal_to(self.player)
        self._deal_to(self.dealer)
        self._deal_to(self.player)
        self._deal_to(self.dealer)

        self.deal_round()
        logger.debug(
            "Round started for %s with %d deck(s): player %d, dealer %d",
            self.player.name,
            self._num_decks,
            self.player.score,
            self.dealer.score,
        )
        self.events.emit_new(
            EventType.ROUND_STARTED,
            num_decks=self._num_decks,
            player_value=self.player.score,
        )

        if self.player.score == config.game.natural:
            self.events.emit_new(EventType.PLAYER_BLACKJACK)
            self.player_stand()

        return True

    def _deal_to(self, participant: Participant) -> Card:
        """Deal a card to a participant."""
        card = self.deck.deal()
        participant.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card),
            hand="dealer" if participant is self.dealer else "player",
            hand_value=participant.score,
        )
        return card

    def player_hit(self) -> bool:
        """Player hits (takes another card)."""
        if self.state != GameState.PLAYER_TURN:
            logger.debug("Ignoring hit in state %s", self.state)
            return False

        self._deal_to(self.player)
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=self.player.score)

        if self.player.hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=self.player.score)
            self.bust()

        return True

    def player_stand(self) -> bool:
        """Player stands; the dealer then plays out its whole turn."""
        if self.state != GameState.PLAYER_TURN:
            logger.debug("Ignoring stand in state %s", self.state)
            return False

        self.events.emit_new(EventType.PLAYER_STAND, hand_value=self.player.score)
        self.end_player_turn()

        if not self.player.hand.is_busted:
            self._play_dealer()

        self.finish_dealer_turn()
        return True

    def _play_dealer(self) -> None:
        """Dealer hits until reaching the stand threshold."""
        while self.dealer_policy.should_hit(self.dealer.hand):
            self._deal_to(self.dealer)
            self.events.emit_new(EventType.DEALER_HITS, hand_value=self.dealer.score)

        if self.dealer.hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer.score)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer.score)

    def _record_result(self) -> None:
        """Push the finished round to the front of the history."""
        result = RoundResult.from_participants(self.player, self.dealer)
        # deque maxlen drops the oldest entry from the far end
        self._history.appendleft(result)

        logger.info("Round over: %s", result.summary())
        self.events.emit_new(
            EventType.ROUND_ENDED,
            winner=result.winner,
            player_value=result.player_score,
            dealer_value=result.dealer_score,
        )

    @property
    def outcome(self) -> Outcome | None:
        """Return how the round was decided, or None while it is in progress."""
        if not self.is_game_over:
            return None
        return determine_outcome(self.player.score, self.dealer.score)

    def get_game_result(self) -> str:
        """Describe the round result from the player's point of view."""
        outcome = self.outcome
        if outcome is None:
            return IN_PROGRESS_MESSAGE

        messages = {
            Outcome.PLAYER_BUST: f"You lost (You went over: {self.player.score})!",
            Outcome.DEALER_BUST: f"You won (Dealer went over: {self.dealer.score})!",
            Outcome.PLAYER_WINS: "You won!",
            Outcome.DEALER_WINS: "You lost!",
            Outcome.PUSH: "Tie!",
        }
        return messages[outcome]


def new_game(
    player_name: str,
    num_decks: int | None = None,
    rng: Random | None = None,
    **kwargs,
) -> BlackjackGame:
    """Create a game for a new session and deal its first round."""
    game = BlackjackGame(player_name, num_decks=num_decks, rng=rng, **kwargs)
    game.start_new_round()
    return game
