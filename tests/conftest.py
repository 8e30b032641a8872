"""Pytest fixtures for blackjack table tests."""

import pytest
from random import Random

from blackjack.cards import Card, Deck, Rank, Suit
from blackjack.game import BlackjackGame
from blackjack.hand import Hand
from blackjack.persistence import SaveManager, SnapshotSigner


def make_hand(*ranks: Rank) -> Hand:
    """Build a hand from ranks, cycling through the suits."""
    suits = list(Suit)
    return Hand(cards=[Card(rank, suits[i % 4]) for i, rank in enumerate(ranks)])


def stacked_factory(*ranks: Rank):
    """
    Deck factory dealing the given ranks first, in order.

    The stacked cards sit on top of a full unshuffled remainder so the
    dealer's draw loop can never run the deck dry.
    """

    def factory(num_decks: int) -> Deck:
        suits = list(Suit)
        top = [Card(rank, suits[i % 4]) for i, rank in enumerate(ranks)]
        filler = [Card(Rank.TWO, Suit.CLUBS)] * 20
        return Deck(num_decks=num_decks, cards=top + filler)

    return factory


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled single deck."""
    return Deck(num_decks=1, rng=rng)


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return make_hand(Rank.ACE, Rank.KING)


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return make_hand(Rank.ACE, Rank.SIX)


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return make_hand(Rank.TEN, Rank.SIX)


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return make_hand(Rank.TEN, Rank.SIX, Rank.KING)


@pytest.fixture
def game(rng):
    """A game that has not dealt yet."""
    return BlackjackGame("Alice", num_decks=1, rng=rng)


@pytest.fixture
def signer():
    """Snapshot signer with a fixed test key."""
    return SnapshotSigner("test-secret")


@pytest.fixture
def save_manager(tmp_path, signer):
    """Save manager writing under a temporary directory."""
    return SaveManager(tmp_path / "saves" / "gamestate.dat", signer=signer)


@pytest.fixture(name="make_hand")
def make_hand_fixture():
    """Hand builder, see make_hand."""
    return make_hand


@pytest.fixture(name="stacked_factory")
def stacked_factory_fixture():
    """Stacked deck factory builder, see stacked_factory."""
    return stacked_factory
