"""Tests for Hand evaluation and the dealer rule."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from blackjack.cards import Card, Rank, Suit
from blackjack.dealer import DealerPolicy, should_hit
from blackjack.hand import Hand, Participant, score

cards = st.builds(Card, st.sampled_from(list(Rank)), st.sampled_from(list(Suit)))


class TestScore:
    """Tests for the score function."""

    def test_empty(self):
        assert score([]) == 0

    @pytest.mark.parametrize(
        "ranks, expected",
        [
            ((Rank.ACE, Rank.SIX), 17),
            ((Rank.ACE, Rank.TEN, Rank.EIGHT), 19),
            ((Rank.ACE, Rank.ACE, Rank.FIVE), 17),
            ((Rank.ACE, Rank.ACE), 12),
            ((Rank.ACE, Rank.ACE, Rank.ACE, Rank.ACE), 14),
            ((Rank.KING, Rank.QUEEN, Rank.TWO), 22),
            ((Rank.ACE, Rank.KING), 21),
        ],
    )
    def test_known_totals(self, make_hand, ranks, expected):
        """Test scores for hand-picked combinations."""
        assert score(make_hand(*ranks).cards) == expected

    @given(st.lists(cards, max_size=12))
    def test_never_above_all_aces_high(self, hand_cards):
        """Test that demoting aces never raises the total."""
        assert score(hand_cards) <= sum(card.value for card in hand_cards)

    @given(st.lists(cards, max_size=12))
    def test_best_total(self, hand_cards):
        """Test the result is the best reachable total."""
        aces = sum(1 for card in hand_cards if card.is_ace)
        high = sum(card.value for card in hand_cards)
        reachable = [high - 10 * demoted for demoted in range(aces + 1)]
        valid = [total for total in reachable if total <= 21]
        expected = max(valid) if valid else min(reachable)
        assert score(hand_cards) == expected

    @given(st.lists(cards, max_size=12))
    def test_order_has_no_effect(self, hand_cards):
        assert score(hand_cards) == score(list(reversed(hand_cards)))


class TestHand:
    """Tests for the Hand class."""

    def test_empty_hand(self, empty_hand):
        """Test empty hand properties."""
        assert len(empty_hand) == 0
        assert empty_hand.value == 0
        assert not empty_hand.is_soft
        assert not empty_hand.is_blackjack
        assert not empty_hand.is_busted

    def test_add_card(self, empty_hand):
        """Test adding cards to hand."""
        empty_hand.add_card(Card(Rank.TEN, Suit.SPADES))
        assert len(empty_hand) == 1
        assert empty_hand.value == 10

    def test_hard_hand_value(self, hard_16_hand):
        """Test hard hand value calculation."""
        assert hard_16_hand.value == 16
        assert hard_16_hand.is_hard

    def test_soft_hand_value(self, soft_17_hand):
        """Test soft hand value calculation."""
        assert soft_17_hand.value == 17
        assert soft_17_hand.is_soft

    def test_blackjack(self, blackjack_hand):
        """Test natural detection."""
        assert blackjack_hand.is_blackjack
        assert blackjack_hand.value == 21

    def test_not_blackjack_three_cards(self, make_hand):
        """Test that 21 with 3+ cards is not a natural."""
        hand = make_hand(Rank.SEVEN, Rank.SEVEN, Rank.SEVEN)
        assert hand.value == 21
        assert not hand.is_blackjack

    def test_bust(self, bust_hand):
        """Test bust detection."""
        assert bust_hand.is_busted
        assert bust_hand.value == 26

    def test_soft_to_hard_transition(self):
        """Test ace switching from 11 to 1."""
        hand = Hand()
        hand.add_card(Card(Rank.ACE, Suit.SPADES))
        assert hand.value == 11
        assert hand.is_soft

        hand.add_card(Card(Rank.FIVE, Suit.HEARTS))
        assert hand.value == 16
        assert hand.is_soft

        hand.add_card(Card(Rank.EIGHT, Suit.CLUBS))
        assert hand.value == 14
        assert hand.is_hard

    def test_clear(self, bust_hand):
        bust_hand.clear()
        assert len(bust_hand) == 0
        assert bust_hand.value == 0

    def test_display_keeps_deal_order(self, make_hand):
        hand = make_hand(Rank.KING, Rank.ACE, Rank.TWO)
        assert hand.display() == ["K♥", "A♦", "2♣"]

    def test_str(self, blackjack_hand, bust_hand, soft_17_hand):
        assert str(blackjack_hand).endswith("(BLACKJACK)")
        assert str(bust_hand).endswith("(BUST)")
        assert str(soft_17_hand).endswith("(soft 17)")


class TestParticipant:
    """Tests for the Participant class."""

    def test_score_is_derived(self):
        player = Participant("Alice")
        assert player.score == 0
        player.add_card(Card(Rank.NINE, Suit.CLUBS))
        player.add_card(Card(Rank.ACE, Suit.CLUBS))
        assert player.score == 20
        assert player.cards == [Card(Rank.NINE, Suit.CLUBS), Card(Rank.ACE, Suit.CLUBS)]

    def test_cards_is_a_copy(self):
        player = Participant("Alice")
        player.add_card(Card(Rank.NINE, Suit.CLUBS))
        player.cards.clear()
        assert len(player.hand) == 1

    def test_clear_hand(self):
        player = Participant("Alice")
        player.add_card(Card(Rank.NINE, Suit.CLUBS))
        player.clear_hand()
        assert player.cards == []


class TestDealerPolicy:
    """Tests for the dealer's mandatory-hit rule."""

    def test_hits_on_sixteen(self, hard_16_hand):
        assert should_hit(hard_16_hand)

    def test_stands_on_seventeen(self, make_hand):
        assert not should_hit(make_hand(Rank.TEN, Rank.SEVEN))

    def test_stands_on_soft_seventeen(self, soft_17_hand):
        """No soft-17 distinction: the dealer stands."""
        assert not should_hit(soft_17_hand)

    def test_stands_on_twenty(self, make_hand):
        assert not should_hit(make_hand(Rank.TEN, Rank.KING))

    def test_hits_empty_hand(self, empty_hand):
        assert should_hit(empty_hand)

    def test_custom_threshold(self, hard_16_hand):
        assert not DealerPolicy(stand_threshold=16).should_hit(hard_16_hand)
