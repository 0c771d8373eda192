"""Tests for card label helpers."""

import pytest

from cardmaster.cards import card_full_name, card_identity, card_rank, card_suit, card_value


class TestLabelParsing:
    """Tests for splitting labels into rank and suit."""

    def test_two_character_label(self):
        assert card_rank("AS") == "A"
        assert card_suit("AS") == "S"

    def test_ten(self):
        assert card_rank("10H") == "10"
        assert card_suit("10H") == "H"

    def test_lowercase_label(self):
        """YOLO-style lowercase labels read the same as hosted ones."""
        assert card_identity("10h") == ("10", "H")
        assert card_identity("kc") == card_identity("KC")

    def test_bare_rank(self):
        assert card_rank("6") == "6"
        assert card_suit("6") == ""
        assert card_rank("10") == "10"
        assert card_suit("10") == ""


class TestCardValue:
    """Tests for the point values handed to the recommendation oracle."""

    def test_ace_is_one(self):
        assert card_value("AS") == 1

    @pytest.mark.parametrize("rank", ["2", "3", "4", "5", "6", "7", "8", "9"])
    def test_numeric_ranks(self, rank):
        assert card_value(f"{rank}D") == int(rank)

    @pytest.mark.parametrize("label", ["10C", "JH", "QD", "KS"])
    def test_ten_valued(self, label):
        assert card_value(label) == 10

    def test_bare_rank_value(self):
        assert card_value("6") == 6

    @pytest.mark.parametrize("label", ["ZS", "", "1X", "JOKER"])
    def test_unknown_rank_falls_back(self, label):
        """Unknown ranks never raise."""
        assert card_value(label) == 0


class TestCardFullName:
    """Tests for display names."""

    def test_names(self):
        assert card_full_name("AS") == "Ace of Spades"
        assert card_full_name("10H") == "10 of Hearts"
        assert card_full_name("QD") == "Queen of Diamonds"
        assert card_full_name("JC") == "Jack of Clubs"
        assert card_full_name("KH") == "King of Hearts"
        assert card_full_name("7d") == "7 of Diamonds"

    def test_bare_rank(self):
        assert card_full_name("6") == "6"
        assert card_full_name("A") == "Ace"

    def test_unknown_rank_is_echoed(self):
        assert card_full_name("ZS") == "Z of Spades"

    @pytest.mark.parametrize("label", ["AS", "10H", "6", "ZS"])
    def test_repeatable(self, label):
        assert card_full_name(label) == card_full_name(label)
