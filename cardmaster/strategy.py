"""
cardmaster/strategy.py — Basic Strategy recommendation oracle.

Takes the player's card point values (Ace = 1, as produced by
``cards.card_value``) and the dealer's upcard label, and returns the
mathematically optimal play as a human-readable action.
"""

import config.settings as cfg
from cardmaster.cards import card_value
from cardmaster.errors import RecommendationError

# ── Basic Strategy Tables ───────────────────────────────────────────────────
# Each row is indexed by dealer upcard: columns 2 3 4 5 6 7 8 9 10 A.
#
# Actions: "H" = Hit, "S" = Stand, "D" = Double (hit if not allowed),
#          "d" = Double (stand if not allowed), "P" = Split

_HARD = {
    5:  "HHHHHHHHHH",
    6:  "HHHHHHHHHH",
    7:  "HHHHHHHHHH",
    8:  "HHHHHHHHHH",
    9:  "HDDDDHHHHH",
    10: "DDDDDDDDHH",
    11: "DDDDDDDDDD",
    12: "HHSSSHHHHH",
    13: "SSSSSHHHHH",
    14: "SSSSSHHHHH",
    15: "SSSSSHHHHH",
    16: "SSSSSHHHHH",
    17: "SSSSSSSSSS",
    18: "SSSSSSSSSS",
    19: "SSSSSSSSSS",
    20: "SSSSSSSSSS",
    21: "SSSSSSSSSS",
}

# Soft totals (an Ace counted as 11)
_SOFT = {
    12: "HHHHHHHHHH",
    13: "HHHDDHHHHH",
    14: "HHHDDHHHHH",
    15: "HHDDDHHHHH",
    16: "HHDDDHHHHH",
    17: "HDDDDHHHHH",
    18: "dddddSSHHH",
    19: "SSSSdSSSSS",
    20: "SSSSSSSSSS",
    21: "SSSSSSSSSS",
}

# Pair splitting, keyed by the value of one card of the pair (Ace = 1)
_PAIRS = {
    1:  "PPPPPPPPPP",
    2:  "PPPPPPHHHH",
    3:  "PPPPPPHHHH",
    4:  "HHHPPHHHHH",
    5:  "DDDDDDDDHH",
    6:  "PPPPPHHHHH",
    7:  "PPPPPPHHHH",
    8:  "PPPPPPPPPP",
    9:  "PPPPPSPPSS",
    10: "SSSSSSSSSS",
}

# Single-deck departures from the tables above: (hard total, column) → action
_SINGLE_DECK = {
    (9, 0): "D",    # 9 vs 2
    (8, 3): "D",    # 8 vs 5
    (8, 4): "D",    # 8 vs 6
}

_ACTIONS = {"H": "Hit", "S": "Stand", "D": "Double Down", "P": "Split"}

_TEN_COLUMN = 8
_ACE_COLUMN = 9


def _dealer_column(dealer_card: str) -> int:
    value = card_value(dealer_card)
    if value == 1:
        return _ACE_COLUMN
    if 2 <= value <= 10:
        return value - 2
    raise RecommendationError(f"Unrecognised dealer card {dealer_card!r}")


def hand_total(values: list[int]) -> tuple[int, bool]:
    """
    Best blackjack total for a list of point values (Ace = 1).

    Returns (total, is_soft); is_soft means one Ace is counted as 11.
    """
    total = sum(values)
    if 1 in values and total + 10 <= 21:
        return total + 10, True
    return total, False


def recommended_action(player_values, dealer_card: str,
                       deck_count: int = cfg.DECK_COUNT,
                       dealer_checked_blackjack: bool = cfg.DEALER_CHECKED_BLACKJACK,
                       options=None) -> str:
    """
    Look up the Basic Strategy action.

    Parameters
    ----------
    player_values : point values of the player's cards, e.g. [10, 6]
    dealer_card : dealer upcard label, e.g. "KC" or "6"
    deck_count : decks in play; a single deck enables the departures above
    dealer_checked_blackjack : False means no-peek play, so never double
        or split against a ten or an ace
    options : side-bet parameters; accepted and ignored

    Returns
    -------
    One of: "Hit", "Stand", "Double Down", "Split"
    """
    col = _dealer_column(dealer_card)
    values = [v for v in player_values if v > 0]   # drop unknown-rank sentinels

    exposed = not dealer_checked_blackjack and col in (_TEN_COLUMN, _ACE_COLUMN)
    can_double = len(values) == 2 and not exposed

    # ── Pairs ───────────────────────────────────────────────
    if can_double and values[0] == values[1]:
        pair_row = _PAIRS.get(values[0])
        if pair_row and pair_row[col] == "P":
            return _ACTIONS["P"]

    total, soft = hand_total(values)

    # ── Soft and hard totals ────────────────────────────────
    if soft:
        action = _SOFT.get(total, "H" * 10)[col]
    else:
        clamped = max(5, min(21, total))
        action = _HARD[clamped][col]
        if deck_count == 1:
            action = _SINGLE_DECK.get((clamped, col), action)

    # ── Resolve conditional actions ─────────────────────────
    if action == "D" and not can_double:
        action = "H"
    if action == "d":
        action = "D" if can_double else "S"

    return _ACTIONS[action]


class BasicStrategyAdvisor:
    """Recommendation oracle backed by the tables in this module."""

    def recommend(self, player_values, dealer_card: str,
                  deck_count: int = cfg.DECK_COUNT,
                  dealer_checked_blackjack: bool = cfg.DEALER_CHECKED_BLACKJACK,
                  options=None) -> str:
        return recommended_action(player_values, dealer_card, deck_count,
                                  dealer_checked_blackjack, options)
