"""
cardmaster/cards.py — Card label helpers.

Labels come from the recognition oracle as "<rank><suit>", e.g. "AS" or
"10H".  A label without a recognised suit letter (e.g. "6") is read as a
bare rank.
"""

import config.settings as cfg

_RANK_NAMES = {"A": "Ace", "J": "Jack", "Q": "Queen", "K": "King"}
_SUIT_NAMES = {"S": "Spades", "H": "Hearts", "D": "Diamonds", "C": "Clubs"}


def _normalise(label: str) -> str:
    return label.strip().upper()


def card_suit(label: str) -> str:
    """Suit letter of a label, or "" when the label carries no suit."""
    label = _normalise(label)
    if len(label) > 1 and label[-1] in cfg.SUITS:
        return label[-1]
    return ""


def card_rank(label: str) -> str:
    """Rank part of a label: 'AS' → 'A', '10h' → '10', '6' → '6'."""
    label = _normalise(label)
    return label[:-1] if card_suit(label) else label


def card_identity(label: str) -> tuple[str, str]:
    """(rank, suit) pair used to collapse duplicate detections."""
    return card_rank(label), card_suit(label)


def card_value(label: str) -> int:
    """
    Point value handed to the recommendation oracle.

    Ace counts 1 (the oracle decides when it plays as 11), court cards 10,
    numeric ranks their face value.  Unknown ranks yield
    ``cfg.UNKNOWN_CARD_VALUE`` instead of raising.
    """
    rank = card_rank(label)
    if rank == "A":
        return 1
    if rank in ("J", "Q", "K"):
        return 10
    if rank in cfg.RANKS:
        return int(rank)
    print(f"[cards] Unknown rank in label {label!r}, "
          f"using value {cfg.UNKNOWN_CARD_VALUE}", flush=True)
    return cfg.UNKNOWN_CARD_VALUE


def card_full_name(label: str) -> str:
    """'QD' → 'Queen of Diamonds'; a bare rank gives just the rank name."""
    rank = card_rank(label)
    suit = card_suit(label)
    rank_name = _RANK_NAMES.get(rank, rank)
    if not suit:
        return rank_name
    return f"{rank_name} of {_SUIT_NAMES[suit]}"
