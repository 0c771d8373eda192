"""
cardmaster/state.py — Detection records, pipeline state and its transitions.

``PipelineState`` is immutable; every change goes through one of the
functions below and produces a new value, so readers always hold a
consistent snapshot.
"""

from dataclasses import dataclass, replace
from typing import Optional

from cardmaster.cards import card_full_name, card_identity, card_rank, card_suit, card_value


@dataclass(frozen=True)
class DetectedCard:
    """One card reported by the recognition oracle for the current frame."""

    label: str
    y: float
    x: float = 0.0
    confidence: float = 1.0

    @property
    def rank(self) -> str:
        return card_rank(self.label)

    @property
    def suit(self) -> str:
        return card_suit(self.label)


@dataclass(frozen=True)
class RoleAssignment:
    """A non-empty frame split into the dealer upcard and the player's hand."""

    dealer_card: str
    player_cards: tuple[str, ...]

    @property
    def player_values(self) -> list[int]:
        return [card_value(c) for c in self.player_cards]


@dataclass(frozen=True)
class PipelineState:
    camera_active: bool = False
    player_cards: tuple[str, ...] = ()
    dealer_card: Optional[str] = None
    detection_empty: bool = False
    recommendation: Optional[str] = None

    @property
    def player_values(self) -> list[int]:
        return [card_value(c) for c in self.player_cards]


def assign_roles(detections: list[DetectedCard]) -> Optional[RoleAssignment]:
    """
    Split a frame's detections into dealer vs. player by vertical position.

    The topmost card (smallest y, ties kept in detection order) is the
    dealer's upcard.  Every other card belongs to the player, collapsed by
    (rank, suit) so the same card seen twice counts once; a second sighting
    of the dealer's card is dropped as well.

    Returns None for an empty frame.
    """
    if not detections:
        return None

    ordered = sorted(detections, key=lambda d: d.y)
    dealer = ordered[0].label
    seen = {card_identity(dealer)}
    player = []
    for det in ordered[1:]:
        ident = card_identity(det.label)
        if ident in seen:
            continue
        seen.add(ident)
        player.append(det.label)

    return RoleAssignment(dealer_card=dealer, player_cards=tuple(player))


def apply_detections(state: PipelineState,
                     assignment: Optional[RoleAssignment]) -> PipelineState:
    """Fold one cycle's role assignment into the state.

    An empty frame only raises ``detection_empty``; the previous hand and
    recommendation stay on screen.
    """
    if assignment is None:
        return replace(state, detection_empty=True)
    return replace(
        state,
        dealer_card=assignment.dealer_card,
        player_cards=assignment.player_cards,
        detection_empty=False,
    )


def with_recommendation(state: PipelineState, action: str) -> PipelineState:
    return replace(state, recommendation=action)


def with_camera(state: PipelineState, active: bool) -> PipelineState:
    return replace(state, camera_active=active)


def state_view(state: PipelineState) -> dict:
    """
    JSON-ready view for the presentation layer.

    Each ``warnings`` entry is True when the last frame had no cards and the
    matching section has nothing to show ("Place cards in view").
    """
    empty = state.detection_empty
    return {
        "camera_active": state.camera_active,
        "player_cards": [card_full_name(c) for c in state.player_cards],
        "dealer_card": card_full_name(state.dealer_card) if state.dealer_card else None,
        "recommendation": state.recommendation,
        "detection_empty": empty,
        "warnings": {
            "player": empty and not state.player_cards,
            "dealer": empty and not state.dealer_card,
            "recommendation": empty and not state.recommendation,
        },
    }
