"""
cardmaster/errors.py — Failures that end a single pipeline cycle.

None of these stop the capture loop; the pipeline logs them and waits for
the next tick.
"""


class PipelineError(Exception):
    """Base class for per-cycle failures."""


class CaptureError(PipelineError):
    """Camera could not be opened or a frame could not be encoded."""


class DetectionError(PipelineError):
    """Recognition oracle failed: transport, HTTP status or response body."""


class RecommendationError(PipelineError):
    """Recommendation oracle could not produce an action for the hand."""
