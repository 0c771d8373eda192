"""
cardmaster/pipeline.py — The capture → detect → recommend loop.

A timer thread ticks once per ``interval`` seconds.  Each tick hands one
cycle to a single worker thread:

    capture frame → JPEG → recognition oracle → dealer/player roles
    → recommendation oracle → publish new PipelineState

A tick that arrives while the previous cycle is still waiting on the
network is skipped, so cycles never overlap and never publish out of order.
"""

import threading
import traceback
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional, Protocol

import numpy as np

import config.settings as cfg
from cardmaster.camera import encode_frame
from cardmaster.errors import CaptureError, DetectionError, RecommendationError
from cardmaster.state import (
    DetectedCard,
    PipelineState,
    apply_detections,
    assign_roles,
    with_camera,
    with_recommendation,
)


class FrameSource(Protocol):
    def open(self) -> None: ...
    def read(self) -> Optional[np.ndarray]: ...
    def release(self) -> None: ...


class Detector(Protocol):
    def detect(self, image: bytes) -> list[DetectedCard]: ...


class Advisor(Protocol):
    def recommend(self, player_values, dealer_card: str, deck_count: int = ...,
                  dealer_checked_blackjack: bool = ..., options=None) -> str: ...


class Pipeline:
    """Owns the camera, both oracles and the published PipelineState."""

    def __init__(self, camera: FrameSource, detector: Detector, advisor: Advisor,
                 interval: float = cfg.CAPTURE_INTERVAL_S,
                 lag_empty_flag: bool = cfg.LAG_EMPTY_FLAG):
        self.camera = camera
        self.detector = detector
        self.advisor = advisor
        self.interval = interval
        self.lag_empty_flag = lag_empty_flag

        self._state = PipelineState()
        self._preview: Optional[bytes] = None
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._torn_down = False
        self._timer: Optional[threading.Thread] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._in_flight: Optional[Future] = None

    # ── Read side ────────────────────────────────────────────────────────

    @property
    def state(self) -> PipelineState:
        with self._lock:
            return self._state

    @property
    def preview(self) -> Optional[bytes]:
        """Most recently captured frame as JPEG bytes."""
        with self._lock:
            return self._preview

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start(self):
        """Idle → Active: open the camera and begin ticking."""
        with self._lock:
            if self._torn_down:
                raise RuntimeError("Pipeline has been shut down")
            if self._state.camera_active:
                return
            self._state = with_camera(self._state, True)

        try:
            self.camera.open()
        except CaptureError as exc:
            # Loop still runs; every cycle will skip until a frame shows up
            print(f"[pipeline] Error accessing the camera: {exc}", flush=True)
        finally:
            # camera_active is already set, so the loop must exist either way
            self._executor = ThreadPoolExecutor(max_workers=1,
                                                thread_name_prefix="cardmaster-cycle")
            self._timer = threading.Thread(target=self._run_timer,
                                           name="cardmaster-timer", daemon=True)
            self._timer.start()
            print(f"[pipeline] Started, capturing every {self.interval:.1f}s", flush=True)

    def shutdown(self):
        """Active → Idle on teardown.  In-flight cycles finish but never publish."""
        with self._lock:
            if self._torn_down:
                return
            self._torn_down = True
            self._state = with_camera(self._state, False)

        self._stop.set()
        if self._timer is not None:
            self._timer.join()
        if self._executor is not None:
            self._executor.shutdown(wait=False)
        self.camera.release()
        print("[pipeline] Stopped", flush=True)

    # ── Scheduling ───────────────────────────────────────────────────────

    def _run_timer(self):
        while not self._stop.wait(self.interval):
            self.tick()

    def tick(self) -> bool:
        """Submit one cycle unless the previous one has not resolved yet."""
        if self._executor is None:
            raise RuntimeError("Pipeline is not started")
        if self._in_flight is not None and not self._in_flight.done():
            print("[pipeline] Previous cycle still running, tick skipped", flush=True)
            return False
        self._in_flight = self._executor.submit(self._guarded_cycle)
        return True

    def _guarded_cycle(self):
        try:
            return self.run_cycle()
        except Exception:
            traceback.print_exc()
            raise

    # ── One cycle ────────────────────────────────────────────────────────

    def run_cycle(self) -> bool:
        """
        Capture one frame and push it through both oracles.

        Returns True when a new state was published.  Capture and detection
        failures are logged and leave the state untouched.
        """
        frame = self.camera.read()
        if frame is None:
            print("[pipeline] No frame from camera, cycle skipped", flush=True)
            return False

        try:
            payload = encode_frame(frame)
            with self._lock:
                self._preview = payload
            detections = self.detector.detect(payload)
        except (CaptureError, DetectionError) as exc:
            print(f"[pipeline] Cycle aborted: {exc}", flush=True)
            return False

        return self.process_detections(detections)

    def process_detections(self, detections: list[DetectedCard]) -> bool:
        """Role assignment, value mapping and recommendation for one frame."""
        previous = self.state
        assignment = assign_roles(detections)
        updated = apply_detections(previous, assignment)

        player_values = assignment.player_values if assignment else []
        print(f"[pipeline] Player's cards: {player_values}", flush=True)
        print(f"[pipeline] Dealer's card: {updated.dealer_card}", flush=True)

        # Lag mode reads the "no cards" flag as it stood before this frame
        gate = previous if self.lag_empty_flag else updated
        if not gate.detection_empty and updated.dealer_card is not None:
            try:
                action = self.advisor.recommend(
                    player_values,
                    updated.dealer_card,
                    cfg.DECK_COUNT,
                    cfg.DEALER_CHECKED_BLACKJACK,
                    None,
                )
                updated = with_recommendation(updated, action)
            except RecommendationError as exc:
                print(f"[pipeline] No recommendation: {exc}", flush=True)

        return self._publish(updated)

    def _publish(self, updated: PipelineState) -> bool:
        with self._lock:
            if self._torn_down:
                print("[pipeline] Cycle finished after shutdown, result dropped", flush=True)
                return False
            self._state = updated
        return True
