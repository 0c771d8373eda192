"""
cardmaster/camera.py — Webcam frame source and JPEG encoding.
"""

import threading

import cv2
import numpy as np

import config.settings as cfg
from cardmaster.errors import CaptureError


def encode_frame(frame: np.ndarray, quality: int = cfg.JPEG_QUALITY) -> bytes:
    """JPEG-encode a BGR frame."""
    ok, buf = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, quality])
    if not ok:
        raise CaptureError("cv2.imencode refused the frame")
    return buf.tobytes()


class Camera:
    """OpenCV capture device, resized to a fixed capture resolution."""

    def __init__(self, index: int = cfg.CAMERA_INDEX,
                 width: int = cfg.CAPTURE_WIDTH, height: int = cfg.CAPTURE_HEIGHT):
        self.index = index
        self.width = width
        self.height = height
        self._cap = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._cap is not None

    def open(self):
        with self._lock:
            if self._cap is not None:
                return
            cap = cv2.VideoCapture(self.index)
            if not cap.isOpened():
                cap.release()
                raise CaptureError(f"Could not open camera {self.index}")

            # Keep only the newest frame; we sample once per tick
            cap.set(cv2.CAP_PROP_BUFFERSIZE, 1)
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
            self._cap = cap
            print(f"[camera] Opened device {self.index}", flush=True)

    def read(self):
        """Latest frame at the capture resolution, or None if unavailable."""
        with self._lock:
            if self._cap is None:
                return None
            ok, frame = self._cap.read()
        if not ok or frame is None:
            return None
        if frame.shape[1] != self.width or frame.shape[0] != self.height:
            frame = cv2.resize(frame, (self.width, self.height))
        return frame

    def release(self):
        with self._lock:
            if self._cap is not None:
                self._cap.release()
                self._cap = None
                print(f"[camera] Released device {self.index}", flush=True)
