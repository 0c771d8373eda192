"""
cardmaster/detector.py — Local YOLO recognition oracle.

Offline alternative to the hosted Roboflow model: loads trained weights
once and runs inference on each JPEG payload the pipeline captures.
"""

import io

import cv2
import numpy as np
from PIL import Image
from ultralytics import YOLO

import config.settings as cfg
from cardmaster.errors import DetectionError
from cardmaster.state import DetectedCard


def decode_payload(image: bytes) -> np.ndarray:
    """JPEG/PNG bytes → BGR numpy array."""
    try:
        pil_img = Image.open(io.BytesIO(image)).convert("RGB")
    except OSError as exc:
        raise DetectionError(f"Undecodable image payload: {exc}") from exc
    return cv2.cvtColor(np.array(pil_img), cv2.COLOR_RGB2BGR)


class YoloCardDetector:
    """Thin wrapper around a YOLO model for card detection."""

    def __init__(self, model_path: str = cfg.MODEL_PATH):
        print(f"[detector] Loading YOLO model from {model_path} ...", flush=True)
        self.model = YOLO(model_path)
        self.class_names = self.model.names  # {0: '10c', 1: '10d', ...}
        print(f"[detector] Loaded — {len(self.class_names)} classes", flush=True)

    def detect(self, image: bytes) -> list[DetectedCard]:
        """
        Run single-stage YOLO inference on one encoded frame.

        Class names are upper-cased so "10h" reads the same as the hosted
        model's "10H".
        """
        frame = decode_payload(image)
        results = self.model.predict(
            frame,
            conf=cfg.CONFIDENCE_THRESHOLD,
            iou=cfg.IOU_THRESHOLD,
            imgsz=cfg.YOLO_IMGSZ,
            verbose=False,
        )

        detections = []
        for r in results:
            for box in r.boxes:
                cls_id = int(box.cls[0])
                x1, y1, x2, y2 = box.xyxy[0].tolist()
                detections.append(DetectedCard(
                    label=str(self.class_names[cls_id]).upper(),
                    y=(y1 + y2) / 2,
                    x=(x1 + x2) / 2,
                    confidence=float(box.conf[0]),
                ))

        return detections
