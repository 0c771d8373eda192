"""
cardmaster/roboflow.py — Client for the Roboflow hosted inference API.

The hosted playing-card model takes a base64 JPEG as a form body and
answers with a list of predictions:

    {"predictions": [{"class": "10H", "x": 312.5, "y": 88.0,
                      "width": 41, "height": 60, "confidence": 0.91}, ...]}
"""

import base64

import requests

import config.settings as cfg
from cardmaster.errors import DetectionError
from cardmaster.state import DetectedCard


class RoboflowDetector:
    """Recognition oracle backed by a hosted Roboflow model."""

    def __init__(self, api_key: str = cfg.ROBOFLOW_API_KEY,
                 model: str = cfg.ROBOFLOW_MODEL,
                 base_url: str = cfg.ROBOFLOW_URL,
                 confidence: int = cfg.ROBOFLOW_CONFIDENCE,
                 timeout: float = cfg.REQUEST_TIMEOUT_S,
                 session: requests.Session = None):
        if not api_key:
            raise ValueError("ROBOFLOW_API_KEY is not set (environment or .env)")
        self.url = f"{base_url.rstrip('/')}/{model}"
        self.api_key = api_key
        self.confidence = confidence
        self.timeout = timeout
        self.session = session or requests.Session()
        print(f"[roboflow] Using hosted model {model}", flush=True)

    def detect(self, image: bytes) -> list[DetectedCard]:
        """Submit one JPEG payload and return its card detections."""
        payload = base64.b64encode(image).decode("ascii")
        try:
            resp = self.session.post(
                self.url,
                params={"api_key": self.api_key, "confidence": self.confidence},
                data=payload,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            body = resp.json()
        except requests.exceptions.RequestException as exc:
            raise DetectionError(f"Roboflow request failed: {exc}") from exc
        except ValueError as exc:
            raise DetectionError(f"Roboflow returned a non-JSON body: {exc}") from exc

        return parse_predictions(body)


def parse_predictions(body: dict) -> list[DetectedCard]:
    """Map a Roboflow response body to detections, keeping response order."""
    try:
        predictions = body["predictions"]
        return [
            DetectedCard(
                label=str(p["class"]),
                y=float(p["y"]),
                x=float(p.get("x", 0.0)),
                confidence=float(p.get("confidence", 1.0)),
            )
            for p in predictions
        ]
    except (KeyError, TypeError, ValueError) as exc:
        raise DetectionError(f"Unexpected Roboflow response shape: {exc}") from exc
