"""
config/settings.py — All tunable parameters in one place.

Secrets and per-machine values come from the environment (or a .env file
next to the project); everything else is a plain constant.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


# ---------------------------------------------------------------------------
# Camera / Capture
# ---------------------------------------------------------------------------
CAMERA_INDEX = int(os.getenv("CAMERA_INDEX", "0"))
CAPTURE_WIDTH = 640                 # Frames are resized to this before encoding
CAPTURE_HEIGHT = 480
JPEG_QUALITY = 90                   # cv2.IMWRITE_JPEG_QUALITY
CAPTURE_INTERVAL_S = float(os.getenv("CAPTURE_INTERVAL_S", "1.0"))

# ---------------------------------------------------------------------------
# Roboflow Hosted Inference
# ---------------------------------------------------------------------------
ROBOFLOW_URL = "https://detect.roboflow.com"
ROBOFLOW_MODEL = os.getenv("ROBOFLOW_MODEL", "playing-cards-ow27d/4")
ROBOFLOW_API_KEY = os.getenv("ROBOFLOW_API_KEY", "")
ROBOFLOW_CONFIDENCE = 40            # Percent, passed through as a query param
REQUEST_TIMEOUT_S = 5.0

# ---------------------------------------------------------------------------
# Local YOLO Model (offline alternative to Roboflow)
# ---------------------------------------------------------------------------
MODEL_PATH = "models/best.pt"
CONFIDENCE_THRESHOLD = 0.40
IOU_THRESHOLD = 0.40
YOLO_IMGSZ = 640

# ---------------------------------------------------------------------------
# Card Labels
# ---------------------------------------------------------------------------
# Hosted model labels look like "AS", "10H": rank followed by an upper-case suit.
RANKS = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
SUITS = ["S", "H", "D", "C"]        # spades, hearts, diamonds, clubs
UNKNOWN_CARD_VALUE = 0              # Point value for labels with an unknown rank

# ---------------------------------------------------------------------------
# Recommendation
# ---------------------------------------------------------------------------
DECK_COUNT = 1
DEALER_CHECKED_BLACKJACK = True
# True keeps the legacy one-cycle lag: the recommendation call is
# gated on the previous cycle's "no cards" flag instead of the current one.
LAG_EMPTY_FLAG = _env_bool("CARDMASTER_LAG_EMPTY_FLAG")

# ---------------------------------------------------------------------------
# Web Server
# ---------------------------------------------------------------------------
SERVER_PORT = 5001
