"""
app.py — Flask front end for Card Master.

Serves the single page UI and exposes the pipeline state: the player's
cards, the dealer's upcard, the recommended move and the latest camera
frame.
"""

import argparse
import atexit

from flask import Flask, Response, jsonify, send_from_directory

import config.settings as settings
from cardmaster.camera import Camera
from cardmaster.pipeline import Pipeline
from cardmaster.state import state_view
from cardmaster.strategy import BasicStrategyAdvisor


def create_app(pipeline: Pipeline) -> Flask:
    app = Flask(__name__, static_folder="web")

    @app.route("/")
    def index():
        """Serve the Card Master page."""
        return send_from_directory(app.static_folder, "index.html")

    @app.route("/api/start", methods=["POST"])
    def start():
        """Turn the camera on and begin the once-a-second detection loop."""
        pipeline.start()
        return jsonify(state_view(pipeline.state))

    @app.route("/api/state")
    def state():
        """
        Current pipeline state for the page.

        Response JSON: {
            "camera_active": bool,
            "player_cards": ["7 of Diamonds", ...],
            "dealer_card": "Ace of Spades" | null,
            "recommendation": "Hit" | null,
            "detection_empty": bool,
            "warnings": {"player": bool, "dealer": bool, "recommendation": bool}
        }
        """
        return jsonify(state_view(pipeline.state))

    @app.route("/api/preview")
    def preview():
        """Latest captured frame as JPEG (204 until the first capture)."""
        frame = pipeline.preview
        if frame is None:
            return Response(status=204)
        return Response(frame, mimetype="image/jpeg",
                        headers={"Cache-Control": "no-store"})

    return app


def build_pipeline(args) -> Pipeline:
    if args.local_model:
        from cardmaster.detector import YoloCardDetector
        detector = YoloCardDetector(args.local_model)
    else:
        from cardmaster.roboflow import RoboflowDetector
        detector = RoboflowDetector()

    return Pipeline(
        camera=Camera(index=args.camera),
        detector=detector,
        advisor=BasicStrategyAdvisor(),
        interval=args.interval,
        lag_empty_flag=args.lag_empty_flag,
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description="Card Master server")
    parser.add_argument("--port", type=int, default=settings.SERVER_PORT)
    parser.add_argument("--camera", type=int, default=settings.CAMERA_INDEX,
                        help="OpenCV camera index")
    parser.add_argument("--interval", type=float, default=settings.CAPTURE_INTERVAL_S,
                        help="Seconds between captures")
    parser.add_argument("--local-model", metavar="WEIGHTS",
                        help="Detect with local YOLO weights instead of Roboflow")
    parser.add_argument("--lag-empty-flag", action="store_true",
                        default=settings.LAG_EMPTY_FLAG,
                        help="Gate recommendations on the previous frame's 'no cards' flag")
    args = parser.parse_args(argv)

    pipeline = build_pipeline(args)
    atexit.register(pipeline.shutdown)

    print(f"[app] Card Master on http://127.0.0.1:{args.port}/", flush=True)
    # The reloader would fork a second pipeline holding the same camera
    create_app(pipeline).run(port=args.port, use_reloader=False)


if __name__ == "__main__":
    main()
