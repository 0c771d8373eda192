"""Tests for the Roboflow hosted inference client."""

import base64
from unittest.mock import MagicMock

import pytest
import requests

from cardmaster.errors import DetectionError
from cardmaster.roboflow import RoboflowDetector, parse_predictions

BODY = {
    "predictions": [
        {"class": "AS", "x": 320.0, "y": 20.0, "width": 40, "height": 60, "confidence": 0.93},
        {"class": "7D", "x": 300.0, "y": 80.0, "width": 40, "height": 60, "confidence": 0.88},
    ]
}


@pytest.fixture
def session():
    s = MagicMock(spec=requests.Session)
    resp = MagicMock()
    resp.json.return_value = BODY
    s.post.return_value = resp
    return s


@pytest.fixture
def roboflow(session):
    return RoboflowDetector(api_key="test-key", model="playing-cards-ow27d/4",
                            confidence=40, timeout=2.0, session=session)


class TestRequest:
    """Tests for the request sent to the hosted model."""

    def test_posts_base64_form_body(self, roboflow, session):
        roboflow.detect(b"\xff\xd8jpeg")
        args, kwargs = session.post.call_args
        assert args[0] == "https://detect.roboflow.com/playing-cards-ow27d/4"
        assert kwargs["params"] == {"api_key": "test-key", "confidence": 40}
        assert kwargs["data"] == base64.b64encode(b"\xff\xd8jpeg").decode("ascii")
        assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
        assert kwargs["timeout"] == 2.0

    def test_returns_detections_in_response_order(self, roboflow):
        dets = roboflow.detect(b"jpeg")
        assert [d.label for d in dets] == ["AS", "7D"]
        assert dets[0].y == 20.0
        assert dets[1].confidence == pytest.approx(0.88)

    def test_missing_api_key(self):
        with pytest.raises(ValueError):
            RoboflowDetector(api_key="", session=MagicMock())


class TestFailures:
    """Every oracle failure surfaces as DetectionError."""

    def test_connection_error(self, roboflow, session):
        session.post.side_effect = requests.ConnectionError("unreachable")
        with pytest.raises(DetectionError):
            roboflow.detect(b"jpeg")

    def test_http_error(self, roboflow, session):
        session.post.return_value.raise_for_status.side_effect = requests.HTTPError("403")
        with pytest.raises(DetectionError):
            roboflow.detect(b"jpeg")

    def test_non_json_body(self, roboflow, session):
        session.post.return_value.json.side_effect = ValueError("Expecting value")
        with pytest.raises(DetectionError):
            roboflow.detect(b"jpeg")

    def test_unexpected_shape(self, roboflow, session):
        session.post.return_value.json.return_value = {"message": "Forbidden"}
        with pytest.raises(DetectionError):
            roboflow.detect(b"jpeg")


class TestParsePredictions:
    """Tests for mapping response bodies."""

    def test_empty(self):
        assert parse_predictions({"predictions": []}) == []

    def test_missing_optional_fields(self):
        dets = parse_predictions({"predictions": [{"class": "QH", "y": 12}]})
        assert dets[0].label == "QH"
        assert dets[0].x == 0.0
        assert dets[0].confidence == 1.0

    def test_missing_class(self):
        with pytest.raises(DetectionError):
            parse_predictions({"predictions": [{"y": 12}]})
