"""
Test suite for the base package.

Covers the error taxonomy, the token bucket rate limiter, the shared value
types and the HTTP status mapping of BaseClient, with the requests session
mocked out so no network access happens.

To run tests:
- Command line: python -m pytest mapbox_client/base/test_base.py -v
"""

from enum import Enum
from unittest.mock import MagicMock, patch
import pytest
import requests

from .base_client import BaseClient, build_params, extract_error_message, parse_model
from .base_errors import (
    APIError,
    CacheError,
    ConfigurationError,
    DecodeError,
    GeometryError,
    InvalidZoomError,
    MapboxError,
    OutOfBoundsError,
    RateLimitError,
    TransportError,
    UnauthorizedError,
)
from .base_rate_limiter import TokenBucketRateLimiter
from .base_types import BoundingBox, Feature, FeatureCollection, GeoPoint, format_coordinates, join_values


# ==================== FIXTURES ====================

def make_response(status_code=200, json_data=None, json_error=False, headers=None, content=b""):
    """Build a fake requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.headers = headers or {}
    response.content = content
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def mock_session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session


@pytest.fixture
def client(mock_session):
    """BaseClient with a mocked session and a limiter that never blocks."""
    limiter = MagicMock(spec=TokenBucketRateLimiter)
    return BaseClient(
        token="test-token",
        base_url="https://api.example.test/",
        request_timeout=5,
        rate_limiter=limiter,
        session=mock_session,
    )


# ==================== TEST CLASSES ====================

class TestErrors:
    """Test the exception hierarchy."""

    def test_all_errors_share_base(self):
        for error_class in (ConfigurationError, TransportError, APIError, DecodeError,
                            GeometryError, CacheError):
            assert issubclass(error_class, MapboxError)

    def test_api_error_kinds(self):
        assert issubclass(RateLimitError, APIError)
        assert issubclass(UnauthorizedError, APIError)

    def test_geometry_error_kinds(self):
        assert issubclass(OutOfBoundsError, GeometryError)
        assert issubclass(InvalidZoomError, GeometryError)

    def test_message(self):
        error = TransportError("HTTP 500")
        assert str(error) == "HTTP 500"


class TestTokenBucketRateLimiter:
    """Test the rate limiter implementation."""

    def test_initialization(self):
        limiter = TokenBucketRateLimiter(
            rate_per_second=2.0,
            burst_capacity=5,
            retry_attempts=3,
            backoff_factor=2.0
        )

        assert limiter.rate_per_second == 2.0
        assert limiter.burst_capacity == 5
        assert limiter.tokens == 5.0  # Starts full
        assert limiter.retry_attempts == 3

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            TokenBucketRateLimiter(rate_per_second=0)
        with pytest.raises(ValueError):
            TokenBucketRateLimiter(burst_capacity=0)

    def test_acquire(self):
        limiter = TokenBucketRateLimiter(rate_per_second=0.001, burst_capacity=3)

        assert limiter.acquire(2) is True
        assert limiter.acquire(1) is True
        assert limiter.acquire(1) is False

    @patch('mapbox_client.base.base_rate_limiter.time.monotonic')
    def test_token_refill(self, mock_time):
        mock_time.return_value = 0.0
        limiter = TokenBucketRateLimiter(rate_per_second=2.0, burst_capacity=5)
        limiter.acquire(5)

        # 0.5 seconds at 2/sec adds one token
        mock_time.return_value = 0.5
        assert limiter.available_tokens == pytest.approx(1.0)

        # Never beyond burst capacity
        mock_time.return_value = 100.0
        assert limiter.available_tokens == 5.0

    @patch('mapbox_client.base.base_rate_limiter.time.monotonic')
    @patch('mapbox_client.base.base_rate_limiter.time.sleep')
    def test_wait_for_token(self, mock_sleep, mock_time):
        current_time = [0.0]

        def sleep_side_effect(duration):
            current_time[0] += duration

        mock_time.side_effect = lambda: current_time[0]
        mock_sleep.side_effect = sleep_side_effect

        limiter = TokenBucketRateLimiter(rate_per_second=10.0, burst_capacity=2, retry_attempts=3)
        limiter.acquire(2)

        limiter.wait_for_token(1)

        assert mock_sleep.called
        total_sleep = sum(c[0][0] for c in mock_sleep.call_args_list)
        assert 0.05 <= total_sleep <= 0.3

    @patch('mapbox_client.base.base_rate_limiter.time.sleep')
    def test_wait_for_token_gives_up(self, mock_sleep):
        limiter = TokenBucketRateLimiter(
            rate_per_second=0.1,
            burst_capacity=1,
            retry_attempts=2,
            backoff_factor=1.0
        )
        limiter.acquire(1)

        with pytest.raises(RateLimitError) as exc_info:
            limiter.wait_for_token(1)

        assert "Failed to acquire" in str(exc_info.value)
        assert mock_sleep.call_count == 2

    @patch('mapbox_client.base.base_rate_limiter.time.sleep')
    def test_request_above_capacity(self, mock_sleep):
        limiter = TokenBucketRateLimiter(rate_per_second=1.0, burst_capacity=2)

        with pytest.raises(RateLimitError):
            limiter.wait_for_token(3)

        mock_sleep.assert_not_called()

    def test_get_wait_time(self):
        limiter = TokenBucketRateLimiter(rate_per_second=1.0, burst_capacity=5)
        assert limiter.get_wait_time(1) == 0.0

        limiter.acquire(5)
        assert 1.9 <= limiter.get_wait_time(2) <= 2.1


class TestTypes:
    """Test shared value types."""

    def test_lon_lat_formatting(self):
        point = GeoPoint(-45.942805, 166.5685)
        assert point.to_lon_lat() == "166.568500,-45.942805"

    def test_points_are_immutable(self):
        point = GeoPoint(1.0, 2.0)
        with pytest.raises(AttributeError):
            point.latitude = 3.0

    def test_format_coordinates(self):
        points = [GeoPoint(1.0, 2.0), GeoPoint(3.5, 4.5)]
        assert format_coordinates(points) == "2.000000,1.000000;4.500000,3.500000"

    def test_join_values(self):
        assert join_values([1, 2.5, "unlimited"]) == "1;2.500000;unlimited"
        assert join_values(["a", "b"], ",") == "a,b"

    def test_bounding_box_orders_corners(self):
        box = BoundingBox(GeoPoint(10.0, 20.0), GeoPoint(-5.0, -30.0))
        assert box.south == -5.0
        assert box.north == 10.0
        assert box.west == -30.0
        assert box.east == 20.0
        assert box.to_query() == "-30.000000,-5.000000,20.000000,10.000000"

    def test_feature_collection_parsing(self):
        collection = FeatureCollection.model_validate({
            "type": "FeatureCollection",
            "features": [{
                "id": "place.1",
                "text": "Dusky Sound",
                "center": [166.5685, -45.942805],
                "unknown_field": 1,
            }],
        })
        feature = collection.features[0]
        assert isinstance(feature, Feature)
        assert feature.center_point() == GeoPoint(-45.942805, 166.5685)

    def test_feature_without_center(self):
        assert Feature().center_point() is None


class TestBuildParams:
    """Test query parameter encoding."""

    def test_encoding(self):
        params = build_params({
            "limit": 5,
            "autocomplete": False,
            "types": ["place", "poi"],
            "country": None,
            "language": [],
        })
        assert params == {"limit": "5", "autocomplete": "false", "types": "place,poi"}

    def test_enum_values(self):
        class Profile(str, Enum):
            WALKING = "mapbox/walking"
            CYCLING = "mapbox/cycling"

        params = build_params({"profile": Profile.WALKING, "both": [Profile.WALKING, Profile.CYCLING]})
        assert params == {"profile": "mapbox/walking", "both": "mapbox/walking,mapbox/cycling"}


class TestParseModel:
    """Test response model validation."""

    def test_valid(self):
        collection = parse_model(FeatureCollection, {"features": [{"id": "poi.1"}]})
        assert collection.features[0].id == "poi.1"

    def test_invalid(self):
        with pytest.raises(DecodeError):
            parse_model(FeatureCollection, {"features": "not a list"})


class TestBaseClient:
    """Test the HTTP base client."""

    def test_missing_token(self, monkeypatch):
        monkeypatch.delenv("MAPBOX_TOKEN", raising=False)
        with pytest.raises(ConfigurationError) as exc_info:
            BaseClient()
        assert "Mapbox API token not found" in str(exc_info.value)

    def test_token_from_environment(self, monkeypatch, mock_session):
        monkeypatch.setenv("MAPBOX_TOKEN", "env-token")
        client = BaseClient(session=mock_session)
        assert client.token == "env-token"
        assert client.base_url == BaseClient.DEFAULT_BASE_URL

    def test_query_request_attaches_token(self, client, mock_session):
        mock_session.get.return_value = make_response(200, {})

        client.query_request("v4/test", {"limit": "1"})

        mock_session.get.assert_called_once_with(
            "https://api.example.test/v4/test",
            params={"limit": "1", "access_token": "test-token"},
            timeout=5,
        )
        client.rate_limiter.wait_for_token.assert_called_once()

    def test_rate_limited(self, client, mock_session):
        mock_session.get.return_value = make_response(429)
        with pytest.raises(RateLimitError):
            client.query_request("v4/test")

    def test_unauthorized(self, client, mock_session):
        mock_session.get.return_value = make_response(401)
        with pytest.raises(UnauthorizedError) as exc_info:
            client.query_request("v4/test")
        assert "unauthorized" in str(exc_info.value)

    def test_timeout(self, client, mock_session):
        mock_session.get.side_effect = requests.exceptions.Timeout()
        with pytest.raises(TransportError):
            client.query_request("v4/test")

    def test_connection_error(self, client, mock_session):
        mock_session.get.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(TransportError):
            client.query_request("v4/test")

    def test_query_json(self, client, mock_session):
        mock_session.get.return_value = make_response(200, {"code": "Ok"})
        assert client.query("directions", "v5", "mapbox/driving", "1,2;3,4") == {"code": "Ok"}
        assert mock_session.get.call_args[0][0] == (
            "https://api.example.test/directions/v5/mapbox/driving/1,2;3,4"
        )

    def test_bad_request_with_message(self, client, mock_session):
        mock_session.get.return_value = make_response(400, {"message": "Invalid coordinates"})
        with pytest.raises(APIError) as exc_info:
            client.query_json("directions/v5/x")
        assert str(exc_info.value) == "api error: Invalid coordinates"

    def test_bad_request_without_message(self, client, mock_session):
        mock_session.get.return_value = make_response(400, json_error=True)
        with pytest.raises(APIError) as exc_info:
            client.query_json("directions/v5/x")
        assert "no message" in str(exc_info.value)

    def test_server_error(self, client, mock_session):
        mock_session.get.return_value = make_response(503, {})
        with pytest.raises(TransportError) as exc_info:
            client.query_json("directions/v5/x")
        assert "503" in str(exc_info.value)

    def test_invalid_json(self, client, mock_session):
        mock_session.get.return_value = make_response(200, json_error=True)
        with pytest.raises(DecodeError):
            client.query_json("directions/v5/x")

    def test_extract_error_message_ignores_non_objects(self):
        assert extract_error_message(make_response(400, ["not", "a", "dict"])) is None

    def test_context_manager_closes_session(self, client, mock_session):
        with client:
            pass
        mock_session.close.assert_called_once()
