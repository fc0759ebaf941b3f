"""Tests for the rating history API endpoint."""

from fastapi.testclient import TestClient

from conftest import make_sample, utc
from rating_history.feeds import FeedBase, StaticFeed, TsvFeed
from rating_history.models.domain import FeedKey

SCENARIO_KEY = FeedKey(player_id=42, speed="overall", size=0)


def scenario_feed() -> StaticFeed:
    """Scenario games delivered newest-first, as the feed does."""
    samples = [
        make_sample(utc(2024, 2, 1, 12), 1510, 1530, 70, "strong_win"),
        make_sample(utc(2024, 1, 5, 18), 1520, 1510, 75, "weak_loss"),
        make_sample(utc(2024, 1, 5, 10), 1500, 1520, 80, "weak_win"),
    ]
    return StaticFeed({SCENARIO_KEY: samples})


def create_test_client(feed: FeedBase) -> TestClient:
    """Create app with the given feed injected."""
    from rating_history.api.app import create_app, get_feed

    app = create_app()
    app.dependency_overrides[get_feed] = lambda: feed
    return TestClient(app)


class TestGetRatingHistory:
    """Test GET /api/players/{player_id}/rating-history."""

    def test_returns_200_with_buckets(self):
        """Returns day and month buckets in ascending order."""
        client = create_test_client(scenario_feed())

        response = client.get("/api/players/42/rating-history")

        assert response.status_code == 200
        data = response.json()
        assert data["game_count"] == 3
        assert [d["period_start"] for d in data["days"]] == ["2024-01-05", "2024-02-01"]
        assert data["days"][0]["starting_rating"] == 1500
        assert data["days"][0]["rating"] == 1510
        assert data["days"][0]["count"] == 2
        assert data["days"][0]["increase"] is None
        assert data["days"][1]["increase"] is True
        assert [m["increase"] for m in data["months"]] == [None, True]

    def test_full_window_stats(self):
        """Without start/end the window covers every game."""
        client = create_test_client(scenario_feed())

        window = client.get("/api/players/42/rating-history").json()["window"]

        assert window["rating_band_lower"] == 1420
        assert window["rating_band_upper"] == 1600
        assert abs(window["scale_domain"][0] - 1349.0) < 1e-6
        assert abs(window["scale_domain"][1] - 1680.0) < 1e-6
        assert window["visible_day_buckets"] == 2

    def test_sub_window(self):
        """start/end restrict the band to games inside the range."""
        client = create_test_client(scenario_feed())

        response = client.get(
            "/api/players/42/rating-history",
            params={"start": "2024-02-01T00:00:00Z", "end": "2024-02-02T00:00:00Z"},
        )

        window = response.json()["window"]
        assert window["rating_band_lower"] == 1440
        assert window["rating_band_upper"] == 1600

    def test_open_ended_window(self):
        """A lone start keeps the last game as the end."""
        client = create_test_client(scenario_feed())

        response = client.get(
            "/api/players/42/rating-history",
            params={"start": "2024-01-05T12:00:00Z"},
        )

        window = response.json()["window"]
        assert window["rating_band_lower"] == 1435
        assert window["rating_band_upper"] == 1600

    def test_end_only_window(self):
        """A lone end keeps the first game as the start."""
        client = create_test_client(scenario_feed())

        response = client.get(
            "/api/players/42/rating-history",
            params={"end": "2024-01-05T12:00:00Z"},
        )

        window = response.json()["window"]
        assert window["start"].startswith("2024-01-05T10:00:00")
        assert window["rating_band_lower"] == 1420
        assert window["rating_band_upper"] == 1600
        assert window["visible_day_buckets"] == 0

    def test_empty_window_returns_sentinels(self):
        """A window with no games swaps the global extrema."""
        client = create_test_client(scenario_feed())

        response = client.get(
            "/api/players/42/rating-history",
            params={"start": "2024-01-10T00:00:00Z", "end": "2024-01-20T00:00:00Z"},
        )

        window = response.json()["window"]
        assert window["rating_band_lower"] == 1600
        assert window["rating_band_upper"] == 1420

    def test_win_loss_scaled_by_width(self):
        """Segment geometry is scaled by the width parameter."""
        client = create_test_client(scenario_feed())

        response = client.get(
            "/api/players/42/rating-history",
            params={
                "start": "2024-01-01T00:00:00Z",
                "end": "2024-03-01T00:00:00Z",
                "width": 600,
            },
        )

        win_loss = response.json()["win_loss"]
        assert len(win_loss) == 2
        january = win_loss[0]
        assert january["wins"] == 1
        assert january["losses"] == 1
        assert abs(january["weak_wins"]["width"] - 310) < 1e-6
        assert abs(january["strong_wins"]["width"]) < 1e-6

    def test_extents(self):
        """Rating and count extents are included."""
        client = create_test_client(scenario_feed())

        data = client.get("/api/players/42/rating-history").json()

        assert data["rating_extent"] == [1510, 1530]
        assert data["count_extent"] == [1, 2]

    def test_returns_404_for_unknown_player(self):
        """Returns 404 when the feed has no history."""
        client = create_test_client(scenario_feed())

        response = client.get("/api/players/99/rating-history")

        assert response.status_code == 404

    def test_returns_422_for_invalid_speed(self):
        """Unknown speeds fail validation."""
        client = create_test_client(scenario_feed())

        response = client.get("/api/players/42/rating-history", params={"speed": "bullet"})

        assert response.status_code == 422

    def test_returns_422_for_invalid_size(self):
        """Unsupported board sizes are rejected."""
        client = create_test_client(scenario_feed())

        response = client.get("/api/players/42/rating-history", params={"size": 7})

        assert response.status_code == 422

    def test_returns_422_for_non_positive_width(self):
        """width must be positive."""
        client = create_test_client(scenario_feed())

        response = client.get("/api/players/42/rating-history", params={"width": 0})

        assert response.status_code == 422

    def test_empty_history(self):
        """A known player with no games returns empty series."""
        client = create_test_client(StaticFeed({SCENARIO_KEY: []}))

        data = client.get("/api/players/42/rating-history").json()

        assert data["days"] == []
        assert data["months"] == []
        assert data["win_loss"] == []
        assert data["window"]["rating_band_lower"] == 0.0
        assert data["rating_extent"] is None

    def test_malformed_feed_returns_422(self, tmp_path):
        """Malformed feed data surfaces as 422."""
        path = tmp_path / "42" / "overall-0.tsv"
        path.parent.mkdir(parents=True)
        path.write_text("ended\trating\tstarting_rating\tdeviation\toutcome\nx\t1\t1\t1\tweak_win\n")
        client = create_test_client(TsvFeed(tmp_path))

        response = client.get("/api/players/42/rating-history")

        assert response.status_code == 422


    def test_non_finite_feed_value_returns_422(self, tmp_path):
        """A nan rating in the feed is reported as malformed data."""
        path = tmp_path / "42" / "overall-0.tsv"
        path.parent.mkdir(parents=True)
        path.write_text(
            "ended\trating\tstarting_rating\tdeviation\toutcome\n"
            "1704448800\tnan\t1500\t80\tweak_win\n"
        )
        client = create_test_client(TsvFeed(tmp_path))

        response = client.get("/api/players/42/rating-history")

        assert response.status_code == 422
        assert "non-finite rating" in response.json()["detail"]

class TestHealth:
    """Test GET /health."""

    def test_health(self):
        """Health check responds ok."""
        client = create_test_client(scenario_feed())
        assert client.get("/health").json() == {"status": "ok"}
