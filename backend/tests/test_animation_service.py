"""Tests for the animation service entry points."""
import pytest

from playmaker.errors import InvalidInputError
from playmaker.models.diagram import Point
from playmaker.services.animation_service import AnimationService
from playmaker.services.engine.frame_sampler import FrameSampler


@pytest.fixture
def service():
    return AnimationService(sampler=FrameSampler(max_frame_count=500))


@pytest.fixture
def payload():
    return {
        "diagram": {
            "courtWidth": 800,
            "courtHeight": 600,
            "players": [
                {
                    "id": "pg",
                    "label": "1",
                    "start": {"x": 0, "y": 0},
                    "path": [
                        {"t": 0, "x": 0, "y": 0, "event": {"type": "dribble"}},
                        {"t": 1000, "x": 10, "y": 0},
                    ],
                },
                {"id": "c", "label": "5", "start": {"x": 400, "y": 100}},
            ],
        },
        "settings": {"fps": 10, "duration": 1000, "showTrails": True, "trailLength": 2},
    }


def test_animate_output_shape(service, payload):
    """Output follows the {frames, keyframes, playback} contract."""
    result = service.animate(payload).to_dict()
    assert set(result) == {"frames", "keyframes", "playback"}
    assert len(result["frames"]) == 11

    frame = result["frames"][5]
    assert frame["timestamp"] == 500
    pg = frame["players"][0]
    assert pg == {
        "id": "pg",
        "label": "1",
        "position": {"x": 5.0, "y": 0.0},
        "trail": pg["trail"],
        "active": True,
    }
    assert len(pg["trail"]) == 2
    assert frame["players"][1]["active"] is False

    assert result["keyframes"] == [
        {"timestamp": 0, "label": "Dribble", "involvedPlayerIds": ["pg"]}
    ]
    assert result["playback"]["frameCount"] == 11
    assert result["playback"]["loop"] is False


def test_animate_is_deterministic(service, payload):
    assert service.animate(payload).to_dict() == service.animate(payload).to_dict()


def test_animate_rejects_before_sampling(service, payload):
    payload["settings"]["fps"] = -1
    with pytest.raises(InvalidInputError) as exc:
        service.animate(payload)
    assert exc.value.field == "settings.fps"


def test_animate_rejects_bad_diagram_with_prefix(service, payload):
    payload["diagram"]["players"][1]["id"] = "pg"
    with pytest.raises(InvalidInputError) as exc:
        service.animate(payload)
    assert exc.value.field == "diagram.players[1].id"


def test_frame_ceiling_applies(service, payload):
    payload["settings"] = {"fps": 60, "duration": 30000}
    with pytest.raises(InvalidInputError) as exc:
        service.animate(payload)
    assert exc.value.field == "settings"


def test_snapshot_between_samples(service, payload):
    t, positions = service.snapshot({"diagram": payload["diagram"], "t": 333})
    assert t == 333
    assert positions["pg"].x == pytest.approx(3.33)
    assert positions["c"] == Point(400, 100)


def test_cache_key_stable_and_sensitive(service, payload):
    key = service.cache_key(payload)
    assert key == service.cache_key(payload)
    assert len(key) == 64

    # Equivalent spelling of the same input yields the same key
    snake = {
        "diagram": payload["diagram"],
        "settings": {"fps": 10, "duration": 1000, "show_trails": True, "trail_length": 2},
    }
    assert service.cache_key(snake) == key

    payload["settings"]["trailLength"] = 3
    assert service.cache_key(payload) != key


def test_snapshot_returns_validated_time(service, payload):
    t, positions = service.snapshot({"diagram": payload["diagram"], "t": "500"})
    assert t == 500.0
    assert isinstance(t, float)
    assert positions["pg"] == Point(5.0, 0.0)
