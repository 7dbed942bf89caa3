"""Tests for role adaptation onto a roster."""
import itertools

import pytest

from playmaker.errors import AdaptationError, InvalidInputError
from playmaker.models.diagram import (
    EventType,
    MovementPath,
    PlayDiagram,
    PlayerToken,
    Point,
    RoleSpec,
    Waypoint,
    WaypointEvent,
)
from playmaker.models.roster import RoleOverride, RosterMember
from playmaker.services.animation_service import AnimationService
from playmaker.services.engine.cost_model import RoleCostModel
from playmaker.services.engine.frame_sampler import FrameSampler
from playmaker.services.role_adapter import RoleAdapter


@pytest.fixture
def adapter():
    return RoleAdapter(
        cost_model=RoleCostModel(adjacent_position_penalty=25, skill_gap_scale=0.1),
        small_screener_size=60,
    )


@pytest.fixture
def designed_play():
    """Three roles: r1 brings the ball up and passes to r2, r2 screens for r3."""
    return PlayDiagram(
        court_width=800,
        court_height=600,
        players=(
            PlayerToken(
                id="r1",
                label="1",
                start=Point(400, 500),
                path=MovementPath((
                    Waypoint(0, 400, 500, WaypointEvent(EventType.DRIBBLE)),
                    Waypoint(800, 400, 400, WaypointEvent(EventType.PASS, target="r2")),
                )),
                role=RoleSpec(position="PG", skills=(("ballHandling", 1.0),)),
            ),
            PlayerToken(
                id="r2",
                label="3",
                start=Point(200, 300),
                path=MovementPath((
                    Waypoint(1200, 300, 250, WaypointEvent(EventType.SCREEN, target="r3")),
                )),
                role=RoleSpec(position="SF", skills=(("shooting", 1.0),)),
            ),
            PlayerToken(
                id="r3",
                label="4",
                start=Point(600, 200),
                role=RoleSpec(position="PF", skills=(("rebounding", 0.5), ("size", 0.5))),
            ),
        ),
    )


@pytest.fixture
def roster():
    return [
        RosterMember(id="A", position="C", skills={"size": 90, "ballHandling": 30}, name="Amir"),
        RosterMember(id="B", position="SF", skills={"shooting": 80, "rebounding": 40, "size": 50}, name="Bea"),
        RosterMember(id="C", position="PF", skills={"shooting": 60, "rebounding": 85, "size": 80}, name="Cal"),
    ]


def test_override_is_binding_and_rest_is_optimal(adapter, designed_play, roster):
    """r1 -> A regardless of cost; r2/r3 take the cheapest pairing of B and C."""
    result = adapter.adapt(designed_play, roster, [RoleOverride("r1", "A")])

    assert result.mapping["r1"] == "A"
    fixed = result.assignments[0]
    assert fixed.source == "fixed"
    assert fixed.cost is None  # C playing PG is otherwise forbidden

    tokens = {t.id: t for t in designed_play.players}
    remaining = ["r2", "r3"]
    pool = [m for m in roster if m.id != "A"]
    best = min(
        sum(adapter.cost_model.cost(tokens[r].role, m) for r, m in zip(remaining, perm))
        for perm in itertools.permutations(pool, len(remaining))
    )
    solved_cost = sum(a.cost for a in result.assignments if a.source == "solved")
    assert solved_cost == pytest.approx(best)
    assert result.mapping == {"r1": "A", "r2": "B", "r3": "C"}
    assert result.total_cost == pytest.approx(3.75)


def test_without_overrides_solves_everything(adapter, designed_play):
    roster = [
        RosterMember(id="x", position="PF", skills={"rebounding": 90, "size": 90}),
        RosterMember(id="y", position="PG", skills={"ballHandling": 95}),
        RosterMember(id="z", position="SF", skills={"shooting": 88, "size": 75}),
    ]
    result = adapter.adapt(designed_play, roster)
    assert result.mapping == {"r1": "y", "r2": "z", "r3": "x"}
    assert all(a.source == "solved" for a in result.assignments)
    assert result.notes == ()


def test_adapted_diagram_renames_and_keeps_geometry(adapter, designed_play, roster):
    result = adapter.adapt(designed_play, roster, [RoleOverride("r1", "A")])
    adapted = result.adapted_diagram

    assert adapted.player_ids == ["A", "B", "C"]
    for original, concrete in zip(designed_play.players, adapted.players):
        assert concrete.start == original.start
        assert concrete.label == original.label
        if original.path is not None:
            assert [(w.t, w.x, w.y) for w in concrete.path] == [(w.t, w.x, w.y) for w in original.path]

    # Event targets follow the players they named
    assert adapted.players[0].path.waypoints[1].event.target == "B"
    assert adapted.players[1].path.waypoints[0].event.target == "C"
    assert result.original_diagram is designed_play


def test_notes_flag_compromises(adapter, designed_play, roster):
    result = adapter.adapt(designed_play, roster, [RoleOverride("r1", "A")])
    assert any(note.startswith("Override places Amir (C) in r1") for note in result.notes)
    assert "Bea may struggle with screens due to smaller size (50/100)" in result.notes


def test_out_of_position_note(adapter):
    diagram = PlayDiagram(800, 600, (
        PlayerToken(id="r1", label="1", start=Point(10, 10), role=RoleSpec(position="SG")),
    ))
    result = adapter.adapt(diagram, [RosterMember(id="p", position="PG", name="Pat")])
    assert result.assignments[0].cost == 25
    assert result.notes == ("Pat plays r1 out of position (PG in a SG role)",)


def test_missing_position_category_names_every_role(adapter):
    """Two C roles against a one-guard roster: both are unfillable."""
    diagram = PlayDiagram(800, 600, (
        PlayerToken(id="r1", label="4", start=Point(10, 10), role=RoleSpec(position="C")),
        PlayerToken(id="r2", label="5", start=Point(20, 20), role=RoleSpec(position="C")),
    ))
    with pytest.raises(AdaptationError) as exc:
        adapter.adapt(diagram, [RosterMember(id="g", position="PG")])
    assert exc.value.unfillable_roles == ["r1", "r2"]


def test_roster_too_small(adapter):
    diagram = PlayDiagram(800, 600, tuple(
        PlayerToken(id=f"r{i}", label=str(i), start=Point(i, i), role=RoleSpec(position="SG"))
        for i in range(3)
    ))
    roster = [RosterMember(id="a", position="SG"), RosterMember(id="b", position="SG")]
    with pytest.raises(AdaptationError) as exc:
        adapter.adapt(diagram, roster)
    assert exc.value.unfillable_roles == ["r0", "r1", "r2"]


def test_strict_role_rejects_adjacent_position(adapter):
    diagram = PlayDiagram(800, 600, (
        PlayerToken(id="r1", label="5", start=Point(1, 1), role=RoleSpec(position="C", flexible=False)),
    ))
    with pytest.raises(AdaptationError) as exc:
        adapter.adapt(diagram, [RosterMember(id="pf", position="PF")])
    assert exc.value.unfillable_roles == ["r1"]


def test_override_consumes_only_compatible_candidate(adapter):
    """Overriding the lone center into another role leaves the C role empty."""
    diagram = PlayDiagram(800, 600, (
        PlayerToken(id="r1", label="1", start=Point(1, 1), role=RoleSpec(position="PG")),
        PlayerToken(id="r2", label="5", start=Point(2, 2), role=RoleSpec(position="C", flexible=False)),
    ))
    roster = [RosterMember(id="big", position="C"), RosterMember(id="guard", position="PG")]
    with pytest.raises(AdaptationError) as exc:
        adapter.adapt(diagram, roster, [RoleOverride("r1", "big")])
    assert exc.value.unfillable_roles == ["r2"]


@pytest.mark.parametrize(
    "override,field",
    [
        (RoleOverride("nope", "A"), "overrides[0].roleId"),
        (RoleOverride("r1", "nobody"), "overrides[0].playerId"),
    ],
)
def test_unknown_override_ids(adapter, designed_play, roster, override, field):
    with pytest.raises(InvalidInputError) as exc:
        adapter.adapt(designed_play, roster, [override])
    assert exc.value.field == field


@pytest.mark.parametrize(
    "overrides,field",
    [
        ([RoleOverride("r1", "A"), RoleOverride("r2", "A")], "overrides[1].playerId"),
        ([RoleOverride("r1", "A"), RoleOverride("r1", "B")], "overrides[1].roleId"),
    ],
)
def test_duplicate_overrides_are_rejected(adapter, designed_play, roster, overrides, field):
    """One roster member per role and one role per roster member."""
    with pytest.raises(InvalidInputError) as exc:
        adapter.adapt(designed_play, roster, overrides)
    assert exc.value.field == field


def test_token_without_role_is_rejected(adapter):
    diagram = PlayDiagram(800, 600, (PlayerToken(id="r1", label="1", start=Point(1, 1)),))
    with pytest.raises(InvalidInputError) as exc:
        adapter.adapt(diagram, [RosterMember(id="a", position="PG")])
    assert exc.value.field == "diagram.players[0].role"


def test_adapt_payload_round_trips_into_animation(adapter):
    """Adapted output validates and animates like any other diagram."""
    payload = {
        "diagram": {
            "courtWidth": 800,
            "courtHeight": 600,
            "players": [
                {
                    "id": "ball",
                    "label": "1",
                    "start": {"x": 400, "y": 500},
                    "path": [
                        {"t": 0, "x": 400, "y": 500, "event": {"type": "possession"}},
                        {"t": 500, "x": 400, "y": 450, "event": {"type": "pass", "to": "wing"}},
                    ],
                    "role": {"position": "point guard", "skills": {"ballHandling": 1}},
                },
                {
                    "id": "wing",
                    "label": "2",
                    "start": {"x": 150, "y": 300},
                    "role": {"position": "SG", "skills": {"shooting": 1}},
                },
            ],
        },
        "roster": [
            {"id": "p7", "positionCategory": "SG", "skills": {"shooting": 90}},
            {"id": "p3", "positionCategory": "PG", "skills": {"ballHandling": 85}},
        ],
        "overrides": [],
    }
    result = adapter.adapt_payload(payload)
    assert result.mapping == {"ball": "p3", "wing": "p7"}

    service = AnimationService(sampler=FrameSampler(max_frame_count=100))
    animation = service.animate({
        "diagram": result.adapted_diagram.to_dict(),
        "settings": {"fps": 10, "duration": 1000},
    })
    assert animation.keyframes[1].involved_player_ids == ("p3", "p7")
    last = animation.frames[-1]
    assert [p.id for p in last.players if p.active] == ["p7"]


def test_adapt_payload_rejects_bad_roster(adapter, designed_play):
    payload = {
        "diagram": designed_play.to_dict(),
        "roster": [{"id": "a", "positionCategory": "goalkeeper"}],
    }
    with pytest.raises(InvalidInputError) as exc:
        adapter.adapt_payload(payload)
    assert exc.value.field.startswith("roster[0]")
