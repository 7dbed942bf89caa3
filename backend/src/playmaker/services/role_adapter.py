"""Role adaptation: bind a play's designed roles to a concrete roster."""

import logging
import math
from typing import Any, Optional

from playmaker.config import get_settings
from playmaker.errors import AdaptationError, InvalidInputError
from playmaker.models.assignment import (
    AdaptationResult,
    FixedAssignment,
    Infeasible,
    RoleAssignment,
)
from playmaker.models.diagram import (
    EventType,
    MovementPath,
    PlayDiagram,
    PlayerToken,
    Waypoint,
    WaypointEvent,
)
from playmaker.models.roster import RoleOverride, RosterMember, Skill
from playmaker.models.schemas import AdaptationRequestSchema
from playmaker.services.diagram_validator import (
    diagram_from_schema,
    overrides_from_schema,
    roster_from_schema,
    validate_schema,
)
from playmaker.services.engine.assignment_solver import solve_assignment
from playmaker.services.engine.cost_model import RoleCostModel

logger = logging.getLogger(__name__)


def _remap_event(event: Optional[WaypointEvent], mapping: dict[str, str]) -> Optional[WaypointEvent]:
    if event is None or event.target is None:
        return event
    return WaypointEvent(type=event.type, target=mapping[event.target], label=event.label)


def remap_diagram(diagram: PlayDiagram, mapping: dict[str, str]) -> PlayDiagram:
    """Rename tokens (and event targets) through mapping, keeping geometry as designed."""
    players = []
    for token in diagram.players:
        path = None
        if token.path is not None:
            path = MovementPath(tuple(
                Waypoint(t=wp.t, x=wp.x, y=wp.y, event=_remap_event(wp.event, mapping))
                for wp in token.path
            ))
        players.append(
            PlayerToken(
                id=mapping[token.id],
                label=token.label,
                start=token.start,
                path=path,
                role=token.role,
            )
        )
    return diagram.with_players(players)


class RoleAdapter:
    """Maps abstract roles onto roster members by minimum-cost assignment.

    Overrides are applied first as fixed pairings; the rest is solved as a
    bipartite assignment over the cost model. Either every role is filled or
    AdaptationError is raised; partial results are never returned.
    """

    def __init__(
        self,
        cost_model: Optional[RoleCostModel] = None,
        small_screener_size: Optional[int] = None,
    ):
        self.cost_model = cost_model or RoleCostModel()
        self.small_screener_size = (
            get_settings().small_screener_size if small_screener_size is None else small_screener_size
        )

    def adapt(
        self,
        diagram: PlayDiagram,
        roster: list[RosterMember],
        overrides: Optional[list[RoleOverride]] = None,
    ) -> AdaptationResult:
        overrides = overrides or []

        for i, token in enumerate(diagram.players):
            if token.role is None:
                raise InvalidInputError(f"diagram.players[{i}].role", f"Token {token.id} has no role")

        members = {member.id: member for member in roster}
        role_ids = diagram.player_ids
        overridden_roles: set[str] = set()
        overridden_players: set[str] = set()
        for i, override in enumerate(overrides):
            if override.role_id not in role_ids:
                raise InvalidInputError(f"overrides[{i}].roleId", f"Unknown role: {override.role_id}")
            if override.role_id in overridden_roles:
                raise InvalidInputError(
                    f"overrides[{i}].roleId", f"Role overridden twice: {override.role_id}"
                )
            if override.player_id not in members:
                raise InvalidInputError(
                    f"overrides[{i}].playerId", f"Unknown roster member: {override.player_id}"
                )
            if override.player_id in overridden_players:
                raise InvalidInputError(
                    f"overrides[{i}].playerId", f"Player assigned twice: {override.player_id}"
                )
            overridden_roles.add(override.role_id)
            overridden_players.add(override.player_id)

        # Step 1: fixed pairings
        fixed: dict[str, FixedAssignment] = {}
        for override in overrides:
            token = diagram.get_player(override.role_id)
            cost = self.cost_model.cost(token.role, members[override.player_id])
            fixed[override.role_id] = FixedAssignment(
                role_id=override.role_id,
                player_id=override.player_id,
                cost=None if math.isinf(cost) else cost,
            )

        # Step 2: cost matrix for what is left
        taken = {f.player_id for f in fixed.values()}
        open_tokens = [token for token in diagram.players if token.id not in fixed]
        candidates = [member for member in roster if member.id not in taken]
        costs = self.cost_model.matrix([token.role for token in open_tokens], candidates)

        # Step 3: solve
        outcome = solve_assignment(
            [token.id for token in open_tokens],
            [member.id for member in candidates],
            costs,
        )
        if isinstance(outcome, Infeasible):
            logger.warning(
                f"Adaptation infeasible ({outcome.reason}): {', '.join(outcome.unfillable_roles)}"
            )
            raise AdaptationError(list(outcome.unfillable_roles), outcome.reason)

        solved = {
            role_id: (player_id, cost)
            for (role_id, player_id), cost in zip(outcome.pairs, outcome.costs)
        }
        assignments = []
        for token in diagram.players:
            if token.id in fixed:
                f = fixed[token.id]
                assignments.append(RoleAssignment(token.id, f.player_id, "fixed", f.cost))
            else:
                player_id, cost = solved[token.id]
                assignments.append(RoleAssignment(token.id, player_id, "solved", cost))

        mapping = {a.role_id: a.player_id for a in assignments}
        adapted = remap_diagram(diagram, mapping)
        notes = self._notes(diagram, assignments, members)

        result = AdaptationResult(
            original_diagram=diagram,
            adapted_diagram=adapted,
            assignments=tuple(assignments),
            notes=tuple(notes),
        )
        logger.info(
            f"Adapted {len(assignments)} roles ({len(fixed)} fixed), total cost {result.total_cost:.2f}"
        )
        return result

    def _notes(
        self,
        diagram: PlayDiagram,
        assignments: list[RoleAssignment],
        members: dict[str, RosterMember],
    ) -> list[str]:
        """Coaching notes about compromises in the chosen lineup."""
        notes = []
        for assignment in assignments:
            token = diagram.get_player(assignment.role_id)
            member = members[assignment.player_id]
            name = member.display_name

            if assignment.cost is None:
                notes.append(
                    f"Override places {name} ({member.position}) in {token.id}, "
                    f"which calls for a {token.role.position}"
                )
            elif member.position != token.role.position:
                notes.append(
                    f"{name} plays {token.id} out of position "
                    f"({member.position} in a {token.role.position} role)"
                )

            sets_screens = token.path is not None and any(
                wp.event is not None and wp.event.type == EventType.SCREEN for wp in token.path
            )
            size = member.rating(Skill.SIZE.value)
            if sets_screens and size < self.small_screener_size:
                notes.append(f"{name} may struggle with screens due to smaller size ({size}/100)")
        return notes

    def adapt_payload(self, payload: Any) -> AdaptationResult:
        """Validate a raw {diagram, roster, overrides?} request and adapt it."""
        request = validate_schema(AdaptationRequestSchema, payload)
        diagram = diagram_from_schema(request.diagram, "diagram")
        roster = roster_from_schema(request.roster)
        overrides = overrides_from_schema(request.overrides)
        return self.adapt(diagram, roster, overrides)
