"""Role assignment results.

Solver output is a tagged union: each override becomes a FixedAssignment and
the reduced problem resolves to either SolvedAssignment or Infeasible.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional, Union

from playmaker.models.diagram import PlayDiagram


@dataclass(frozen=True)
class FixedAssignment:
    """An explicit override; cost is None when the pairing is otherwise forbidden."""

    role_id: str
    player_id: str
    cost: Optional[float]


@dataclass(frozen=True)
class SolvedAssignment:
    """Minimum-cost pairing of the roles left after overrides."""

    pairs: tuple[tuple[str, str], ...]  # (role_id, player_id) in role declaration order
    costs: tuple[float, ...]

    @property
    def total_cost(self) -> float:
        return sum(self.costs)


@dataclass(frozen=True)
class Infeasible:
    unfillable_roles: tuple[str, ...]
    reason: str


AssignmentOutcome = Union[SolvedAssignment, Infeasible]


@dataclass(frozen=True)
class RoleAssignment:
    role_id: str
    player_id: str
    source: Literal["fixed", "solved"]
    cost: Optional[float]

    def to_dict(self) -> dict:
        return {
            "roleId": self.role_id,
            "playerId": self.player_id,
            "source": self.source,
            "cost": self.cost,
        }


@dataclass(frozen=True)
class AdaptationResult:
    original_diagram: PlayDiagram
    adapted_diagram: PlayDiagram
    assignments: tuple[RoleAssignment, ...]
    notes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def total_cost(self) -> float:
        return sum(a.cost for a in self.assignments if a.cost is not None)

    @property
    def mapping(self) -> dict[str, str]:
        return {a.role_id: a.player_id for a in self.assignments}

    def to_dict(self) -> dict:
        return {
            "originalDiagram": self.original_diagram.to_dict(),
            "adaptedDiagram": self.adapted_diagram.to_dict(),
            "assignments": [a.to_dict() for a in self.assignments],
            "totalCost": self.total_cost,
            "notes": list(self.notes),
        }
