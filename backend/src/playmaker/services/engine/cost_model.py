"""Cost of placing a roster member into a designed role."""

import math
from typing import Optional

from playmaker.config import get_settings
from playmaker.models.diagram import RoleSpec
from playmaker.models.roster import MAX_RATING, RosterMember
from playmaker.utils.position_normalizer import position_distance


class RoleCostModel:
    """cost = position mismatch penalty + skill gap penalty.

    Position: exact match is free, a neighbouring position costs
    adjacent_position_penalty if the role is flexible, anything else is
    forbidden (math.inf). Skill gap: each emphasised skill adds
    weight * (100 - rating), scaled by skill_gap_scale.
    """

    def __init__(
        self,
        adjacent_position_penalty: Optional[float] = None,
        skill_gap_scale: Optional[float] = None,
    ):
        settings = get_settings()
        self.adjacent_position_penalty = (
            settings.adjacent_position_penalty
            if adjacent_position_penalty is None
            else adjacent_position_penalty
        )
        self.skill_gap_scale = settings.skill_gap_scale if skill_gap_scale is None else skill_gap_scale

    def position_penalty(self, role: RoleSpec, member: RosterMember) -> float:
        distance = position_distance(role.position, member.position)
        if distance == 0:
            return 0.0
        if distance == 1 and role.flexible:
            return self.adjacent_position_penalty
        return math.inf

    def skill_gap_penalty(self, role: RoleSpec, member: RosterMember) -> float:
        gap = sum(weight * (MAX_RATING - member.rating(skill)) for skill, weight in role.skills)
        return gap * self.skill_gap_scale

    def cost(self, role: RoleSpec, member: RosterMember) -> float:
        penalty = self.position_penalty(role, member)
        if math.isinf(penalty):
            return penalty
        return penalty + self.skill_gap_penalty(role, member)

    def matrix(self, roles: list[RoleSpec], members: list[RosterMember]) -> list[list[float]]:
        return [[self.cost(role, member) for member in members] for role in roles]
