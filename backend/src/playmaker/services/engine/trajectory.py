"""Continuous position-of-time functions built from movement paths."""

from bisect import bisect_right
from typing import Optional

from playmaker.models.diagram import MovementPath, PlayDiagram, PlayerToken, Point


class Trajectory:
    """Piecewise-linear position function for one player.

    Rules:
    - before the first waypoint the player sits at its start position
    - between waypoints the position is linearly interpolated
    - after the last waypoint the position holds (no extrapolation)
    - waypoints sharing a timestamp are an instantaneous jump; a query at
      exactly that time returns the later waypoint

    Evaluation keeps no state, so frames can be sampled in any order.
    """

    def __init__(self, start: Point, path: Optional[MovementPath] = None):
        self.start = start
        self._waypoints = tuple(path) if path is not None else ()
        self._times = [wp.t for wp in self._waypoints]

    @property
    def end_time(self) -> float:
        """Time of the last waypoint (0 for stationary players)."""
        return self._times[-1] if self._times else 0.0

    def position_at(self, t: float) -> Point:
        if not self._waypoints:
            return self.start

        # Waypoints with time <= t; with duplicate timestamps this lands past
        # the last duplicate, so the later waypoint wins.
        idx = bisect_right(self._times, t)
        if idx == 0:
            return self.start
        prev = self._waypoints[idx - 1]
        if idx == len(self._waypoints) or t == prev.t:
            return prev.point

        nxt = self._waypoints[idx]
        fraction = (t - prev.t) / (nxt.t - prev.t)
        return Point(
            prev.x + (nxt.x - prev.x) * fraction,
            prev.y + (nxt.y - prev.y) * fraction,
        )

    def __call__(self, t: float) -> Point:
        return self.position_at(t)


def build_trajectory(player: PlayerToken) -> Trajectory:
    return Trajectory(player.start, player.path)


def build_trajectories(diagram: PlayDiagram) -> dict[str, Trajectory]:
    """Trajectories for every player, keyed by id in declaration order."""
    return {player.id: build_trajectory(player) for player in diagram.players}
