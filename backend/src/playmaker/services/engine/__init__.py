"""Pure computation components: trajectories, frame sampling and role assignment."""
from playmaker.services.engine.trajectory import Trajectory, build_trajectories, build_trajectory
from playmaker.services.engine.frame_sampler import FrameSampler, extract_keyframes
from playmaker.services.engine.assignment_solver import solve_assignment
from playmaker.services.engine.cost_model import RoleCostModel

__all__ = [
    "Trajectory",
    "build_trajectories",
    "build_trajectory",
    "FrameSampler",
    "extract_keyframes",
    "solve_assignment",
    "RoleCostModel",
]
