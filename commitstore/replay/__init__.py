"""
Replay module: rebuild state from commits.
"""

from .runner import ProjectionResult, ReplayResult, project, replay_aggregate

__all__ = ["ProjectionResult", "ReplayResult", "project", "replay_aggregate"]
