"""Play agent implementations for headless battle simulation.

Re-exports the base class and all concrete agent implementations so
consumers can do::

    from bead_tactics.sim.play_agents import AutoPlayAdapter, HeuristicAgent
"""

from .base import AutoPlayAdapter, TurnPlan
from .heuristic_agent import HeuristicAgent
from .random_agent import RandomAgent

__all__ = ["AutoPlayAdapter", "HeuristicAgent", "RandomAgent", "TurnPlan"]
