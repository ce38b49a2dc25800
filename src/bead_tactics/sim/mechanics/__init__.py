"""Game mechanics for the bead-tactics simulator.

Re-exports the primary names from each mechanics module for convenience.

Usage::

    from bead_tactics.sim.mechanics import (
        BeadPile, BeadPool, PlayerBeadSystem, can_afford, select_random_bead,
        DiceRoller,
        find_closest_target, step_toward,
    )
"""

# -- beads -------------------------------------------------------------------
from .beads import (
    BeadPile,
    BeadPool,
    PlayerBeadSystem,
    bead_counts_to_action_cost,
    can_afford,
    select_random_bead,
)

# -- dice --------------------------------------------------------------------
from .dice import DiceRoller, parse_dice_notation

# -- targeting ---------------------------------------------------------------
from .targeting import find_closest_target, step_toward

__all__ = [
    # beads
    "BeadPile",
    "BeadPool",
    "PlayerBeadSystem",
    "bead_counts_to_action_cost",
    "can_afford",
    "select_random_bead",
    # dice
    "DiceRoller",
    "parse_dice_notation",
    # targeting
    "find_closest_target",
    "step_toward",
]
