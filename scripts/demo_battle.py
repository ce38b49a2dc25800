"""Play the built-in sample battle headless and print what happened.

Usage:
    python scripts/demo_battle.py [--seed 42] [--agent heuristic] [--party 4] [--verbose]
"""

from __future__ import annotations

import argparse
import logging

from bead_tactics.sim.content.registry import ContentRegistry
from bead_tactics.sim.content.sample import SAMPLE_ARENA_ID, SAMPLE_MONSTER_ID
from bead_tactics.sim.core.rng import GameRNG
from bead_tactics.sim.play_agents.base import AutoPlayAdapter
from bead_tactics.sim.play_agents.heuristic_agent import HeuristicAgent
from bead_tactics.sim.play_agents.random_agent import RandomAgent
from bead_tactics.sim.runner import BatchRunner, BattleSimulator


def _agent_factory(name: str):
    def factory(rng: GameRNG) -> AutoPlayAdapter:
        if name == "random":
            return RandomAgent(rng=rng)
        return HeuristicAgent()
    return factory


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the sample bead-tactics battle")
    parser.add_argument("--seed", type=int, default=42, help="Battle seed")
    parser.add_argument("--agent", choices=["heuristic", "random"], default="heuristic")
    parser.add_argument("--party", type=int, default=4, help="Number of heroes")
    parser.add_argument("--runs", type=int, default=1, help="Battles to run (consecutive seeds)")
    parser.add_argument("--verbose", action="store_true", help="Log every turn")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    registry = ContentRegistry()
    registry.load_sample_content()
    print(registry)

    simulator = BattleSimulator(
        registry,
        monster_id=SAMPLE_MONSTER_ID,
        arena_id=SAMPLE_ARENA_ID,
        party_size=args.party,
        agent_factory=_agent_factory(args.agent),
    )
    results = BatchRunner(simulator).run_batch(args.runs, base_seed=args.seed)

    for tel in results:
        print(
            f"seed={tel.seed} result={tel.result} turns={tel.turns} "
            f"monster_hp={tel.monster_hp_end} dealt={tel.damage_dealt} "
            f"taken={tel.damage_taken}"
        )
        print(f"  party hp: {tel.party_hp_end}")
        print(f"  actions:  {tel.actions_by_id}")

    if len(results) > 1:
        print(f"\nWin rate: {BatchRunner.win_rate(results):.1%}")


if __name__ == "__main__":
    main()
