"""Battle simulation runner -- ties the builder, the battle loop, a play
agent and telemetry together.

- **BattleSimulator**: builds and runs one battle to completion.
- **BatchRunner**: runs many seeded battles.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from bead_tactics.ir.events import AttackEvent
from bead_tactics.sim.builder import BattleBuilder
from bead_tactics.sim.content.registry import ContentRegistry
from bead_tactics.sim.core.battle_state import BattleState
from bead_tactics.sim.core.rng import GameRNG
from bead_tactics.sim.play_agents.base import AutoPlayAdapter
from bead_tactics.sim.play_agents.heuristic_agent import HeuristicAgent
from bead_tactics.sim.telemetry import BattleTelemetry
from bead_tactics.sim.turns import TurnFlowController, TurnRecord

logger = logging.getLogger(__name__)

_MAX_TURNS = 500

AgentFactory = Callable[[GameRNG], AutoPlayAdapter]


def _default_agent(rng: GameRNG) -> AutoPlayAdapter:
    return HeuristicAgent()


def collect_telemetry(
    seed: int,
    state: BattleState,
    flow: TurnFlowController,
    result: str,
) -> BattleTelemetry:
    """Summarise a finished (or capped) battle from its turn log."""
    telemetry = BattleTelemetry(
        seed=seed,
        result=result,
        turns=flow.turns,
        monster_hp_end=state.monster.current_health,
        party_hp_end={c.id: c.current_health for c in state.characters},
    )
    for record in flow.turn_log:
        _tally(telemetry, state, record)
    return telemetry


def _tally(telemetry: BattleTelemetry, state: BattleState, record: TurnRecord) -> None:
    if state.is_monster(record.actor_id):
        if record.state is not None:
            telemetry.monster_states.append(record.state)
    elif record.action_id is not None:
        telemetry.actions_by_id[record.action_id] = (
            telemetry.actions_by_id.get(record.action_id, 0) + 1
        )

    for event in record.events:
        if not isinstance(event, AttackEvent):
            continue
        if state.is_monster(event.target_id):
            telemetry.damage_dealt += event.damage
        else:
            telemetry.damage_taken += event.damage


class BattleSimulator:
    """Runs single battles of one content setup.

    Parameters
    ----------
    registry:
        Where monster, arena, classes and actions are looked up.
    monster_id, arena_id:
        The encounter.
    class_ids:
        Hero classes, cycled over the party.  Defaults to every class.
    party_size:
        Number of heroes.
    agent_factory:
        ``rng -> AutoPlayAdapter`` called once per battle.  Defaults to a
        :class:`HeuristicAgent`.
    max_turns:
        Turn cap per battle.
    """

    def __init__(
        self,
        registry: ContentRegistry,
        monster_id: str,
        arena_id: str,
        class_ids: list[str] | None = None,
        party_size: int = 4,
        agent_factory: AgentFactory | None = None,
        max_turns: int = _MAX_TURNS,
    ) -> None:
        self.registry = registry
        self.monster_id = monster_id
        self.arena_id = arena_id
        self.class_ids = class_ids
        self.party_size = party_size
        self.agent_factory = agent_factory or _default_agent
        self.max_turns = max_turns

    def build(self, seed: int) -> BattleState:
        classes = (
            [self.registry.get_class(c) for c in self.class_ids]
            if self.class_ids
            else self.registry.get_all_classes()
        )
        return (
            BattleBuilder()
            .with_monster(self.registry.get_monster(self.monster_id))
            .with_arena(self.registry.get_arena(self.arena_id))
            .with_classes(classes)
            .with_actions(self.registry.get_all_actions())
            .with_party_size(self.party_size)
            .with_rng(GameRNG(seed))
            .build()
        )

    def run(self, seed: int) -> BattleTelemetry:
        """Build and play one battle with *seed*, returning telemetry."""
        return asyncio.run(self.run_async(seed))

    async def run_async(self, seed: int) -> BattleTelemetry:
        state = self.build(seed)
        agent = self.agent_factory(state.rng.fork("agent"))
        agent.attach(state)

        flow = TurnFlowController(state, agent, max_turns=self.max_turns, turn_delay_ms=0)
        status = await flow.start()
        telemetry = collect_telemetry(seed, state, flow, status.value)
        logger.debug(
            "Battle seed=%d: %s after %d turns", seed, telemetry.result, telemetry.turns,
        )
        return telemetry


class BatchRunner:
    """Runs many battles with consecutive seeds."""

    def __init__(self, simulator: BattleSimulator) -> None:
        self.simulator = simulator

    def run_batch(self, n_runs: int, base_seed: int = 42) -> list[BattleTelemetry]:
        seeds = [base_seed + i for i in range(n_runs)]
        return [self.simulator.run(seed) for seed in seeds]

    @staticmethod
    def win_rate(results: list[BattleTelemetry]) -> float:
        if not results:
            return 0.0
        return sum(1 for r in results if r.won) / len(results)
