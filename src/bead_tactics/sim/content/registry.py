"""Content registry -- validates and serves classes, monsters, arenas and
actions for the bead-tactics simulator.

Content arrives either as a validated :class:`ContentSet` or as the plain
dicts a data loader produces, which are validated into a ``ContentSet``
first.  The built-in sample battle lives in
:mod:`bead_tactics.sim.content.sample`.
"""

from __future__ import annotations

from typing import Any, Mapping

from bead_tactics.ir.actions import ActionDefinition
from bead_tactics.ir.arenas import ArenaDefinition
from bead_tactics.ir.characters import CharacterClass
from bead_tactics.ir.content_set import ContentSet
from bead_tactics.ir.monsters import MonsterDefinition
from bead_tactics.sim.content.sample import SAMPLE_CONTENT


class ContentRegistry:
    """Single source of truth for battle content during simulation.

    Later loads override earlier ones with the same id.

    Usage::

        registry = ContentRegistry()
        registry.load_sample_content()

        ogre = registry.get_monster("ogre")
        pit = registry.get_arena("pit")
    """

    def __init__(self) -> None:
        self.classes: dict[str, CharacterClass] = {}
        self.monsters: dict[str, MonsterDefinition] = {}
        self.arenas: dict[str, ArenaDefinition] = {}
        self.actions: dict[str, ActionDefinition] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_content_set(self, content: ContentSet | Mapping[str, Any]) -> ContentSet:
        """Register everything in *content*.

        Parameters
        ----------
        content:
            A :class:`ContentSet`, or a mapping with ``classes``,
            ``monsters``, ``arenas`` and ``actions`` lists.

        Returns
        -------
        ContentSet
            The validated content.

        Raises
        ------
        pydantic.ValidationError
            If a mapping does not describe valid content.
        """
        if not isinstance(content, ContentSet):
            content = ContentSet.model_validate(content)

        for char_class in content.classes:
            self.classes[char_class.id] = char_class
        for monster in content.monsters:
            self.monsters[monster.id] = monster
        for arena in content.arenas:
            self.arenas[arena.id] = arena
        for action in content.actions:
            self.actions[action.id] = action
        return content

    def load_sample_content(self) -> ContentSet:
        """Register the built-in sample battle (knights vs. the Ogre)."""
        return self.load_content_set(SAMPLE_CONTENT)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_class(self, class_id: str) -> CharacterClass:
        """Raises ``ValueError`` for unknown ids."""
        return self._lookup(self.classes, class_id, "class")

    def get_monster(self, monster_id: str) -> MonsterDefinition:
        """Raises ``ValueError`` for unknown ids."""
        return self._lookup(self.monsters, monster_id, "monster")

    def get_arena(self, arena_id: str) -> ArenaDefinition:
        """Raises ``ValueError`` for unknown ids."""
        return self._lookup(self.arenas, arena_id, "arena")

    def get_action(self, action_id: str) -> ActionDefinition:
        """Raises ``ValueError`` for unknown ids."""
        return self._lookup(self.actions, action_id, "action")

    def get_all_classes(self) -> list[CharacterClass]:
        return list(self.classes.values())

    def get_all_actions(self) -> list[ActionDefinition]:
        return list(self.actions.values())

    def list_monster_ids(self) -> list[str]:
        return sorted(self.monsters)

    @staticmethod
    def _lookup(table: dict[str, Any], item_id: str, label: str) -> Any:
        try:
            return table[item_id]
        except KeyError:
            raise ValueError(f"Unknown {label} id: {item_id!r}") from None

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"ContentRegistry(classes={len(self.classes)}, "
            f"monsters={len(self.monsters)}, "
            f"arenas={len(self.arenas)}, "
            f"actions={len(self.actions)})"
        )
