"""Tests for ContentRegistry -- loading and serving battle content."""

import pytest
from pydantic import ValidationError

from bead_tactics.ir.content_set import ContentSet
from bead_tactics.sim.content.registry import ContentRegistry


class TestSampleContent:
    def test_loads_everything(self, registry):
        assert [c.id for c in registry.get_all_classes()] == ["knight"]
        assert registry.list_monster_ids() == ["ogre"]
        assert {a.id for a in registry.get_all_actions()} == {"move", "run", "attack", "rest"}
        assert registry.get_arena("pit").width == 9

    def test_ogre_states_are_named(self, registry):
        states = registry.get_monster("ogre").state_definitions()
        assert [s.name for s in states] == ["idle", "stalk", "smash"]

    def test_attack_option_parsed(self, registry):
        attack = registry.get_action("attack")
        style = attack.get_parameter("style")

        assert style.optional
        assert not style.multi_select
        assert style.get_choice("heavy").cost.red == 1
        assert attack.options["heavy"].modified_effect_ids() == ["strike"]

    def test_repr(self, registry):
        assert repr(registry) == "ContentRegistry(classes=1, monsters=1, arenas=1, actions=4)"


class TestLookupErrors:
    @pytest.mark.parametrize("method", ["get_class", "get_monster", "get_arena", "get_action"])
    def test_unknown_id(self, registry, method):
        with pytest.raises(ValueError, match="Unknown"):
            getattr(registry, method)("nope")


class TestLoading:
    def test_later_loads_override(self):
        reg = ContentRegistry()
        reg.load_sample_content()
        reg.load_content_set(ContentSet(actions=[{"id": "rest", "name": "Nap"}]))

        assert reg.get_action("rest").name == "Nap"
        assert len(reg.actions) == 4

    def test_invalid_mapping_raises(self):
        with pytest.raises(ValidationError):
            ContentRegistry().load_content_set({"arenas": [{"id": "x", "name": "X", "width": 0, "height": 3}]})
