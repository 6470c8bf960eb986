"""Tests for action, effect and combatant schemas."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from special_actions.models import (
    Ability,
    Action,
    ActionType,
    AoeEffect,
    Combatant,
    CombatantType,
    CustomEffect,
    DamageEffect,
    Effect,
    RechargeAbility,
    SaveEffect,
    Trigger,
    TriggerType,
)


effect_adapter: TypeAdapter[Effect] = TypeAdapter(Effect)


class TestEffectUnion:
    """Tests for parsing the effect tree."""

    def test_discriminated_by_type(self) -> None:
        """Test the type tag selects the effect variant."""
        effect = effect_adapter.validate_python(
            {"type": "damage", "damage": "2d6", "damageType": "fire", "targets": {"type": "all"}}
        )

        assert isinstance(effect, DamageEffect)
        assert effect.damage == "2d6"
        assert effect.damage_type == "fire"

    def test_unknown_type_rejected(self) -> None:
        """Test an unknown effect tag is a validation error."""
        with pytest.raises(ValidationError):
            effect_adapter.validate_python({"type": "teleport"})

    def test_inline_save_alias(self) -> None:
        """Test inline saves are read from savingThrow."""
        effect = effect_adapter.validate_python(
            {
                "type": "damage",
                "damage": 20,
                "savingThrow": {"ability": "dex", "dc": 15, "halfOnSuccess": True},
            }
        )

        assert effect.save is not None  # type: ignore[union-attr]
        assert effect.save.ability == Ability.DEX  # type: ignore[union-attr]
        assert effect.save.half_on_success is True  # type: ignore[union-attr]
        assert "savingThrow" in effect.model_dump(by_alias=True)

    def test_nested_aoe(self) -> None:
        """Test area effects parse their nested effects recursively."""
        effect = effect_adapter.validate_python(
            {
                "type": "aoe",
                "area": {"shape": "sphere", "size": 20, "origin": [3, 4]},
                "effects": [
                    {"type": "damage", "damage": 8},
                    {"type": "aoe", "effects": [{"type": "condition", "condition": "prone"}]},
                ],
            }
        )

        assert isinstance(effect, AoeEffect)
        assert effect.area is not None
        assert effect.area.origin == [3, 4]
        assert isinstance(effect.effects[1], AoeEffect)

    def test_save_branches_accept_single_object(self) -> None:
        """Test a lone onFailure object becomes a one-element list."""
        effect = effect_adapter.validate_python(
            {
                "type": "save",
                "ability": "wisdom",
                "dc": 14,
                "onFailure": {"type": "condition", "condition": "frightened", "duration": 1},
            }
        )

        assert isinstance(effect, SaveEffect)
        assert effect.ability == Ability.WIS
        assert len(effect.on_failure) == 1
        assert effect.on_success == []

    def test_custom_keeps_unknown_keys(self) -> None:
        """Test custom effects keep caller data the engine does not read."""
        effect = effect_adapter.validate_python(
            {"type": "custom", "payload": {"note": "roll on table"}, "tableId": 7}
        )

        assert isinstance(effect, CustomEffect)
        assert effect.payload == {"note": "roll on table"}
        assert effect.model_dump(by_alias=True)["tableId"] == 7

    def test_negative_duration_rejected(self) -> None:
        """Test condition durations cannot be negative."""
        with pytest.raises(ValidationError):
            effect_adapter.validate_python({"type": "condition", "condition": "stunned", "duration": -1})


class TestAction:
    """Tests for the Action schema."""

    def test_type_required(self) -> None:
        """Test every action declares its economy."""
        with pytest.raises(ValidationError):
            Action(name="Mystery")  # type: ignore[call-arg]

    def test_defaults(self) -> None:
        """Test cost defaults to 1 and effects to an empty list."""
        action = Action(name="Detect", type=ActionType.LEGENDARY)

        assert action.cost == 1
        assert action.effects == []
        assert action.id

    @pytest.mark.parametrize("threshold", [0, 7])
    def test_recharge_threshold_bounds(self, threshold: int) -> None:
        """Test recharge thresholds must be a d6 face."""
        with pytest.raises(ValidationError):
            Action(name="Breath", type="recharge", recharge=threshold)

    def test_unknown_trigger_type_kept(self) -> None:
        """Test unknown trigger types survive as plain strings."""
        trigger = Trigger.model_validate({"type": "ally_falls"})

        assert trigger.type == "ally_falls"
        assert not isinstance(trigger.type, TriggerType)

    def test_known_trigger_type_parsed(self) -> None:
        """Test known trigger types become enum members."""
        assert Trigger(type="spell_cast").type is TriggerType.SPELL_CAST

    def test_recharge_ability_defaults(self) -> None:
        """Test a recharge binding starts charged with threshold 5."""
        ability = RechargeAbility(action_id="breath")

        assert ability.threshold == 5
        assert ability.charged is True


class TestEnums:
    """Tests for enum helpers."""

    @pytest.mark.parametrize("raw", ["dex", "DEX", "dexterity", Ability.DEX])
    def test_ability_parse(self, raw: str) -> None:
        """Test abilities accept abbreviations and full names."""
        assert Ability.parse(raw) is Ability.DEX

    def test_ability_parse_rejects_unknown(self) -> None:
        """Test unknown ability names raise ValueError."""
        with pytest.raises(ValueError):
            Ability.parse("luck")

    def test_shared_pools(self) -> None:
        """Test only legendary and mythic actions draw on a cost pool."""
        pooled = {action_type for action_type in ActionType if action_type.uses_shared_pool}

        assert pooled == {ActionType.LEGENDARY, ActionType.MYTHIC}


class TestCombatant:
    """Tests for the Combatant schema."""

    def test_ability_keys_parsed(self) -> None:
        """Test ability keys accept abbreviations."""
        combatant = Combatant(name="Rogue", abilities={"dex": 18}, saving_throws={"dexterity": 7})

        assert combatant.ability_score(Ability.DEX) == 18
        assert combatant.ability_score(Ability.STR) == 10
        assert combatant.saving_throws[Ability.DEX] == 7

    def test_defaults_to_monster(self) -> None:
        """Test combatants fight for the monsters unless told otherwise."""
        assert Combatant(name="Wolf").type == CombatantType.MONSTER

    def test_conscious(self) -> None:
        """Test consciousness follows hit points."""
        combatant = Combatant(name="Guard", hp=1, max_hp=11)
        assert combatant.is_conscious is True

        combatant.hp = 0
        assert combatant.is_conscious is False

    def test_caller_fields_kept(self) -> None:
        """Test callers can attach their own data to combatants."""
        combatant = Combatant(name="Paladin", initiative=17)

        assert combatant.model_extra == {"initiative": 17}
