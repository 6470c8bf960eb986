"""Built-in creature templates.

Templates are written in the same camelCase JSON shape the library
imports and exports, so they double as examples of the format.
"""

from __future__ import annotations

from typing import Any


DEFAULT_CATEGORIES: list[tuple[str, str]] = [
    ("dragon", "Dragons"),
    ("undead", "Undead"),
    ("mythic", "Mythic Creatures"),
    ("villain", "Villains"),
    ("paragon", "Paragon Monsters"),
    ("fiend", "Fiends"),
]


DEFAULT_TEMPLATES: list[dict[str, Any]] = [
    {
        "id": "adult_red_dragon",
        "name": "Adult Red Dragon",
        "category": "dragon",
        "description": "A legendary red dragon with fiery breath and a volcanic lair.",
        "maxLegendaryActions": 3,
        "actions": [
            {
                "id": "detect",
                "name": "Detect",
                "description": "The dragon makes a Wisdom (Perception) check.",
                "type": "legendary",
                "cost": 1,
                "effects": [],
            },
            {
                "id": "tail_attack",
                "name": "Tail Attack",
                "description": "The dragon makes a tail attack.",
                "type": "legendary",
                "cost": 1,
                "effects": [
                    {
                        "type": "damage",
                        "damage": "2d8+8",
                        "damageType": "bludgeoning",
                        "targets": {"type": "selected"},
                    }
                ],
            },
            {
                "id": "wing_attack",
                "name": "Wing Attack",
                "description": (
                    "The dragon beats its wings. Each creature within 10 feet must "
                    "succeed on a DC 22 Dexterity saving throw or take bludgeoning "
                    "damage and be knocked prone."
                ),
                "type": "legendary",
                "cost": 2,
                "effects": [
                    {
                        "type": "aoe",
                        "area": {"shape": "sphere", "size": 10},
                        "effects": [
                            {
                                "type": "save",
                                "ability": "dex",
                                "dc": 22,
                                "targets": {"type": "enemies"},
                                "onFailure": [
                                    {"type": "damage", "damage": "2d6+8", "damageType": "bludgeoning"},
                                    {"type": "condition", "condition": "prone", "duration": 1},
                                ],
                            }
                        ],
                    }
                ],
            },
            {
                "id": "fire_breath",
                "name": "Fire Breath",
                "description": "The dragon exhales fire in a 60-foot cone.",
                "type": "recharge",
                "recharge": 5,
                "effects": [
                    {
                        "type": "aoe",
                        "area": {"shape": "cone", "size": 60},
                        "effects": [
                            {
                                "type": "damage",
                                "damage": "18d6",
                                "damageType": "fire",
                                "savingThrow": {"ability": "dex", "dc": 21, "halfOnSuccess": True},
                            }
                        ],
                    }
                ],
            },
            {
                "id": "magma_eruption",
                "name": "Magma Eruption",
                "description": "Magma erupts from a point on the ground the dragon can see.",
                "type": "lair",
                "effects": [
                    {
                        "type": "damage",
                        "damage": "6d6",
                        "damageType": "fire",
                        "targets": {"type": "random", "count": 2},
                        "savingThrow": {"ability": "dex", "dc": 15, "halfOnSuccess": True},
                    }
                ],
            },
            {
                "id": "volcanic_tremor",
                "name": "Volcanic Tremor",
                "description": "A tremor shakes the lair.",
                "type": "lair",
                "effects": [
                    {
                        "type": "condition",
                        "condition": "prone",
                        "targets": {"type": "players"},
                        "savingThrow": {"ability": "dex", "dc": 15, "negateOnSuccess": True},
                    }
                ],
            },
        ],
    },
    {
        "id": "lich",
        "name": "Lich",
        "category": "undead",
        "description": "An undead spellcaster of terrible power.",
        "maxLegendaryActions": 3,
        "actions": [
            {
                "id": "cantrip",
                "name": "Cantrip",
                "description": "The lich casts a cantrip.",
                "type": "legendary",
                "cost": 1,
                "effects": [],
            },
            {
                "id": "paralyzing_touch",
                "name": "Paralyzing Touch",
                "description": "The lich uses its Paralyzing Touch.",
                "type": "legendary",
                "cost": 2,
                "effects": [
                    {
                        "type": "damage",
                        "damage": "3d6",
                        "damageType": "cold",
                        "targets": {"type": "selected"},
                    },
                    {
                        "type": "save",
                        "ability": "con",
                        "dc": 18,
                        "targets": {"type": "selected"},
                        "onFailure": {"type": "condition", "condition": "paralyzed", "duration": 10},
                    },
                ],
            },
            {
                "id": "frightening_gaze",
                "name": "Frightening Gaze",
                "description": "The lich fixes its gaze on one creature it can see.",
                "type": "legendary",
                "cost": 2,
                "effects": [
                    {
                        "type": "condition",
                        "condition": "frightened",
                        "duration": 10,
                        "targets": {"type": "selected"},
                        "savingThrow": {"ability": "wis", "dc": 18, "negateOnSuccess": True},
                    }
                ],
            },
            {
                "id": "disrupt_life",
                "name": "Disrupt Life",
                "description": "Each non-undead creature within 20 feet takes necrotic damage.",
                "type": "legendary",
                "cost": 3,
                "effects": [
                    {
                        "type": "aoe",
                        "area": {"shape": "sphere", "size": 20},
                        "effects": [
                            {
                                "type": "damage",
                                "damage": "6d6",
                                "damageType": "necrotic",
                                "savingThrow": {"ability": "con", "dc": 18, "halfOnSuccess": True},
                            }
                        ],
                    }
                ],
            },
            {
                "id": "grasping_hands",
                "name": "Grasping Hands",
                "description": "Skeletal hands burst from the ground, grasping at the living.",
                "type": "lair",
                "effects": [
                    {
                        "type": "condition",
                        "condition": "restrained",
                        "duration": 1,
                        "targets": {"type": "players"},
                        "savingThrow": {"ability": "str", "dc": 14, "negateOnSuccess": True},
                    }
                ],
            },
        ],
    },
    {
        "id": "mythic_sphinx",
        "name": "Mythic Sphinx",
        "category": "mythic",
        "description": "A guardian sphinx that reveals its mythic nature when first defeated.",
        "maxLegendaryActions": 3,
        "maxMythicActions": 2,
        "actions": [
            {
                "id": "claw_attack",
                "name": "Claw Attack",
                "description": "The sphinx makes one claw attack.",
                "type": "legendary",
                "cost": 1,
                "effects": [
                    {
                        "type": "damage",
                        "damage": "2d10+6",
                        "damageType": "slashing",
                        "targets": {"type": "selected"},
                    }
                ],
            },
            {
                "id": "teleport",
                "name": "Teleport",
                "description": "The sphinx magically teleports up to 120 feet.",
                "type": "legendary",
                "cost": 2,
                "effects": [{"type": "custom", "payload": {"teleport": 120}}],
            },
            {
                "id": "weaken_time",
                "name": "Weaken Time",
                "description": "Time slows around the sphinx's foes.",
                "type": "mythic",
                "cost": 2,
                "effects": [
                    {
                        "type": "save",
                        "ability": "wis",
                        "dc": 18,
                        "targets": {"type": "enemies"},
                        "onFailure": {"type": "condition", "condition": "slowed", "duration": 1},
                    }
                ],
            },
            {
                "id": "rewind",
                "name": "Rewind",
                "description": "The sphinx draws strength from a moment already past.",
                "type": "mythic",
                "cost": 1,
                "effects": [{"type": "healing", "healing": "4d10", "targets": {"type": "self"}}],
            },
        ],
    },
    {
        "id": "goblin_warlord",
        "name": "Goblin Warlord",
        "category": "villain",
        "description": "A cunning boss whose villain actions turn the tide once per round.",
        "villainActionsPerRound": 1,
        "actions": [
            {
                "id": "rally_the_horde",
                "name": "Rally the Horde",
                "description": "Every ally heals and shakes off its fear.",
                "type": "villain_action",
                "effects": [{"type": "healing", "healing": "2d6", "targets": {"type": "allies"}}],
            },
            {
                "id": "call_reinforcements",
                "name": "Call Reinforcements",
                "description": "Goblins pour in from a side tunnel.",
                "type": "villain_action",
                "effects": [{"type": "summon", "creature": "goblin", "count": 3}],
            },
            {
                "id": "scatter",
                "name": "Scatter!",
                "description": "The warlord's traps fling foes across the room.",
                "type": "villain_action",
                "effects": [
                    {
                        "type": "movement",
                        "distance": 15,
                        "direction": "away",
                        "targets": {"type": "enemies"},
                        "savingThrow": {"ability": "str", "dc": 13, "halfDistanceOnSuccess": True},
                    }
                ],
            },
            {
                "id": "redirect_attack",
                "name": "Redirect Attack",
                "description": "When attacked in melee, the warlord swaps places with a goblin.",
                "type": "reaction",
                "trigger": {"type": "attacked", "range": 5},
                "effects": [],
            },
            {
                "id": "nimble_escape",
                "name": "Nimble Escape",
                "description": "The warlord disengages or hides.",
                "type": "bonus_action",
                "effects": [],
            },
        ],
    },
    {
        "id": "paragon_owlbear",
        "name": "Paragon Owlbear",
        "category": "paragon",
        "description": "An owlbear that fights on through multiple paragon phases.",
        "paragonPhases": 2,
        "actions": [
            {
                "id": "ferocious_roar",
                "name": "Ferocious Roar",
                "description": "The owlbear roars, terrifying nearby foes.",
                "type": "paragon_action",
                "phase": 1,
                "effects": [
                    {
                        "type": "condition",
                        "condition": "frightened",
                        "duration": 2,
                        "targets": {"type": "enemies"},
                        "savingThrow": {"ability": "wis", "dc": 13, "halfDurationOnSuccess": True},
                    }
                ],
            },
            {
                "id": "savage_rend",
                "name": "Savage Rend",
                "description": "The owlbear tears into a foe in a frenzy.",
                "type": "paragon_action",
                "phase": 2,
                "effects": [
                    {
                        "type": "damage",
                        "damage": "3d8+5",
                        "damageType": "slashing",
                        "targets": {"type": "selected"},
                    }
                ],
            },
        ],
    },
    {
        "id": "balor",
        "name": "Balor",
        "category": "fiend",
        "description": "A demon of flame and shadow.",
        "actions": [
            {
                "id": "fire_aura",
                "name": "Fire Aura",
                "description": "Creatures near the balor are burned.",
                "type": "bonus_action",
                "effects": [
                    {
                        "type": "aoe",
                        "area": {"shape": "sphere", "size": 5},
                        "effects": [{"type": "damage", "damage": "3d6", "damageType": "fire"}],
                    }
                ],
            },
            {
                "id": "fiery_retaliation",
                "name": "Fiery Retaliation",
                "description": "When the balor takes cold damage, it lashes out with flame.",
                "type": "reaction",
                "trigger": {"type": "damaged", "damageType": "cold"},
                "effects": [
                    {
                        "type": "damage",
                        "damage": "2d6",
                        "damageType": "fire",
                        "targets": {"type": "selected"},
                    }
                ],
            },
            {
                "id": "counter_magic",
                "name": "Counter Magic",
                "description": "The balor disrupts a spell of 3rd level or higher.",
                "type": "reaction",
                "trigger": {"type": "spell_cast", "minLevel": 3},
                "effects": [{"type": "custom", "payload": {"counterspell": True}}],
            },
            {
                "id": "death_throes",
                "name": "Death Throes",
                "description": "The balor explodes when it dies.",
                "type": "recharge",
                "recharge": 6,
                "effects": [
                    {
                        "type": "aoe",
                        "area": {"shape": "sphere", "size": 30},
                        "effects": [
                            {
                                "type": "damage",
                                "damage": "20d6",
                                "damageType": "fire",
                                "savingThrow": {"ability": "dex", "dc": 20, "halfOnSuccess": True},
                            }
                        ],
                    }
                ],
            },
        ],
    },
]


__all__ = [
    "DEFAULT_CATEGORIES",
    "DEFAULT_TEMPLATES",
]
