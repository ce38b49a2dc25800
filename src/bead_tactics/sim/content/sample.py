"""Built-in sample battle: a party of knights against the Ogre.

The content is kept in the plain-dict shape the data loader produces so it
goes through the same validation as any loaded content.
"""

from __future__ import annotations

from typing import Any

SAMPLE_ARENA_ID = "pit"
SAMPLE_CLASS_ID = "knight"
SAMPLE_MONSTER_ID = "ogre"

SAMPLE_CONTENT: dict[str, Any] = {
    "actions": [
        {
            "id": "move",
            "name": "Move",
            "category": "movement",
            "description": "Step to an adjacent empty tile.",
            "cost": {"time": 1},
            "parameters": [
                {
                    "type": "tile",
                    "key": "destination",
                    "prompt": "Choose a tile",
                    "range": 1,
                    "filter": "empty",
                },
            ],
            "effects": [
                {"id": "step", "type": "move", "params": {"destination": "$destination"}},
            ],
        },
        {
            "id": "run",
            "name": "Run",
            "category": "movement",
            "description": "Cover up to three tiles at the price of a green bead.",
            "cost": {"time": 2, "green": 1},
            "parameters": [
                {
                    "type": "tile",
                    "key": "destination",
                    "prompt": "Choose a tile",
                    "range": 3,
                    "filter": "empty",
                },
            ],
            "effects": [
                {"id": "dash", "type": "move", "params": {"destination": "$destination"}},
            ],
        },
        {
            "id": "attack",
            "name": "Attack",
            "category": "attack",
            "description": "Strike an adjacent enemy.",
            "cost": {"time": 2, "red": 1},
            "parameters": [
                {
                    "type": "entity",
                    "key": "target",
                    "prompt": "Choose a target",
                    "filter": "enemy",
                    "range": 1,
                },
                {
                    "type": "option",
                    "key": "style",
                    "prompt": "Put your weight behind it?",
                    "optional": True,
                    "multiSelect": False,
                    "options": [
                        {"id": "heavy", "label": "Heavy swing", "cost": {"time": 1, "red": 1}},
                    ],
                },
            ],
            "effects": [
                {
                    "id": "strike",
                    "type": "attack",
                    "params": {"targetEntity": "$target", "damage": "1d4"},
                },
            ],
            "options": {
                "heavy": {"modifies": "strike", "modifier": {"damage": 2}},
            },
        },
        {
            "id": "rest",
            "name": "Rest",
            "category": "other",
            "description": "Catch your breath and draw two beads.",
            "cost": {"time": 2},
            "parameters": [],
            "effects": [
                {"id": "draw", "type": "drawBeads", "params": {"count": 2, "entityId": "$actor"}},
            ],
        },
    ],
    "classes": [
        {
            "id": SAMPLE_CLASS_ID,
            "name": "Knight",
            "description": "Sturdy melee fighter.",
            "stats": {"health": 10, "speed": 1, "damage": "1d4", "range": 1},
            "beads": {"red": 4, "blue": 2, "green": 3, "white": 3},
            "innate_actions": ["move", "run", "attack", "rest"],
        },
    ],
    "monsters": [
        {
            "id": SAMPLE_MONSTER_ID,
            "name": "Ogre",
            "description": "Slow, angry and hits like a landslide.",
            "stats": {"health": 16},
            "beads": {"red": 3, "blue": 2, "green": 2, "white": 1},
            "start_state": "idle",
            "states": {
                "idle": {
                    "wheel_cost": 2,
                    "range": 1,
                    "damage": 1,
                    "transitions": {
                        "red": "smash", "blue": "stalk", "green": "idle", "white": "idle",
                    },
                },
                "stalk": {
                    "wheel_cost": 1,
                    "range": 1,
                    "damage": 1,
                    "transitions": {
                        "red": "smash", "blue": "stalk", "green": "idle", "white": "stalk",
                    },
                },
                "smash": {
                    "wheel_cost": 3,
                    "range": 1,
                    "damage": 3,
                    "area": "single",
                    "transitions": {
                        "red": "smash", "blue": "stalk", "green": "idle", "white": "idle",
                    },
                },
            },
        },
    ],
    "arenas": [
        {
            "id": SAMPLE_ARENA_ID,
            "name": "The Pit",
            "description": "A square of packed dirt.",
            "width": 9,
            "height": 9,
            "player_spawns": [
                {"x": 1, "y": 1}, {"x": 2, "y": 1}, {"x": 1, "y": 2}, {"x": 2, "y": 2},
            ],
            "monster_spawn": {"x": 5, "y": 4},
        },
    ],
}
