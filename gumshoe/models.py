"""
In-memory game data model for the Gumshoe murder mystery.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple

from gumshoe.layout import Room
from gumshoe.pools import slugify

# Game phases
PHASE_PLAYING = "playing"
PHASE_ASSEMBLED = "assembled"
PHASE_WON = "won"
PHASE_LOST = "lost"
TERMINAL_PHASES = frozenset({PHASE_WON, PHASE_LOST})

SELECTION_NPC = "npc"
SELECTION_ITEM = "item"

MURDER_WEAPON_ID = "weapon-murder"
MESSAGE_LOG_LIMIT = 20


@dataclass(frozen=True)
class Alibi:
    with_whom: str  # NPC id
    in_room: str    # Room id


@dataclass(frozen=True)
class AlibiGroup:
    id: str
    room: str
    members: Tuple[str, ...]


@dataclass(frozen=True)
class NPC:
    id: str
    name: str
    gender: str
    current_room: str
    alibi: Optional[Alibi] = None
    clues: Tuple[str, ...] = ()
    is_murderer: bool = False


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    room: str
    is_murder_weapon: bool
    can_take: bool
    description: str


@dataclass(frozen=True)
class Selection:
    kind: str  # "npc" | "item"
    id: str


@dataclass(frozen=True)
class GameState:
    # Player
    current_room: str
    inventory: Tuple[str, ...]

    # World
    rooms: Tuple[Room, ...]
    npcs: Tuple[NPC, ...]
    items: Tuple[Item, ...]

    # Solution
    murder_weapon: str  # Item id
    murder_room: str    # Room id
    murderer: str       # NPC id
    victim: str         # Display name only; the victim is not an NPC

    messages: Tuple[str, ...] = ()
    selected: Optional[Selection] = None
    phase: str = PHASE_PLAYING
    alibi_groups: Tuple[AlibiGroup, ...] = field(default_factory=tuple)


def append_messages(messages: Tuple[str, ...], *new: str, limit: int = MESSAGE_LOG_LIMIT) -> Tuple[str, ...]:
    """Keep the most recent ``limit`` entries, then append ``new``."""
    return tuple(messages[-limit:]) + tuple(new)


def item_handle(item: Item) -> str:
    """Public name for an item. Internal ids would single out the murder weapon."""
    return slugify(item.name)


def _public_selection(selected: Optional[Selection], public_id: Dict[str, str]) -> Optional[Dict[str, str]]:
    if selected is None:
        return None
    if selected.kind == SELECTION_ITEM:
        return {"kind": selected.kind, "id": public_id.get(selected.id, selected.id)}
    return asdict(selected)


def to_dict(state: GameState, reveal: bool = False) -> Dict[str, Any]:
    """JSON-ready view of the state.

    Solution fields and clue text appear only with ``reveal``. Without it items
    are keyed and ordered by their public handle.
    """
    npcs = []
    for npc in state.npcs:
        entry: Dict[str, Any] = {
            "id": npc.id,
            "name": npc.name,
            "gender": npc.gender,
            "current_room": npc.current_room,
        }
        if reveal:
            entry["alibi"] = asdict(npc.alibi) if npc.alibi else None
            entry["clues"] = list(npc.clues)
            entry["is_murderer"] = npc.is_murderer
        npcs.append(entry)

    public_id = {item.id: (item.id if reveal else item_handle(item)) for item in state.items}
    ordered = state.items if reveal else sorted(state.items, key=item_handle)

    items = []
    for item in ordered:
        entry = {
            "id": public_id[item.id],
            "name": item.name,
            "room": None if item.id in state.inventory else item.room,
            "can_take": item.can_take,
            "description": item.description,
        }
        if reveal:
            entry["handle"] = item_handle(item)
            entry["is_murder_weapon"] = item.is_murder_weapon
        items.append(entry)

    payload: Dict[str, Any] = {
        "phase": state.phase,
        "current_room": state.current_room,
        "inventory": [public_id.get(item_id, item_id) for item_id in state.inventory],
        "victim": state.victim,
        "selected": _public_selection(state.selected, public_id),
        "messages": list(state.messages),
        "rooms": [
            {
                "id": room.id,
                "name": room.name,
                "doors": [asdict(door) for door in room.doors],
            }
            for room in state.rooms
        ],
        "npcs": npcs,
        "items": items,
    }
    if reveal:
        payload["solution"] = {
            "murderer": state.murderer,
            "murder_room": state.murder_room,
            "murder_weapon": state.murder_weapon,
        }
        payload["alibi_groups"] = [
            {"id": group.id, "room": group.room, "members": list(group.members)}
            for group in state.alibi_groups
        ]
    return payload
