"""Pure lookups over a GameState. Misses return None or an empty list."""
from __future__ import annotations

from typing import List, Optional

from gumshoe.layout import Room
from gumshoe.models import NPC, AlibiGroup, GameState, Item, item_handle


def find_npc(state: GameState, npc_id: str) -> Optional[NPC]:
    return next((npc for npc in state.npcs if npc.id == npc_id), None)


def find_item(state: GameState, item_id: str) -> Optional[Item]:
    return next((item for item in state.items if item.id == item_id), None)


def find_item_by_handle(state: GameState, handle: str) -> Optional[Item]:
    return next((item for item in state.items if item_handle(item) == handle), None)


def find_room(state: GameState, room_id: str) -> Optional[Room]:
    return next((room for room in state.rooms if room.id == room_id), None)


def npcs_in_room(state: GameState, room_id: str) -> List[NPC]:
    return [npc for npc in state.npcs if npc.current_room == room_id]


def items_in_room(state: GameState, room_id: str) -> List[Item]:
    """Items lying in ``room_id``; anything already taken is excluded."""
    return [item for item in state.items if item.room == room_id and item.id not in state.inventory]


def inventory_items(state: GameState) -> List[Item]:
    return [item for item in (find_item(state, item_id) for item_id in state.inventory) if item is not None]


def can_move_to(state: GameState, target_room_id: str) -> bool:
    # Doors are directed; a reverse door exists only if the layout defines one.
    current = find_room(state, state.current_room)
    if current is None:
        return False
    return any(door.to_room_id == target_room_id for door in current.doors)


def adjacent_rooms(state: GameState) -> List[Room]:
    current = find_room(state, state.current_room)
    if current is None:
        return []
    return [room for room in (find_room(state, door.to_room_id) for door in current.doors) if room is not None]


def alibi_group_of(state: GameState, npc_id: str) -> Optional[AlibiGroup]:
    return next((group for group in state.alibi_groups if npc_id in group.members), None)


def check_win_condition(state: GameState, accused_npc_id: str) -> str:
    has_weapon = state.murder_weapon in state.inventory
    in_murder_room = state.current_room == state.murder_room
    accused_murderer = accused_npc_id == state.murderer

    if has_weapon and in_murder_room and accused_murderer:
        return "win"
    return "lose"
