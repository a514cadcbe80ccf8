from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Tuple

from gumshoe.dialogue import (
    assemble_message,
    examine_message,
    generate_alibi_response,
    generate_question_response,
    lose_message,
    move_message,
    take_message,
    win_message,
)
from gumshoe.models import (
    MESSAGE_LOG_LIMIT,
    NPC,
    PHASE_ASSEMBLED,
    PHASE_LOST,
    PHASE_PLAYING,
    PHASE_WON,
    SELECTION_ITEM,
    SELECTION_NPC,
    TERMINAL_PHASES,
    GameState,
    Item,
    Selection,
    append_messages,
)
from gumshoe.queries import can_move_to, check_win_condition, find_item, find_npc, find_room


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    action: str
    message: str = ""
    # Why a declined action did nothing; empty on success.
    reason: str = ""

    @staticmethod
    def success(action: str, message: str = "") -> "ActionResult":
        return ActionResult(True, action, message, "")

    @staticmethod
    def declined(action: str, reason: str) -> "ActionResult":
        return ActionResult(False, action, "", reason)


Outcome = Tuple[GameState, ActionResult]


# ----------------------------
# Small helpers
# ----------------------------

def _say(state: GameState, message: str, limit: int, **changes: Any) -> GameState:
    return replace(state, messages=append_messages(state.messages, message, limit=limit), **changes)


def _game_over(state: GameState, action: str) -> Optional[ActionResult]:
    if state.phase in TERMINAL_PHASES:
        return ActionResult.declined(action, f"The case is closed ({state.phase}); start a new game")
    return None


def _selected_npc(state: GameState, action: str) -> Tuple[Optional[NPC], Optional[ActionResult]]:
    if state.selected is None or state.selected.kind != SELECTION_NPC:
        return None, ActionResult.declined(action, "Select a suspect first")
    npc = find_npc(state, state.selected.id)
    if npc is None:
        return None, ActionResult.declined(action, f"Unknown suspect: {state.selected.id}")
    return npc, None


def _selected_item(state: GameState, action: str) -> Tuple[Optional[Item], Optional[ActionResult]]:
    if state.selected is None or state.selected.kind != SELECTION_ITEM:
        return None, ActionResult.declined(action, "Select an item first")
    item = find_item(state, state.selected.id)
    if item is None:
        return None, ActionResult.declined(action, f"Unknown item: {state.selected.id}")
    return item, None


# ----------------------------
# Actions
# ----------------------------

def select(state: GameState, selection: Optional[Selection]) -> Outcome:
    denied = _game_over(state, "SELECT")
    if denied:
        return state, denied

    if selection is None:
        return replace(state, selected=None), ActionResult.success("SELECT")

    if selection.kind == SELECTION_NPC:
        found = find_npc(state, selection.id) is not None
    elif selection.kind == SELECTION_ITEM:
        found = find_item(state, selection.id) is not None
    else:
        return state, ActionResult.declined("SELECT", f"Unknown selection kind: {selection.kind}")

    if not found:
        return state, ActionResult.declined("SELECT", f"Unknown {selection.kind}: {selection.id}")
    return replace(state, selected=selection), ActionResult.success("SELECT")


def move_to_room(state: GameState, room_id: str, *, limit: int = MESSAGE_LOG_LIMIT) -> Outcome:
    denied = _game_over(state, "MOVE")
    if denied:
        return state, denied

    room = find_room(state, room_id)
    if room is None:
        return state, ActionResult.declined("MOVE", f"Unknown room: {room_id}")
    if not can_move_to(state, room_id):
        return state, ActionResult.declined("MOVE", f"Blocked: no door from {state.current_room} to {room_id}")

    message = move_message(room.name)
    return _say(state, message, limit, current_room=room.id, selected=None), ActionResult.success("MOVE", message)


def examine(state: GameState, *, limit: int = MESSAGE_LOG_LIMIT) -> Outcome:
    denied = _game_over(state, "EXAMINE")
    if denied:
        return state, denied

    item, denied = _selected_item(state, "EXAMINE")
    if denied:
        return state, denied

    message = examine_message(item.name, item.description)
    return _say(state, message, limit), ActionResult.success("EXAMINE", message)


def take(state: GameState, *, limit: int = MESSAGE_LOG_LIMIT) -> Outcome:
    denied = _game_over(state, "TAKE")
    if denied:
        return state, denied

    item, denied = _selected_item(state, "TAKE")
    if denied:
        return state, denied
    if not item.can_take:
        return state, ActionResult.declined("TAKE", f"The {item.name} cannot be taken")
    if item.id in state.inventory:
        return state, ActionResult.declined("TAKE", f"The {item.name} is already in your inventory")

    message = take_message(item.name)
    new_state = _say(state, message, limit, inventory=state.inventory + (item.id,), selected=None)
    return new_state, ActionResult.success("TAKE", message)


def question(state: GameState, rng: random.Random, *, limit: int = MESSAGE_LOG_LIMIT) -> Outcome:
    denied = _game_over(state, "QUESTION")
    if denied:
        return state, denied

    npc, denied = _selected_npc(state, "QUESTION")
    if denied:
        return state, denied

    message = generate_question_response(npc, rng)
    return _say(state, message, limit), ActionResult.success("QUESTION", message)


def alibi(state: GameState, rng: random.Random, *, limit: int = MESSAGE_LOG_LIMIT) -> Outcome:
    denied = _game_over(state, "ALIBI")
    if denied:
        return state, denied

    npc, denied = _selected_npc(state, "ALIBI")
    if denied:
        return state, denied

    message = generate_alibi_response(npc, state.npcs, state.rooms, rng)
    return _say(state, message, limit), ActionResult.success("ALIBI", message)


def assemble(state: GameState, *, limit: int = MESSAGE_LOG_LIMIT) -> Outcome:
    denied = _game_over(state, "ASSEMBLE")
    if denied:
        return state, denied
    if state.phase != PHASE_PLAYING:
        return state, ActionResult.declined("ASSEMBLE", "The suspects are already assembled")
    if not state.inventory:
        return state, ActionResult.declined("ASSEMBLE", "Pick up the murder weapon first")

    npcs = tuple(replace(npc, current_room=state.current_room) for npc in state.npcs)
    message = assemble_message()
    return _say(state, message, limit, npcs=npcs, phase=PHASE_ASSEMBLED), ActionResult.success("ASSEMBLE", message)


def accuse(state: GameState, *, limit: int = MESSAGE_LOG_LIMIT) -> Outcome:
    denied = _game_over(state, "ACCUSE")
    if denied:
        return state, denied

    accused, denied = _selected_npc(state, "ACCUSE")
    if denied:
        return state, denied
    if state.phase != PHASE_ASSEMBLED:
        return state, ActionResult.declined("ACCUSE", "Assemble the suspects first")

    room = find_room(state, state.current_room)
    weapon = find_item(state, state.murder_weapon)
    if room is None or weapon is None:
        return state, ActionResult.declined("ACCUSE", "The scene of the accusation cannot be resolved")

    # No partial credit: the player is not told which part was wrong.
    if check_win_condition(state, accused.id) == "win":
        message = win_message(accused.name, state.victim, weapon.name, room.name)
        return _say(state, message, limit, phase=PHASE_WON), ActionResult.success("ACCUSE", message)

    message = lose_message(accused.name)
    return _say(state, message, limit, phase=PHASE_LOST), ActionResult.success("ACCUSE", message)


# ----------------------------
# Dispatch
# ----------------------------

def _select_from(state: GameState, action: Dict[str, Any]) -> Outcome:
    entity = action.get("entity")
    if not entity:
        return select(state, None)
    if not isinstance(entity, dict):
        return state, ActionResult.declined("SELECT", "entity must be an object with kind and id")
    return select(state, Selection(kind=str(entity.get("kind", "")), id=str(entity.get("id", ""))))


ACTIONS: Dict[str, Callable[[GameState, Dict[str, Any], random.Random, int], Outcome]] = {
    "MOVE": lambda s, a, rng, limit: move_to_room(s, str(a.get("room_id", "")), limit=limit),
    "SELECT": lambda s, a, rng, limit: _select_from(s, a),
    "EXAMINE": lambda s, a, rng, limit: examine(s, limit=limit),
    "TAKE": lambda s, a, rng, limit: take(s, limit=limit),
    "QUESTION": lambda s, a, rng, limit: question(s, rng, limit=limit),
    "ALIBI": lambda s, a, rng, limit: alibi(s, rng, limit=limit),
    "ASSEMBLE": lambda s, a, rng, limit: assemble(s, limit=limit),
    "ACCUSE": lambda s, a, rng, limit: accuse(s, limit=limit),
}


def apply_action(
    state: GameState,
    action: Dict[str, Any],
    rng: random.Random,
    *,
    limit: int = MESSAGE_LOG_LIMIT,
) -> Outcome:
    """Apply ``{"type": "MOVE", "room_id": ...}``-style payloads. NEW_GAME is handled by the session."""
    action_type = str(action.get("type", "")).upper()
    handler = ACTIONS.get(action_type)
    if handler is None:
        return state, ActionResult.declined(action_type or "?", f"Unknown action: {action_type}")
    return handler(state, action, rng, limit)
