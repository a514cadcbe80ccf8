"""Backend API for the Gumshoe murder mystery."""
import logging
import os
from pathlib import Path

from flask import Flask, jsonify, request
from flask_cors import CORS

from gumshoe.config import GameConfig
from gumshoe.models import TERMINAL_PHASES, item_handle, to_dict
from gumshoe.queries import (
    adjacent_rooms,
    alibi_group_of,
    find_item_by_handle,
    find_npc,
    find_room,
    items_in_room,
    npcs_in_room,
)
from gumshoe.session import GameSession

logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)


def _load_config():
    path = os.getenv("GUMSHOE_CONFIG", "").strip()
    if not path:
        return GameConfig()
    logger.info("Loading game config from %s", path)
    return GameConfig.load(Path(path))


# In-memory game (will reset on server restart)
session = GameSession(_load_config())


def reset_game(config=None):
    """Replace the session with a freshly generated mystery."""
    global session
    session = GameSession(config or session.config)
    return session


def get_session():
    return session


def _error(message, status):
    return jsonify({"status": "error", "message": message}), status


def _act(action):
    state, result = session.dispatch(action)
    if not result.ok:
        return jsonify({
            "status": "declined",
            "action": result.action,
            "reason": result.reason,
            "phase": state.phase,
        }), 409
    return jsonify({
        "status": "success",
        "action": result.action,
        "message": result.message,
        "phase": state.phase,
    })


@app.route('/api/game/new', methods=['POST'])
def new_game():
    """Start a new game."""
    state, _ = session.dispatch({"type": "NEW_GAME"})
    return jsonify({
        "status": "success",
        "message": "New game started",
        "victim": state.victim,
        "current_room": state.current_room,
        "messages": list(state.messages),
    })


@app.route('/api/game/state', methods=['GET'])
def get_state():
    """Get current game state (without revealing the solution)."""
    return jsonify(to_dict(session.state))


@app.route('/api/game/room', methods=['GET'])
def get_room():
    """Describe the player's current room: occupants, items and exits."""
    state = session.state
    room = find_room(state, state.current_room)
    if room is None:
        return _error("Current room not found", 404)
    return jsonify({
        "id": room.id,
        "name": room.name,
        "npcs": [{"id": npc.id, "name": npc.name} for npc in npcs_in_room(state, room.id)],
        "items": [
            {"id": item_handle(item), "name": item.name}
            for item in sorted(items_in_room(state, room.id), key=item_handle)
        ],
        "exits": [{"id": r.id, "name": r.name} for r in adjacent_rooms(state)],
    })


@app.route('/api/game/move', methods=['POST'])
def move():
    """Walk through a door into an adjacent room."""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return _error("JSON object required", 400)
    room_id = data.get("room_id")

    if not room_id:
        return _error("room_id required", 400)
    if find_room(session.state, room_id) is None:
        return _error("Room not found", 404)

    return _act({"type": "MOVE", "room_id": room_id})


@app.route('/api/game/select', methods=['POST'])
def select():
    """Select an NPC or item; an empty body clears the selection.

    Items are addressed by the handle shown in the state and room views.
    """
    data = request.get_json(silent=True)
    if data is None:
        return _error("JSON body required", 400)
    if not isinstance(data, dict):
        return _error("JSON object required", 400)

    if not data.get("id"):
        return _act({"type": "SELECT", "entity": None})

    kind = data.get("kind")
    if kind not in ("npc", "item"):
        return _error("kind must be 'npc' or 'item'", 400)

    state = session.state
    requested = str(data["id"])
    if kind == "npc":
        npc = find_npc(state, requested)
        target_id = npc.id if npc else None
    else:
        item = find_item_by_handle(state, requested)
        target_id = item.id if item else None

    if target_id is None:
        if state.phase not in TERMINAL_PHASES:
            return _error(f"{kind} not found", 404)
        target_id = requested

    return _act({"type": "SELECT", "entity": {"kind": kind, "id": target_id}})


@app.route('/api/game/examine', methods=['POST'])
def examine():
    return _act({"type": "EXAMINE"})


@app.route('/api/game/take', methods=['POST'])
def take():
    return _act({"type": "TAKE"})


@app.route('/api/game/question', methods=['POST'])
def question():
    return _act({"type": "QUESTION"})


@app.route('/api/game/alibi', methods=['POST'])
def alibi():
    return _act({"type": "ALIBI"})


@app.route('/api/game/assemble', methods=['POST'])
def assemble():
    return _act({"type": "ASSEMBLE"})


@app.route('/api/game/accuse', methods=['POST'])
def accuse():
    """Accuse the selected suspect. Needs the suspects assembled."""
    return _act({"type": "ACCUSE"})


@app.route('/api/game/debug', methods=['GET'])
def debug():
    """Reveal the solution when the server runs in debug mode. Read-only."""
    if not session.config.debug:
        return _error("Not found", 404)
    state = session.state
    suspects = []
    for npc in state.npcs:
        group = alibi_group_of(state, npc.id)
        suspects.append({
            "id": npc.id,
            "name": npc.name,
            "is_murderer": npc.is_murderer,
            "alibi_group": group.id if group else None,
            "alibi_room": group.room if group else None,
        })
    return jsonify({
        "status": "success",
        "lines": list(session.solution_lines()),
        "suspects": suspects,
        "state": to_dict(state, reveal=True),
    })


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok", "service": "gumshoe-backend"})


if __name__ == '__main__':
    app.run(debug=True, port=5001)
