from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from gumshoe.config import GameConfig
from gumshoe.logging_config import configure_logging
from gumshoe.models import TERMINAL_PHASES, to_dict
from gumshoe.queries import adjacent_rooms, find_room, inventory_items, items_in_room, npcs_in_room
from gumshoe.session import GameSession

HELP = """Commands:
  look
  go <room>
  question <suspect> | alibi <suspect>
  examine <item> | take <item>
  assemble
  accuse <suspect>
  inventory
  new
  reveal    # debug mode only
  quit"""


def _norm_token(s: str) -> str:
    """Normalize ids typed by humans: case-insensitive, spaces and underscores become hyphens."""
    s = s.strip().strip('"').strip("'")
    return s.lower().replace(" ", "-").replace("_", "-")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Gumshoe murder mystery generator")
    parser.add_argument("--config", default=None, help="Path to game config JSON")
    parser.add_argument("--log-level", default=None, help="Logging level (default: GUMSHOE_LOG_LEVEL or INFO)")

    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Generate a mystery and print it as JSON")
    generate.add_argument("--npc-count", type=int, default=None, help="Suspects plus the victim")
    generate.add_argument("--seed", type=int, default=None)
    generate.add_argument("--reveal", action="store_true", help="Include the solution, alibis and clues")

    play = sub.add_parser("play", help="Play in the terminal")
    play.add_argument("--seed", type=int, default=None)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5001)

    return parser


def _load_config(path: Optional[str]) -> GameConfig:
    if not path:
        return GameConfig()
    return GameConfig.load(Path(path))


def _start_session(config: GameConfig) -> GameSession:
    try:
        return GameSession(config)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Cannot start a game: {exc}")


def parse_command(line: str, session: GameSession) -> List[Dict[str, Any]]:
    """Translate one typed command into the actions it stands for.

    Commands that name an entity become a SELECT followed by the action.
    """
    words = line.strip().split(maxsplit=1)
    if not words:
        return []
    verb = words[0].lower()
    target = _norm_token(words[1]) if len(words) > 1 else ""

    if verb in ("go", "move"):
        return [{"type": "MOVE", "room_id": target}]
    if verb in ("question", "alibi", "accuse"):
        actions: List[Dict[str, Any]] = []
        if target:
            actions.append({"type": "SELECT", "entity": {"kind": "npc", "id": target}})
        actions.append({"type": verb.upper()})
        return actions
    if verb in ("examine", "take"):
        actions = []
        if target:
            actions.append({"type": "SELECT", "entity": {"kind": "item", "id": _item_id(session, target)}})
        actions.append({"type": verb.upper()})
        return actions
    if verb == "assemble":
        return [{"type": "ASSEMBLE"}]
    if verb == "new":
        return [{"type": "NEW_GAME"}]
    return [{"type": verb.upper()}]


def _item_id(session: GameSession, token: str) -> str:
    # Items are typed by name ("lead pipe") but keyed by id ("weapon-decoy-1").
    for item in session.state.items:
        if token in (item.id, _norm_token(item.name)):
            return item.id
    return token


def describe_room(session: GameSession) -> str:
    state = session.state
    room = find_room(state, state.current_room)
    if room is None:
        return "You are nowhere."
    people = ", ".join(npc.name for npc in npcs_in_room(state, room.id)) or "nobody"
    things = ", ".join(item.name for item in items_in_room(state, room.id)) or "nothing"
    exits = ", ".join(f"{r.name} ({r.id})" for r in adjacent_rooms(state)) or "none"
    return f"{room.name}\n  People: {people}\n  Items: {things}\n  Exits: {exits}"


def run_repl(session: GameSession, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> None:
    def say(text: str) -> None:
        print(text, file=stdout)

    for message in session.state.messages:
        say(message)
    say(describe_room(session))

    for raw in stdin:
        line = raw.strip()
        if not line:
            continue
        if line in ("quit", "exit"):
            break
        if line in ("help", "?"):
            say(HELP)
            continue
        if line == "look":
            say(describe_room(session))
            continue
        if line == "inventory":
            say(", ".join(item.name for item in inventory_items(session.state)) or "Empty")
            continue
        if line == "reveal":
            try:
                for text in session.reveal():
                    say(text)
            except ValueError as exc:
                say(str(exc))
            continue

        for action in parse_command(line, session):
            state, result = session.dispatch(action)
            if not result.ok:
                say(result.reason)
                break
            if result.message:
                say(result.message)
            if result.action in ("MOVE", "NEW_GAME"):
                say(describe_room(session))
        if session.state.phase in TERMINAL_PHASES:
            say("Type 'new' for another case or 'quit' to leave.")


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = _load_config(args.config)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Invalid config: {exc}")

    if args.command == "generate":
        if args.npc_count is not None:
            config = replace(config, npc_count=args.npc_count)
        if args.seed is not None:
            config = replace(config, seed=args.seed)
        session = _start_session(config)
        print(json.dumps(to_dict(session.state, reveal=args.reveal), indent=2))
        return

    if args.command == "play":
        if args.seed is not None:
            config = replace(config, seed=args.seed)
        run_repl(_start_session(config))
        return

    if args.command == "serve":
        try:
            from gumshoe import app as api

            api.reset_game(config)
        except (OSError, ValueError) as exc:
            raise SystemExit(f"Cannot start a game: {exc}")
        api.app.run(host=args.host, port=args.port)
        return

    raise SystemExit(f"Unknown command: {args.command}")


if __name__ == "__main__":
    main()
