from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from gumshoe.config import GameConfig
from gumshoe.dialogue import solution_summary
from gumshoe.engine import ActionResult, apply_action
from gumshoe.generator import generate_mystery
from gumshoe.layout import HouseLayout
from gumshoe.models import GameState, append_messages
from gumshoe.pools import ContentPack
from gumshoe.queries import find_item, find_npc, find_room
from gumshoe.randomness import make_rng

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Owns the one live GameState and the random stream that feeds it."""

    config: GameConfig = field(default_factory=GameConfig)
    layout: Optional[HouseLayout] = None
    pack: Optional[ContentPack] = None
    rng: Optional[random.Random] = None

    def __post_init__(self) -> None:
        self.layout = self.layout or self.config.layout()
        self.pack = self.pack or self.config.content_pack()
        self.rng = self.rng or make_rng(self.config.seed)
        self.state: GameState = self._generate()

    def _generate(self) -> GameState:
        return generate_mystery(self.layout, self.pack, npc_count=self.config.npc_count, rng=self.rng)

    def new_game(self) -> GameState:
        self.state = self._generate()
        return self.state

    def dispatch(self, action: Dict[str, Any]) -> Tuple[GameState, ActionResult]:
        if str(action.get("type", "")).upper() == "NEW_GAME":
            return self.new_game(), ActionResult.success("NEW_GAME")

        new_state, result = apply_action(self.state, action, self.rng, limit=self.config.message_limit)
        if result.ok:
            self.state = new_state
        else:
            logger.debug("Declined %s: %s", result.action, result.reason)
        return self.state, result

    def solution_lines(self) -> Tuple[str, ...]:
        """The planted solution as log lines (debug mode only). Leaves the state alone."""
        if not self.config.debug:
            raise ValueError("Solution reveal is only available in debug mode")
        state = self.state
        murderer = find_npc(state, state.murderer)
        room = find_room(state, state.murder_room)
        weapon = find_item(state, state.murder_weapon)
        return solution_summary(
            state.victim,
            murderer.name if murderer else "Unknown",
            room.name if room else "Unknown",
            weapon.name if weapon else "Unknown",
        )

    def reveal(self) -> Tuple[str, ...]:
        """Append the planted solution to the message log."""
        lines = self.solution_lines()
        state = self.state
        self.state = replace(state, messages=append_messages(state.messages, *lines, limit=self.config.message_limit))
        return lines
