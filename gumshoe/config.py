from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from gumshoe.generator import DEFAULT_NPC_COUNT
from gumshoe.layout import DEFAULT_LAYOUT, HouseLayout, unreachable_rooms
from gumshoe.models import MESSAGE_LOG_LIMIT
from gumshoe.pools import DEFAULT_PACK, ContentPack

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    npc_count: int = DEFAULT_NPC_COUNT
    message_limit: int = MESSAGE_LOG_LIMIT
    seed: Optional[int] = None
    layout_path: Optional[Path] = None
    content_pack_path: Optional[Path] = None
    debug: bool = False

    @staticmethod
    def from_dict(raw: Dict[str, Any], base_dir: Optional[Path] = None) -> "GameConfig":
        def _path(key: str) -> Optional[Path]:
            value = raw.get(key)
            if not value:
                return None
            path = Path(value)
            if not path.is_absolute() and base_dir is not None:
                path = base_dir / path
            return path

        seed = raw.get("seed")
        config = GameConfig(
            npc_count=int(raw.get("npc_count", DEFAULT_NPC_COUNT)),
            message_limit=int(raw.get("message_limit", MESSAGE_LOG_LIMIT)),
            seed=None if seed is None else int(seed),
            layout_path=_path("layout"),
            content_pack_path=_path("content_pack"),
            debug=bool(raw.get("debug", False)),
        )
        if config.npc_count < 2:
            raise ValueError(f"npc_count must be at least 2, got {config.npc_count}")
        if config.message_limit < 1:
            raise ValueError(f"message_limit must be positive, got {config.message_limit}")
        return config

    @staticmethod
    def load(path: Path) -> "GameConfig":
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        return GameConfig.from_dict(raw, base_dir=path.resolve().parent)

    def layout(self) -> HouseLayout:
        if self.layout_path is None:
            return DEFAULT_LAYOUT
        layout = HouseLayout.load(self.layout_path)
        stranded = unreachable_rooms(layout)
        if stranded:
            logger.warning("Layout '%s' has rooms unreachable from %s: %s",
                           layout.name, layout.starting_room, ", ".join(stranded))
        return layout

    def content_pack(self) -> ContentPack:
        if self.content_pack_path is None:
            return DEFAULT_PACK
        return ContentPack.load(self.content_pack_path)
