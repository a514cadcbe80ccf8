"""
Content packs: the name/gender pool for suspects and the weapon pool.
"""
from __future__ import annotations

import json
import re
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

GENDERS = ("male", "female")


def slugify(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


def npc_id_for(name: str) -> str:
    return slugify(name)


@dataclass(frozen=True)
class NpcProfile:
    name: str
    gender: str


@dataclass(frozen=True)
class WeaponProfile:
    name: str
    description: str


@dataclass(frozen=True)
class ContentPack:
    name: str
    npcs: Tuple[NpcProfile, ...]
    weapons: Tuple[WeaponProfile, ...]

    def duplicate_ids(self) -> List[str]:
        """NPC ids shared by more than one name once lowercased and hyphenated."""
        counts = Counter(npc_id_for(npc.name) for npc in self.npcs)
        return sorted(npc_id for npc_id, count in counts.items() if count > 1)

    def duplicate_weapon_handles(self) -> List[str]:
        counts = Counter(slugify(weapon.name) for weapon in self.weapons)
        return sorted(handle for handle, count in counts.items() if count > 1)

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "ContentPack":
        npcs = []
        for entry in raw.get("npcs", []):
            gender = entry.get("gender", "female")
            if gender not in GENDERS:
                raise ValueError(f"Invalid gender '{gender}' for {entry.get('name')}")
            npcs.append(NpcProfile(name=entry["name"], gender=gender))
        weapons = [
            WeaponProfile(name=entry["name"], description=entry.get("description", ""))
            for entry in raw.get("weapons", [])
        ]
        return ContentPack(name=raw.get("name", "custom"), npcs=tuple(npcs), weapons=tuple(weapons))

    @staticmethod
    def load(path: Path) -> "ContentPack":
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        raw.setdefault("name", path.stem)
        return ContentPack.from_dict(raw)


DEFAULT_PACK = ContentPack(
    name="blackwood",
    npcs=(
        NpcProfile("Victoria", "female"),
        NpcProfile("Esther", "female"),
        NpcProfile("Earl", "male"),
        NpcProfile("Gerald", "male"),
        NpcProfile("Margaret", "female"),
        NpcProfile("Howard", "male"),
        NpcProfile("Beatrice", "female"),
        NpcProfile("Arthur", "male"),
        NpcProfile("Clarence", "male"),
        NpcProfile("Dorothy", "female"),
        NpcProfile("Edmund", "male"),
        NpcProfile("Florence", "female"),
    ),
    weapons=(
        WeaponProfile("Candlestick", "A heavy brass candlestick, tarnished with age."),
        WeaponProfile("Knife", "A sharp carving knife from the kitchen."),
        WeaponProfile("Rope", "A length of sturdy hemp rope."),
        WeaponProfile("Lead Pipe", "A section of lead plumbing pipe."),
        WeaponProfile("Wrench", "A heavy iron wrench."),
        WeaponProfile("Revolver", "A small caliber revolver, recently fired."),
        WeaponProfile("Poison Vial", "A small glass vial, traces of liquid inside."),
        WeaponProfile("Fire Poker", "A cast iron fire poker from the hearth."),
        WeaponProfile("Dagger", "An antique dagger with a jeweled hilt."),
        WeaponProfile("Baseball Bat", "A wooden baseball bat, slightly worn."),
    ),
)
