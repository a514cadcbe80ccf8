"""Static house layouts: rooms connected by directed doors."""
from __future__ import annotations

import json
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

DIRECTIONS = ("north", "south", "east", "west")


@dataclass(frozen=True)
class Door:
    to_room_id: str
    direction: str
    # Position along the wall, 0..1 with 0.5 at the centre
    position: float = 0.5


@dataclass(frozen=True)
class Room:
    id: str
    name: str
    x: int
    y: int
    width: int
    height: int
    doors: Tuple[Door, ...] = ()

    def neighbours(self) -> List[str]:
        return [door.to_room_id for door in self.doors]


@dataclass(frozen=True)
class HouseLayout:
    name: str
    rooms: Tuple[Room, ...]
    starting_room: str

    def room(self, room_id: str) -> Optional[Room]:
        return next((r for r in self.rooms if r.id == room_id), None)

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "HouseLayout":
        rooms = []
        for entry in raw.get("rooms", []):
            doors = []
            for door in entry.get("doors", []):
                direction = door.get("direction", "north")
                if direction not in DIRECTIONS:
                    raise ValueError(f"Invalid door direction '{direction}' in room {entry.get('id')}")
                doors.append(
                    Door(
                        to_room_id=door["to_room_id"],
                        direction=direction,
                        position=float(door.get("position", 0.5)),
                    )
                )
            rooms.append(
                Room(
                    id=entry["id"],
                    name=entry.get("name", entry["id"]),
                    x=int(entry.get("x", 0)),
                    y=int(entry.get("y", 0)),
                    width=int(entry.get("width", 1)),
                    height=int(entry.get("height", 1)),
                    doors=tuple(doors),
                )
            )
        if not rooms:
            raise ValueError("Layout must define at least one room")
        starting_room = raw.get("starting_room", rooms[0].id)
        return HouseLayout(name=raw.get("name", "Unnamed House"), rooms=tuple(rooms), starting_room=starting_room)

    @staticmethod
    def load(path: Path) -> "HouseLayout":
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        raw.setdefault("name", path.stem)
        return HouseLayout.from_dict(raw)


def reachable_rooms(layout: HouseLayout, start: Optional[str] = None) -> Set[str]:
    """Room ids reachable from ``start`` (default: the starting room) by following doors."""
    origin = start or layout.starting_room
    if layout.room(origin) is None:
        return set()

    seen = {origin}
    queue = deque([origin])
    while queue:
        room = layout.room(queue.popleft())
        if room is None:
            continue
        for neighbour in room.neighbours():
            if neighbour not in seen:
                seen.add(neighbour)
                queue.append(neighbour)
    return seen


def unreachable_rooms(layout: HouseLayout) -> List[str]:
    reachable = reachable_rooms(layout)
    return [room.id for room in layout.rooms if room.id not in reachable]


def _room(room_id: str, name: str, x: int, y: int, width: int, height: int, *doors: Tuple[str, str, float]) -> Room:
    return Room(
        id=room_id,
        name=name,
        x=x,
        y=y,
        width=width,
        height=height,
        doors=tuple(Door(to_room_id=to, direction=d, position=p) for to, d, p in doors),
    )


# Blackwood Manor, a 12 x 8 grid. Every door has a matching door back.
DEFAULT_LAYOUT = HouseLayout(
    name="Blackwood Manor",
    starting_room="hall",
    rooms=(
        _room("parlor", "Parlor", 0, 0, 3, 2,
              ("library", "east", 0.5), ("dining", "south", 0.5)),
        _room("library", "Library", 3, 0, 3, 3,
              ("parlor", "west", 0.3), ("hall", "south", 0.5), ("study", "east", 0.5)),
        _room("study", "Study", 6, 0, 3, 2,
              ("library", "west", 0.5), ("gallery", "east", 0.5), ("conservatory", "south", 0.5)),
        _room("gallery", "Gallery", 9, 0, 3, 3,
              ("study", "west", 0.3), ("master", "south", 0.5)),
        _room("dining", "Dining Room", 0, 2, 3, 3,
              ("parlor", "north", 0.5), ("hall", "east", 0.6), ("kitchen", "south", 0.5)),
        _room("hall", "Hall", 3, 3, 3, 2,
              ("library", "north", 0.5), ("dining", "west", 0.5),
              ("conservatory", "east", 0.5), ("billiard", "south", 0.5)),
        _room("conservatory", "Conservatory", 6, 2, 3, 3,
              ("study", "north", 0.5), ("hall", "west", 0.6),
              ("master", "east", 0.7), ("guest", "south", 0.5)),
        _room("master", "Master Bedroom", 9, 3, 3, 3,
              ("gallery", "north", 0.5), ("conservatory", "west", 0.5), ("servants", "south", 0.5)),
        _room("kitchen", "Kitchen", 0, 5, 3, 3,
              ("dining", "north", 0.5), ("billiard", "east", 0.3)),
        _room("billiard", "Billiard Room", 3, 5, 3, 3,
              ("hall", "north", 0.5), ("kitchen", "west", 0.5), ("guest", "east", 0.5)),
        _room("guest", "Guest Room", 6, 5, 3, 3,
              ("conservatory", "north", 0.5), ("billiard", "west", 0.5), ("servants", "east", 0.5)),
        _room("servants", "Servants' Quarters", 9, 6, 3, 2,
              ("master", "north", 0.5), ("guest", "west", 0.75)),
    ),
)
