"""Procedural mystery generation.

A mystery is planted first (victim, murderer, room, weapon) and then back-filled
with alibis and clues so that:

- the murderer is the only suspect without an alibi,
- every innocent shares an alibi room with one or two other innocents,
- at least two innocents accuse the murderer when two or more innocents exist,
- the murder room and weapon are each hinted by at least one innocent.
"""
from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from gumshoe.dialogue import ClueRoles, generate_clues_for_npc, intro_messages
from gumshoe.layout import DEFAULT_LAYOUT, HouseLayout, Room
from gumshoe.models import (
    MURDER_WEAPON_ID,
    NPC,
    PHASE_PLAYING,
    Alibi,
    AlibiGroup,
    GameState,
    Item,
)
from gumshoe.pools import DEFAULT_PACK, ContentPack, NpcProfile, WeaponProfile, npc_id_for
from gumshoe.randomness import make_rng, pick_one, pick_random, shuffle

logger = logging.getLogger(__name__)

DEFAULT_NPC_COUNT = 7  # six suspects plus the victim
MAX_DECOYS = 3


def _check_preconditions(layout: HouseLayout, pack: ContentPack, npc_count: int) -> None:
    if npc_count < 2:
        raise ValueError(f"npc_count must be at least 2 (victim and murderer), got {npc_count}")
    if len(pack.npcs) < npc_count:
        raise ValueError(f"Content pack '{pack.name}' has {len(pack.npcs)} NPCs, need {npc_count}")
    if not pack.weapons:
        raise ValueError(f"Content pack '{pack.name}' has no weapons")
    if not layout.rooms:
        raise ValueError(f"Layout '{layout.name}' has no rooms")
    if layout.room(layout.starting_room) is None:
        raise ValueError(f"Starting room '{layout.starting_room}' is not in layout '{layout.name}'")
    duplicates = pack.duplicate_ids()
    if duplicates:
        raise ValueError(f"NPC names collide after id normalisation: {', '.join(duplicates)}")
    duplicates = pack.duplicate_weapon_handles()
    if duplicates:
        raise ValueError(f"Weapon names collide after normalisation: {', '.join(duplicates)}")


def create_npcs(
    profiles: Sequence[NpcProfile], murderer_name: str, rooms: Sequence[Room], rng: random.Random
) -> List[NPC]:
    """Spread suspects over a shuffled room order, one room per suspect in turn."""
    shuffled_rooms = shuffle(rooms, rng)
    return [
        NPC(
            id=npc_id_for(profile.name),
            name=profile.name,
            gender=profile.gender,
            current_room=shuffled_rooms[index % len(shuffled_rooms)].id,
            is_murderer=profile.name == murderer_name,
        )
        for index, profile in enumerate(profiles)
    ]


def create_items(
    murder_weapon: WeaponProfile,
    murder_room: Room,
    rooms: Sequence[Room],
    weapons: Sequence[WeaponProfile],
    rng: random.Random,
) -> List[Item]:
    items = [
        Item(
            id=MURDER_WEAPON_ID,
            name=murder_weapon.name,
            room=murder_room.id,
            is_murder_weapon=True,
            can_take=True,
            description=murder_weapon.description,
        )
    ]

    other_weapons = [w for w in weapons if w.name != murder_weapon.name]
    other_rooms = [r for r in rooms if r.id != murder_room.id]
    decoy_count = min(MAX_DECOYS, len(other_rooms), len(other_weapons))
    for index, weapon in enumerate(pick_random(other_weapons, decoy_count, rng)):
        items.append(
            Item(
                id=f"weapon-decoy-{index}",
                name=weapon.name,
                room=other_rooms[index].id,
                is_murder_weapon=False,
                can_take=True,
                description=weapon.description,
            )
        )
    return items


def assign_alibis(
    npcs: Sequence[NPC], rooms: Sequence[Room], rng: random.Random
) -> Tuple[List[NPC], Tuple[AlibiGroup, ...]]:
    """Pair innocents into alibi groups; the murderer alone gets no alibi.

    With an odd number of innocents the last one joins the first pair's room
    and names the first pair's first member as partner. That member still
    names only their own pair partner.
    """
    innocents = shuffle([npc for npc in npcs if not npc.is_murderer], rng)
    alibi_rooms = shuffle(rooms, rng)

    alibis: Dict[str, Optional[Alibi]] = {}
    groups: List[AlibiGroup] = []
    for i in range(0, len(innocents), 2):
        if i + 1 < len(innocents):
            first, second = innocents[i], innocents[i + 1]
            room = alibi_rooms[(i // 2) % len(alibi_rooms)]
            alibis[first.id] = Alibi(with_whom=second.id, in_room=room.id)
            alibis[second.id] = Alibi(with_whom=first.id, in_room=room.id)
            groups.append(AlibiGroup(id=f"alibi-{len(groups)}", room=room.id, members=(first.id, second.id)))
        else:
            lone = innocents[i]
            if not groups:
                # Sole innocent: a group of one that vouches for itself.
                room = alibi_rooms[0]
                alibis[lone.id] = Alibi(with_whom=lone.id, in_room=room.id)
                groups.append(AlibiGroup(id="alibi-0", room=room.id, members=(lone.id,)))
                continue
            anchor = innocents[0]
            alibis[lone.id] = Alibi(with_whom=anchor.id, in_room=groups[0].room)
            groups[0] = replace(groups[0], members=groups[0].members + (lone.id,))

    updated = [replace(npc, alibi=None if npc.is_murderer else alibis.get(npc.id)) for npc in npcs]
    return updated, tuple(groups)


def assign_clue_roles(npcs: Sequence[NPC], rng: random.Random) -> Dict[str, ClueRoles]:
    innocents = shuffle([npc for npc in npcs if not npc.is_murderer], rng)
    flags = {npc.id: {"accuse_murderer": False, "hint_room": False, "hint_weapon": False} for npc in npcs}

    count = len(innocents)
    if count >= 1:
        flags[innocents[0].id]["accuse_murderer"] = True
    if count >= 2:
        flags[innocents[1].id]["accuse_murderer"] = True

    if count >= 3:
        flags[innocents[2].id]["hint_room"] = True
    elif count >= 1:
        flags[innocents[0].id]["hint_room"] = True

    if count >= 4:
        flags[innocents[3].id]["hint_weapon"] = True
    elif count >= 2:
        flags[innocents[1].id]["hint_weapon"] = True
    elif count >= 1:
        flags[innocents[0].id]["hint_weapon"] = True

    return {npc_id: ClueRoles(**values) for npc_id, values in flags.items()}


def generate_mystery(
    layout: HouseLayout = DEFAULT_LAYOUT,
    pack: ContentPack = DEFAULT_PACK,
    npc_count: int = DEFAULT_NPC_COUNT,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Build a fresh, solvable mystery. ``npc_count`` includes the victim."""
    _check_preconditions(layout, pack, npc_count)
    rng = rng or make_rng()
    rooms = list(layout.rooms)

    selected = pick_random(pack.npcs, npc_count, rng)
    victim, murderer = selected[0], selected[1]
    suspects = selected[1:]

    murder_room = pick_one(rooms, rng)
    murder_weapon = pick_one(pack.weapons, rng)

    npcs = create_npcs(suspects, murderer.name, rooms, rng)
    items = create_items(murder_weapon, murder_room, rooms, pack.weapons, rng)
    npcs, alibi_groups = assign_alibis(npcs, rooms, rng)

    roles = assign_clue_roles(npcs, rng)
    npcs = [
        replace(
            npc,
            clues=generate_clues_for_npc(
                npc, npcs, victim, murderer, murder_room, murder_weapon.name, roles[npc.id], rng
            ),
        )
        for npc in npcs
    ]

    murderer_id = npc_id_for(murderer.name)
    logger.info("Generated mystery in %s with %d suspects", layout.name, len(npcs))
    logger.debug(
        "Solution: %s killed %s with the %s in the %s",
        murderer_id,
        victim.name,
        murder_weapon.name,
        murder_room.id,
    )

    return GameState(
        current_room=layout.starting_room,
        inventory=(),
        rooms=tuple(rooms),
        npcs=tuple(npcs),
        items=tuple(items),
        murder_weapon=MURDER_WEAPON_ID,
        murder_room=murder_room.id,
        murderer=murderer_id,
        victim=victim.name,
        messages=intro_messages(victim.name, layout.name),
        selected=None,
        phase=PHASE_PLAYING,
        alibi_groups=alibi_groups,
    )
