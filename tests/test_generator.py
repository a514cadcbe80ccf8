"""
Property tests for mystery generation.
"""
import random

import pytest

from gumshoe.dialogue import generate_alibi_response
from gumshoe.generator import assign_clue_roles, generate_mystery
from gumshoe.layout import DEFAULT_LAYOUT, HouseLayout, Room
from gumshoe.models import MURDER_WEAPON_ID, PHASE_PLAYING
from gumshoe.pools import DEFAULT_PACK, ContentPack, NpcProfile, WeaponProfile
from gumshoe.queries import find_item, find_npc, find_room

SEEDS = range(40)
NPC_COUNTS = range(2, len(DEFAULT_PACK.npcs) + 1)


def all_states():
    for npc_count in NPC_COUNTS:
        for seed in SEEDS:
            yield npc_count, generate_mystery(npc_count=npc_count, rng=random.Random(seed))


def murderer_of(state):
    return find_npc(state, state.murderer)


def test_initial_state():
    state = generate_mystery(rng=random.Random(1))
    assert state.phase == PHASE_PLAYING
    assert state.inventory == ()
    assert state.selected is None
    assert state.current_room == DEFAULT_LAYOUT.starting_room
    assert len(state.messages) == 4
    assert state.victim in state.messages[1]
    assert len(state.npcs) == 6


def test_victim_is_not_a_suspect():
    for _, state in all_states():
        assert state.victim not in [npc.name for npc in state.npcs]


def test_exactly_one_murderer_without_alibi():
    for _, state in all_states():
        murderers = [npc for npc in state.npcs if npc.is_murderer]
        assert len(murderers) == 1
        assert murderers[0].id == state.murderer
        assert murderers[0].alibi is None


def test_every_innocent_has_a_corroborated_alibi():
    for _, state in all_states():
        for npc in state.npcs:
            if npc.is_murderer:
                continue
            assert npc.alibi is not None
            partner = find_npc(state, npc.alibi.with_whom)
            assert partner is not None
            assert partner.alibi is not None
            assert partner.alibi.in_room == npc.alibi.in_room
            assert find_room(state, npc.alibi.in_room) is not None


def test_alibi_groups_partition_the_innocents():
    for npc_count, state in all_states():
        innocents = sorted(npc.id for npc in state.npcs if not npc.is_murderer)
        members = sorted(m for group in state.alibi_groups for m in group.members)
        assert members == innocents
        assert state.murderer not in members

        sizes = [len(group.members) for group in state.alibi_groups]
        if len(innocents) == 1:
            assert sizes == [1]
        else:
            assert all(size in (2, 3) for size in sizes)
            assert sizes.count(3) == len(innocents) % 2

        for group in state.alibi_groups:
            for member in group.members:
                assert find_npc(state, member).alibi.in_room == group.room


def test_odd_innocent_joins_first_pair():
    # Six suspects: one murderer, five innocents.
    state = generate_mystery(npc_count=7, rng=random.Random(3))
    trio = state.alibi_groups[0]
    assert len(trio.members) == 3
    lone = find_npc(state, trio.members[2])
    anchor = find_npc(state, trio.members[0])
    assert lone.alibi.with_whom == anchor.id
    assert anchor.alibi.with_whom == trio.members[1]


def test_two_innocents_accuse_the_murderer():
    for npc_count, state in all_states():
        innocents = [npc for npc in state.npcs if not npc.is_murderer]
        if len(innocents) < 2:
            continue
        name = murderer_of(state).name
        accusers = [npc.id for npc in innocents if any(name in clue for clue in npc.clues)]
        assert len(accusers) >= 2


def test_room_and_weapon_are_hinted():
    for npc_count, state in all_states():
        if npc_count < 3:
            continue
        room_name = find_room(state, state.murder_room).name
        weapon_name = find_item(state, state.murder_weapon).name
        innocent_clues = [clue for npc in state.npcs if not npc.is_murderer for clue in npc.clues]
        assert any(room_name in clue for clue in innocent_clues)
        assert any(weapon_name in clue and room_name in clue for clue in innocent_clues)


def test_every_suspect_has_a_clue_and_the_murderer_exactly_one():
    for _, state in all_states():
        for npc in state.npcs:
            assert len(npc.clues) >= 1
        murderer = murderer_of(state)
        assert len(murderer.clues) == 1
        innocent_names = [npc.name for npc in state.npcs if not npc.is_murderer]
        if innocent_names:
            assert any(name in murderer.clues[0] for name in innocent_names)


def test_single_innocent_carries_every_role():
    state = generate_mystery(npc_count=3, rng=random.Random(11))
    innocent = next(npc for npc in state.npcs if not npc.is_murderer)
    assert len(innocent.clues) == 3
    assert innocent.alibi.with_whom == innocent.id


def test_clue_roles_fallbacks():
    rng = random.Random(5)
    for npc_count in NPC_COUNTS:
        state = generate_mystery(npc_count=npc_count, rng=random.Random(npc_count))
        roles = assign_clue_roles(state.npcs, rng)
        innocents = [npc.id for npc in state.npcs if not npc.is_murderer]
        assert not roles[state.murderer].any()
        accusers = sum(1 for npc_id in innocents if roles[npc_id].accuse_murderer)
        assert accusers == min(2, len(innocents))
        assert sum(1 for npc_id in innocents if roles[npc_id].hint_room) == min(1, len(innocents))
        assert sum(1 for npc_id in innocents if roles[npc_id].hint_weapon) == min(1, len(innocents))


def test_murder_weapon_starts_in_murder_room():
    for _, state in all_states():
        weapon = find_item(state, MURDER_WEAPON_ID)
        assert state.murder_weapon == MURDER_WEAPON_ID
        assert weapon.is_murder_weapon
        assert weapon.can_take
        assert weapon.room == state.murder_room


def test_decoys_are_spread_over_other_rooms():
    for _, state in all_states():
        decoys = [item for item in state.items if not item.is_murder_weapon]
        murder_weapon = find_item(state, MURDER_WEAPON_ID)
        assert [item.id for item in decoys] == [f"weapon-decoy-{i}" for i in range(3)]
        assert len({item.room for item in decoys}) == 3
        assert all(item.room != state.murder_room for item in decoys)
        assert len({item.name for item in state.items}) == 4
        assert murder_weapon.name not in [item.name for item in decoys]


def test_decoys_clamp_to_weapon_pool():
    pack = ContentPack(
        name="tiny",
        npcs=DEFAULT_PACK.npcs,
        weapons=(WeaponProfile("Rope", "Hemp."), WeaponProfile("Knife", "Sharp.")),
    )
    state = generate_mystery(pack=pack, rng=random.Random(2))
    assert len(state.items) == 2


def test_decoys_clamp_to_room_count():
    layout = HouseLayout(
        name="Cottage",
        starting_room="den",
        rooms=(Room("den", "Den", 0, 0, 1, 1), Room("loft", "Loft", 1, 0, 1, 1)),
    )
    state = generate_mystery(layout=layout, rng=random.Random(2))
    decoys = [item for item in state.items if not item.is_murder_weapon]
    assert len(decoys) == 1
    assert decoys[0].room != state.murder_room


def test_suspects_spread_evenly():
    for _, state in all_states():
        rooms = [npc.current_room for npc in state.npcs]
        # fewer suspects than rooms in the default manor
        assert len(set(rooms)) == len(rooms)


def test_same_seed_same_mystery():
    assert generate_mystery(rng=random.Random(99)) == generate_mystery(rng=random.Random(99))


@pytest.mark.parametrize("npc_count", [0, 1, len(DEFAULT_PACK.npcs) + 1])
def test_invalid_npc_count(npc_count):
    with pytest.raises(ValueError):
        generate_mystery(npc_count=npc_count, rng=random.Random(0))


def test_empty_weapon_pool_rejected():
    pack = ContentPack(name="unarmed", npcs=DEFAULT_PACK.npcs, weapons=())
    with pytest.raises(ValueError):
        generate_mystery(pack=pack)


def test_colliding_names_rejected():
    pack = ContentPack(
        name="twins",
        npcs=(NpcProfile("Mary Ann", "female"), NpcProfile("mary  ann", "female"), NpcProfile("Tom", "male")),
        weapons=DEFAULT_PACK.weapons,
    )
    assert pack.duplicate_ids() == ["mary-ann"]
    with pytest.raises(ValueError):
        generate_mystery(pack=pack, npc_count=3)


def test_multi_word_names_become_hyphenated_ids():
    pack = ContentPack(
        name="gentry",
        npcs=(NpcProfile("Lady Cordelia", "female"), NpcProfile("Dr Hartley", "male"), NpcProfile("James", "male")),
        weapons=DEFAULT_PACK.weapons,
    )
    state = generate_mystery(pack=pack, npc_count=3, rng=random.Random(4))
    assert {npc.id for npc in state.npcs} <= {"lady-cordelia", "dr-hartley", "james"}
    assert find_npc(state, state.murderer) is not None


def test_colliding_weapon_names_rejected():
    pack = ContentPack(
        name="armoury",
        npcs=DEFAULT_PACK.npcs,
        weapons=(WeaponProfile("Lead Pipe", "Heavy."), WeaponProfile("lead  pipe", "Also heavy.")),
    )
    assert pack.duplicate_weapon_handles() == ["lead-pipe"]
    with pytest.raises(ValueError):
        generate_mystery(pack=pack)


def test_sole_innocent_alibi_is_solitary():
    state = generate_mystery(npc_count=3, rng=random.Random(11))
    innocent = next(npc for npc in state.npcs if not npc.is_murderer)
    text = generate_alibi_response(innocent, state.npcs, state.rooms, random.Random(0))
    assert text.count(innocent.name) == 1
    assert find_room(state, innocent.alibi.in_room).name in text
