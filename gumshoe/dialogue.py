"""
Clue and narrative text for suspects and the player.

Templates use literal ``{placeholder}`` substitution; template text must not
contain braces other than placeholders.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from gumshoe.layout import Room
from gumshoe.models import NPC
from gumshoe.pools import NpcProfile
from gumshoe.randomness import pick_one

PRONOUNS: Dict[str, Dict[str, str]] = {
    "male": {"subject": "he", "object": "him", "possessive": "his", "reflexive": "himself"},
    "female": {"subject": "she", "object": "her", "possessive": "her", "reflexive": "herself"},
}

VOICE_MODIFIERS = (
    "in a nervous voice",
    "with a haughty sniff",
    "in an annoyed voice",
    "rather defensively",
    "in a hushed whisper",
    "with obvious disdain",
    "thoughtfully",
    "after a long pause",
    "with a knowing look",
    "in a trembling voice",
    "dismissively",
    "with barely concealed anger",
)

ACCUSATION_TEMPLATES = (
    '{speaker} answers {voice}, "Far be it from me to meddle in your affairs, inspector, but I really think you '
    'should question {accused}. Why just the other day {accusedSubject} told me that {victim} would be better off dead."',
    '{speaker} says {voice}, "I don\'t want to point fingers, but {accused} and {victim} had a terrible row last week. '
    '{accused} said some very... unfortunate things."',
    '{speaker} replies {voice}, "You might want to look into {accused}. I overheard {accusedObject} saying {victim} '
    'was \'in the way\' of {accusedPossessive} plans."',
    '{speaker} confides {voice}, "Between you and me, inspector, {accused} had motive. {victim} knew something about '
    '{accused} that {accusedSubject} didn\'t want getting out."',
    '{speaker} answers {voice}, "Have you spoken to {accused} yet? {accusedSubject} had quite the grudge against '
    '{victim}. Something about an inheritance, I believe."',
)

ROOM_OBSERVATION_TEMPLATES = (
    '{speaker} mentions {voice}, "I did see {suspect} near the {room} earlier this evening. '
    'Seemed rather suspicious at the time."',
    '{speaker} recalls {voice}, "Now that you mention it, I spotted {suspect} coming out of the {room} '
    'looking quite flustered."',
    '{speaker} says {voice}, "I\'m fairly certain I saw {suspect} heading toward the {room} '
    'around the time it must have happened."',
    '{speaker} adds {voice}, "You know, I noticed {suspect} near the {room}. {suspectSubject} seemed to be '
    'in quite a hurry."',
)

WEAPON_CLUE_TEMPLATES = (
    '{speaker} recalls {voice}, "I saw the {weapon} in the {room} earlier. It struck me as odd at the time."',
    '{speaker} mentions {voice}, "You might check the {room} for the {weapon}. I believe I saw it there."',
    '{speaker} says {voice}, "The {weapon}? I think I last saw it in the {room}, if that helps."',
)

FLAVOR_TEMPLATES = (
    '{speaker} sighs {voice}, "This is all so dreadful. Poor {victim}."',
    '{speaker} says {voice}, "I\'ve told you everything I know, inspector."',
    '{speaker} responds {voice}, "I was minding my own business, as I always do."',
    '{speaker} replies {voice}, "This household has always had its... complications."',
)

ALIBI_TEMPLATES = (
    '{speaker} answers {voice}, "{partner} and I spent the entire evening together in the {room}."',
    '{speaker} states {voice}, "I was with {partner} in the {room} all evening. {partnerSubject} can vouch for me."',
    '{speaker} replies {voice}, "Ask {partner}. We were in the {room} together when it happened."',
)

SOLITARY_ALIBI_TEMPLATES = (
    '{speaker} answers {voice}, "I spent the entire evening in the {room}. I never left it, not once."',
    '{speaker} states {voice}, "I was in the {room} all evening. Nobody joined me, but I never stepped out."',
    '{speaker} replies {voice}, "The {room}. I was there from supper onward, keeping my own counsel."',
)

NO_ALIBI_TEMPLATES = (
    '{speaker} hesitates {voice}, "I... I was alone. In my quarters. Reading."',
    '{speaker} stammers {voice}, "I don\'t have anyone who can account for my whereabouts."',
    '{speaker} says {voice}, "I prefer my own company. I was alone that evening."',
    '{speaker} replies {voice}, "I stepped outside for some air. No one saw me, I suppose."',
)


@dataclass(frozen=True)
class ClueRoles:
    accuse_murderer: bool = False
    hint_room: bool = False
    hint_weapon: bool = False

    def any(self) -> bool:
        return self.accuse_murderer or self.hint_room or self.hint_weapon


def pronouns_for(gender: str) -> Dict[str, str]:
    return PRONOUNS["male"] if gender == "male" else PRONOUNS["female"]


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def fill_template(template: str, values: Dict[str, str]) -> str:
    result = template
    for key, value in values.items():
        result = result.replace("{" + key + "}", value)
    return result


def _accusation(speaker: str, voice: str, accused: str, gender: str, victim: str, rng: random.Random) -> str:
    pronouns = pronouns_for(gender)
    return fill_template(
        pick_one(ACCUSATION_TEMPLATES, rng),
        {
            "speaker": speaker,
            "voice": voice,
            "accused": accused,
            "accusedSubject": pronouns["subject"],
            "accusedObject": pronouns["object"],
            "accusedPossessive": pronouns["possessive"],
            "victim": victim,
        },
    )


def generate_clues_for_npc(
    npc: NPC,
    all_npcs: Sequence[NPC],
    victim: NpcProfile,
    murderer: NpcProfile,
    murder_room: Room,
    murder_weapon_name: str,
    roles: ClueRoles,
    rng: random.Random,
) -> Tuple[str, ...]:
    clues: List[str] = []
    voice = pick_one(VOICE_MODIFIERS, rng)

    if npc.is_murderer:
        # The murderer points at a scapegoat and never hints at room or weapon.
        innocents = [n for n in all_npcs if not n.is_murderer and n.id != npc.id]
        if innocents:
            scapegoat = pick_one(innocents, rng)
            clues.append(_accusation(npc.name, voice, scapegoat.name, scapegoat.gender, victim.name, rng))
            return tuple(clues)
        # Nobody left to blame: fall through to flavor text.
        roles = ClueRoles()

    if roles.accuse_murderer:
        clues.append(_accusation(npc.name, voice, murderer.name, murderer.gender, victim.name, rng))

    if roles.hint_room:
        clues.append(
            fill_template(
                pick_one(ROOM_OBSERVATION_TEMPLATES, rng),
                {
                    "speaker": npc.name,
                    "voice": voice,
                    "suspect": murderer.name,
                    "suspectSubject": capitalize_first(pronouns_for(murderer.gender)["subject"]),
                    "room": murder_room.name,
                },
            )
        )

    if roles.hint_weapon:
        clues.append(
            fill_template(
                pick_one(WEAPON_CLUE_TEMPLATES, rng),
                {
                    "speaker": npc.name,
                    "voice": voice,
                    "weapon": murder_weapon_name,
                    "room": murder_room.name,
                },
            )
        )

    if not clues:
        clues.append(
            fill_template(
                pick_one(FLAVOR_TEMPLATES, rng),
                {"speaker": npc.name, "voice": voice, "victim": victim.name},
            )
        )

    return tuple(clues)


def generate_alibi_response(npc: NPC, all_npcs: Sequence[NPC], all_rooms: Sequence[Room], rng: random.Random) -> str:
    voice = pick_one(VOICE_MODIFIERS, rng)

    if npc.alibi:
        partner = next((n for n in all_npcs if n.id == npc.alibi.with_whom), None)
        room = next((r for r in all_rooms if r.id == npc.alibi.in_room), None)
        if partner and room and partner.id == npc.id:
            return fill_template(
                pick_one(SOLITARY_ALIBI_TEMPLATES, rng),
                {"speaker": npc.name, "voice": voice, "room": room.name},
            )
        if partner and room:
            return fill_template(
                pick_one(ALIBI_TEMPLATES, rng),
                {
                    "speaker": npc.name,
                    "voice": voice,
                    "partner": partner.name,
                    "partnerSubject": capitalize_first(pronouns_for(partner.gender)["subject"]),
                    "room": room.name,
                },
            )

    # A dangling alibi reference reads the same as no alibi at all.
    return fill_template(pick_one(NO_ALIBI_TEMPLATES, rng), {"speaker": npc.name, "voice": voice})


def generate_question_response(npc: NPC, rng: random.Random) -> str:
    if not npc.clues:
        return f"{npc.name} shrugs and says nothing useful."
    return pick_one(npc.clues, rng)


def intro_messages(victim_name: str, house_name: str) -> Tuple[str, ...]:
    return (
        f"Welcome to {house_name}, Inspector.",
        f"{victim_name} has been found murdered!",
        "Question the suspects, examine the evidence, and solve the case.",
        "When ready, pick up the murder weapon, go to the murder room, ASSEMBLE the suspects, "
        "and ACCUSE the guilty party.",
    )


def examine_message(item_name: str, description: str) -> str:
    return f"You examine the {item_name}. {description}"


def take_message(item_name: str) -> str:
    return f"You pick up the {item_name} and add it to your inventory."


def move_message(room_name: str) -> str:
    return f"You enter the {room_name}."


def assemble_message() -> str:
    return "You call all the suspects to gather in this room. They look at you expectantly, waiting for your accusation."


def win_message(murderer_name: str, victim_name: str, weapon_name: str, room_name: str) -> str:
    return (
        "Congratulations, Inspector! You've solved the case!\n\n"
        f"{murderer_name} murdered {victim_name} with the {weapon_name} in the {room_name}.\n\n"
        "Justice has been served."
    )


def lose_message(accused_name: str) -> str:
    return (
        f"You accuse {accused_name}, but your deduction is incorrect!\n\n"
        "The real murderer escapes justice. Your reputation as a detective is ruined."
    )


def solution_summary(victim: str, murderer: str, room: str, weapon: str) -> Tuple[str, ...]:
    return (
        "=== DEBUG INFO ===",
        f"Victim: {victim}",
        f"Murderer: {murderer}",
        f"Murder Room: {room}",
        f"Murder Weapon: {weapon}",
        "==================",
    )
