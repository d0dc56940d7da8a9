"""Default AI competitor roster.

Each character races against the controlled racer in its own lane. Speeds
are base values in track units per second before roster scaling.
"""

from sprintsim.models import CharacterProfile

CHARACTER_PROFILES: list[CharacterProfile] = [
    CharacterProfile(
        id="mommy",
        name="Mommy",
        color=0x4A90D9,  # Blue
        base_min_speed=35,
        base_max_speed=55,
        role="Mom",
    ),
    CharacterProfile(
        id="daddy",
        name="Daddy",
        color=0x2ECC71,  # Green
        base_min_speed=40,
        base_max_speed=58,
        role="Dad",
    ),
    CharacterProfile(
        id="uncle-zack",
        name="Uncle Zack",
        color=0xE67E22,  # Orange
        base_min_speed=33,
        base_max_speed=51,
        role="Uncle",
    ),
    CharacterProfile(
        id="gaga",
        name="Gaga",
        color=0x9B59B6,  # Purple
        base_min_speed=30,
        base_max_speed=48,
        role="Grandma",
    ),
    CharacterProfile(
        id="grandpa",
        name="Grandpa",
        color=0xE74C3C,  # Red
        base_min_speed=27,
        base_max_speed=45,
        role="Grandpa",
    ),
    CharacterProfile(
        id="lalo",
        name="Lalo",
        color=0xF1C40F,  # Gold
        base_min_speed=42,
        base_max_speed=60,
        role="Dog",
    ),
]


def get_profile(profile_id: str) -> CharacterProfile | None:
    """Look up a character by id."""
    for profile in CHARACTER_PROFILES:
        if profile.id == profile_id:
            return profile
    return None
