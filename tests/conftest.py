"""Shared participant factories for the test suite."""

from __future__ import annotations

import random

from lib_teambuilder.participant_models import ROLE_TYPES, Participant
import pytest


def build_participant(
    pid: str,
    game: str = "Chess",
    skill: int = 5,
    role: str = "STRATEGIST",
    ptype: str = "BALANCED",
    score: int = 75,
) -> Participant:
    return Participant(
        id=pid,
        name=f"Player {pid}",
        email=f"{pid.lower()}@university.edu",
        preferred_game=game,
        skill_level=skill,
        preferred_role=role,
        personality_score=score,
        personality_type=ptype,
    )


def build_random_pool(n: int, seed: int) -> list[Participant]:
    rng = random.Random(seed)
    games = ["Chess", "Go", "FIFA", "Valorant", "DOTA 2", "Basketball", "CS:GO", "Poker"]
    types = ["LEADER"] * 2 + ["THINKER"] * 3 + ["SOCIALIZER"] * 2 + ["BALANCED"] * 3
    return [
        build_participant(
            f"P{i:03d}",
            game=rng.choice(games),
            skill=rng.randint(1, 10),
            role=rng.choice(ROLE_TYPES),
            ptype=rng.choice(types),
        )
        for i in range(n)
    ]


def build_scenario_a_pool() -> list[Participant]:
    """12 participants, two LEADERs, six games of two, every role twice among the rest."""
    pool: list[Participant] = []
    non_leader = 0
    for i in range(12):
        game = f"Game{i // 2 + 1}"
        skill = 5 + i % 2
        if i in (0, 2):
            role = "STRATEGIST" if i == 0 else "ATTACKER"
            pool.append(build_participant(f"A{i:02d}", game, skill, role, "LEADER", 95))
            continue
        role = ROLE_TYPES[non_leader % len(ROLE_TYPES)]
        ptype = "THINKER" if non_leader in (3, 7) else "BALANCED"
        non_leader += 1
        pool.append(build_participant(f"A{i:02d}", game, skill, role, ptype))
    return pool


@pytest.fixture
def make_participant():
    return build_participant


@pytest.fixture
def random_pool():
    return build_random_pool


@pytest.fixture
def scenario_a_pool() -> list[Participant]:
    return build_scenario_a_pool()
