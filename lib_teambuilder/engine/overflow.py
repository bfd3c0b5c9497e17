"""Partition of participants left over after assembly.

Overflow teams are never constraint-checked; their violations are only
reported through :func:`describe_violations`.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
import logging
import random

from lib_teambuilder.engine.constraints import describe_violations
from lib_teambuilder.participant_models import Participant, Team


logger = logging.getLogger(__name__)


class OverflowAssigner:
    """Shuffle leftovers and cut them into chunks of at most the target size."""

    def __init__(self, target_size: int, team_ids: Iterator[int], rng: random.Random):
        self.target_size = target_size
        self.team_ids = team_ids
        self.rng = rng

    def assign(self, leftovers: Sequence[Participant]) -> list[Team]:
        remaining = list(leftovers)
        self.rng.shuffle(remaining)

        teams: list[Team] = []
        for start in range(0, len(remaining), self.target_size):
            chunk = remaining[start:start + self.target_size]
            team = Team(team_id=next(self.team_ids), members=chunk)
            teams.append(team)
            logger.info(
                "Overflow team %d (%d members): %s",
                team.team_id,
                team.size,
                " | ".join(describe_violations(chunk, self.target_size)) or "no violations",
            )
        return teams
