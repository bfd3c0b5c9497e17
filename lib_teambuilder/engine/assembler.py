"""Greedy compliant-team assembly.

Each attempt runs SEEK_LEADER -> FILL_MEMBERS -> COMPLETE | ABORT. The first
aborted attempt ends assembly for the whole run; there is no retry with a
different leader or candidate order, and everyone left goes to overflow.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
import logging
import random
from typing import Literal

from lib_teambuilder.engine.constraints import has_enough_roles
from lib_teambuilder.engine.parallel import ParallelEvaluator
from lib_teambuilder.participant_models import Participant, Team


logger = logging.getLogger(__name__)

UnsatisfiableReason = Literal["no_leader", "incomplete_team", "insufficient_roles"]


# ---------------------------------------------------------------------------
# Attempt outcomes
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Formed:
    team: Team


@dataclass(frozen=True)
class Unsatisfiable:
    reason: UnsatisfiableReason
    detail: str = ""


AssemblyOutcome = Formed | Unsatisfiable


@dataclass
class AssemblyRun:
    """Teams committed by one assembly pass and the participants left over."""

    teams: list[Team] = field(default_factory=list)
    remaining: list[Participant] = field(default_factory=list)
    halt: Unsatisfiable | None = None


# ---------------------------------------------------------------------------
# Assembler
# ---------------------------------------------------------------------------
def leaders_first(pool: Sequence[Participant], rng: random.Random) -> list[Participant]:
    """All LEADERs before everyone else, each group shuffled on its own."""
    leaders = [p for p in pool if p.personality_type == "LEADER"]
    others = [p for p in pool if p.personality_type != "LEADER"]
    rng.shuffle(leaders)
    rng.shuffle(others)
    return leaders + others


class GreedyTeamAssembler:
    """Builds compliant teams one at a time from a shared pool."""

    def __init__(
        self,
        target_size: int,
        evaluator: ParallelEvaluator,
        team_ids: Iterator[int],
        rng: random.Random,
    ):
        self.target_size = target_size
        self.evaluator = evaluator
        self.team_ids = team_ids
        self.rng = rng

    def build_team(self, pool: Sequence[Participant]) -> AssemblyOutcome:
        """Try to build one compliant team from *pool* without touching it."""
        # SEEK_LEADER
        leader = next((p for p in pool if p.personality_type == "LEADER"), None)
        if leader is None:
            return Unsatisfiable("no_leader", "no LEADER left in pool")

        # FILL_MEMBERS
        chosen: list[Participant] = [leader]
        available = [p for p in pool if p is not leader]
        while len(chosen) < self.target_size and available:
            pick = self.evaluator.select(chosen, available)
            if pick is None:
                break
            chosen.append(pick.participant)
            available = [p for p in available if p is not pick.participant]

        if len(chosen) < self.target_size:
            return Unsatisfiable(
                "incomplete_team",
                f"stopped at {len(chosen)}/{self.target_size} with no legal candidate",
            )
        if not has_enough_roles(chosen):
            roles = len({p.preferred_role for p in chosen})
            return Unsatisfiable("insufficient_roles", f"only {roles} distinct roles")

        # COMPLETE
        return Formed(Team(team_id=next(self.team_ids), members=chosen))

    def assemble(self, participants: Sequence[Participant]) -> AssemblyRun:
        """Commit teams until the pool is too small or an attempt aborts."""
        pool = leaders_first(participants, self.rng)
        run = AssemblyRun()

        while len(pool) >= self.target_size:
            outcome = self.build_team(pool)
            if isinstance(outcome, Unsatisfiable):
                logger.info(
                    "Assembly halted (%s: %s), %d participants left",
                    outcome.reason, outcome.detail, len(pool),
                )
                run.halt = outcome
                break

            team = outcome.team
            taken = {p.key for p in team.members}
            pool = [p for p in pool if p.key not in taken]
            run.teams.append(team)
            logger.debug(
                "Team %d committed (avg skill %.2f)", team.team_id, team.average_skill,
            )

        run.remaining = pool
        return run
