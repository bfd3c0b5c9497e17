"""Team formation pipeline: assembly, overflow, skill balancing.

Usage::

    builder = TeamBuilder(participants, team_size=5)
    result = builder.form_teams()
    for team_id, rules in result.violations().items():
        ...
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import Executor
import itertools
import logging
import random
import time

from lib_teambuilder.config import MAX_TEAM_SIZE, MIN_TEAM_SIZE, FormationSettings
from lib_teambuilder.engine.assembler import GreedyTeamAssembler
from lib_teambuilder.engine.balancer import SkillBalancer
from lib_teambuilder.engine.constraints import would_violate
from lib_teambuilder.engine.overflow import OverflowAssigner
from lib_teambuilder.engine.parallel import ParallelEvaluator
from lib_teambuilder.errors import ConfigurationError
from lib_teambuilder.participant_models import Participant, Team, TeamFormationResult


logger = logging.getLogger(__name__)


class TeamBuilder:
    """Partition a participant pool into compliant and overflow teams."""

    def __init__(
        self,
        participants: Sequence[Participant],
        team_size: int,
        executor: Executor | None = None,
        settings: FormationSettings | None = None,
        seed: int | None = None,
        workers: int | None = None,
    ):
        if not participants:
            raise ConfigurationError("No participants given")
        if not MIN_TEAM_SIZE <= team_size <= MAX_TEAM_SIZE:
            raise ConfigurationError(
                f"Team size must be {MIN_TEAM_SIZE}-{MAX_TEAM_SIZE}, got {team_size}"
            )
        keys = [p.key for p in participants]
        if len(keys) != len(set(keys)):
            raise ConfigurationError("Duplicate participant ids found")

        self.settings = settings or FormationSettings()
        self.participants = list(participants)
        self.team_size = team_size
        self.seed = seed if seed is not None else self.settings.seed
        self.evaluator = ParallelEvaluator(executor, workers=workers, settings=self.settings)
        self.result = TeamFormationResult(target_size=team_size)

    def form_teams(self) -> TeamFormationResult:
        """Run one full formation. Each call starts over with team id 1.

        Returns a deep copy; the builder keeps its own teams for
        :meth:`find_suitable_team`.
        """
        started = time.perf_counter()
        logger.info(
            "Forming teams of %d from %d participants", self.team_size, len(self.participants),
        )

        rng = random.Random(self.seed)
        team_ids = itertools.count(1)

        assembler = GreedyTeamAssembler(self.team_size, self.evaluator, team_ids, rng)
        run = assembler.assemble(self.participants)

        overflow: list[Team] = []
        if run.remaining:
            overflow = OverflowAssigner(self.team_size, team_ids, rng).assign(run.remaining)

        compliant = run.teams
        balance = SkillBalancer(self.team_size, self.settings).balance(compliant)

        self.result = TeamFormationResult(
            target_size=self.team_size,
            compliant_teams=compliant,
            overflow_teams=overflow,
            balance=balance,
        )
        logger.info(
            "Formed %d compliant and %d overflow teams in %.0fms",
            len(compliant), len(overflow), (time.perf_counter() - started) * 1000,
        )
        return self.result.model_copy(deep=True)

    def find_suitable_team(self, participant: Participant) -> Team:
        """First compliant team with room that *participant* can legally join.

        Falls back to a new, empty overflow team. Unlike :meth:`form_teams`
        this returns the builder's own team, not a copy: the caller is
        expected to ``add_member`` the participant to it.
        """
        for team in self.result.compliant_teams:
            if team.size < self.team_size and not would_violate(team.members, participant):
                return team

        used = [t.team_id for t in self.result.all_teams]
        team = Team(team_id=max(used, default=0) + 1)
        self.result.overflow_teams.append(team)
        return team
