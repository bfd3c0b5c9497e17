"""Tests for lib_teambuilder/engine/assembler.py."""

import itertools
import random

from lib_teambuilder.engine.assembler import (
    Formed,
    GreedyTeamAssembler,
    Unsatisfiable,
    leaders_first,
)
from lib_teambuilder.engine.constraints import is_compliant
from lib_teambuilder.engine.parallel import ParallelEvaluator
import pytest


def _assembler(target_size, seed=0, first_id=1):
    return GreedyTeamAssembler(
        target_size,
        ParallelEvaluator(None),
        itertools.count(first_id),
        random.Random(seed),
    )


@pytest.fixture
def small_pool(make_participant):
    return [
        make_participant("L1", game="Chess", skill=7, role="STRATEGIST", ptype="LEADER"),
        make_participant("F1", game="Go", skill=5, role="ATTACKER", ptype="THINKER"),
        make_participant("F2", game="FIFA", skill=6, role="DEFENDER", ptype="SOCIALIZER"),
        make_participant("F3", game="Poker", skill=4, role="SUPPORTER", ptype="BALANCED"),
    ]


class TestLeadersFirst:
    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_leaders_precede_others(self, random_pool, seed):
        pool = random_pool(60, seed=seed)
        ordered = leaders_first(pool, random.Random(seed))
        n_leaders = sum(1 for p in pool if p.personality_type == "LEADER")
        assert all(p.personality_type == "LEADER" for p in ordered[:n_leaders])
        assert all(p.personality_type != "LEADER" for p in ordered[n_leaders:])
        assert sorted(p.id for p in ordered) == sorted(p.id for p in pool)

    def test_same_seed_same_order(self, random_pool):
        pool = random_pool(40, seed=5)
        first = [p.id for p in leaders_first(pool, random.Random(7))]
        second = [p.id for p in leaders_first(pool, random.Random(7))]
        assert first == second


class TestBuildTeam:
    def test_formed(self, small_pool):
        outcome = _assembler(4).build_team(small_pool)
        assert isinstance(outcome, Formed)
        assert outcome.team.team_id == 1
        assert outcome.team.members[0].id == "L1"
        assert is_compliant(outcome.team.members, 4)

    def test_no_leader(self, small_pool):
        outcome = _assembler(3).build_team(small_pool[1:])
        assert outcome == Unsatisfiable("no_leader", "no LEADER left in pool")

    def test_incomplete_when_only_leaders_left(self, make_participant):
        pool = [make_participant(f"L{i}", game=f"G{i}", ptype="LEADER") for i in range(4)]
        outcome = _assembler(3).build_team(pool)
        assert isinstance(outcome, Unsatisfiable)
        assert outcome.reason == "incomplete_team"

    def test_insufficient_roles(self, make_participant):
        pool = [make_participant("L", game="G0", role="ATTACKER", ptype="LEADER")]
        pool += [make_participant(f"B{i}", game=f"G{i + 1}", role="ATTACKER") for i in range(4)]
        outcome = _assembler(4).build_team(pool)
        assert isinstance(outcome, Unsatisfiable)
        assert outcome.reason == "insufficient_roles"

    def test_does_not_touch_pool(self, small_pool):
        ids = [p.id for p in small_pool]
        _assembler(4).build_team(small_pool)
        assert [p.id for p in small_pool] == ids

    def test_failed_attempt_consumes_no_team_id(self, make_participant):
        ids = itertools.count(1)
        assembler = GreedyTeamAssembler(3, ParallelEvaluator(None), ids, random.Random(0))
        assembler.build_team([make_participant("B1"), make_participant("B2")])
        assert next(ids) == 1


class TestAssemble:
    def test_commits_and_reports_leftovers(self, small_pool, make_participant):
        pool = [*small_pool, make_participant("X1", game="Go"), make_participant("X2", game="Go")]
        run = _assembler(4).assemble(pool)
        assert len(run.teams) == 1
        assert len(run.remaining) == 2
        assert run.halt is None

    def test_halts_on_first_failure(self, small_pool, make_participant):
        extras = [make_participant(f"B{i}", game=f"X{i}", role="ATTACKER") for i in range(4)]
        run = _assembler(4).assemble([*small_pool, *extras])
        assert len(run.teams) == 1
        assert run.halt is not None and run.halt.reason == "no_leader"
        assert len(run.remaining) == 4

    def test_pool_smaller_than_target(self, small_pool):
        run = _assembler(5).assemble(small_pool)
        assert run.teams == []
        assert run.halt is None
        assert len(run.remaining) == 4

    def test_no_participant_in_two_teams(self, random_pool):
        run = _assembler(4, seed=3).assemble(random_pool(120, seed=3))
        ids = [p.id for t in run.teams for p in t.members] + [p.id for p in run.remaining]
        assert sorted(ids) == sorted(f"P{i:03d}" for i in range(120))
