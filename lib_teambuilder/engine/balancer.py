"""Skill balancing by member swaps between compliant teams.

Greedy hill-climb: each iteration only looks at the weakest and strongest
team, takes the first legal swap between them and stops as soon as that
pair has none. It can end short of the best achievable balance.
"""

from __future__ import annotations

import logging

from lib_teambuilder.config import FormationSettings
from lib_teambuilder.engine.constraints import is_compliant
from lib_teambuilder.participant_models import BalanceReport, Team


logger = logging.getLogger(__name__)


def _gap(teams: list[Team]) -> float:
    if len(teams) < 2:
        return 0.0
    averages = [t.average_skill for t in teams]
    return max(averages) - min(averages)


class SkillBalancer:
    """Narrow the average-skill spread of compliant teams."""

    def __init__(self, target_size: int, settings: FormationSettings | None = None):
        settings = settings or FormationSettings()
        self.target_size = target_size
        self.max_iterations = settings.max_balance_iterations
        self.threshold = settings.balance_threshold

    def balance(self, teams: list[Team]) -> BalanceReport:
        """Swap members in place. *teams* is left sorted by average skill."""
        report = BalanceReport(initial_gap=_gap(teams), final_gap=_gap(teams))
        if len(teams) < 2:
            report.stop_reason = "too_few_teams"
            return report

        report.stop_reason = "max_iterations"
        for _ in range(self.max_iterations):
            report.iterations += 1
            teams.sort(key=lambda t: t.average_skill)
            weak, strong = teams[0], teams[-1]

            if strong.average_skill - weak.average_skill < self.threshold:
                report.stop_reason = "balanced"
                break
            if not self.try_swap(strong, weak):
                report.stop_reason = "no_legal_swap"
                break
            report.swaps += 1

        teams.sort(key=lambda t: t.average_skill)
        report.final_gap = _gap(teams)
        logger.info(
            "Balancing stopped (%s) after %d iterations, %d swaps, gap %.2f -> %.2f",
            report.stop_reason, report.iterations, report.swaps,
            report.initial_gap, report.final_gap,
        )
        return report

    def try_swap(self, a: Team, b: Team) -> bool:
        """Apply the first swap that keeps both teams compliant."""
        original_a = list(a.members)
        original_b = list(b.members)

        for pa in original_a:
            for pb in original_b:
                a.remove_member(pa)
                a.add_member(pb)
                b.remove_member(pb)
                b.add_member(pa)

                if (is_compliant(a.members, self.target_size)
                        and is_compliant(b.members, self.target_size)):
                    logger.debug(
                        "Swapped %s (team %d) with %s (team %d)",
                        pa.id, a.team_id, pb.id, b.team_id,
                    )
                    return True

                a.members[:] = original_a
                b.members[:] = original_b
        return False
