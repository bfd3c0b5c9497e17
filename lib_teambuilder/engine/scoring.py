"""Candidate ranking for greedy team assembly.

All functions are *pure*. Scores only rank candidates that already pass
:func:`would_violate`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from lib_teambuilder.engine.constraints import MAX_THINKERS, would_violate
from lib_teambuilder.participant_models import Participant


NEW_ROLE_BONUS = 25.0
SKILL_CLOSENESS_BASE = 15.0
THINKER_BONUS = 10.0
# Average assumed for an empty team.
NEUTRAL_AVERAGE = 5.0


@dataclass(frozen=True)
class CandidateScore:
    participant: Participant
    score: float


def score_candidate(team: Sequence[Participant], candidate: Participant) -> float:
    """Score *candidate* for *team*.

    - +25 when the candidate's role is not yet on the team
    - +(15 - |skill - team average|), average 5 for an empty team
    - +10 for a THINKER while the team has fewer than two
    """
    score = 0.0

    if all(m.preferred_role != candidate.preferred_role for m in team):
        score += NEW_ROLE_BONUS

    avg = sum(m.skill_level for m in team) / len(team) if team else NEUTRAL_AVERAGE
    score += SKILL_CLOSENESS_BASE - abs(candidate.skill_level - avg)

    if candidate.personality_type == "THINKER":
        thinkers = sum(1 for m in team if m.personality_type == "THINKER")
        if thinkers < MAX_THINKERS:
            score += THINKER_BONUS

    return score


def best_candidate(
    team: Sequence[Participant],
    candidates: Sequence[Participant],
) -> CandidateScore | None:
    """Highest-scoring legal candidate, first encountered wins ties.

    Returns None when no candidate is legal.
    """
    best: CandidateScore | None = None
    for p in candidates:
        if would_violate(team, p):
            continue
        score = score_candidate(team, p)
        if best is None or score > best.score:
            best = CandidateScore(participant=p, score=score)
    return best
