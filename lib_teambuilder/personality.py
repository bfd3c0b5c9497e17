"""Survey scoring and personality classification."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from lib_teambuilder.participant_models import Participant, PersonalityType

SURVEY_QUESTIONS = 5
ANSWER_MIN = 1
ANSWER_MAX = 5

# Lower bound (inclusive) of each band, checked top-down.
_THRESHOLDS: list[tuple[int, PersonalityType]] = [
    (90, "LEADER"),
    (70, "BALANCED"),
    (50, "THINKER"),
]


def calculate_personality_score(answers: Sequence[int]) -> int:
    """Scale five 1-5 survey answers to a 20-100 score.

    Raises:
        ValueError: If there are not exactly five answers or one is out of range.
    """
    if len(answers) != SURVEY_QUESTIONS:
        raise ValueError(f"Expected {SURVEY_QUESTIONS} answers, got {len(answers)}")
    for a in answers:
        if not ANSWER_MIN <= a <= ANSWER_MAX:
            raise ValueError(f"Answer {a} outside {ANSWER_MIN}-{ANSWER_MAX}")
    return sum(answers) * 4


def classify_personality(score: int) -> PersonalityType:
    for lower, ptype in _THRESHOLDS:
        if score >= lower:
            return ptype
    return "SOCIALIZER"


def reclassify(participants: Iterable[Participant]) -> None:
    """Re-derive each participant's type from its stored score."""
    for p in participants:
        p.personality_type = classify_personality(p.personality_score)
