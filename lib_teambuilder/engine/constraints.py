"""Hard team rules and violation diagnostics.

All functions are *pure*.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lib_teambuilder.participant_models import Participant


# ---------------------------------------------------------------------------
# Rule limits
# ---------------------------------------------------------------------------
MAX_SAME_GAME = 2
MAX_LEADERS = 1
MAX_THINKERS = 2
MAX_SOCIALIZERS = 1
MIN_DIFFERENT_ROLES = 3

_PERSONALITY_CAPS: dict[str, int] = {
    "LEADER": MAX_LEADERS,
    "THINKER": MAX_THINKERS,
    "SOCIALIZER": MAX_SOCIALIZERS,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def would_violate(team: Sequence[Participant], candidate: Participant) -> bool:
    """Return True if adding *candidate* to *team* breaks a hard rule.

    Checks the per-game cap and the LEADER / THINKER / SOCIALIZER caps.
    BALANCED members are never capped.
    """
    same_game = sum(1 for m in team if m.preferred_game == candidate.preferred_game)
    if same_game >= MAX_SAME_GAME:
        return True

    cap = _PERSONALITY_CAPS.get(candidate.personality_type)
    if cap is None:
        return False
    same_type = sum(1 for m in team if m.personality_type == candidate.personality_type)
    return same_type >= cap


def has_enough_roles(team: Sequence[Participant]) -> bool:
    return len({m.preferred_role for m in team}) >= MIN_DIFFERENT_ROLES


def has_rule_problem(team: Sequence[Participant]) -> bool:
    """Full-membership check of the game and personality caps."""
    games = Counter(m.preferred_game for m in team)
    if any(count > MAX_SAME_GAME for count in games.values()):
        return True
    types = Counter(m.personality_type for m in team)
    return any(types[ptype] > cap for ptype, cap in _PERSONALITY_CAPS.items())


def describe_violations(team: Sequence[Participant], target_size: int) -> list[str]:
    """Name every rule *team* breaks. Empty list means compliant."""
    violations: list[str] = []

    if len(team) != target_size:
        violations.append(f"Wrong size ({len(team)}/{target_size})")

    games = Counter(m.preferred_game for m in team)
    for game, count in games.items():
        if count > MAX_SAME_GAME:
            violations.append(f"Too many {game} players: {count}")

    types = Counter(m.personality_type for m in team)
    if types["LEADER"] == 0:
        violations.append("No Leader")
    if types["LEADER"] > MAX_LEADERS:
        violations.append(f"Too many Leaders: {types['LEADER']}")
    if types["THINKER"] > MAX_THINKERS:
        violations.append(f"Too many Thinkers: {types['THINKER']}")
    if types["SOCIALIZER"] > MAX_SOCIALIZERS:
        violations.append(f"Too many Socializers: {types['SOCIALIZER']}")

    roles = {m.preferred_role for m in team}
    if len(roles) < MIN_DIFFERENT_ROLES:
        violations.append(f"Only {len(roles)} roles")

    return violations


def is_compliant(team: Sequence[Participant], target_size: int) -> bool:
    return not describe_violations(team, target_size)
