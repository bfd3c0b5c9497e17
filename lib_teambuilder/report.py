"""Plain-text and tabular views of a formation result."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from lib_teambuilder.engine.constraints import describe_violations
from lib_teambuilder.participant_models import Team, TeamFormationResult


class FormationSummary(BaseModel):
    compliant_teams: int = Field(ge=0)
    overflow_teams: int = Field(ge=0)
    total_teams: int = Field(ge=0)
    total_players: int = Field(ge=0)
    skill_gap: float = 0.0


def summarize(result: TeamFormationResult) -> FormationSummary:
    return FormationSummary(
        compliant_teams=len(result.compliant_teams),
        overflow_teams=len(result.overflow_teams),
        total_teams=len(result.all_teams),
        total_players=sum(t.size for t in result.all_teams),
        skill_gap=round(result.skill_gap, 2),
    )


def team_rows(team: Team) -> list[dict[str, Any]]:
    """One dict per member, in join order, for table display."""
    return [
        {
            "TeamID": team.team_id,
            "ID": m.id,
            "Name": m.name,
            "Game": m.preferred_game,
            "Skill": m.skill_level,
            "Role": m.preferred_role,
            "Personality": m.personality_type,
        }
        for m in team.members
    ]


def format_team(team: Team, target_size: int, overflow: bool = False) -> str:
    """Text block for one team; overflow teams list their violations."""
    label = "Overflow" if overflow else "Good"
    lines = [f"Team {team.team_id} [{label}]"]
    for m in team.members:
        name = m.name if len(m.name) <= 15 else m.name[:13] + ".."
        lines.append(
            f" {m.id:<6} | {name:<15} | {m.preferred_game:<12} | Skill: {m.skill_level:2d}"
            f" | {m.preferred_role:<11} | {m.personality_type:<10}"
        )
    lines.append(f" Avg Skill: {team.average_skill:.2f} | Size: {team.size}/{target_size}")
    if overflow:
        violations = describe_violations(team.members, target_size)
        if violations:
            lines.append(" Violation: " + " | ".join(violations))
    return "\n".join(lines)


def format_result(result: TeamFormationResult) -> str:
    if not result.all_teams:
        return "No teams yet."
    blocks = [format_team(t, result.target_size) for t in result.compliant_teams]
    blocks += [format_team(t, result.target_size, overflow=True) for t in result.overflow_teams]
    s = summarize(result)
    blocks.append(
        f"Good Teams: {s.compliant_teams} | Overflow: {s.overflow_teams}"
        f" | Total Teams: {s.total_teams} | Total Players: {s.total_players}"
    )
    return "\n\n".join(blocks)
