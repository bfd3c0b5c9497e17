"""Participant and team models.

Participants carry a preferred game, a 1-10 skill rating, a preferred role and
a personality classification (LEADER / THINKER / SOCIALIZER / BALANCED).
"""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lib_teambuilder.engine.constraints import describe_violations


# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------
RoleType = Literal["STRATEGIST", "ATTACKER", "DEFENDER", "SUPPORTER", "COORDINATOR"]
PersonalityType = Literal["LEADER", "THINKER", "SOCIALIZER", "BALANCED"]

ROLE_TYPES: tuple[str, ...] = get_args(RoleType)
PERSONALITY_TYPES: tuple[str, ...] = get_args(PersonalityType)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------
class Participant(BaseModel):
    """A single registered participant."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    email: str = ""
    preferred_game: str = Field(..., min_length=1)
    skill_level: int = Field(..., ge=1, le=10)
    preferred_role: RoleType
    personality_score: int = 0
    personality_type: PersonalityType

    @field_validator("id", "preferred_game")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("preferred_role", "personality_type", mode="before")
    @classmethod
    def normalise_enum(cls, v: object) -> object:
        """Accept enum values in any letter case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def key(self) -> str:
        """Case-insensitive identity used for all membership checks."""
        return self.id.casefold()

    def same_as(self, other: Participant) -> bool:
        return self.key == other.key


class Team(BaseModel):
    """A team with members kept in join order."""

    team_id: int = Field(..., ge=1)
    members: list[Participant] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def average_skill(self) -> float:
        if not self.members:
            return 0.0
        return sum(m.skill_level for m in self.members) / len(self.members)

    def add_member(self, participant: Participant) -> None:
        self.members.append(participant)

    def remove_member(self, participant: Participant) -> bool:
        """Remove *participant* by id. Returns False if it was not a member."""
        for i, m in enumerate(self.members):
            if m.same_as(participant):
                del self.members[i]
                return True
        return False

    def contains_participant(self, participant_id: str) -> Participant | None:
        wanted = participant_id.strip().casefold()
        return next((m for m in self.members if m.key == wanted), None)


class BalanceReport(BaseModel):
    """Outcome of the skill balancing pass."""

    iterations: int = Field(default=0, ge=0)
    swaps: int = Field(default=0, ge=0)
    initial_gap: float = 0.0
    final_gap: float = 0.0
    stop_reason: str = "not_run"


class TeamFormationResult(BaseModel):
    """Compliant and overflow teams of one formation run."""

    target_size: int = Field(..., ge=2, le=10)
    compliant_teams: list[Team] = Field(default_factory=list)
    overflow_teams: list[Team] = Field(default_factory=list)
    balance: BalanceReport = Field(default_factory=BalanceReport)

    @property
    def all_teams(self) -> list[Team]:
        return [*self.compliant_teams, *self.overflow_teams]

    @property
    def skill_gap(self) -> float:
        """Spread of average skill across compliant teams."""
        if len(self.compliant_teams) < 2:
            return 0.0
        averages = [t.average_skill for t in self.compliant_teams]
        return max(averages) - min(averages)

    def violations(self) -> dict[int, list[str]]:
        """Violated rules for every overflow team, keyed by team id."""
        return {
            t.team_id: describe_violations(t.members, self.target_size)
            for t in self.overflow_teams
        }

    def find_team_of(self, participant_id: str) -> Team | None:
        return next(
            (t for t in self.all_teams if t.contains_participant(participant_id) is not None),
            None,
        )
