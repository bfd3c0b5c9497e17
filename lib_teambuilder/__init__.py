"""Team formation library: constrained greedy assembly and skill balancing."""

from .errors import (
    AttributeUpdateError,
    ConfigurationError,
    ParallelTaskFailure,
    ParticipantParseError,
)
from .participant_models import Participant, Team, TeamFormationResult
from .registry import TeamRegistry
from .team_builder import TeamBuilder

__all__ = [
    "AttributeUpdateError",
    "ConfigurationError",
    "ParallelTaskFailure",
    "Participant",
    "ParticipantParseError",
    "Team",
    "TeamBuilder",
    "TeamFormationResult",
    "TeamRegistry",
]
