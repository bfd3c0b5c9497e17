"""Thread-safe registry of participants and the latest formed teams."""

from __future__ import annotations

from concurrent.futures import Executor
import logging
import threading
from typing import Any

from pydantic import ValidationError

from lib_teambuilder.config import FormationSettings
from lib_teambuilder.errors import AttributeUpdateError
from lib_teambuilder.participant_models import Participant, Team, TeamFormationResult
from lib_teambuilder.team_builder import TeamBuilder


logger = logging.getLogger(__name__)


class TeamRegistry:
    """Owns the participant pool and the result of the last formation run.

    Callers only ever receive copies of the stored teams.
    """

    def __init__(
        self,
        settings: FormationSettings | None = None,
        executor: Executor | None = None,
    ):
        self.settings = settings or FormationSettings()
        self.executor = executor
        self._participants: list[Participant] = []
        self._result: TeamFormationResult | None = None
        self._builder: TeamBuilder | None = None
        self._team_size = self.settings.team_size
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Participants
    # ------------------------------------------------------------------
    @property
    def participants(self) -> list[Participant]:
        with self._lock:
            return [p.model_copy() for p in self._participants]

    def register(self, participant: Participant) -> Team | None:
        """Add a participant to the pool.

        Once teams have been formed the newcomer also joins the first compliant
        team it fits, or a new overflow team. Returns a copy of that team.
        """
        with self._lock:
            if self._find(participant.id) is not None:
                raise ValueError(f"Participant with id '{participant.id}' already exists")
            self._participants.append(participant)
            if self._builder is None:
                return None

            team = self._builder.find_suitable_team(participant)
            team.add_member(participant)
            logger.info("Participant %s placed in team %d", participant.id, team.team_id)
            return team.model_copy(deep=True)

    def load(self, participants: list[Participant]) -> None:
        """Replace the pool and drop any formed teams."""
        with self._lock:
            keys = [p.key for p in participants]
            if len(keys) != len(set(keys)):
                raise ValueError("Duplicate participant ids found")
            self._participants = list(participants)
            self._result = None
            self._builder = None

    def update_participant(self, participant_id: str, updates: dict[str, Any]) -> Participant:
        """Apply *updates* to a participant, all or nothing.

        Formed teams see the change too; they are not re-formed.

        Raises:
            AttributeUpdateError: For an unknown participant or field, an id
                change, or any value the model rejects.
        """
        with self._lock:
            current = self._find(participant_id)
            if current is None:
                raise AttributeUpdateError(f"Participant with id '{participant_id}' not found")

            unknown = set(updates) - set(Participant.model_fields)
            if unknown:
                raise AttributeUpdateError(f"Unknown field(s): {', '.join(sorted(unknown))}")
            if "id" in updates:
                raise AttributeUpdateError("Participant id cannot be changed")

            data = current.model_dump()
            data.update(updates)
            try:
                validated = Participant(**data)
            except ValidationError as e:
                raise AttributeUpdateError(f"Invalid update for '{participant_id}': {e}") from e

            targets = [current]
            if self._result is not None:
                team = self._result.find_team_of(participant_id)
                member = team.contains_participant(participant_id) if team else None
                if member is not None and member is not current:
                    targets.append(member)
            for target in targets:
                for field_name in updates:
                    setattr(target, field_name, getattr(validated, field_name))
            logger.info("Participant %s updated: %s", current.id, ", ".join(sorted(updates)))
            return current.model_copy()

    def withdraw(self, participant_id: str) -> TeamFormationResult | None:
        """Remove a participant and re-form teams if teams were formed.

        Raises:
            ValueError: If the participant is not registered.
        """
        with self._lock:
            target = self._find(participant_id)
            if target is None:
                raise ValueError(f"Participant with id '{participant_id}' not found")
            self._participants = [p for p in self._participants if not p.same_as(target)]
            logger.info("Participant %s withdrawn", target.id)

            if self._result is None:
                return None
            if not self._participants:
                self._result = None
                self._builder = None
                return None
            return self._form_locked(self._team_size)

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------
    def form(self, team_size: int | None = None) -> TeamFormationResult:
        with self._lock:
            return self._form_locked(team_size or self._team_size)

    def snapshot(self) -> TeamFormationResult | None:
        with self._lock:
            return self._result.model_copy(deep=True) if self._result else None

    def find_team_of(self, participant_id: str) -> Team | None:
        with self._lock:
            if self._result is None:
                return None
            team = self._result.find_team_of(participant_id)
            return team.model_copy(deep=True) if team else None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _find(self, participant_id: str) -> Participant | None:
        wanted = participant_id.strip().casefold()
        return next((p for p in self._participants if p.key == wanted), None)

    def _form_locked(self, team_size: int) -> TeamFormationResult:
        builder = TeamBuilder(
            self._participants,
            team_size,
            executor=self.executor,
            settings=self.settings,
        )
        formed = builder.form_teams()
        # Live result: later registrations are placed into it.
        self._builder = builder
        self._result = builder.result
        self._team_size = team_size
        return formed
