"""Participant ingestion from CSV rows.

Row layout (8 fields, header skipped)::

    ID,Name,Email,PreferredGame,SkillLevel,PreferredRole,PersonalityScore,PersonalityType

The parallel variant parses contiguous chunks on a worker pool. A bad row
fails only its own chunk; the other chunks' participants are kept and the
caller decides whether partial results are acceptable.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import Executor
import csv
import logging
import math
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lib_teambuilder.errors import ParallelTaskFailure, ParticipantParseError
from lib_teambuilder.participant_models import (
    PERSONALITY_TYPES,
    ROLE_TYPES,
    Participant,
)


logger = logging.getLogger(__name__)

CSV_COLUMNS: list[str] = [
    "ID", "Name", "Email", "PreferredGame", "SkillLevel",
    "PreferredRole", "PersonalityScore", "PersonalityType",
]


# ---------------------------------------------------------------------------
# Row parsing
# ---------------------------------------------------------------------------
def parse_row(raw: str) -> Participant:
    """Parse one CSV record into a participant.

    Raises:
        ParticipantParseError: On a wrong field count, non-integer numbers,
            unknown role / personality values or any other invalid field.
    """
    fields = next(csv.reader([raw]), [])
    if len(fields) != len(CSV_COLUMNS):
        raise ParticipantParseError(
            f"Invalid CSV row (expected {len(CSV_COLUMNS)} columns, got {len(fields)})", raw,
        )
    pid, name, email, game, skill, role, score, ptype = (f.strip() for f in fields)

    try:
        skill_level = int(skill)
        personality_score = int(score)
    except ValueError:
        raise ParticipantParseError("Invalid number format", raw) from None

    if role.upper() not in ROLE_TYPES or ptype.upper() not in PERSONALITY_TYPES:
        raise ParticipantParseError("Invalid enum value", raw)

    try:
        return Participant(
            id=pid,
            name=name,
            email=email,
            preferred_game=game,
            skill_level=skill_level,
            preferred_role=role,
            personality_score=personality_score,
            personality_type=ptype,
        )
    except ValidationError as e:
        raise ParticipantParseError(f"Invalid participant data ({e.error_count()} errors)", raw) from e


def _data_lines(path: str | Path) -> list[str]:
    with open(path, newline="", encoding="utf-8") as f:
        lines = f.read().splitlines()
    return [line for line in lines[1:] if line.strip()]


def read_participants(path: str | Path) -> list[Participant]:
    """Read every data row of *path* in order, failing on the first bad row."""
    participants = [parse_row(line) for line in _data_lines(path)]
    logger.info("Loaded %d participants from %s", len(participants), path)
    return participants


# ---------------------------------------------------------------------------
# Chunked parsing
# ---------------------------------------------------------------------------
class ChunkFailure(BaseModel):
    """A chunk whose parse task raised."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    chunk_index: int = Field(ge=0)
    first_row: int = Field(ge=0)
    error: Exception


class IngestionReport(BaseModel):
    """Participants from successful chunks, in chunk order, plus failures."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    participants: list[Participant] = Field(default_factory=list)
    failures: list[ChunkFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        if self.failures:
            raise ParallelTaskFailure(
                f"{len(self.failures)} ingestion chunk(s) failed: "
                + "; ".join(str(f.error) for f in self.failures),
                causes={f.chunk_index: f.error for f in self.failures},
            )


def _parse_chunk(rows: list[str]) -> list[Participant]:
    return [parse_row(row) for row in rows]


def parse_rows_parallel(
    rows: Sequence[str],
    executor: Executor,
    workers: int = 4,
) -> IngestionReport:
    """Parse *rows* in *workers* contiguous chunks and join them chunk by chunk."""
    report = IngestionReport()
    if not rows:
        return report

    size = math.ceil(len(rows) / max(workers, 1))
    starts = list(range(0, len(rows), size))
    futures = [executor.submit(_parse_chunk, list(rows[s:s + size])) for s in starts]

    for index, (start, future) in enumerate(zip(starts, futures)):
        try:
            report.participants.extend(future.result())
        except Exception as e:
            logger.error("Chunk %d (rows %d-%d) failed: %s", index, start, start + size - 1, e)
            report.failures.append(ChunkFailure(chunk_index=index, first_row=start, error=e))

    logger.info(
        "Parsed %d participants in %d chunks (%d failed)",
        len(report.participants), len(futures), len(report.failures),
    )
    return report


def read_participants_parallel(
    path: str | Path,
    executor: Executor,
    workers: int = 4,
    strict: bool = True,
) -> IngestionReport:
    """Chunked variant of :func:`read_participants`.

    With ``strict`` any failed chunk raises :class:`ParallelTaskFailure`.
    """
    report = parse_rows_parallel(_data_lines(path), executor, workers)
    if strict:
        report.raise_for_failures()
    return report
