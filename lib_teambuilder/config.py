"""Formation settings loaded from environment variables.

Reads a ``.env`` file found from the working directory (if any), then the
``TEAM_*`` variables.
"""

from __future__ import annotations

import logging
import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from lib_teambuilder.errors import ConfigurationError

logger = logging.getLogger(__name__)

MIN_TEAM_SIZE = 2
MAX_TEAM_SIZE = 10


class FormationSettings(BaseModel):
    """Tunables for one formation run."""

    team_size: int = Field(default=5, ge=MIN_TEAM_SIZE, le=MAX_TEAM_SIZE)
    seed: int | None = None

    # Parallel candidate search
    parallel_threshold: int = Field(default=150, ge=1)
    min_chunk_size: int = Field(default=25, ge=1)
    chunk_timeout: float = Field(default=2.0, gt=0.0)

    # Skill balancing
    max_balance_iterations: int = Field(default=50, ge=0)
    balance_threshold: float = Field(default=1.2, ge=0.0)

    # Chunked ingestion
    ingest_workers: int = Field(default=4, ge=1)


_ENV_FIELDS: dict[str, str] = {
    "TEAM_SIZE": "team_size",
    "TEAM_SEED": "seed",
    "TEAM_PARALLEL_THRESHOLD": "parallel_threshold",
    "TEAM_CHUNK_TIMEOUT": "chunk_timeout",
    "TEAM_INGEST_WORKERS": "ingest_workers",
}


def load_settings(dotenv: bool = True) -> FormationSettings:
    """Build settings from the environment.

    Raises:
        ConfigurationError: If a variable is set to an invalid value.
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    values: dict[str, str] = {}
    for env_name, field_name in _ENV_FIELDS.items():
        raw = os.getenv(env_name, "").strip()
        if raw:
            values[field_name] = raw

    try:
        settings = FormationSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid formation settings: {e}") from e

    logger.info(
        "Formation settings: team_size=%d seed=%s workers=%d",
        settings.team_size, settings.seed, settings.ingest_workers,
    )
    return settings
