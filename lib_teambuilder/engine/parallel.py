"""Chunked candidate search on a worker pool.

The coordinator owns the shared candidate list. Each worker gets its own copy
of one contiguous slice plus a copy of the current team and returns only the
chunk-local best. Any timeout or worker error falls back to the sequential
scan over the same candidates; late results of abandoned tasks are ignored.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import Executor, Future
from concurrent.futures import TimeoutError as FutureTimeoutError
import logging
import math
import os

from lib_teambuilder.config import FormationSettings
from lib_teambuilder.engine.scoring import CandidateScore, best_candidate
from lib_teambuilder.participant_models import Participant


logger = logging.getLogger(__name__)


def split_chunks(items: Sequence[Participant], n_chunks: int) -> list[list[Participant]]:
    """Split *items* into at most *n_chunks* contiguous, near-equal copies."""
    if not items or n_chunks <= 0:
        return []
    size = math.ceil(len(items) / n_chunks)
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


class ParallelEvaluator:
    """Pick the best legal candidate, splitting large pools across workers."""

    def __init__(
        self,
        executor: Executor | None = None,
        workers: int | None = None,
        settings: FormationSettings | None = None,
    ):
        settings = settings or FormationSettings()
        self.executor = executor
        self.workers = workers or os.cpu_count() or 1
        self.threshold = settings.parallel_threshold
        self.min_chunk_size = settings.min_chunk_size
        self.timeout = settings.chunk_timeout
        self.fallbacks = 0

    def chunk_count(self, n_candidates: int) -> int:
        return min(self.workers, n_candidates // self.min_chunk_size)

    def uses_parallel(self, n_candidates: int) -> bool:
        return (
            self.executor is not None
            and n_candidates > self.threshold
            and self.chunk_count(n_candidates) > 1
        )

    def select(
        self,
        team: Sequence[Participant],
        candidates: Sequence[Participant],
    ) -> CandidateScore | None:
        """Best legal candidate for *team*, or None if nobody fits."""
        if not self.uses_parallel(len(candidates)):
            return best_candidate(team, candidates)

        try:
            return self._select_parallel(team, candidates)
        except FutureTimeoutError:
            logger.warning(
                "Parallel scoring timed out after %.1fs, using sequential scan",
                self.timeout,
            )
        except Exception:
            logger.warning("Parallel scoring failed, using sequential scan", exc_info=True)

        self.fallbacks += 1
        return best_candidate(team, candidates)

    def _select_parallel(
        self,
        team: Sequence[Participant],
        candidates: Sequence[Participant],
    ) -> CandidateScore | None:
        executor = self.executor
        if executor is None:
            raise RuntimeError("No executor configured")
        team_snapshot = list(team)
        chunks = split_chunks(candidates, self.chunk_count(len(candidates)))

        futures: list[Future[CandidateScore | None]] = [
            executor.submit(best_candidate, team_snapshot, chunk)
            for chunk in chunks
        ]

        best: CandidateScore | None = None
        for future in futures:
            result = future.result(timeout=self.timeout)
            if result is not None and (best is None or result.score > best.score):
                best = result

        logger.debug(
            "Parallel scoring over %d candidates in %d chunks",
            len(candidates), len(chunks),
        )
        return best
