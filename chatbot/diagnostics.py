"""Diagnostic channel for send-path failures kept out of the transcript."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Deque, List, Optional

from .constants import MAX_FAILURE_RECORDS
from .errors import ChatError

logger = logging.getLogger(__name__)


@dataclass
class FailureRecord:
    """Kind and detail of one handled failure."""

    kind: str
    detail: str
    status: Optional[int] = None
    generation: Optional[int] = None
    model: Optional[str] = None
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class DiagnosticChannel:
    """Logs failures and keeps the most recent ones for inspection."""

    def __init__(self, max_records: int = MAX_FAILURE_RECORDS) -> None:
        self._records: Deque[FailureRecord] = deque(maxlen=max_records)
        self.stale_dropped = 0

    @property
    def records(self) -> List[FailureRecord]:
        return list(self._records)

    def report_failure(
        self,
        error: ChatError,
        *,
        generation: Optional[int] = None,
        model: Optional[str] = None,
    ) -> FailureRecord:
        record = FailureRecord(
            kind=error.kind,
            detail=error.detail,
            status=error.status,
            generation=generation,
            model=model,
        )
        self._records.append(record)
        logger.error(
            f"Completion failed: kind={record.kind} status={record.status} "
            f"model={record.model} generation={record.generation} detail={record.detail}"
        )
        return record

    def report_stale(self, *, generation: int, current_generation: int) -> None:
        self.stale_dropped += 1
        logger.info(
            f"Dropping response from generation {generation}; history was cleared "
            f"(now generation {current_generation})"
        )
