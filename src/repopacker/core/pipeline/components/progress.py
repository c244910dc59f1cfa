from __future__ import annotations

"""
Progress Notification Side-Channel.

Wraps the optional caller-supplied sink so that pipeline stages can emit
events unconditionally. Delivery is best-effort: a missing sink is a
no-op and a failing sink is logged, never propagated.
"""

import logging
from typing import Optional

from repopacker.domain.pipeline_models import ProgressEvent, ProgressReporter

logger = logging.getLogger(__name__)


class ProgressNotifier:
    """Fire-and-forget emitter for ProgressEvent records."""

    def __init__(self, sink: Optional[ProgressReporter] = None) -> None:
        self._sink = sink

    def emit(
            self,
            status: str,
            progress: float,
            message: str,
            details: Optional[str] = None,
    ) -> None:
        if self._sink is None:
            return

        event = ProgressEvent(
            status=status,
            progress=max(0, min(100, int(progress))),
            message=message,
            details=details,
        )
        try:
            self._sink(event)
        except Exception as e:
            logger.warning(f"Progress sink raised {type(e).__name__}: {e}")
