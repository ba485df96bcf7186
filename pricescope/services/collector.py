"""Single consumer that drains site outcomes into a :class:`ResultSet`."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Optional

from .outcomes import ResultSet, SiteOutcome

logger = logging.getLogger(__name__)

# Marker enqueued behind the last outcome to end the drain loop
_STOP = object()


class ResultCollector:
    """
    Drain outcomes from a shared queue on a dedicated thread.

    Workers ``put`` onto :attr:`outcomes`; :meth:`stop` enqueues a stop
    marker on the same queue and joins the thread. Because the queue is
    FIFO, every outcome whose ``put`` returned before ``stop`` was called
    is drained before the marker, whatever the queue bound is.
    """

    def __init__(self, maxsize: int = 1) -> None:
        self.outcomes: "queue.Queue[object]" = queue.Queue(maxsize=maxsize)
        self._results = ResultSet()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("result collector already started")
        self._thread = threading.Thread(target=self._drain, name="result-collector")
        self._thread.start()

    def stop(self) -> ResultSet:
        """Signal that no more outcomes will arrive and wait for the drain to finish."""

        if self._thread is None:
            raise RuntimeError("result collector was never started")
        self.outcomes.put(_STOP)
        self._thread.join()
        logger.debug(
            "Collector stopped after %d outcomes (%d failed)",
            self._results.received,
            len(self._results.failures),
        )
        return self._results

    def _drain(self) -> None:
        while True:
            item = self.outcomes.get()
            if item is _STOP:
                return
            try:
                self._record(item)
            except Exception:
                logger.exception("Could not record outcome %r", item)

    def _record(self, outcome: SiteOutcome) -> None:
        if not outcome.ok:
            logger.warning(
                "Site %r failed during %s: %s",
                outcome.site.name,
                outcome.stage,
                outcome.detail,
            )
        self._results.add(outcome)
