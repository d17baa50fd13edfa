"""Background thread that samples frame regions one request at a time."""

from __future__ import annotations

import enum
import logging
import queue
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from cocuyo.batch import RegionParams, sample_regions
from cocuyo.sampling import RGB, Frame

logger = logging.getLogger(__name__)

Sampler = Callable[[Frame, Sequence[RegionParams]], "list[tuple[int, Optional[RGB]]]"]

_STOP = object()


@dataclass
class SamplingResult:
    """Colours per region id, plus the time the worker spent sampling."""

    colors: list[tuple[int, Optional[RGB]]] = field(default_factory=list)
    sampling_time_ms: float = 0.0


class SendStatus(enum.Enum):
    SENT = "sent"
    BUSY = "busy"
    DEAD = "dead"


@dataclass(frozen=True)
class SendResult:
    """Outcome of a submission; ``future`` is set only when the request was sent."""

    status: SendStatus
    future: Optional["Future[SamplingResult]"] = None

    @property
    def sent(self) -> bool:
        return self.status is SendStatus.SENT


@dataclass
class _Request:
    frame: Frame
    regions: list[RegionParams]
    future: "Future[SamplingResult]"


class SamplingWorker:
    """Runs sampling requests on a dedicated thread.

    At most one request waits while another is being processed; further
    submissions report ``BUSY``. After ``close`` every submission reports
    ``DEAD``. Requests accepted before closing are still completed.
    """

    def __init__(self, sampler: Sampler = sample_regions) -> None:
        self._sampler = sampler
        self._requests: "queue.Queue[object]" = queue.Queue(maxsize=1)
        self._lock = threading.Lock()
        self._closed = False
        self._thread = threading.Thread(
            target=self._run, name="region-sampler", daemon=True
        )
        self._thread.start()

    def _run(self) -> None:
        while True:
            item = self._requests.get()
            if item is _STOP:
                break
            assert isinstance(item, _Request)
            start = time.perf_counter()
            try:
                colors = list(self._sampler(item.frame, item.regions))
            except Exception as exc:  # the worker must survive a failed frame
                logger.warning("region sampling failed: %s", exc)
                colors = [(region.region_id, None) for region in item.regions]
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            item.future.set_result(SamplingResult(colors, elapsed_ms))
        logger.info("sampling worker thread exiting")

    def try_send(self, frame: Frame, regions: Sequence[RegionParams]) -> SendResult:
        """Submit a request without blocking."""
        with self._lock:
            if self._closed or not self._thread.is_alive():
                return SendResult(SendStatus.DEAD)
            future: "Future[SamplingResult]" = Future()
            try:
                self._requests.put_nowait(_Request(frame, list(regions), future))
            except queue.Full:
                return SendResult(SendStatus.BUSY)
            return SendResult(SendStatus.SENT, future)

    def close(self) -> None:
        """Stop accepting requests, finish the accepted ones and end the thread."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        if self._thread.is_alive():
            self._requests.put(_STOP)
            self._thread.join()

    def __enter__(self) -> "SamplingWorker":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["SamplingResult", "SendStatus", "SendResult", "SamplingWorker"]