# simulated realtime biofeedback stream
# starts from the patient's last wearable reading and random-walks hr, hrv and eda
# on a fixed interval. the stream is an explicit handle that the caller must cancel.

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from mediview.models.wearable import WearableReading
from mediview.services.generators import WalkSpec, bounded_step

logger = logging.getLogger(__name__)

REALTIME_WALKS = {
    "heart_rate_bpm": WalkSpec(75, -2, 2, 50, 120),
    "heart_rate_variability_ms": WalkSpec(60, -3, 3, 25, 130),
    "eda_microsiemens": WalkSpec(0.8, -0.1, 0.1, 0.1, 2.5),
}


@dataclass(frozen=True)
class RealtimeSnapshot:
    heart_rate_bpm: int
    heart_rate_variability_ms: int
    eda_microsiemens: float

    def to_dict(self) -> dict:
        return {
            "heartRateBpm": self.heart_rate_bpm,
            "heartRateVariabilityMs": self.heart_rate_variability_ms,
            "edaMicrosiemens": round(self.eda_microsiemens, 1),
        }


UpdateCallback = Callable[[RealtimeSnapshot], Awaitable[None]]


def snapshot_from_reading(reading: Optional[WearableReading]) -> RealtimeSnapshot:
    """seed the stream from a reading, falling back to resting defaults"""
    hr = reading.heart_rate_bpm if reading and reading.heart_rate_bpm is not None else None
    hrv = reading.heart_rate_variability_ms if reading and reading.heart_rate_variability_ms is not None else None
    eda = reading.eda_microsiemens if reading and reading.eda_microsiemens is not None else None
    return RealtimeSnapshot(
        heart_rate_bpm=int(hr if hr is not None else REALTIME_WALKS["heart_rate_bpm"].start),
        heart_rate_variability_ms=int(hrv if hrv is not None else REALTIME_WALKS["heart_rate_variability_ms"].start),
        eda_microsiemens=round(eda if eda is not None else REALTIME_WALKS["eda_microsiemens"].start, 1),
    )


def step_snapshot(snapshot: RealtimeSnapshot, rng: random.Random) -> RealtimeSnapshot:
    """one bounded walk step per metric, each clamped independently.
    eda keeps full precision between steps and is only rounded for display"""
    hr = bounded_step(snapshot.heart_rate_bpm, REALTIME_WALKS["heart_rate_bpm"], rng)
    hrv = bounded_step(snapshot.heart_rate_variability_ms, REALTIME_WALKS["heart_rate_variability_ms"], rng)
    eda = bounded_step(snapshot.eda_microsiemens, REALTIME_WALKS["eda_microsiemens"], rng)
    return RealtimeSnapshot(
        heart_rate_bpm=int(round(hr)),
        heart_rate_variability_ms=int(round(hrv)),
        eda_microsiemens=eda,
    )


class RealtimeStream:
    """cancelable handle around the periodic update task"""

    def __init__(
        self,
        initial: RealtimeSnapshot,
        on_update: UpdateCallback,
        interval: float,
        rng: Optional[random.Random] = None,
    ):
        self.latest = initial
        self.on_update = on_update
        self.interval = interval
        self.rng = rng or random.Random()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> "RealtimeStream":
        if self.running:
            return self
        self._task = asyncio.create_task(self._run())
        return self

    async def _run(self):
        await self.on_update(self.latest)
        while True:
            await asyncio.sleep(self.interval)
            self.latest = step_snapshot(self.latest, self.rng)
            await self.on_update(self.latest)

    async def cancel(self):
        """stop the stream and wait for the task to unwind"""
        if self._task is None:
            return
        task, self._task = self._task, None
        if task.done():
            if not task.cancelled() and task.exception() is not None:
                logger.warning(f"Realtime stream ended with error: {task.exception()}")
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


class StreamRegistry:
    """tracks live streams so the app can stop them all on shutdown"""

    def __init__(self):
        self._streams: set[RealtimeStream] = set()

    def __len__(self) -> int:
        return len(self._streams)

    def add(self, stream: RealtimeStream):
        self._streams.add(stream)

    async def remove(self, stream: RealtimeStream):
        self._streams.discard(stream)
        await stream.cancel()

    async def cancel_all(self):
        streams, self._streams = self._streams, set()
        for stream in streams:
            await stream.cancel()
        if streams:
            logger.info(f"Cancelled {len(streams)} realtime stream(s)")


# singleton instance
streams = StreamRegistry()
