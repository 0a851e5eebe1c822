"""Periodic drivers for a monitoring session.

Two ticks run on one asyncio loop: a 1 Hz temperature tick (the walk itself
only moves every 2 s) and a 20 Hz tick that advances the PPG synthesizer and
drains the live accelerometer queue. Every tick is a synchronous call into
the session, so samples are never processed concurrently.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from vestmon.samples import SignalKind
from vestmon.session import Frame, MonitorSession

log = logging.getLogger(__name__)

TEMPERATURE_TICK_S = 1.0
FAST_TICK_S = 0.05
FRAME_INTERVAL_S = 1.0

FrameSink = Callable[[Frame], None]


async def _every(interval: float, fn: Callable[[float], None]) -> None:
    while True:
        fn(time.monotonic())
        await asyncio.sleep(interval)


async def run_monitor(
    session: MonitorSession,
    duration: float | None = None,
    sink: FrameSink | None = None,
    frame_interval: float = FRAME_INTERVAL_S,
) -> Frame:
    """Drive ``session`` until ``duration`` elapses (or forever).

    Args:
        session: The session to tick.
        duration: Seconds to run; None runs until cancelled.
        sink: Called with a fresh frame every ``frame_interval`` seconds.
        frame_interval: Seconds between frames handed to ``sink``.

    Returns:
        The final frame.

    Raises:
        Whatever a tick or ``sink`` raised; the other ticks are stopped.
    """

    def _temperature_tick(now: float) -> None:
        session.tick(SignalKind.TEMPERATURE, now)

    def _fast_tick(now: float) -> None:
        session.tick(SignalKind.PPG, now)
        session.tick(SignalKind.ACCEL, now)

    def _emit(_now: float) -> None:
        if sink is not None:
            sink(session.snapshot())

    tasks = [
        asyncio.create_task(_every(TEMPERATURE_TICK_S, _temperature_tick)),
        asyncio.create_task(_every(FAST_TICK_S, _fast_tick)),
        asyncio.create_task(_every(frame_interval, _emit)),
    ]
    try:
        done, _pending = await asyncio.wait(
            tasks, timeout=duration, return_when=asyncio.FIRST_EXCEPTION
        )
        # the tick loops never return, so a finished task has raised
        for task in done:
            task.result()
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    return session.snapshot()
