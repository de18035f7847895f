import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .controller import RunStats, Step, StepController
from .engine import SortEngine, resolve_algorithm
from .errors import InvalidSize, InvalidSpeed, RunInProgress
from .sequence import Role, WorkingSequence
from .settings import Settings

log = logging.getLogger(__name__)

StepSink = Callable[[WorkingSequence, Step], None]


@dataclass
class RunResult:
    algorithm: str
    values:    List[int]
    roles:     List[Role]
    stats:     RunStats = field(default_factory=RunStats)
    completed: bool = True


def prepare(algorithm, values, delay_ms=0, max_size=None):
    """
    Resolve the algorithm and capture a fresh working sequence.
    Nothing is mutated if the algorithm or size is rejected.
    """
    key = resolve_algorithm(algorithm)
    values = list(values)
    if max_size is not None and len(values) > max_size:
        raise InvalidSize(len(values), max_size)
    if delay_ms < 0:
        raise InvalidSpeed(f"Delay must be >= 0 ms, got {delay_ms}")
    ctl = StepController(WorkingSequence.capture(values), delay_ms)
    return key, ctl, SortEngine(ctl).steps(key)


def _result(key, ctl, completed):
    seq = ctl.sequence
    return RunResult(key, seq.values(), seq.roles(), ctl.stats, completed)


async def _pause(delay, sleep, cancel) -> bool:
    """Wait one step; returns True if cancel fired first."""
    if cancel is None:
        await sleep(delay)
        return False
    if cancel.is_set():
        return True
    timer  = asyncio.ensure_future(sleep(delay))
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({timer, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        timer.cancel(); waiter.cancel()
    if timer.done() and not timer.cancelled() and timer.exception() is not None:
        raise timer.exception()
    return cancel.is_set()


async def run(algorithm, values, delay_ms=0, *,
              on_step: Optional[StepSink] = None,
              cancel: Optional[asyncio.Event] = None,
              sleep=asyncio.sleep,
              max_size=None) -> RunResult:
    """
    Sort `values` with the chosen algorithm, suspending `delay_ms` at every step.

    `on_step` sees the sequence at each suspension point, before the wait.
    Setting `cancel` abandons the run at the next pause; the result then
    has completed=False and holds the partially sorted state.
    """
    key, ctl, steps = prepare(algorithm, values, delay_ms, max_size)
    delay = delay_ms / 1000.0
    log.debug("Running %s on %d elements, %d ms/step", key, len(ctl.sequence), delay_ms)
    try:
        for step in steps:
            if on_step is not None:
                on_step(ctl.sequence, step)
            if await _pause(delay, sleep, cancel):
                log.debug("%s cancelled after %d steps", key, ctl.stats.pauses)
                return _result(key, ctl, False)
    finally:
        steps.close()
    log.debug("%s finished: %s", key, ctl.stats)
    return _result(key, ctl, True)


def run_blocking(algorithm, values, delay_ms=0, *,
                 on_step: Optional[StepSink] = None,
                 cancel=None,
                 sleep=time.sleep,
                 max_size=None) -> RunResult:
    """
    Same as run() but paced with a blocking sleep, for worker threads.
    With a threading.Event as `cancel` each pause waits on the event instead.
    """
    key, ctl, steps = prepare(algorithm, values, delay_ms, max_size)
    delay = delay_ms / 1000.0
    log.debug("Running %s on %d elements, %d ms/step", key, len(ctl.sequence), delay_ms)
    try:
        for step in steps:
            if on_step is not None:
                on_step(ctl.sequence, step)
            if cancel is None:
                sleep(delay)
            elif cancel.wait(delay):
                log.debug("%s cancelled after %d steps", key, ctl.stats.pauses)
                return _result(key, ctl, False)
    finally:
        steps.close()
    log.debug("%s finished: %s", key, ctl.stats)
    return _result(key, ctl, True)


class SortSession:
    """
    Owns the single-flight rule for one array: one run at a time,
    cancellable from outside via cancel().
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._cancel: Optional[asyncio.Event] = None
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def start(self, algorithm, values, speed=None, *,
                    on_step: Optional[StepSink] = None,
                    sleep=asyncio.sleep) -> RunResult:
        if self._busy:
            raise RunInProgress()
        values = list(values)
        self.settings.check_size(len(values))
        delay_ms = self.settings.delay_for_speed(speed)

        self._busy   = True
        self._cancel = asyncio.Event()
        try:
            return await run(algorithm, values, delay_ms,
                             on_step=on_step, cancel=self._cancel, sleep=sleep)
        finally:
            self._busy   = False
            self._cancel = None

    def cancel(self):
        if self._cancel is not None:
            self._cancel.set()
