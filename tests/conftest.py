import pytest

from stepsort import StepController, WorkingSequence


def drive(gen):
    """Exhaust a step generator; returns (return value, yielded steps)."""
    steps = []
    while True:
        try:
            steps.append(next(gen))
        except StopIteration as stop:
            return stop.value, steps


def no_sleep(_seconds):
    pass


@pytest.fixture
def make_ctl():
    def _make(values, delay_ms=0):
        return StepController(WorkingSequence.capture(values), delay_ms)
    return _make
