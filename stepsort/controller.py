from dataclasses import dataclass
from typing import Generator, NamedTuple, Tuple

from .sequence import Role, WorkingSequence


class Step(NamedTuple):
    """One suspension point: what is about to happen and to which slots."""
    kind:    str              # "pause" | "compare" | "swap" | "write"
    indices: Tuple[int, ...]


@dataclass
class RunStats:
    pauses:      int = 0
    comparisons: int = 0
    swaps:       int = 0
    writes:      int = 0
    partitions:  int = 0


# Generator type of every step primitive and algorithm:
# yields Steps, may return a result via `yield from`.
Steps = Generator[Step, None, object]


class StepController:
    """
    Gateway between sorting logic and the working sequence.

    Every primitive that reads or moves values first suspends through
    pause(), so algorithms written against it are generators:

        if (yield from ctl.compare(j, j+1)):
            yield from ctl.swap(j, j+1)

    Index checks happen after the pause; an out-of-range index makes the
    primitive a no-op rather than an error.
    """

    def __init__(self, sequence: WorkingSequence, delay_ms: int = 0):
        self.sequence = sequence
        self.delay_ms = delay_ms
        self.stats    = RunStats()

    def mark(self, i: int, role: Role = Role.ACTIVE):
        if self.sequence.in_range(i):
            self.sequence.set_role(i, role)

    def unmark(self, i: int):
        self.mark(i, Role.NORMAL)

    def finish(self, i: int):
        self.mark(i, Role.DONE)

    def pause(self, kind: str = "pause", *indices: int) -> Steps:
        self.stats.pauses += 1
        yield Step(kind, indices)

    def compare(self, i: int, j: int) -> Steps:
        yield from self.pause("compare", i, j)
        self.stats.comparisons += 1
        seq = self.sequence
        if not (seq.in_range(i) and seq.in_range(j)):
            return False
        return seq[i].value > seq[j].value

    def swap(self, i: int, j: int) -> Steps:
        yield from self.pause("swap", i, j)
        seq = self.sequence
        if not (seq.in_range(i) and seq.in_range(j)):
            return
        self.stats.swaps += 1
        seq.exchange(i, j)

    def overwrite(self, i: int, value: int) -> Steps:
        yield from self.pause("write", i)
        if not self.sequence.in_range(i):
            return
        self.stats.writes += 1
        self.sequence.set_value(i, value)
