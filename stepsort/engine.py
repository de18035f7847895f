import logging

from .controller import StepController, Steps
from .errors import InvalidAlgorithm
from .sequence import Role

log = logging.getLogger(__name__)

# Display name and key, in menu order; numeric ids are 1-based positions.
ALGORITHMS = [
    ("Bubble Sort",    "bubble"),
    ("Selection Sort", "selection"),
    ("Insertion Sort", "insertion"),
    ("Merge Sort",     "merge"),
    ("Quick Sort",     "quick"),
]

_KEYS = [key for _, key in ALGORITHMS]


def resolve_algorithm(algorithm) -> str:
    """Accept a key ("quick"), a display name ("Quick Sort") or a 1-based id."""
    if isinstance(algorithm, int) and not isinstance(algorithm, bool):
        if 1 <= algorithm <= len(_KEYS):
            return _KEYS[algorithm - 1]
        raise InvalidAlgorithm(algorithm)
    if isinstance(algorithm, str):
        if algorithm in _KEYS:
            return algorithm
        for name, key in ALGORITHMS:
            if algorithm == name:
                return key
    raise InvalidAlgorithm(algorithm)


class SortEngine:
    """
    The five sorts, written only in terms of StepController primitives.

    Each algorithm is a generator of Steps; nothing happens until a
    driver iterates it. Recursive dividers chain with `yield from`.
    """

    def __init__(self, ctl: StepController):
        self.ctl     = ctl
        self.size    = len(ctl.sequence)
        self._buffer = []

    def steps(self, algorithm) -> Steps:
        key = resolve_algorithm(algorithm)
        log.debug("Preparing %s over %d elements", key, self.size)
        return getattr(self, f"{key}_sort")()

    # ============================================================
    # ======================== QUADRATIC =========================
    # ============================================================

    def bubble_sort(self):
        ctl, n = self.ctl, self.size
        for i in range(n - 1):
            for j in range(n - i - 1):
                ctl.mark(j); ctl.mark(j+1)
                if (yield from ctl.compare(j, j+1)):
                    yield from ctl.swap(j, j+1)
                ctl.unmark(j); ctl.unmark(j+1)
            ctl.finish(n - i - 1)
        ctl.finish(0)

    def selection_sort(self):
        ctl, n = self.ctl, self.size
        for i in range(n):
            mi = i
            ctl.mark(mi, Role.CANDIDATE)
            for j in range(i+1, n):
                ctl.mark(j)
                if (yield from ctl.compare(mi, j)):
                    ctl.unmark(mi)
                    mi = j
                    ctl.mark(mi, Role.CANDIDATE)
                else:
                    ctl.unmark(j)
            if mi != i:
                yield from ctl.swap(mi, i)
            ctl.unmark(mi)
            ctl.finish(i)

    def insertion_sort(self):
        ctl, n = self.ctl, self.size
        for i in range(1, n):
            ctl.mark(i, Role.CANDIDATE)
            yield from ctl.pause("pause", i)
            j = i - 1
            while j >= 0 and (yield from ctl.compare(j, j+1)):
                ctl.mark(j)
                yield from ctl.swap(j, j+1)
                ctl.unmark(j+1)
                j -= 1
            ctl.unmark(j+1)
        # closing sweep, one slot per pause
        for k in range(n):
            yield from ctl.pause("pause", k)
            ctl.finish(k)

    # ============================================================
    # ======================== MERGE SORT ========================
    # ============================================================

    def merge_sort(self):
        yield from self._merge_divide(0, self.size - 1)
        for k in range(self.size):
            self.ctl.finish(k)

    def _merge_divide(self, start, end):
        if start < end:
            mid = start + (end - start) // 2
            yield from self._merge_divide(start, mid)
            yield from self._merge_divide(mid+1, end)
            yield from self._merge(start, mid, end)

    def _merge(self, start, mid, end):
        ctl, seq = self.ctl, self.ctl.sequence
        merged = self._buffer
        merged.clear()
        lo, hi = start, mid + 1
        while lo <= mid and hi <= end:
            a, b = lo, hi
            ctl.mark(a); ctl.mark(b)
            # equal values take the right run first
            if (yield from ctl.compare(b, a)):
                merged.append(seq[lo].value); lo += 1
            else:
                merged.append(seq[hi].value); hi += 1
            ctl.unmark(a); ctl.unmark(b)
        merged.extend(seq[k].value for k in range(lo, mid+1))
        merged.extend(seq[k].value for k in range(hi, end+1))

        for k, v in zip(range(start, end+1), merged):
            ctl.mark(k)
            yield from ctl.overwrite(k, v)
            ctl.unmark(k)

    # ============================================================
    # ======================== QUICK SORT ========================
    # ============================================================

    def quick_sort(self):
        yield from self._quick_divide(0, self.size - 1)
        seq = self.ctl.sequence
        for k in range(self.size):
            if seq[k].role is not Role.DONE:
                self.ctl.finish(k)

    def _quick_divide(self, start, end):
        if start < end:
            p = yield from self._partition(start, end)
            yield from self._quick_divide(start, p-1)
            yield from self._quick_divide(p+1, end)
        elif start == end:
            self.ctl.finish(start)

    def _partition(self, start, end):
        """Lomuto partition around the last element; returns the pivot's final index."""
        ctl = self.ctl
        if start >= end or not ctl.sequence.in_range(end):
            return end
        ctl.stats.partitions += 1

        ctl.mark(end, Role.PIVOT)
        store = start
        for i in range(start, end):
            ctl.mark(i)
            # pivot > value[i]  <=>  value[i] < pivot
            if (yield from ctl.compare(end, i)):
                yield from ctl.swap(i, store)
                ctl.unmark(store)
                store += 1
            ctl.unmark(i)
        yield from ctl.swap(store, end)
        ctl.unmark(end)
        ctl.finish(store)
        return store
