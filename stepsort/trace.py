import numpy as np

from .controller import Step
from .sequence import Role, WorkingSequence


class TraceRecorder:
    """
    Visual sink that keeps a copy of the sequence at every suspension point.

    Frames are stored as int64 value rows and uint8 role rows so a whole
    run can be inspected as two (frames x N) matrices.
    """

    def __init__(self):
        self.steps  = []
        self._values = []
        self._roles  = []

    def __call__(self, sequence: WorkingSequence, step: Step):
        self.steps.append(step)
        self._values.append(np.fromiter((e.value for e in sequence), dtype=np.int64, count=len(sequence)))
        self._roles.append(np.fromiter((e.role for e in sequence), dtype=np.uint8, count=len(sequence)))

    def __len__(self):
        return len(self.steps)

    def _stack(self, rows, dtype):
        if not rows:
            return np.zeros((0, 0), dtype=dtype)
        return np.vstack(rows)

    def values_matrix(self) -> np.ndarray:
        return self._stack(self._values, np.int64)

    def roles_matrix(self) -> np.ndarray:
        return self._stack(self._roles, np.uint8)

    def kinds(self):
        return [s.kind for s in self.steps]

    def count(self, kind: str) -> int:
        return sum(1 for s in self.steps if s.kind == kind)

    def done_monotonic(self) -> bool:
        """True when no slot ever leaves DONE once it gets there."""
        roles = self.roles_matrix()
        if roles.shape[0] < 2:
            return True
        done = roles == Role.DONE
        return bool(np.all(done[1:] >= done[:-1]))

    def role_counts(self) -> np.ndarray:
        """Per-frame histogram of roles, shape (frames, len(Role))."""
        roles = self.roles_matrix()
        out = np.zeros((roles.shape[0], len(Role)), dtype=np.int64)
        for role in Role:
            out[:, role] = (roles == role).sum(axis=1)
        return out
