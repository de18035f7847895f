"""Step-by-step sorting engine for array visualizers."""

from .controller import RunStats, Step, StepController
from .engine import ALGORITHMS, SortEngine, resolve_algorithm
from .errors import InvalidAlgorithm, InvalidSize, InvalidSpeed, InvalidValue, RunInProgress, SortError
from .runner import RunResult, SortSession, run, run_blocking
from .sequence import Element, Role, WorkingSequence
from .settings import Settings, delay_for_speed, load_settings, save_settings
from .trace import TraceRecorder

__version__ = "1.0.0"

__all__ = [
    "ALGORITHMS",
    "Element",
    "InvalidAlgorithm",
    "InvalidSize",
    "InvalidSpeed",
    "InvalidValue",
    "Role",
    "RunInProgress",
    "RunResult",
    "RunStats",
    "Settings",
    "SortEngine",
    "SortError",
    "SortSession",
    "Step",
    "StepController",
    "TraceRecorder",
    "WorkingSequence",
    "delay_for_speed",
    "load_settings",
    "resolve_algorithm",
    "run",
    "run_blocking",
    "save_settings",
]
