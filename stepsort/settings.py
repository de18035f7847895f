import json
import logging
import math
import os
from dataclasses import asdict, dataclass, fields

from .errors import InvalidSize, InvalidSpeed

log = logging.getLogger(__name__)

# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

BASE_DELAY_MS  = 400
DEFAULT_SPEED  = 1.0
MIN_SPEED      = 0.25
MAX_SPEED      = 8.0
MAX_ARRAY_SIZE = 128

# JSON file looked up in the working directory for overrides
SETTINGS_JSON = "stepsort.json"

# must be strictly positive; the rest only non-negative
_POSITIVE = ("default_speed", "min_speed", "max_speed")


@dataclass
class Settings:
    base_delay_ms:  int   = BASE_DELAY_MS
    default_speed:  float = DEFAULT_SPEED
    min_speed:      float = MIN_SPEED
    max_speed:      float = MAX_SPEED
    max_array_size: int   = MAX_ARRAY_SIZE

    def delay_for_speed(self, speed=None) -> int:
        """
        Map a speed factor to a per-step delay in milliseconds.
        Higher speed -> shorter delay; the result is truncated like
        the slider math it replaces (400 / 3 -> 133).
        """
        if speed is None:
            speed = self.default_speed
        if speed <= 0:
            raise InvalidSpeed(f"Speed must be > 0, got {speed}")
        speed = max(self.min_speed, min(self.max_speed, speed))
        return int(self.base_delay_ms / speed)

    def check_size(self, size: int) -> int:
        if size < 0 or size > self.max_array_size:
            raise InvalidSize(size, self.max_array_size)
        return size


def delay_for_speed(speed: float) -> int:
    return Settings().delay_for_speed(speed)


# ============================================================
# =================== SETTINGS JSON ==========================
# ============================================================

def _check_field(name, expected, value):
    """Reason the value is unusable for the field, or None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return f"expected a number, got {value!r}"
    if expected is int and not isinstance(value, int):
        return f"expected an integer, got {value!r}"
    if not math.isfinite(value):
        return f"expected a finite number, got {value!r}"
    if name in _POSITIVE and value <= 0:
        return f"must be > 0, got {value!r}"
    if value < 0:
        return f"must be >= 0, got {value!r}"
    return None


def load_settings(path: str = SETTINGS_JSON) -> Settings:
    """
    Read overrides from JSON. Unknown keys are ignored; a key with a
    wrong type or sign keeps its default; unreadable files give defaults.
    """
    if not os.path.exists(path):
        return Settings()
    try:
        with open(path) as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("Could not read settings from %s: %s", path, e)
        return Settings()
    if not isinstance(raw, dict):
        log.warning("Ignoring settings in %s: expected an object", path)
        return Settings()
    types = {f.name: f.type for f in fields(Settings)}
    unknown = sorted(set(raw) - set(types))
    if unknown:
        log.warning("Ignoring unknown settings keys: %s", ", ".join(unknown))

    overrides = {}
    for name, value in raw.items():
        if name not in types:
            continue
        problem = _check_field(name, types[name], value)
        if problem:
            log.warning("Ignoring setting %s in %s: %s", name, path, problem)
            continue
        overrides[name] = value
    settings = Settings(**overrides)
    if settings.min_speed > settings.max_speed:
        log.warning("Ignoring speed range in %s: min_speed %s > max_speed %s",
                    path, settings.min_speed, settings.max_speed)
        settings.min_speed, settings.max_speed = MIN_SPEED, MAX_SPEED
    return settings


def save_settings(settings: Settings, path: str = SETTINGS_JSON):
    with open(path, "w") as f:
        json.dump(asdict(settings), f, indent=2)
