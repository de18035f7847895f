class SortError(Exception):
    """Base class for every error raised by stepsort."""


class InvalidAlgorithm(SortError, LookupError):
    def __init__(self, key):
        super().__init__(f"Unknown algorithm: {key!r}")
        self.key = key


class InvalidSize(SortError, ValueError):
    def __init__(self, size, limit=None):
        if limit is None:
            msg = f"Array size must be >= 0, got {size}"
        else:
            msg = f"Array size must be between 0 and {limit}, got {size}"
        super().__init__(msg)
        self.size = size


class InvalidSpeed(SortError, ValueError):
    pass


class RunInProgress(SortError, RuntimeError):
    def __init__(self):
        super().__init__("A sort is already running on this session")


class InvalidValue(SortError, ValueError):
    def __init__(self, value):
        super().__init__(f"Values must be integers, got {value!r}")
        self.value = value
