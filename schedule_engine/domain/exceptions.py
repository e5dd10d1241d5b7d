"""Domain-specific exceptions"""


class ScheduleEngineError(Exception):
    """Base exception for the schedule engine"""

    pass


class InvalidArgumentError(ScheduleEngineError, ValueError):
    """Caller supplied a malformed date, count, index or amount"""

    pass
