"""Reasons a sensor reading can be rejected."""

from __future__ import annotations


class SensorValidationError(ValueError):
    """Base class for readings that fail validation at construction time."""

    code = "invalid_reading"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class EmptyDeviceId(SensorValidationError):
    code = "empty_device_id"

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "device_id must not be empty"


class FutureTimestamp(SensorValidationError):
    code = "future_timestamp"

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "timestamp must not be in the future"


class ValueOutOfRange(SensorValidationError):
    code = "value_out_of_range"

    def __init__(self, value: float, min: float, max: float) -> None:
        super().__init__(value, min, max)
        self.value = value
        self.min = min
        self.max = max

    def __str__(self) -> str:
        return f"value {self.value} is out of range [{self.min}, {self.max}]"


class InvalidUnit(SensorValidationError):
    code = "invalid_unit"

    def __init__(self, raw: str) -> None:
        super().__init__(raw)
        self.raw = raw

    def __str__(self) -> str:
        return f"invalid unit: {self.raw}"
