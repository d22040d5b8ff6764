"""Measurement unit vocabularies, one closed set per sensor kind."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Mapping, TypeVar

from models.errors import InvalidUnit

_U = TypeVar("_U", bound=Enum)


def _lookup(aliases: Mapping[str, _U], text: str) -> _U:
    unit = aliases.get(text.lower())
    if unit is None:
        raise InvalidUnit(text)
    return unit


class TemperatureUnit(str, Enum):
    """Units accepted by temperature sensors."""

    celsius = "Celsius"
    fahrenheit = "Fahrenheit"

    @classmethod
    def parse(cls, text: str) -> "TemperatureUnit":
        """Parse ``text`` case-insensitively; accepts ``c``/``celsius`` and ``f``/``fahrenheit``."""
        return _lookup(_TEMPERATURE_ALIASES, text)

    def as_str(self) -> str:
        return self.value


class HumidityUnit(str, Enum):
    """Units accepted by relative humidity sensors."""

    percent = "Percent"

    @classmethod
    def parse(cls, text: str) -> "HumidityUnit":
        """Parse ``text`` case-insensitively; accepts ``percent`` and ``%``."""
        return _lookup(_HUMIDITY_ALIASES, text)

    def as_str(self) -> str:
        return self.value


class CO2Unit(str, Enum):
    """Units accepted by CO2 concentration sensors."""

    ppm = "ppm"

    @classmethod
    def parse(cls, text: str) -> "CO2Unit":
        """Parse ``text`` case-insensitively; only ``ppm`` is accepted."""
        return _lookup(_CO2_ALIASES, text)

    def as_str(self) -> str:
        return self.value


_TEMPERATURE_ALIASES: Dict[str, TemperatureUnit] = {
    "celsius": TemperatureUnit.celsius,
    "c": TemperatureUnit.celsius,
    "fahrenheit": TemperatureUnit.fahrenheit,
    "f": TemperatureUnit.fahrenheit,
}

_HUMIDITY_ALIASES: Dict[str, HumidityUnit] = {
    "percent": HumidityUnit.percent,
    "%": HumidityUnit.percent,
}

_CO2_ALIASES: Dict[str, CO2Unit] = {
    "ppm": CO2Unit.ppm,
}
