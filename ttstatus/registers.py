"""Register blocks and decoded readings for Triangle Tube boilers"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .units import (
    DEGREE_FAHRENHEIT,
    MICROAMP,
    PERCENT,
    c_to_f,
    to_signed16,
)

# Raw value meaning "setpoint not set / not yet available"
SETPOINT_NOT_SET = 0x8000


class Unit(Enum):
    """Source unit and scale of a raw register value."""

    CELSIUS = ("celsius", 1)
    DECI_CELSIUS = ("deci_celsius", 10)
    HALF_CELSIUS = ("half_celsius", 2)
    PERCENT = ("percent", 1)
    MICROAMP = ("microamp", 1)
    CODE = ("code", 1)

    def __init__(self, key: str, divisor: int):
        self.key = key
        self.divisor = divisor

    @property
    def is_temperature(self) -> bool:
        return self in (Unit.CELSIUS, Unit.DECI_CELSIUS, Unit.HALF_CELSIUS)

    @property
    def display_unit(self) -> str:
        if self.is_temperature:
            return DEGREE_FAHRENHEIT
        if self is Unit.PERCENT:
            return PERCENT
        if self is Unit.MICROAMP:
            return MICROAMP
        return ""


@dataclass(frozen=True)
class RegisterBlock:
    """
    Contiguous run of 16-bit words read from the device.

    `address` is the 0-based wire address of the first word. Vendors publish
    1-based register numbers (30001, 40001, ...); `first_register` is the
    vendor number of the first word, so `register(R)` maps vendor register R
    to offset R - first_register. It defaults to the wire address for
    devices documented in wire addresses.
    """

    address: int
    words: Tuple[int, ...]
    first_register: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "words", tuple(self.words))
        if self.first_register is None:
            object.__setattr__(self, "first_register", self.address)

    def __len__(self) -> int:
        return len(self.words)

    def __getitem__(self, offset: int) -> int:
        return self.words[offset]

    def __iter__(self) -> Iterator[int]:
        return iter(self.words)

    def register(self, number: int) -> int:
        """Return the word holding vendor register `number`."""
        offset = number - self.first_register
        if offset < 0 or offset >= len(self.words):
            raise IndexError(
                f"Register {number} outside block "
                f"{self.first_register}..{self.first_register + len(self.words) - 1}"
            )
        return self.words[offset]


@dataclass(frozen=True)
class StatusBit:
    """Label for one bit of a status bitfield."""
    bit: int
    label: str

    def is_set(self, word: int) -> bool:
        return bool(word & (1 << self.bit))


@dataclass(frozen=True)
class StatusValue:
    """Label for one enumerated status code."""
    code: int
    label: str


@dataclass(frozen=True)
class Reading:
    """A decoded physical quantity taken from one register."""

    label: str
    raw: int
    unit: Unit
    valid: bool = True
    signed: bool = False

    @property
    def number(self) -> int:
        """Raw register value, as int16 when the field is signed."""
        return to_signed16(self.raw) if self.signed else self.raw

    @property
    def celsius(self) -> Optional[float]:
        if not self.unit.is_temperature:
            return None
        return self.number / self.unit.divisor

    @property
    def value(self) -> int:
        """Display value: whole Fahrenheit for temperatures, raw otherwise."""
        if self.unit.is_temperature:
            return c_to_f(self.celsius)
        return self.number

    @property
    def display_unit(self) -> str:
        return self.unit.display_unit


@dataclass(frozen=True)
class DecodedStatus:
    """
    Status taken from a single status-bearing register.

    Bitfield devices fill `flags` with every active label. Enumerated devices
    set `code`, plus `label` when the code is known.
    """

    flags: Tuple[str, ...] = ()
    code: Optional[int] = None
    label: Optional[str] = None

    def lines(self) -> List[str]:
        if self.code is not None:
            return [self.label if self.label is not None else str(self.code)]
        return list(self.flags)


@dataclass(frozen=True)
class BoilerStatus:
    """Everything decoded from one poll."""

    dialect: str
    status: DecodedStatus
    readings: Tuple[Reading, ...] = field(default_factory=tuple)

    def visible_readings(self) -> List[Reading]:
        """Readings to display; unset setpoints are dropped."""
        return [r for r in self.readings if r.valid]

    def reading(self, label: str) -> Optional[Reading]:
        for r in self.readings:
            if r.label == label:
                return r
        return None
