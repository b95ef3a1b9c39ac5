"""Unit constants and conversions for tt-status."""

from typing import Final, Union

# Temperature
DEGREE_FAHRENHEIT: Final = "°F"
DEGREE_CELSIUS: Final = "°C"

# Percentage
PERCENT: Final = "%"

# Flame ionization current
MICROAMP: Final = "μA"


def c_to_f(value: Union[int, float]) -> int:
    """
    Convert Celsius to whole degrees Fahrenheit.

    The result is truncated toward zero, never rounded, so a given register
    value always renders the same way.

    Args:
        value: Temperature in degrees Celsius

    Returns:
        Temperature in degrees Fahrenheit
    """
    return int(value * 9 / 5 + 32)


def to_signed16(word: int) -> int:
    """Reinterpret an unsigned 16-bit register word as int16."""
    word &= 0xFFFF
    if word >= 0x8000:
        return word - 0x10000
    return word
