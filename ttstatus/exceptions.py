"""Exceptions raised while polling a boiler"""

from typing import Optional


class TTStatusError(Exception):
    """Base exception for tt-status errors."""


class ConfigError(ValueError, TTStatusError):
    """Invalid or incomplete configuration."""


class ConnectError(ConnectionError, TTStatusError):
    """Modbus transport could not be established."""


class DeviceIOError(IOError, TTStatusError):
    """Register block read failed at the transport or Modbus level."""

    def __init__(self, block: str, address: int, count: int,
                 reason: Optional[str] = None) -> None:
        self.block = block
        self.address = address
        self.count = count
        self.reason = reason
        message = (
            f"Modbus read of {count} registers at addr {address:#x} ({block}) failed"
        )
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ShortReadError(DeviceIOError):
    """Device returned a different number of words than requested."""

    def __init__(self, block: str, address: int, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            block, address, expected,
            reason=f"expected {expected} words, got {actual}",
        )
