"""
tt-status - Triangle Tube boiler status over Modbus

Reads a boiler's status and temperature registers via Modbus RTU or
Modbus TCP and prints them in human units.
"""

__version__ = "0.3.0"

from .config import ConfigLoader, GeneralConfig, ModbusConfig
from .logging_setup import setup_logging, get_logger
from .exceptions import (
    TTStatusError,
    ConfigError,
    ConnectError,
    DeviceIOError,
    ShortReadError,
)
from .modbus_client import ModbusConnection, SerialParams
from .decoders import DIALECTS, get_decoder
from .presentation import format_status, print_status

__all__ = [
    "__version__",
    "ConfigLoader",
    "GeneralConfig",
    "ModbusConfig",
    "setup_logging",
    "get_logger",
    "TTStatusError",
    "ConfigError",
    "ConnectError",
    "DeviceIOError",
    "ShortReadError",
    "ModbusConnection",
    "SerialParams",
    "DIALECTS",
    "get_decoder",
    "format_status",
    "print_status",
]
