"""Modbus RTU/TCP client returning register blocks for the decoders

Architecture:
- ModbusConnection: one connection per run, opened once and closed on exit
- Every read returns a RegisterBlock of exactly the requested size or raises
- No retries: a failed or short read aborts the poll
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from pymodbus import pymodbus_apply_logging_config
from pymodbus.client import ModbusSerialClient, ModbusTcpClient
from pymodbus.exceptions import ModbusException

from .config import ModbusConfig
from .exceptions import ConnectError, DeviceIOError, ShortReadError
from .logging_setup import get_logger
from .registers import RegisterBlock

# Suppress pymodbus exception logging unless debugging
logging.getLogger("pymodbus").setLevel(logging.CRITICAL)


@dataclass(frozen=True)
class SerialParams:
    """RS-485 line settings, fixed per boiler dialect"""
    baudrate: int = 38400
    parity: str = "N"
    bytesize: int = 8
    stopbits: int = 1

    def __str__(self) -> str:
        return f"{self.baudrate} {self.bytesize}{self.parity}{self.stopbits}"


class ModbusConnection:
    """Single Modbus connection used for one sequential poll."""

    def __init__(self, config: ModbusConfig, serial_params: SerialParams = None,
                 debug: bool = False):
        self.config = config
        self.serial_params = serial_params or SerialParams()
        self.debug = debug
        self.log = get_logger()
        self.client = None
        self.connected = False
        self.successful_reads = 0
        self.failed_reads = 0

        if debug:
            pymodbus_apply_logging_config(logging.DEBUG)

    def __enter__(self) -> "ModbusConnection":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _new_client(self):
        if self.config.is_tcp:
            return ModbusTcpClient(
                host=self.config.host,
                port=self.config.port,
                timeout=self.config.timeout,
                retries=0
            )
        params = self.serial_params
        return ModbusSerialClient(
            port=self.config.serial_port,
            baudrate=params.baudrate,
            bytesize=params.bytesize,
            parity=params.parity,
            stopbits=params.stopbits,
            timeout=self.config.timeout,
            retries=0
        )

    def connect(self):
        """Establish the Modbus connection, raising ConnectError on failure."""
        endpoint = self.config.endpoint
        try:
            self.client = self._new_client()
            self.connected = bool(self.client.connect())
        except (ModbusException, OSError) as e:
            self.connected = False
            raise ConnectError(f"Modbus connection to {endpoint} failed: {e}") from e

        if not self.connected:
            raise ConnectError(f"Modbus connection to {endpoint} failed")

        if self.config.is_tcp:
            self.log.info(f"Modbus connected to {endpoint}, slave {self.config.slave}")
        else:
            self.log.info(
                f"Modbus connected to {endpoint} ({self.serial_params}), "
                f"slave {self.config.slave}"
            )

    def close(self):
        """Close Modbus connection. Safe to call more than once."""
        if self.client is not None:
            self.client.close()
            self.client = None
            if self.connected:
                self.log.info("Modbus disconnected")
        self.connected = False

    def read_input_registers(self, address: int, count: int,
                             first_register: Optional[int] = None) -> RegisterBlock:
        """Read `count` input registers starting at 0-based `address`."""
        return self._read("input", address, count, first_register)

    def read_holding_registers(self, address: int, count: int,
                               first_register: Optional[int] = None) -> RegisterBlock:
        """Read `count` holding registers starting at 0-based `address`."""
        return self._read("holding", address, count, first_register)

    def _read(self, kind: str, address: int, count: int,
              first_register: Optional[int]) -> RegisterBlock:
        """
        Read one register block.

        Args:
            kind: 'input' or 'holding'
            address: 0-based wire address of the first register
            count: Number of 16-bit words requested
            first_register: Vendor register number of the first word

        Returns:
            RegisterBlock holding exactly `count` words

        Raises:
            DeviceIOError: Transport failure or Modbus exception response
            ShortReadError: Response carried a different number of words
        """
        block = f"{kind} registers"
        if self.client is None or not self.connected:
            self.failed_reads += 1
            raise DeviceIOError(block, address, count, reason="not connected")

        if kind == "input":
            read = self.client.read_input_registers
        else:
            read = self.client.read_holding_registers

        try:
            result = read(address, count=count, device_id=self.config.slave)
        except ModbusException as e:
            self.failed_reads += 1
            raise DeviceIOError(block, address, count, reason=str(e)) from e

        if result.isError():
            self.failed_reads += 1
            raise DeviceIOError(block, address, count, reason=str(result))

        words: List[int] = list(result.registers or [])
        if len(words) != count:
            self.failed_reads += 1
            raise ShortReadError(block, address, count, len(words))

        self.successful_reads += 1
        self.log.debug(f"Read {kind} {address:#06x}+{count}: {words}")
        return RegisterBlock(address, words, first_register)
