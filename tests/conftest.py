"""Shared fixtures: an in-memory register reader and a fake pymodbus client."""

from typing import Dict, List, Optional, Tuple

import pytest

from ttstatus import modbus_client
from ttstatus.exceptions import DeviceIOError, ShortReadError
from ttstatus.registers import RegisterBlock


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep config file discovery away from the developer's own files."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TT_STATUS_CONFIG", raising=False)


class FakeReader:
    """Register block reader backed by dictionaries of address -> words."""

    def __init__(self, input_regs: Dict[int, List[int]] = None,
                 holding_regs: Dict[int, List[int]] = None):
        self.regs = {
            "input": dict(input_regs or {}),
            "holding": dict(holding_regs or {}),
        }
        self.calls: List[Tuple[str, int, int]] = []

    def read_input_registers(self, address: int, count: int,
                             first_register: Optional[int] = None) -> RegisterBlock:
        return self._read("input", address, count, first_register)

    def read_holding_registers(self, address: int, count: int,
                               first_register: Optional[int] = None) -> RegisterBlock:
        return self._read("holding", address, count, first_register)

    def _read(self, kind, address, count, first_register):
        self.calls.append((kind, address, count))
        block = f"{kind} registers"
        words = self.regs[kind].get(address)
        if words is None:
            raise DeviceIOError(block, address, count, reason="no response")
        if len(words) != count:
            raise ShortReadError(block, address, count, len(words))
        return RegisterBlock(address, words, first_register)


@pytest.fixture
def fake_reader():
    return FakeReader


class FakeResponse:
    """Stand-in for a pymodbus register read response."""

    def __init__(self, registers: List[int] = None, error: bool = False):
        self.registers = registers if registers is not None else []
        self.error = error

    def isError(self) -> bool:
        return self.error

    def __str__(self) -> str:
        return "Exception Response(132, 4, SlaveFailure)" if self.error else "ReadResponse"


@pytest.fixture
def fake_client(monkeypatch):
    """
    Replace pymodbus clients with a scripted fake.

    Set `fake_client.responses[(kind, address)]` to a FakeResponse or an
    exception instance. Created clients are collected in `instances`.
    """
    instances = []

    class FakeModbusClient:
        responses: Dict[Tuple[str, int], object] = {}
        connect_result = True

        def __init__(self, **kwargs):
            self.kwargs = kwargs
            self.closed = False
            self.calls = []
            instances.append(self)

        def connect(self):
            if isinstance(self.connect_result, Exception):
                raise self.connect_result
            return self.connect_result

        def close(self):
            self.closed = True

        def read_input_registers(self, address, count=1, device_id=1):
            return self._respond("input", address, count, device_id)

        def read_holding_registers(self, address, count=1, device_id=1):
            return self._respond("holding", address, count, device_id)

        def _respond(self, kind, address, count, device_id):
            self.calls.append((kind, address, count, device_id))
            response = self.responses.get((kind, address))
            if response is None:
                return FakeResponse(error=True)
            if isinstance(response, Exception):
                raise response
            return response

    FakeModbusClient.responses = {}
    FakeModbusClient.instances = instances
    monkeypatch.setattr(modbus_client, "ModbusTcpClient", FakeModbusClient)
    monkeypatch.setattr(modbus_client, "ModbusSerialClient", FakeModbusClient)
    return FakeModbusClient


def prestige_responses(status=0x05, temps=None, setpoints=None):
    """Healthy responses for every block the bitfield map reads."""
    temps = temps or [250, 60, 50, 70, 0xFFFB, 0, 7, 45, 0x8000]
    setpoints = setpoints or [82, 0x8000]
    return {
        ("input", 0x000): FakeResponse([status]),
        ("input", 0x300): FakeResponse(temps),
        ("holding", 0x500): FakeResponse(setpoints),
    }
