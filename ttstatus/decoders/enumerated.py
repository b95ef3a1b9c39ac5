"""Register map for controllers with an enumerated status code

The vendor documents registers 1-based: input registers start at 30001 and
holding registers at 40001, both at wire address 0. Field constants below
are the vendor register numbers; RegisterBlock.register() maps them to
block offsets (vendor register R -> offset R - first register).

TODO: confirm divisors, serial settings and the status table against a
second controller; return temp in particular has been seen unscaled.
"""

from typing import Dict, Tuple

from ..logging_setup import get_logger
from ..modbus_client import SerialParams
from ..registers import (
    BoilerStatus,
    DecodedStatus,
    Reading,
    RegisterBlock,
    StatusValue,
    Unit,
)
from .base import Decoder

FIRST_INPUT_REGISTER = 30001
FIRST_HOLDING_REGISTER = 40001
INPUT_COUNT = 16
HOLDING_COUNT = 8

# Input registers (30001 - 30016)
REG_SUPPLY_TEMP = 30002
REG_RETURN_TEMP = 30003
REG_FLUE_TEMP = 30005
REG_FIRING_RATE = 30008
REG_SYSTEM_SETPOINT = 30010
REG_OUTLET_SETPOINT = 30011
REG_STATUS = 30014

# Holding registers (40001 - 40008)
REG_DHW_STORAGE_TEMP = 40003
REG_OUTDOOR_TEMP = 40004
REG_DHW_SETPOINT = 40006

STATUS_VALUES: Tuple[StatusValue, ...] = (
    StatusValue(0, "Standby"),
    StatusValue(1, "Pre-Purge"),
    StatusValue(2, "Ignition"),
    StatusValue(3, "Burner On"),
    StatusValue(4, "Post-Purge"),
    StatusValue(32, "Blocking"),
    StatusValue(33, "Lockout"),
    StatusValue(34, "Idle"),
)

STATUS_LABELS: Dict[int, str] = {s.code: s.label for s in STATUS_VALUES}


def wire_address(first_register: int) -> int:
    """0-based wire address of a 1-based vendor register number."""
    return first_register - (first_register // 10000) * 10000 - 1


def decode_status_code(code: int) -> DecodedStatus:
    """Look up a status code; unknown codes keep only the raw value."""
    return DecodedStatus(code=code, label=STATUS_LABELS.get(code))


def decode_readings(inputs: RegisterBlock, holding: RegisterBlock) -> Tuple[Reading, ...]:
    """
    Decode temperatures and setpoints.

    Args:
        inputs: Input registers 30001 - 30016
        holding: Holding registers 40001 - 40008

    Returns:
        Readings in display order
    """
    return (
        Reading("Supply temp", inputs.register(REG_SUPPLY_TEMP), Unit.DECI_CELSIUS),
        Reading("Return temp", inputs.register(REG_RETURN_TEMP), Unit.DECI_CELSIUS),
        Reading("Flue temp", inputs.register(REG_FLUE_TEMP), Unit.DECI_CELSIUS),
        Reading("Firing rate", inputs.register(REG_FIRING_RATE), Unit.PERCENT),
        Reading("DHW Storage temp", holding.register(REG_DHW_STORAGE_TEMP), Unit.DECI_CELSIUS),
        Reading("Outdoor temp", holding.register(REG_OUTDOOR_TEMP), Unit.DECI_CELSIUS,
                signed=True),
        Reading("DHW Setpoint", holding.register(REG_DHW_SETPOINT), Unit.HALF_CELSIUS),
        Reading("System Setpoint", inputs.register(REG_SYSTEM_SETPOINT), Unit.HALF_CELSIUS),
        Reading("Outlet Setpoint", inputs.register(REG_OUTLET_SETPOINT), Unit.HALF_CELSIUS),
    )


class EnumeratedDecoder(Decoder):
    """
    Controller reporting a single enumerated status code.

    Reads 16 input registers from 30001 and 8 holding registers from 40001.
    Every value is shown; this map has no "not set" sentinel.
    """

    name = "enumerated"
    serial_params = SerialParams(baudrate=9600, parity="N", bytesize=8, stopbits=1)

    def __init__(self):
        self.log = get_logger()

    def decode(self, reader) -> BoilerStatus:
        inputs = reader.read_input_registers(
            wire_address(FIRST_INPUT_REGISTER), INPUT_COUNT,
            first_register=FIRST_INPUT_REGISTER
        )
        holding = reader.read_holding_registers(
            wire_address(FIRST_HOLDING_REGISTER), HOLDING_COUNT,
            first_register=FIRST_HOLDING_REGISTER
        )

        code = inputs.register(REG_STATUS)
        status = decode_status_code(code)
        if status.label is None:
            self.log.warning(f"Unknown status code {code}")

        return BoilerStatus(self.name, status, decode_readings(inputs, holding))
