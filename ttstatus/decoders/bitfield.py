"""Triangle Tube Solo Prestige register map (bitfield status word)"""

from typing import List, Tuple

from ..logging_setup import get_logger
from ..modbus_client import SerialParams
from ..registers import (
    SETPOINT_NOT_SET,
    BoilerStatus,
    DecodedStatus,
    Reading,
    RegisterBlock,
    StatusBit,
    Unit,
)
from .base import Decoder

STATUS_BITS: Tuple[StatusBit, ...] = (
    StatusBit(0, "PC Manual Mode"),
    StatusBit(1, "DHW Mode"),
    StatusBit(2, "CH Mode"),
    StatusBit(3, "Freeze Protection Mode"),
    StatusBit(4, "Flame Present"),
    StatusBit(5, "CH(1) Pump"),
    StatusBit(6, "DHW Pump"),
    StatusBit(7, "System / CH2 Pump"),
)

# Bit 7 is not reported by this controller
TESTED_BITS = 7

STATUS_ADDR = 0x000
TEMPS_ADDR = 0x300
TEMPS_COUNT = 9
SETPOINTS_ADDR = 0x500
SETPOINTS_COUNT = 2


def decode_status_word(word: int) -> DecodedStatus:
    """
    Decode the status bitfield.

    A zero word means Standby. Active bits are listed in ascending order.
    """
    flags: List[str] = []
    if word == 0:
        flags.append("Standby")
    for status_bit in STATUS_BITS[:TESTED_BITS]:
        if status_bit.is_set(word):
            flags.append(status_bit.label)
    return DecodedStatus(flags=tuple(flags))


def decode_temperatures(block: RegisterBlock) -> List[Reading]:
    """Decode the 9 input registers at 0x300."""
    return [
        # Supply temp: 0.1 degree C
        Reading("Supply temp", block[0], Unit.DECI_CELSIUS),
        Reading("Return temp", block[1], Unit.CELSIUS),
        Reading("DHW Storage temp", block[2], Unit.CELSIUS),
        Reading("Flue temp", block[3], Unit.CELSIUS),
        # Outdoor temp goes below zero
        Reading("Outdoor temp", block[4], Unit.CELSIUS, signed=True),
        # block[5] reserved
        Reading("Flame Ionization", block[6], Unit.MICROAMP),
        Reading("Firing rate", block[7], Unit.PERCENT),
        # Only set while firing
        Reading("Boiler Setpoint", block[8], Unit.CELSIUS,
                valid=block[8] != SETPOINT_NOT_SET),
    ]


def decode_setpoints(block: RegisterBlock) -> List[Reading]:
    """Decode the 2 holding registers at 0x500."""
    return [
        Reading("CH1 Maximum Setpoint", block[0], Unit.CELSIUS),
        Reading("DHW Setpoint", block[1], Unit.CELSIUS,
                valid=block[1] != SETPOINT_NOT_SET),
    ]


class BitfieldDecoder(Decoder):
    """
    Solo Prestige style controller.

    Status is a bit-per-feature word at input register 0; temperatures are
    whole degrees except supply temp (tenths).
    """

    name = "bitfield"
    serial_params = SerialParams(baudrate=38400, parity="N", bytesize=8, stopbits=1)

    def __init__(self):
        self.log = get_logger()

    def decode(self, reader) -> BoilerStatus:
        status_block = reader.read_input_registers(STATUS_ADDR, 1)
        status = decode_status_word(status_block[0])
        self.log.debug(f"Status word {status_block[0]:#06x}: {list(status.flags)}")

        temps_block = reader.read_input_registers(TEMPS_ADDR, TEMPS_COUNT)
        readings = decode_temperatures(temps_block)

        setpoints_block = reader.read_holding_registers(SETPOINTS_ADDR, SETPOINTS_COUNT)
        readings.extend(decode_setpoints(setpoints_block))

        return BoilerStatus(self.name, status, tuple(readings))
