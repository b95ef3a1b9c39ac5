import pytest

from ttstatus.decoders.enumerated import (
    FIRST_HOLDING_REGISTER,
    FIRST_INPUT_REGISTER,
    STATUS_VALUES,
    EnumeratedDecoder,
    decode_status_code,
    wire_address,
)
from ttstatus.exceptions import ShortReadError


def input_words(status=34):
    """Input registers 30001 - 30016, indexed by vendor register number."""
    regs = {
        30002: 700,   # supply 70.0 C
        30003: 550,   # return 55.0 C
        30005: 612,   # flue 61.2 C
        30008: 42,    # firing rate %
        30010: 150,   # system setpoint 75.0 C
        30011: 141,   # outlet setpoint 70.5 C
        30014: status,
    }
    return [regs.get(30001 + i, 0) for i in range(16)]


def holding_words():
    """Holding registers 40001 - 40008."""
    regs = {
        40003: 490,     # DHW storage 49.0 C
        40004: 0xFFCE,  # outdoor -5.0 C
        40006: 120,     # DHW setpoint 60.0 C
    }
    return [regs.get(40001 + i, 0) for i in range(8)]


def make_reader(fake_reader, status=34):
    return fake_reader(input_regs={0: input_words(status)}, holding_regs={0: holding_words()})


class TestStatusTable:
    @pytest.mark.parametrize("entry", STATUS_VALUES, ids=lambda s: s.label)
    def test_known_codes(self, entry):
        status = decode_status_code(entry.code)
        assert status.label == entry.label
        assert status.lines() == [entry.label]

    def test_unknown_code_shows_raw_value(self):
        status = decode_status_code(9999)
        assert status.code == 9999
        assert status.label is None
        assert status.lines() == ["9999"]

    def test_codes_unique(self):
        codes = [s.code for s in STATUS_VALUES]
        assert len(codes) == len(set(codes))

    def test_not_a_bitfield(self):
        # 35 would contain bit 1 (Pre-Purge) and bit 5 if read as flags
        status = decode_status_code(35)
        assert status.flags == ()
        assert status.lines() == ["35"]


class TestAddressing:
    def test_vendor_registers_start_at_wire_zero(self):
        assert wire_address(FIRST_INPUT_REGISTER) == 0
        assert wire_address(FIRST_HOLDING_REGISTER) == 0
        assert wire_address(30014) == 13

    def test_blocks_read(self, fake_reader):
        reader = make_reader(fake_reader)
        EnumeratedDecoder().decode(reader)
        assert reader.calls == [("input", 0, 16), ("holding", 0, 8)]


class TestEnumeratedDecoder:
    def test_idle(self, fake_reader):
        status = EnumeratedDecoder().decode(make_reader(fake_reader, status=34))
        assert status.dialect == "enumerated"
        assert status.status.lines() == ["Idle"]

    def test_unknown_status(self, fake_reader):
        status = EnumeratedDecoder().decode(make_reader(fake_reader, status=9999))
        assert status.status.lines() == ["9999"]

    def test_fields(self, fake_reader):
        status = EnumeratedDecoder().decode(make_reader(fake_reader))
        values = {r.label: r.value for r in status.readings}
        assert values == {
            "Supply temp": 158,
            "Return temp": 131,
            "Flue temp": 142,
            "Firing rate": 42,
            "DHW Storage temp": 120,
            "Outdoor temp": 23,
            "DHW Setpoint": 140,
            "System Setpoint": 167,
            "Outlet Setpoint": 158,
        }

    def test_scales(self, fake_reader):
        status = EnumeratedDecoder().decode(make_reader(fake_reader))
        assert status.reading("Supply temp").celsius == 70.0
        assert status.reading("Outlet Setpoint").celsius == 70.5
        assert status.reading("Outdoor temp").celsius == -5.0

    def test_no_sentinel_suppression(self, fake_reader):
        words = holding_words()
        words[40006 - 40001] = 0x8000
        reader = fake_reader(input_regs={0: input_words()}, holding_regs={0: words})
        status = EnumeratedDecoder().decode(reader)
        assert len(status.visible_readings()) == len(status.readings) == 9

    def test_short_holding_read_aborts(self, fake_reader):
        reader = fake_reader(input_regs={0: input_words()}, holding_regs={0: holding_words()[:7]})
        with pytest.raises(ShortReadError) as exc_info:
            EnumeratedDecoder().decode(reader)
        assert exc_info.value.expected == 8
        assert exc_info.value.actual == 7

    def test_serial_params(self):
        assert EnumeratedDecoder.serial_params.baudrate == 9600
