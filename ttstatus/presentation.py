"""Plain text rendering of a decoded boiler status"""

import sys
from typing import List, TextIO

from .registers import BoilerStatus, Reading

# Values line up at this column with 8-column tabs
VALUE_COLUMN = 24


def format_reading(reading: Reading) -> str:
    """Format one reading as 'Label:<tabs>value unit'."""
    label = f"{reading.label}:"
    sep = "\t" * max(1, (VALUE_COLUMN - len(label) + 7) // 8)
    return f"{label}{sep}{reading.value:3d} {reading.display_unit}".rstrip()


def format_status(status: BoilerStatus) -> List[str]:
    """Render the status section followed by every displayable reading."""
    lines = ["Status:"]
    lines.extend(f" {line}" for line in status.status.lines())
    lines.extend(format_reading(r) for r in status.visible_readings())
    return lines


def print_status(status: BoilerStatus, stream: TextIO = None):
    stream = stream or sys.stdout
    for line in format_status(status):
        print(line, file=stream)
