"""Common decoder interface"""

from abc import ABC, abstractmethod

from ..modbus_client import SerialParams
from ..registers import BoilerStatus


class Decoder(ABC):
    """
    Decodes one boiler register map into a BoilerStatus.

    Subclasses share only this interface and the register block reader.
    Each one owns its register layout and status model.

    The reader passed to `decode` provides `read_input_registers` and
    `read_holding_registers`, each returning a RegisterBlock or raising.
    """

    name: str = ""
    serial_params: SerialParams = SerialParams()

    @abstractmethod
    def decode(self, reader) -> BoilerStatus:
        """Read every block this dialect needs and decode it."""
