"""Boiler register map decoders, selected by dialect name"""

from typing import Dict, Type

from ..exceptions import ConfigError
from .base import Decoder
from .bitfield import BitfieldDecoder
from .enumerated import EnumeratedDecoder

DECODERS: Dict[str, Type[Decoder]] = {
    BitfieldDecoder.name: BitfieldDecoder,
    EnumeratedDecoder.name: EnumeratedDecoder,
}

DIALECTS = tuple(DECODERS)


def get_decoder(dialect: str) -> Decoder:
    """Create the decoder for a dialect name."""
    try:
        return DECODERS[dialect]()
    except KeyError:
        raise ConfigError(
            f"Unknown dialect '{dialect}', expected one of: {', '.join(DIALECTS)}"
        ) from None


__all__ = [
    "Decoder",
    "BitfieldDecoder",
    "EnumeratedDecoder",
    "DECODERS",
    "DIALECTS",
    "get_decoder",
]
