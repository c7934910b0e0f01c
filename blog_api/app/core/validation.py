"""
Gate helpers shared by the service pipelines.

Path parameters, query parameters and headers reach the services as
text.  ``parse_number`` converts them with the same leniency the
service has always applied: surrounding whitespace is ignored, an
empty string counts as zero, decimals, exponents, ``Infinity`` and
unsigned ``0x``/``0o``/``0b`` literals are accepted and anything else
is rejected.
"""

import math
import re
from typing import Any, Iterable, Mapping, Optional, Union

from .errors import InvalidInput

Number = Union[int, float]

_DECIMAL = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)
_PREFIXED = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_BASES = {"x": 16, "o": 8, "b": 2}


def parse_number(value: Any) -> Optional[Number]:
    """Return ``value`` as a number or ``None`` if it is not numeric.

    Text is accepted in decimal or exponent notation, as ``Infinity``
    or as an unsigned ``0x``/``0o``/``0b`` literal.  Underscores,
    ``inf`` and ``nan`` are rejected.  Integral values are returned as
    ``int`` so they compare equal to record ids.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return 0
        if _PREFIXED.fullmatch(text):
            return int(text[2:], _BASES[text[1].lower()])
        if not _DECIMAL.fullmatch(text):
            return None
        number = float(text.replace("Infinity", "inf"))
    if math.isnan(number):
        return None
    if number.is_integer():
        return int(number)
    return number


def require_number(value: Any, message: str) -> Number:
    """Parse ``value`` or fail the gate with ``InvalidInput(message)``."""
    number = parse_number(value)
    if number is None:
        raise InvalidInput(message)
    return number


def is_number(value: Any) -> bool:
    """True for JSON numbers.  Booleans are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def first_present(payload: Mapping[str, Any], keys: Iterable[str]) -> Optional[str]:
    """Return the first of ``keys`` found in ``payload``, in the given order."""
    for key in keys:
        if key in payload:
            return key
    return None
