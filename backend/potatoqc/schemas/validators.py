"""Reusable coercion helpers for batch form input.

Form values reach the backend as whatever the browser sent: numbers, numeric
text, empty strings, or nothing at all. These helpers normalise them:

- ``parse_number``   leading-decimal parse, ``None`` when there is no number
- ``coerce_metric``  metric value or ``None`` (stored as absent)
- ``coerce_amount``  required quantity/price; empty is missing, junk is 0
- ``coerce_stored_amount``  lenient variant for already-persisted records
"""

import math
import numbers
import re
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BeforeValidator, StringConstraints


# Leading decimal number, optionally signed, with an optional exponent.
NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: Any) -> float | None:
    """Read a numeric value the way a form number field is read.

    Args:
        value: Raw input (number, text, or anything else)

    Returns:
        The parsed float, or None when the input holds no finite number
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, (numbers.Real, Decimal)):
            number = float(value)
        elif isinstance(value, str):
            match = NUMBER_PREFIX.match(value.strip())
            if not match:
                return None
            number = float(match.group(0))
        else:
            return None
    except (OverflowError, ValueError):
        # Integers beyond float range, signalling NaN
        return None

    if not math.isfinite(number):
        return None
    return number


def coerce_metric(value: Any) -> float | None:
    """Metric fields are optional; anything non-numeric is stored as absent."""
    return parse_number(value)


def coerce_amount(value: Any) -> Any:
    """Required numeric field (quantity, price).

    Empty input is a missing required field and is rejected; non-empty text
    that is not a number is coerced to 0.

    Raises:
        ValueError: If the value is empty
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError("Field required")

    number = parse_number(value)
    return 0.0 if number is None else number


def coerce_stored_amount(value: Any) -> float:
    number = parse_number(value)
    return 0.0 if number is None else number


# ── Annotated field types ────────────────────────────────────

MetricValue = Annotated[float | None, BeforeValidator(coerce_metric)]
Amount = Annotated[float, BeforeValidator(coerce_amount)]
StoredAmount = Annotated[float, BeforeValidator(coerce_stored_amount)]
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
