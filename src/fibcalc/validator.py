# src/fibcalc/validator.py
from __future__ import annotations

import re
from enum import Enum

from fibcalc.runtime import current as _rt_current
from fibcalc.utility import UserInputError

# Optional sign, digits, optional '_' group separators (same rule as int())
_INT_RE = re.compile(r"^([+-]?)(\d(?:_?\d)*)$")


class ValidationErrorKind(Enum):
    NOT_A_NUMBER = "not_a_number"
    NEGATIVE = "negative"
    TOO_LARGE = "too_large"


class ValidationError(UserInputError):
    """Raised by validate(); .kind tells which rule was violated."""

    def __init__(self, kind: ValidationErrorKind, raw: str | None = None, max_n: int | None = None):
        self.kind = kind
        self.raw = raw
        self.max_n = max_n
        super().__init__(f"{kind.value}: {raw!r}")


def validate(raw: str | None, max_n: int | None = None) -> int:
    """
    Parse a user-typed index and bounds-check it against [0, max_n].

    max_n defaults to the active profile's LIMITS.MAX_N. Rules are checked in
    order (not-a-number, negative, too-large); the first violation is raised
    as ValidationError.
    """
    if max_n is None:
        max_n = _rt_current().max_n

    m = _INT_RE.match((raw or "").strip())
    if m is None:
        raise ValidationError(ValidationErrorKind.NOT_A_NUMBER, raw, max_n)

    sign, digits = m.groups()
    digits = digits.replace("_", "").lstrip("0") or "0"

    if sign == "-" and digits != "0":
        raise ValidationError(ValidationErrorKind.NEGATIVE, raw, max_n)

    # Compare lengths first: int() refuses very long digit strings
    if len(digits) > len(str(max_n)) or int(digits) > max_n:
        raise ValidationError(ValidationErrorKind.TOO_LARGE, raw, max_n)

    return int(digits)
