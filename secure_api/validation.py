from __future__ import annotations

import re
from typing import Optional

from .schemas import InputError, ValidationResult


# ---------------------------------------------------------------------------
# Deny-lists
# ---------------------------------------------------------------------------

_TAG_PATTERN = re.compile(r"<[^>]*>")

# Matched against the lower-cased input; plain words trip these too.
_SQL_PATTERNS = ["select", "insert", "update", "delete", "drop", "union", "--"]

# Matched case-sensitively.
_DANGEROUS_SCHEMES = ["javascript:", "data:", "vbscript:"]


def validate_user_input(value: Optional[str]) -> ValidationResult:
    """
    Classify a user-supplied string.

    Checks run in order and the first failure wins: emptiness, markup,
    SQL keywords, script-capable URI schemes. A value that passes every
    check comes back trimmed and otherwise untouched.
    """
    if not value:
        return ValidationResult.invalid(InputError.MISSING)

    if _TAG_PATTERN.search(value):
        return ValidationResult.invalid(InputError.INVALID)

    lowered = value.lower()
    if any(pattern in lowered for pattern in _SQL_PATTERNS):
        return ValidationResult.invalid(InputError.INVALID)

    if any(scheme in value for scheme in _DANGEROUS_SCHEMES):
        return ValidationResult.invalid(InputError.INVALID)

    return ValidationResult.valid(value.strip())
