"""Email address validation with structured errors and warnings."""

from .disposable import DISPOSABLE_DOMAINS, is_disposable
from .models import IssueCode, ValidationOptions, ValidationResult
from .patterns import FormatPattern
from .validator import (
    STRICT_DEFAULT_OPTIONS,
    describe,
    extract_domain,
    is_from_domain,
    is_valid,
    normalize,
    resolve_options,
    validate,
)

__all__ = [
    "DISPOSABLE_DOMAINS",
    "STRICT_DEFAULT_OPTIONS",
    "FormatPattern",
    "IssueCode",
    "ValidationOptions",
    "ValidationResult",
    "describe",
    "extract_domain",
    "is_disposable",
    "is_from_domain",
    "is_valid",
    "normalize",
    "resolve_options",
    "validate",
]
