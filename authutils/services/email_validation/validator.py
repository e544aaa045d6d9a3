"""Rule-based email address validation.

Runs an ordered series of independent checks over a candidate address and
collects every violation instead of stopping at the first one, so callers can
show specific messages to users.

Usage:
    from authutils.services.email_validation import validate

    result = validate("  jane@example.com  ")
    if not result.is_valid:
        show_errors(result.errors)

All functions are pure: no I/O, no shared mutable state.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from authutils.core.logging import get_logger

from .disposable import is_disposable
from .models import (
    MAX_LOCAL_PART_LENGTH,
    MESSAGES,
    IssueCode,
    ValidationOptions,
    ValidationResult,
)
from .patterns import FormatPattern

logger = get_logger(__name__)

OptionsLike = ValidationOptions | Mapping[str, Any]

# Effective options when validate() is called without any. Unlike the model
# defaults, this runs the strict ASCII pattern.
STRICT_DEFAULT_OPTIONS = ValidationOptions(allow_international=False)


def resolve_options(options: OptionsLike | None = None) -> ValidationOptions:
    """
    Merge caller options over the defaults.

    Options set to None, and values that fail validation, fall back to the
    field defaults; this never raises.
    """
    if options is None:
        return STRICT_DEFAULT_OPTIONS
    if isinstance(options, ValidationOptions):
        return options
    if not isinstance(options, Mapping):
        logger.bind(options_type=type(options).__name__).warning(
            "email_validation_options_ignored"
        )
        return STRICT_DEFAULT_OPTIONS

    values = {key: value for key, value in options.items() if value is not None}
    try:
        return ValidationOptions.model_validate(values)
    except ValidationError as e:
        invalid = {str(err["loc"][0]) for err in e.errors() if err["loc"]}

    # Drop both spellings of every rejected field
    dropped = set(invalid)
    for name, field in ValidationOptions.model_fields.items():
        if name in invalid or field.alias in invalid:
            dropped.update({name, field.alias})
    logger.bind(invalid_options=sorted(invalid)).warning("email_validation_options_ignored")
    return ValidationOptions.model_validate(
        {key: value for key, value in values.items() if key not in dropped}
    )


def describe(code: IssueCode, options: OptionsLike | None = None) -> str:
    """Render the user-facing message for an issue code."""
    opts = resolve_options(options)
    return MESSAGES[code].format(
        max_length=opts.max_length,
        max_local_length=MAX_LOCAL_PART_LENGTH,
    )


def validate(candidate: Any, options: OptionsLike | None = None) -> ValidationResult:
    """
    Validate an email address.

    Args:
        candidate: Value to check. Surrounding whitespace is ignored.
        options: ValidationOptions or a partial mapping of them. When omitted,
            strict (non-international) mode is used.

    Returns:
        ValidationResult with every error and warning found, in check order
    """
    opts = resolve_options(options)

    if candidate is None:
        return _rejected(IssueCode.REQUIRED, opts)
    if not isinstance(candidate, str):
        return _rejected(IssueCode.NOT_A_STRING, opts)

    email = candidate.strip()
    errors: list[IssueCode] = []
    warnings: list[IssueCode] = []

    if not email:
        errors.append(IssueCode.EMPTY)

    if len(email) > opts.max_length:
        errors.append(IssueCode.TOO_LONG)

    pattern = FormatPattern.select(opts.allow_international)
    if not pattern.matches(email):
        errors.append(IssueCode.BAD_FORMAT)

    if ".." in email:
        errors.append(IssueCode.CONSECUTIVE_DOTS)

    # Split on the first @ only; any further @ stays in the domain
    local_part, _, domain = email.partition("@")

    if _has_edge_dot(email) or _has_edge_dot(local_part):
        errors.append(IssueCode.EDGE_DOT)

    if "@" in email:
        if email.count("@") != 1:
            errors.append(IssueCode.MULTIPLE_AT)

        if not local_part:
            errors.append(IssueCode.EMPTY_LOCAL)

        if len(local_part) > MAX_LOCAL_PART_LENGTH:
            errors.append(IssueCode.LOCAL_TOO_LONG)

        if not domain:
            errors.append(IssueCode.EMPTY_DOMAIN)

        if opts.require_tld and "." not in domain:
            errors.append(IssueCode.MISSING_TLD)

        if is_disposable(domain):
            warnings.append(IssueCode.DISPOSABLE_DOMAIN)

        if not opts.allow_display_name and "<" in email:
            errors.append(IssueCode.DISPLAY_NAME_FORBIDDEN)

    result = _build_result(errors, warnings, opts)
    if not result.is_valid:
        # Codes only, never the address itself
        logger.bind(
            error_codes=[code.value for code in errors],
            pattern=pattern.value,
        ).debug("email_validation_rejected")
    return result


def is_valid(candidate: Any, options: OptionsLike | None = None) -> bool:
    """Quick boolean check."""
    return validate(candidate, options).is_valid


def extract_domain(candidate: Any) -> str | None:
    """Return the lowercased domain, or None unless there is exactly one @."""
    if not candidate or not isinstance(candidate, str):
        return None

    parts = candidate.strip().split("@")
    return parts[1].lower() if len(parts) == 2 else None


def is_from_domain(candidate: Any, domain: str) -> bool:
    """Check if an address belongs to a domain (case-insensitive)."""
    if not isinstance(domain, str):
        return False
    return extract_domain(candidate) == domain.lower()


def normalize(candidate: Any) -> str:
    """Trim and lowercase an address for storage/comparison.

    Never fails: returns "" for None, non-string or empty input.
    """
    if not candidate or not isinstance(candidate, str):
        return ""

    return candidate.strip().lower()


def _has_edge_dot(value: str) -> bool:
    return value.startswith(".") or value.endswith(".")


def _rejected(code: IssueCode, opts: ValidationOptions) -> ValidationResult:
    """Result for inputs that cannot be checked at all."""
    return ValidationResult(errors=[describe(code, opts)], error_codes=[code])


def _build_result(
    errors: list[IssueCode],
    warnings: list[IssueCode],
    opts: ValidationOptions,
) -> ValidationResult:
    return ValidationResult(
        errors=[describe(code, opts) for code in errors],
        warnings=[describe(code, opts) for code in warnings],
        error_codes=errors,
        warning_codes=warnings,
    )
