"""Email validation models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class IssueCode(str, Enum):
    """Stable kind of a validation issue, one per message."""

    REQUIRED = "required"
    NOT_A_STRING = "not-a-string"
    EMPTY = "empty"
    TOO_LONG = "too-long"
    BAD_FORMAT = "bad-format"
    CONSECUTIVE_DOTS = "consecutive-dots"
    EDGE_DOT = "edge-dot"
    MULTIPLE_AT = "multiple-at"
    EMPTY_LOCAL = "empty-local"
    LOCAL_TOO_LONG = "local-too-long"
    EMPTY_DOMAIN = "empty-domain"
    MISSING_TLD = "missing-tld"
    DISPLAY_NAME_FORBIDDEN = "display-name-forbidden"
    # Advisory only, never an error
    DISPOSABLE_DOMAIN = "disposable-domain"


# Message templates, formatted with the effective options
MESSAGES: dict[IssueCode, str] = {
    IssueCode.REQUIRED: "Email is required",
    IssueCode.NOT_A_STRING: "Email must be a string",
    IssueCode.EMPTY: "Email cannot be empty",
    IssueCode.TOO_LONG: "Email cannot exceed {max_length} characters",
    IssueCode.BAD_FORMAT: "Invalid email format",
    IssueCode.CONSECUTIVE_DOTS: "Email cannot contain consecutive dots",
    IssueCode.EDGE_DOT: "Email cannot start or end with a dot",
    IssueCode.MULTIPLE_AT: "Email must contain exactly one @ symbol",
    IssueCode.EMPTY_LOCAL: "Email local part cannot be empty",
    IssueCode.LOCAL_TOO_LONG: "Email local part cannot exceed {max_local_length} characters",
    IssueCode.EMPTY_DOMAIN: "Email domain cannot be empty",
    IssueCode.MISSING_TLD: "Email must include a top-level domain",
    IssueCode.DISPLAY_NAME_FORBIDDEN: "Display names are not allowed",
    IssueCode.DISPOSABLE_DOMAIN: "Disposable email address detected",
}

# RFC 5321 limits
DEFAULT_MAX_LENGTH = 254
MAX_LOCAL_PART_LENGTH = 64


class ValidationOptions(BaseModel):
    """
    Validation policy.

    Fields left unset fall back to these defaults. Note that
    ``allow_international`` defaults to True here, while ``validate()``
    called without any options runs in strict mode. Mapping keys may be
    snake_case or camelCase (``maxLength``).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    allow_international: bool = True
    allow_display_name: bool = False
    require_tld: bool = True
    max_length: int = DEFAULT_MAX_LENGTH


class ValidationResult(BaseModel):
    """Result of email validation."""

    model_config = ConfigDict(frozen=True)

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    error_codes: list[IssueCode] = Field(default_factory=list)
    warning_codes: list[IssueCode] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors

    def has_error(self, code: IssueCode) -> bool:
        return code in self.error_codes
