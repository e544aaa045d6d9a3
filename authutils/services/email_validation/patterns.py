"""Address format patterns.

Two strictness tiers, chosen once per call from ``allow_international``.
Neither implements full RFC 5322; they cover practically all addresses seen
in sign-up forms.
"""

import re
from enum import Enum

# Practical ASCII grammar: RFC 5321 specials in the local part, hyphenated
# labels (no leading/trailing hyphen, at most 63 chars) in the domain.
STRICT_EMAIL_REGEX = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@"
    r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

# Anything without whitespace: one @, then at least one dot in the domain
INTERNATIONAL_EMAIL_REGEX = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


class FormatPattern(str, Enum):
    """Format strictness tier."""

    STRICT = "strict"
    INTERNATIONAL = "international"

    @classmethod
    def select(cls, allow_international: bool) -> "FormatPattern":
        return cls.INTERNATIONAL if allow_international else cls.STRICT

    @property
    def regex(self) -> re.Pattern[str]:
        return _REGEXES[self]

    def matches(self, email: str) -> bool:
        """Whole-string match against this tier's pattern."""
        return self.regex.fullmatch(email) is not None


_REGEXES: dict[FormatPattern, re.Pattern[str]] = {
    FormatPattern.STRICT: STRICT_EMAIL_REGEX,
    FormatPattern.INTERNATIONAL: INTERNATIONAL_EMAIL_REGEX,
}
