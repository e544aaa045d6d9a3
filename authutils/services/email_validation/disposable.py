"""Disposable email domain list."""

from importlib.resources import files

DOMAINS_RESOURCE = "disposable_domains.txt"


def _load_disposable_domains() -> frozenset[str]:
    """Read the bundled domain list, one domain per line, ``#`` for comments."""
    resource = files(__package__).joinpath(DOMAINS_RESOURCE)
    if not resource.is_file():
        return frozenset()

    entries = (line.strip().lower() for line in resource.read_text().splitlines())
    return frozenset(entry for entry in entries if entry and not entry.startswith("#"))


# Read once at import; lookups are set membership
DISPOSABLE_DOMAINS = _load_disposable_domains()


def is_disposable(domain: str) -> bool:
    """Check whether a domain hosts throwaway mailboxes (case-insensitive)."""
    if not domain:
        return False
    return domain.lower() in DISPOSABLE_DOMAINS
