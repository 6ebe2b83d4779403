"""
Workspace slug helpers used by automatic onboarding.
"""

import re
import secrets
import string
from typing import Iterator, Optional

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
SLUG_MAX_LENGTH = 20

GENERIC_TERMS = frozenset(
    {
        "user",
        "admin",
        "test",
        "demo",
        "info",
        "contact",
        "hello",
        "hi",
        "me",
        "my",
        "app",
        "web",
        "site",
    }
)

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def clean_slug_part(value: str) -> str:
    """Lower-case, collapse non-alphanumerics to single hyphens, trim, cap length"""
    slug = re.sub(r"[^a-z0-9]", "-", value.lower())
    slug = re.sub(r"-+", "-", slug)
    slug = slug.strip("-")
    return slug[:SLUG_MAX_LENGTH]


def is_generic_term(slug: str) -> bool:
    return slug in GENERIC_TERMS or len(slug) < 3


def base_slug_from_email(email: str) -> str:
    local_part, _, domain = email.partition("@")
    base = clean_slug_part(local_part)
    if is_generic_term(base):
        domain_part = clean_slug_part(domain.split(".")[0])
        base = f"{base}-{domain_part}" if base and domain_part else base or domain_part
    return base or "workspace"


def numbered_slug_candidates(base: str) -> Iterator[str]:
    """base, base-2 ... base-10"""
    yield base
    for i in range(2, 11):
        yield f"{base}-{i}"


def random_suffix(length: int = 6) -> str:
    return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(length))


def fallback_slug(base: str) -> str:
    return f"{base}-{random_suffix()}"


def default_workspace_name(email: str, first_name: Optional[str] = None) -> str:
    if first_name:
        return f"{first_name}'s Workspace"
    return f"{email.partition('@')[0]} Workspace"
