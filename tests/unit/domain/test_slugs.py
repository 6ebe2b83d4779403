from convoforms.domain.slugs import (
    SLUG_MAX_LENGTH,
    SLUG_PATTERN,
    base_slug_from_email,
    clean_slug_part,
    default_workspace_name,
    fallback_slug,
    numbered_slug_candidates,
)


def test_clean_slug_part():
    assert clean_slug_part("John.Doe+forms") == "john-doe-forms"
    assert clean_slug_part("--a__b--") == "a-b"
    assert len(clean_slug_part("x" * 40)) == SLUG_MAX_LENGTH


def test_base_slug_uses_local_part():
    assert base_slug_from_email("jane.smith@acme.io") == "jane-smith"


def test_generic_local_part_gets_domain():
    assert base_slug_from_email("admin@acme.io") == "admin-acme"
    assert base_slug_from_email("jo@globex.com") == "jo-globex"


def test_empty_base_falls_back():
    assert base_slug_from_email("...@...") == "workspace"


def test_numbered_candidates():
    candidates = list(numbered_slug_candidates("jane"))
    assert candidates[0] == "jane"
    assert candidates[1] == "jane-2"
    assert candidates[-1] == "jane-10"
    assert len(candidates) == 10


def test_fallback_slug_is_valid():
    slug = fallback_slug("jane")
    assert slug.startswith("jane-")
    assert len(slug) == len("jane-") + 6
    assert SLUG_PATTERN.match(slug)


def test_default_workspace_name():
    assert default_workspace_name("jane@acme.io", "Jane") == "Jane's Workspace"
    assert default_workspace_name("jane@acme.io") == "jane Workspace"
