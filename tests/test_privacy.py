"""Tests for email privacy helpers."""

from compost_logbook.services.privacy import (
    ANONYMOUS_LABEL,
    EmailPrivacyService,
    hash_email,
    is_plausible_email,
    mask_email,
    normalize_email,
)


def test_normalize_and_hash_are_case_insensitive() -> None:
    assert normalize_email("  Jane@Example.COM ") == "jane@example.com"
    assert normalize_email("   ") is None
    assert hash_email("Jane@Example.com") == hash_email("jane@example.com ")
    assert len(hash_email("jane@example.com") or "") == 64
    assert hash_email(None) is None


def test_mask_email() -> None:
    assert mask_email("john@example.com") == "jo**@example.com"
    assert mask_email("johnathan@example.com") == "jo*******@example.com"
    assert mask_email(None) == ANONYMOUS_LABEL
    assert mask_email("not-an-email") == ANONYMOUS_LABEL


def test_is_plausible_email() -> None:
    assert is_plausible_email("a@x.com")
    assert not is_plausible_email("a@@x.com")
    assert not is_plausible_email("a x@x.com")
    assert not is_plausible_email("@x.com")


def test_protect_and_reveal(privacy: EmailPrivacyService) -> None:
    ciphertext, digest = privacy.protect(" A@X.com ")

    assert ciphertext is not None
    assert digest == hash_email("a@x.com")
    assert privacy.reveal(ciphertext) == "a@x.com"
    assert privacy.protect(None) == (None, None)


def test_reveal_failure_is_anonymous(privacy: EmailPrivacyService) -> None:
    assert privacy.reveal("garbage") is None
    assert privacy.reveal(None) is None
