"""Tests for container wiring."""

import pytest
from pydantic import ValidationError

from compost_logbook.adapters.fernet_email_cipher import FernetEmailCipher
from compost_logbook.adapters.supabase_log_repository import SupabaseLogRepository
from compost_logbook.config import Settings
from compost_logbook.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.settings is settings
    assert isinstance(container.logbook_service.repository, SupabaseLogRepository)
    assert isinstance(container.logbook_service.privacy.cipher, FernetEmailCipher)
    assert container.report_service.timezone_name == "Europe/Amsterdam"


def test_settings_reject_unknown_timezone(settings) -> None:
    with pytest.raises(ValidationError, match="Unknown timezone"):
        Settings(**{**settings.model_dump(), "timezone": "Mars/Olympus"})
