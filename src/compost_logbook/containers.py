"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from compost_logbook.adapters.fernet_email_cipher import FernetEmailCipher
from compost_logbook.adapters.supabase_log_repository import SupabaseLogRepository
from compost_logbook.adapters.supabase_report_repository import (
    SupabaseReportRepository,
)
from compost_logbook.adapters.supabase_taxonomy_repository import (
    SupabaseTaxonomyRepository,
)
from compost_logbook.config import Settings
from compost_logbook.services.aggregation import AggregationService
from compost_logbook.services.filters import FilterResolver
from compost_logbook.services.identity import IdentityService
from compost_logbook.services.log_query import LogQueryService
from compost_logbook.services.logbook import LogbookService
from compost_logbook.services.privacy import EmailPrivacyService
from compost_logbook.services.reports import ReportService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    logbook_service: LogbookService
    report_service: ReportService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    log_repository = SupabaseLogRepository(supabase_client)
    report_repository = SupabaseReportRepository(supabase_client)
    taxonomy_repository = SupabaseTaxonomyRepository(supabase_client)
    privacy = EmailPrivacyService(
        FernetEmailCipher.create(resolved_settings.email_encryption_key)
    )
    identity_service = IdentityService(privacy)
    filter_resolver = FilterResolver(taxonomy_repository)
    report_service = ReportService(
        repository=report_repository,
        log_query=LogQueryService(log_repository),
        filters=filter_resolver,
        identity=identity_service,
        aggregation=AggregationService(identity_service, filter_resolver),
        timezone_name=resolved_settings.timezone,
    )
    logbook_service = LogbookService(
        repository=log_repository,
        privacy=privacy,
        timezone_name=resolved_settings.timezone,
    )
    return AppContainer(
        settings=resolved_settings,
        logbook_service=logbook_service,
        report_service=report_service,
    )
