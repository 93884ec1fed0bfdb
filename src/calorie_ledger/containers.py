"""Dependency container wiring for the ledger engine."""

from dataclasses import dataclass

from supabase import create_client

from calorie_ledger.adapters.json_file_store import JsonFileStore
from calorie_ledger.adapters.supabase_store import SupabaseKeyValueStore
from calorie_ledger.config import Settings, parse_storage_backend
from calorie_ledger.services.ledger import LedgerService
from calorie_ledger.services.profile import ProfileService
from calorie_ledger.services.progress import ProgressService
from calorie_ledger.services.rollover import RolloverScheduler
from calorie_ledger.services.storage import KeyValueStore, StorageGateway
from calorie_ledger.services.suggestions import SuggestionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    ledger_service: LedgerService
    profile_service: ProfileService
    progress_service: ProgressService
    suggestion_service: SuggestionService
    rollover_scheduler: RolloverScheduler


def build_store(settings: Settings) -> KeyValueStore:
    """Create the configured key-value store."""
    backend = parse_storage_backend(settings.storage_backend)
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage requires url and service key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client=client, table=settings.supabase_table)
    return JsonFileStore.create(settings.data_dir)


def build_container(
    settings: Settings | None = None, store: KeyValueStore | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_store = store or build_store(resolved_settings)
    gateway = StorageGateway(
        store=resolved_store,
        timeout_seconds=resolved_settings.storage_timeout_seconds,
    )
    ledger_service = LedgerService(
        storage=gateway, timezone_name=resolved_settings.timezone
    )
    profile_service = ProfileService(storage=gateway)
    progress_service = ProgressService(
        ledger_service=ledger_service,
        profile_service=profile_service,
    )
    suggestion_service = SuggestionService(
        ledger_service=ledger_service,
        default_limit=resolved_settings.suggestion_limit,
    )
    rollover_scheduler = RolloverScheduler(
        ledger_service=ledger_service,
        interval_seconds=resolved_settings.rollover_interval_seconds,
    )
    return AppContainer(
        settings=resolved_settings,
        store=resolved_store,
        ledger_service=ledger_service,
        profile_service=profile_service,
        progress_service=progress_service,
        suggestion_service=suggestion_service,
        rollover_scheduler=rollover_scheduler,
    )
