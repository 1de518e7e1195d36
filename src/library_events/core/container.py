"""Dependency injection container for building fully-wired engine instances."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from library_events.analytics.aggregator import EventAggregator
from library_events.analytics.reports import ReportService
from library_events.core.config import AppConfig
from library_events.core.store import LibraryEventStore
from library_events.domain.interfaces import IRecordStorage
from library_events.storage.json_storage import JsonFileStorage
from library_events.storage.memory import InMemoryStorage
from library_events.storage.sqlite_storage import SQLiteStorage


class DIContainer:
    """Factory helpers that assemble the store and report service."""

    @staticmethod
    def create_store(
        *,
        config: Optional[AppConfig] = None,
        storage: Optional[IRecordStorage] = None,
    ) -> LibraryEventStore:
        cfg = config or AppConfig.from_env()
        backend = storage or DIContainer._build_storage(cfg)
        store = LibraryEventStore(
            backend,
            categories=cfg.categories,
            seed_on_empty=cfg.seed_on_empty,
        )
        return store.load()

    @staticmethod
    def create_report_service(
        store: LibraryEventStore, *, config: Optional[AppConfig] = None
    ) -> ReportService:
        cfg = config or AppConfig.from_env()
        return ReportService(
            store,
            EventAggregator(store.categories),
            top_n=cfg.top_n,
            recent_limit=cfg.recent_limit,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _build_storage(config: AppConfig) -> IRecordStorage:
        mapping: Dict[str, Callable[[], IRecordStorage]] = {
            "memory": InMemoryStorage,
            "json": lambda: JsonFileStorage(config.storage_path),
            "sqlite": lambda: SQLiteStorage(config.storage_path),
        }
        try:
            return mapping[config.storage_backend]()
        except KeyError as exc:
            raise ValueError(f"Unknown storage backend '{config.storage_backend}'") from exc
