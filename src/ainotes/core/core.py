from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, cast

from ainotes.config import Config
from ainotes.core.storage import Storage, create_storage

if TYPE_CHECKING:
    from ainotes.core.modules.summary.providers import SummaryProvider


class Service:
    """Base class for services with direct storage access."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from ainotes.core.modules.access.service import AccessService  # noqa: PLC0415
    from ainotes.core.modules.note.service import NoteService  # noqa: PLC0415
    from ainotes.core.modules.query.service import QueryService  # noqa: PLC0415
    from ainotes.core.modules.session.service import SessionService  # noqa: PLC0415
    from ainotes.core.modules.summary.service import SummaryService  # noqa: PLC0415
    from ainotes.core.modules.user.service import UserService  # noqa: PLC0415

    user: UserService
    session: SessionService
    access: AccessService
    note: NoteService
    query: QueryService
    summary: SummaryService

    def __init__(self, storage: Storage) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._storage = storage

        # Service configuration: (attribute_name, module_path, class_name)
        # Order matters for initialization - users must be loaded before sessions
        service_configs = [
            ("user", "ainotes.core.modules.user.service", "UserService"),
            ("session", "ainotes.core.modules.session.service", "SessionService"),
            ("access", "ainotes.core.modules.access.service", "AccessService"),
            ("note", "ainotes.core.modules.note.service", "NoteService"),
            ("query", "ainotes.core.modules.query.service", "QueryService"),
            ("summary", "ainotes.core.modules.summary.service", "SummaryService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(storage)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, storage, summary provider, and all service instances."""

    config: Config
    storage: Storage
    summary_provider: SummaryProvider | None
    services: Services

    def __init__(
        self,
        config: Config,
        storage: Storage | None = None,
        summary_provider: SummaryProvider | None = None,
    ) -> None:
        """Initialize core with config and storage, and auto-register services.

        `storage` and `summary_provider` default to what the config selects.
        """
        from ainotes.core.modules.summary.providers import create_summary_provider  # noqa: PLC0415

        self.config = config
        self.storage = storage if storage is not None else create_storage(config)
        self.summary_provider = summary_provider if summary_provider is not None else create_summary_provider(config)
        self.services = Services(self.storage)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Load persisted collections, then start all services."""
        await self.storage.open()
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and release the storage backend on shutdown."""
        await self.services.stop_all()
        await self.storage.close()
