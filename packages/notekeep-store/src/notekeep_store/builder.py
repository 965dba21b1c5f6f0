from __future__ import annotations

from typing import TYPE_CHECKING

from notekeep_core.errors import ConfigError
from notekeep_core.logging import get_logger

from notekeep_store.service import NoteService

if TYPE_CHECKING:
    from notekeep_core.config import NotekeepConfig

    from notekeep_store.protocols import NoteStorage

logger = get_logger("builder")


class NoteServiceBuilder:
    """Build a NoteService from configuration.

    Usage:
        config = NotekeepConfig.load()
        service = NoteServiceBuilder(config).build()
    """

    def __init__(self, config: NotekeepConfig) -> None:
        self._config = config

    def build(self) -> NoteService:
        store = self._config.store
        logger.info("Building note service with %s backend", store.backend)
        return NoteService(
            self._build_storage(), strict_writes=store.strict_writes
        )

    def _build_storage(self) -> NoteStorage:
        backend = self._config.store.backend
        if backend == "memory":
            from notekeep_store.backends import InProcessNoteStorage
            return InProcessNoteStorage()
        elif backend == "file":
            from notekeep_store.backends import JSONFileNoteStorage
            return JSONFileNoteStorage(self._config.store.path)
        else:
            raise ConfigError(f"Unknown store backend: {backend!r}")
