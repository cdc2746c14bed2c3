from __future__ import annotations

from app.application.ports.session_catalog import SessionCatalogPort
from app.domain.entities.session_type import SessionType
from app.infrastructure.catalog.session_types_data import SESSION_TYPES


class SessionCatalogStore(SessionCatalogPort):
    def __init__(self, catalog: dict[str, SessionType] | None = None) -> None:
        self._catalog = catalog or SESSION_TYPES

    def get_session_type(self, key: str) -> SessionType | None:
        normalized_key = key.lower().strip()
        return self._catalog.get(normalized_key)

    def list_session_types(self) -> list[SessionType]:
        return list(self._catalog.values())
