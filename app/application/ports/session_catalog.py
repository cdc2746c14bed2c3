from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.session_type import SessionType


class SessionCatalogPort(ABC):
    @abstractmethod
    def get_session_type(self, key: str) -> SessionType | None:
        """Get session type by key."""
        raise NotImplementedError

    @abstractmethod
    def list_session_types(self) -> list[SessionType]:
        raise NotImplementedError
