"""Categorías de error de las operaciones sobre usuarios."""

from __future__ import annotations

from enum import Enum


class OperationKind(Enum):
    """Tipo de operación remota; cada una tiene un mensaje fijo para el usuario."""

    FETCH = "Failed to fetch users. Please try again later."
    ADD = "Failed to add user. Please try again."
    EDIT = "Failed to edit user. Please try again."
    DELETE = "Failed to delete user. Please try again."

    @property
    def message(self) -> str:
        return self.value


__all__ = ["OperationKind"]
