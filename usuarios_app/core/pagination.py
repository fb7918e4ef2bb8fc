"""Paginación en cliente sobre la lista completa de usuarios."""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

from usuarios_app.core.services import UserStore
from usuarios_app.core.state import Observable
from usuarios_app.models.user import User

USERS_PER_PAGE = 5

T = TypeVar("T")


def total_pages(total_users: int, users_per_page: int = USERS_PER_PAGE) -> int:
    """Cantidad de páginas: ``ceil(total_users / users_per_page)``, 0 si no hay usuarios."""

    if users_per_page <= 0:
        raise ValueError(f"users_per_page debe ser positivo: {users_per_page}")
    if total_users < 0:
        raise ValueError(f"total_users no puede ser negativo: {total_users}")
    return math.ceil(total_users / users_per_page)


def visible_slice(
    users: Sequence[T], current_page: int, users_per_page: int = USERS_PER_PAGE
) -> list[T]:
    """Usuarios de la página ``current_page`` (base 1), en el orden original.

    Una página fuera de rango devuelve una lista vacía.
    """

    if users_per_page <= 0:
        raise ValueError(f"users_per_page debe ser positivo: {users_per_page}")
    if current_page < 1:
        return []
    fin = current_page * users_per_page
    return list(users[fin - users_per_page : fin])


class PaginationView(Observable):
    """Página actual sobre la lista del :class:`UserStore`.

    ``current_page`` no se corrige cuando la lista se achica: si se borra el
    único usuario de la última página la vista queda vacía hasta que se
    seleccione otra página.
    """

    def __init__(self, store: UserStore, users_per_page: int = USERS_PER_PAGE) -> None:
        super().__init__()
        if users_per_page <= 0:
            raise ValueError(f"users_per_page debe ser positivo: {users_per_page}")
        self._store = store
        self.users_per_page = users_per_page
        self.current_page = 1

    def visible_users(self) -> list[User]:
        return visible_slice(self._store.users, self.current_page, self.users_per_page)

    def page_count(self) -> int:
        return total_pages(len(self._store.users), self.users_per_page)

    def page_numbers(self) -> list[int]:
        """Números de página para los botones del paginador."""

        return list(range(1, self.page_count() + 1))

    def on_page_select(self, page: int) -> None:
        """Cambia de página sin validar contra el total de páginas."""

        if page < 1:
            raise ValueError(f"La página debe ser positiva: {page}")
        self.current_page = page
        self._notify()


__all__ = ["PaginationView", "USERS_PER_PAGE", "total_pages", "visible_slice"]
