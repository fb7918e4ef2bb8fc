"""Servicios de aplicación que coordinan el acceso a datos."""

from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Callable

from usuarios_app.core.errors import OperationKind
from usuarios_app.core.state import AppState, Observable
from usuarios_app.infrastructure.api_client import APIError
from usuarios_app.infrastructure.repositories import UserRepository
from usuarios_app.models.user import User, UserId

logger = logging.getLogger(__name__)


class UserStore(Observable):
    """Fuente única de la lista de usuarios y del último error.

    Cada operación hace exactamente una llamada remota y luego concilia el
    estado local. Las llamadas de un mismo tipo se serializan con un lock
    por :class:`OperationKind`; las de tipos distintos pueden solaparse y
    se aplican en orden de finalización. Un error guarda el mensaje fijo
    de su categoría y nunca se propaga; un éxito borra el error previo.

    Si al crear un usuario el servidor devuelve un ``id`` que ya está en la
    lista local, el alta se informa como fallida y la lista no cambia aunque
    el registro sí se haya creado en remoto: a partir de ahí la lista local
    y el servidor difieren hasta el próximo :meth:`load`.
    """

    def __init__(self, repository: UserRepository, state: AppState | None = None) -> None:
        super().__init__()
        self._repository = repository
        self._state = state if state is not None else AppState()
        self._state_lock = threading.RLock()
        self._en_curso = {kind: threading.Lock() for kind in OperationKind}

    # ------------------------------------------------------------------
    # Lectura
    # ------------------------------------------------------------------
    @property
    def users(self) -> list[User]:
        with self._state_lock:
            return list(self._state.usuarios)

    @property
    def editing(self) -> User | None:
        with self._state_lock:
            return self._state.usuario_en_edicion

    @property
    def error(self) -> str | None:
        with self._state_lock:
            return self._state.error

    # ------------------------------------------------------------------
    # Operaciones
    # ------------------------------------------------------------------
    def begin_edit(self, user: User) -> None:
        """Marca ``user`` como el usuario en edición."""

        self._apply(lambda state: setattr(state, "usuario_en_edicion", user), clear_error=False)

    def load(self) -> bool:
        """Reemplaza la lista local por la colección remota completa."""

        with self._en_curso[OperationKind.FETCH]:
            try:
                usuarios = self._repository.obtener_usuarios()
            except APIError as exc:
                self._fail(OperationKind.FETCH, exc)
                return False
            logger.debug("Cargados %d usuarios", len(usuarios))
            self._apply(lambda state: state.reemplazar_usuarios(usuarios))
            return True

    def add(self, record: User) -> bool:
        """Crea el usuario en remoto y lo agrega con el ``id`` asignado."""

        with self._en_curso[OperationKind.ADD]:
            try:
                nuevo_id = self._repository.crear(record)
            except APIError as exc:
                self._fail(OperationKind.ADD, exc)
                return False

            usuario = dataclasses.replace(record, id=nuevo_id)
            with self._state_lock:
                # ids únicos en la lista local
                duplicado = self._state.contiene_id(nuevo_id)
                if not duplicado:
                    self._state.agregar_usuario(usuario)
                    self._state.error = None
            if duplicado:
                self._fail(
                    OperationKind.ADD,
                    APIError(f"El servidor asignó un id ya existente: {nuevo_id!r}"),
                )
                return False
            self._notify()
            return True

    def update(self, record: User) -> bool:
        """Reemplaza el usuario en remoto y localmente, y termina la edición."""

        with self._en_curso[OperationKind.EDIT]:
            try:
                self._repository.reemplazar(record)
            except APIError as exc:
                self._fail(OperationKind.EDIT, exc)
                return False

            def _aplicar(state: AppState) -> None:
                state.reemplazar_usuario(record)
                state.usuario_en_edicion = None

            self._apply(_aplicar)
            return True

    def remove(self, user_id: UserId) -> bool:
        """Elimina el usuario en remoto y lo quita de la lista local."""

        with self._en_curso[OperationKind.DELETE]:
            try:
                self._repository.eliminar(user_id)
            except APIError as exc:
                self._fail(OperationKind.DELETE, exc)
                return False
            self._apply(lambda state: state.quitar_usuario(user_id))
            return True

    # ------------------------------------------------------------------
    # Auxiliares
    # ------------------------------------------------------------------
    def _apply(self, cambio: Callable[[AppState], None], *, clear_error: bool = True) -> None:
        with self._state_lock:
            cambio(self._state)
            if clear_error:
                self._state.error = None
        self._notify()

    def _fail(self, kind: OperationKind, exc: Exception) -> None:
        logger.warning("Operación %s fallida: %s", kind.name, exc)
        with self._state_lock:
            self._state.error = kind.message
        self._notify()


__all__ = ["UserStore"]
