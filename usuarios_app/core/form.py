"""Controlador del formulario de alta y edición de usuarios."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable

from usuarios_app.core.services import UserStore
from usuarios_app.core.state import Observable
from usuarios_app.models.user import Company, User, UserId

logger = logging.getLogger(__name__)

Dispatcher = Callable[[Callable[[], Any]], None]


class FormMode(Enum):
    ADDING = "adding"
    EDITING = "editing"


@dataclass
class FormFields:
    """Valores transitorios del formulario."""

    id: UserId | str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    department: str = ""


# Nombres de los campos tal como los envía el formulario.
_FIELD_ALIASES = {
    "firstName": "first_name",
    "lastName": "last_name",
}
_FIELD_NAMES = frozenset(f.name for f in fields(FormFields))


def _run_now(operacion: Callable[[], Any]) -> None:
    operacion()


class UserFormController(Observable):
    """Mantiene los campos del formulario y el modo alta/edición.

    El modo se deriva del usuario en edición del :class:`UserStore`: pasa a
    edición con :meth:`begin_edit` y vuelve a alta sólo cuando el store
    completa una actualización con éxito.

    ``dispatch`` decide dónde se ejecuta la llamada al store; por defecto en
    el mismo hilo. Los campos se limpian apenas se despacha el envío, sin
    esperar la respuesta remota.
    """

    def __init__(self, store: UserStore, dispatch: Dispatcher = _run_now) -> None:
        super().__init__()
        self._store = store
        self._dispatch = dispatch
        self.fields = FormFields()

    @property
    def mode(self) -> FormMode:
        return FormMode.EDITING if self._store.editing is not None else FormMode.ADDING

    def begin_edit(self, user: User) -> None:
        """Carga ``user`` en los campos y pasa a modo edición."""

        self.fields = FormFields(
            id=user.id if user.id is not None else "",
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            department=user.department,
        )
        self._store.begin_edit(user)
        self._notify()

    def on_field_change(self, field_name: str, value: Any) -> None:
        nombre = _FIELD_ALIASES.get(field_name, field_name)
        if nombre not in _FIELD_NAMES:
            raise ValueError(f"Campo de formulario desconocido: {field_name!r}")
        setattr(self.fields, nombre, value)
        self._notify()

    def build_record(self) -> User:
        """Arma el registro de usuario a partir de los campos actuales."""

        campos = self.fields
        return User(
            id=campos.id if campos.id != "" else None,
            name=f"{campos.first_name} {campos.last_name}",
            email=campos.email,
            company=Company(name=campos.department),
        )

    def submit(self) -> User:
        """Envía el registro al store (alta o edición) y limpia el formulario."""

        record = self.build_record()
        if self.mode is FormMode.EDITING:
            logger.debug("Enviando edición del usuario %r", record.id)
            self._dispatch(lambda: self._store.update(record))
        else:
            logger.debug("Enviando alta de usuario %r", record.name)
            self._dispatch(lambda: self._store.add(record))
        self.fields = FormFields()
        self._notify()
        return record


__all__ = ["Dispatcher", "FormFields", "FormMode", "UserFormController"]
