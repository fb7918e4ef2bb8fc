"""Estado compartido de la aplicación."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List

from usuarios_app.models.user import User, UserId


Listener = Callable[[], None]


class Observable:
    """Lista de suscriptores notificados tras cada cambio de estado."""

    def __init__(self) -> None:
        self._suscriptores: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Registra ``listener`` y devuelve la función que lo da de baja."""

        self._suscriptores.append(listener)

        def _unsubscribe() -> None:
            if listener in self._suscriptores:
                self._suscriptores.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._suscriptores):
            listener()


@dataclass
class AppState:
    """Mantiene la lista de usuarios, el usuario en edición y el último error."""

    usuarios: List[User] = field(default_factory=list)
    usuario_en_edicion: User | None = None
    error: str | None = None

    def reemplazar_usuarios(self, usuarios: list[User]) -> None:
        self.usuarios = list(usuarios)

    def agregar_usuario(self, usuario: User) -> None:
        self.usuarios = [*self.usuarios, usuario]

    def reemplazar_usuario(self, usuario: User) -> None:
        self.usuarios = [usuario if u.id == usuario.id else u for u in self.usuarios]

    def quitar_usuario(self, user_id: UserId) -> None:
        self.usuarios = [u for u in self.usuarios if u.id != user_id]

    def contiene_id(self, user_id: UserId) -> bool:
        return any(u.id == user_id for u in self.usuarios)


__all__ = ["AppState", "Listener", "Observable"]
