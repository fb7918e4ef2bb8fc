"""Implementaciones de repositorios para acceso a datos."""

from __future__ import annotations

from usuarios_app.infrastructure.api_client import APIClient, APIError
from usuarios_app.models.user import User, UserId


class UserRepository:
    """Repositorio de usuarios basado en un cliente API."""

    def __init__(self, api_client: APIClient) -> None:
        self._api_client = api_client

    def obtener_usuarios(self) -> list[User]:
        """Devuelve la lista completa de usuarios."""

        usuarios_crudos = self._api_client.obtener_usuarios()
        if not isinstance(usuarios_crudos, list):
            raise APIError("Formato inesperado al leer usuarios.")
        try:
            return [User.from_dict(datos) for datos in usuarios_crudos]
        except AttributeError as exc:
            raise APIError("Formato inesperado al leer usuarios.") from exc

    def crear(self, usuario: User) -> UserId:
        """Crea el usuario (sin ``id``) y devuelve el ``id`` asignado por el servidor."""

        respuesta = self._api_client.crear_usuario(usuario.to_dict(include_id=False))
        if not isinstance(respuesta, dict) or respuesta.get("id") is None:
            raise APIError("El servicio no devolvió el id del usuario creado.")
        return respuesta["id"]

    def reemplazar(self, usuario: User) -> None:
        self._api_client.reemplazar_usuario(usuario.id, usuario.to_dict())

    def eliminar(self, user_id: UserId) -> None:
        self._api_client.eliminar_usuario(user_id)


__all__ = ["UserRepository"]
