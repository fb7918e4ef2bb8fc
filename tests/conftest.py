"""Fixtures comunes: servicio REST simulado en memoria."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from usuarios_app.core.services import UserStore
from usuarios_app.infrastructure.api_client import APIError
from usuarios_app.infrastructure.repositories import UserRepository
from usuarios_app.models.user import Company, User


def make_user(user_id: int, name: str | None = None) -> User:
    return User(
        id=user_id,
        name=name or f"Nombre{user_id} Apellido{user_id}",
        email=f"user{user_id}@example.com",
        company=Company(name=f"Depto {user_id}"),
    )


class FakeAPIClient:
    """Sustituto en memoria de ``APIClient`` que registra cada llamada."""

    def __init__(self, usuarios: list[dict[str, Any]] | None = None, next_id: int = 99) -> None:
        self.usuarios = usuarios or []
        self.next_id = next_id
        self.calls: list[tuple[str, Any]] = []
        self.fail_on: set[str] = set()

    def _check(self, operacion: str, argumento: Any = None) -> None:
        self.calls.append((operacion, argumento))
        if operacion in self.fail_on:
            raise APIError(f"fallo simulado en {operacion}")

    def obtener_usuarios(self) -> Any:
        self._check("list")
        return copy.deepcopy(self.usuarios)

    def crear_usuario(self, datos: dict[str, Any]) -> Any:
        self._check("create", datos)
        return {**datos, "id": self.next_id}

    def reemplazar_usuario(self, user_id: Any, datos: dict[str, Any]) -> Any:
        self._check("replace", (user_id, datos))
        return datos

    def eliminar_usuario(self, user_id: Any) -> Any:
        self._check("delete", user_id)
        return {}


@pytest.fixture
def remote_users() -> list[dict[str, Any]]:
    return [make_user(i).to_dict() for i in range(1, 13)]


@pytest.fixture
def fake_api(remote_users: list[dict[str, Any]]) -> FakeAPIClient:
    return FakeAPIClient(remote_users)


@pytest.fixture
def store(fake_api: FakeAPIClient) -> UserStore:
    return UserStore(UserRepository(fake_api))


@pytest.fixture
def loaded_store(store: UserStore) -> UserStore:
    assert store.load()
    return store
