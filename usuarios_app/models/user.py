"""Definiciones de modelos de dominio."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

UserId = Union[int, str]


@dataclass(frozen=True, slots=True)
class Company:
    """Empresa del usuario; su nombre se muestra como "departamento"."""

    name: str = ""


@dataclass(frozen=True, slots=True)
class User:
    """Usuario tal como lo expone el servicio REST.

    ``id`` lo asigna el servidor al crear el registro, por eso es opcional
    mientras el usuario todavía no fue enviado.
    """

    id: UserId | None
    name: str
    email: str
    company: Company = field(default_factory=Company)

    @property
    def first_name(self) -> str:
        return self.name.partition(" ")[0]

    @property
    def last_name(self) -> str:
        return self.name.partition(" ")[2]

    @property
    def department(self) -> str:
        return self.company.name

    @classmethod
    def from_dict(cls, datos: dict[str, Any]) -> "User":
        """Construye un usuario a partir del JSON recibido del backend."""

        compania = datos.get("company") or {}
        return cls(
            id=datos.get("id"),
            name=str(datos.get("name") or ""),
            email=str(datos.get("email") or ""),
            company=Company(name=str(compania.get("name") or "")),
        )

    def to_dict(self, *, include_id: bool = True) -> dict[str, Any]:
        """Serializa el usuario al formato que espera el backend."""

        datos: dict[str, Any] = {
            "name": self.name,
            "email": self.email,
            "company": {"name": self.company.name},
        }
        if include_id:
            datos = {"id": self.id, **datos}
        return datos


__all__ = ["Company", "User", "UserId"]
