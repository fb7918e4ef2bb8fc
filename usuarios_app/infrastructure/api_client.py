"""Cliente HTTP del servicio REST de usuarios.

Encapsula las cuatro operaciones del recurso ``/users``. Cualquier fallo de
transporte, de estado HTTP o de formato se traduce a :class:`APIError`
conservando la causa original.
"""

from __future__ import annotations

import json
import logging
import socket
from http.client import HTTPException
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from usuarios_app.config import DEFAULT_API_BASE, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Fallo al comunicarse con el servicio remoto."""


class APIClient:
    """Provee acceso HTTP al recurso de usuarios."""

    def __init__(self, api_base: str = DEFAULT_API_BASE, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    def obtener_usuarios(self) -> Any:
        """GET /users: colección completa, sin parámetros de paginación."""

        return self._request("GET", "/users")

    def crear_usuario(self, datos: dict[str, Any]) -> Any:
        """POST /users: devuelve el objeto con el ``id`` asignado."""

        return self._request("POST", "/users", datos)

    def reemplazar_usuario(self, user_id: Any, datos: dict[str, Any]) -> Any:
        """PUT /users/{id}: reemplazo completo del registro."""

        return self._request("PUT", f"/users/{user_id}", datos)

    def eliminar_usuario(self, user_id: Any) -> Any:
        """DELETE /users/{id}."""

        return self._request("DELETE", f"/users/{user_id}")

    # ------------------------------------------------------------------
    # Transporte
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        url = f"{self.api_base}{path}"
        headers = {"Accept": "application/json"}
        data = None
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"

        logger.debug("%s %s", method, url)
        try:
            with urlopen(
                Request(url, data=data, method=method, headers=headers),
                timeout=self.timeout,
            ) as response:
                raw = response.read()
        except HTTPError as exc:
            raise APIError(f"{method} {url} respondió HTTP {exc.code}") from exc
        except URLError as exc:
            if isinstance(exc.reason, socket.timeout):
                raise APIError(f"{method} {url} expiró por timeout") from exc
            raise APIError(f"No se pudo conectar a {url}: {exc.reason}") from exc
        except TimeoutError as exc:
            raise APIError(f"{method} {url} expiró por timeout") from exc
        except (OSError, HTTPException) as exc:
            raise APIError(f"Fallo de comunicación en {method} {url}: {exc!r}") from exc

        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise APIError(f"Respuesta inválida de {method} {url}") from exc


__all__ = ["APIClient", "APIError"]
