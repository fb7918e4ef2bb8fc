"""Configuración de la aplicación leída desde variables de entorno."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_API_BASE = "https://jsonplaceholder.typicode.com"
DEFAULT_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True, slots=True)
class Settings:
    """Parámetros de conexión y de registro."""

    api_base: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Lee ``USUARIOS_API_BASE``, ``USUARIOS_API_TIMEOUT`` y ``USUARIOS_LOG_LEVEL``."""

        env = os.environ if environ is None else environ

        api_base = env.get("USUARIOS_API_BASE", DEFAULT_API_BASE).strip().rstrip("/")
        if not api_base:
            raise ValueError("USUARIOS_API_BASE no puede estar vacío")

        timeout_texto = env.get("USUARIOS_API_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(timeout_texto)
        except ValueError as exc:
            raise ValueError(
                f"USUARIOS_API_TIMEOUT debe ser numérico: {timeout_texto!r}"
            ) from exc
        if timeout <= 0:
            raise ValueError(f"USUARIOS_API_TIMEOUT debe ser positivo: {timeout}")

        log_level = env.get("USUARIOS_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        return cls(api_base=api_base, timeout=timeout, log_level=log_level or DEFAULT_LOG_LEVEL)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = ["Settings", "configure_logging"]
