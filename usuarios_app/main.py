"""Punto de entrada de la aplicación.

Crea los componentes de infraestructura, servicios y estado, y arranca la
interfaz gráfica principal.
"""

from __future__ import annotations

import sys

from PyQt6.QtWidgets import QApplication

from usuarios_app.config import Settings, configure_logging
from usuarios_app.core.form import UserFormController
from usuarios_app.core.pagination import PaginationView
from usuarios_app.core.services import UserStore
from usuarios_app.infrastructure.api_client import APIClient
from usuarios_app.infrastructure.repositories import UserRepository
from usuarios_app.ui.main_window import MainWindow


def main() -> None:
    """Arranca la aplicación PyQt6 con las dependencias configuradas."""

    settings = Settings.from_env()
    configure_logging(settings)

    app = QApplication(sys.argv)

    api_client = APIClient(settings.api_base, timeout=settings.timeout)
    repository = UserRepository(api_client)
    store = UserStore(repository)
    pagination = PaginationView(store)

    window = MainWindow(
        store=store,
        pagination=pagination,
        form_factory=lambda dispatch: UserFormController(store, dispatch=dispatch),
    )
    window.show()
    window.reload_data()

    sys.exit(app.exec())


if __name__ == "__main__":  # pragma: no cover - punto de entrada interactivo
    main()
