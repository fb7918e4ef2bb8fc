"""Ventana principal de la aplicación."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from PyQt6.QtCore import QObject, Qt, QThread, pyqtSignal
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from usuarios_app.core.form import FormMode, UserFormController
from usuarios_app.core.pagination import PaginationView
from usuarios_app.core.services import UserStore
from usuarios_app.models.user import User


@dataclass(slots=True)
class _TableColumns:
    id: int = 0
    first_name: int = 1
    last_name: int = 2
    email: int = 3
    department: int = 4
    actions: int = 5


class _OperationWorker(QObject):
    """Ejecuta una operación del store fuera del hilo de la interfaz."""

    finished = pyqtSignal()

    def __init__(self, operacion: Callable[[], Any]) -> None:
        super().__init__()
        self._operacion = operacion

    def run(self) -> None:
        try:
            self._operacion()
        finally:
            self.finished.emit()


class MainWindow(QMainWindow):
    """Ventana principal con formulario, tabla paginada de usuarios y errores."""

    # Los suscriptores pueden ser notificados desde un hilo de trabajo.
    state_changed = pyqtSignal()

    def __init__(
        self,
        *,
        store: UserStore,
        pagination: PaginationView,
        form_factory: Callable[[Callable[[Callable[[], Any]], None]], UserFormController],
    ) -> None:
        super().__init__()
        self.store = store
        self.pagination = pagination
        self.form = form_factory(self.dispatch)
        self._columns = _TableColumns()
        self._workers: list[tuple[QThread, _OperationWorker]] = []

        self.setWindowTitle("User Management")
        self.resize(900, 480)

        self.error_label = QLabel()
        self.error_label.setObjectName("errorLabel")
        self.error_label.setStyleSheet(
            "background-color: #fee2e2; color: #991b1b; border: 1px solid #fecdd3;"
            "border-radius: 6px; padding: 6px; font-weight: 600;"
        )
        self.error_label.setVisible(False)

        self.inputs: dict[str, QLineEdit] = {}
        form_bar = QHBoxLayout()
        for nombre, placeholder in (
            ("first_name", "First Name"),
            ("last_name", "Last Name"),
            ("email", "Email"),
            ("department", "Department"),
        ):
            line_edit = QLineEdit(placeholderText=placeholder)
            line_edit.textEdited.connect(
                lambda text, campo=nombre: self.form.on_field_change(campo, text)
            )
            line_edit.returnPressed.connect(self._on_submit)
            self.inputs[nombre] = line_edit
            form_bar.addWidget(line_edit)

        self.submit_button = QPushButton("Add User")
        self.submit_button.clicked.connect(self._on_submit)
        form_bar.addWidget(self.submit_button)

        self.table = QTableWidget(columnCount=6)
        self.table.setHorizontalHeaderLabels(
            ["ID", "First Name", "Last Name", "Email", "Department", "Actions"]
        )
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)

        self.pages_bar = QHBoxLayout()

        title = QLabel("User Management")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet("font-size: 15pt; font-weight: 700; color: #1d4ed8;")

        layout = QVBoxLayout()
        layout.addWidget(title)
        layout.addWidget(self.error_label)
        layout.addLayout(form_bar)
        layout.addWidget(self.table)
        layout.addLayout(self.pages_bar)

        container = QWidget()
        container.setLayout(layout)
        self.setCentralWidget(container)

        self.state_changed.connect(self._render)
        for observable in (self.store, self.pagination, self.form):
            observable.subscribe(self.state_changed.emit)

        self._render()

    # ------------------------------------------------------------------
    # Ejecución en segundo plano
    # ------------------------------------------------------------------
    def dispatch(self, operacion: Callable[[], Any]) -> None:
        """Lanza ``operacion`` en un ``QThread`` propio."""

        thread = QThread(self)
        worker = _OperationWorker(operacion)
        worker.moveToThread(thread)

        thread.started.connect(worker.run)
        worker.finished.connect(thread.quit)
        worker.finished.connect(worker.deleteLater)
        thread.finished.connect(lambda: self._limpiar_hilo(thread))

        self._workers.append((thread, worker))
        thread.start()

    def _limpiar_hilo(self, thread: QThread) -> None:
        self._workers = [(t, w) for t, w in self._workers if t is not thread]
        thread.deleteLater()

    # ------------------------------------------------------------------
    # Eventos y acciones
    # ------------------------------------------------------------------
    def reload_data(self) -> None:
        self.dispatch(self.store.load)

    def _on_submit(self) -> None:
        # Equivalente a los campos "required" del formulario.
        if any(not line_edit.text().strip() for line_edit in self.inputs.values()):
            return
        self.form.submit()

    def _on_edit(self, usuario: User) -> None:
        self.form.begin_edit(usuario)

    def _on_delete(self, usuario: User) -> None:
        self.dispatch(lambda: self.store.remove(usuario.id))

    # ------------------------------------------------------------------
    # Renderizado
    # ------------------------------------------------------------------
    def _render(self) -> None:  # pragma: no cover - UI
        error = self.store.error
        self.error_label.setText(error or "")
        self.error_label.setVisible(bool(error))

        campos = self.form.fields
        for nombre, line_edit in self.inputs.items():
            valor = str(getattr(campos, nombre))
            if line_edit.text() != valor:
                line_edit.setText(valor)
        editando = self.form.mode is FormMode.EDITING
        self.submit_button.setText("Update User" if editando else "Add User")

        self._populate_table(self.pagination.visible_users())
        self._populate_pages()

    def _populate_table(self, usuarios: list[User]) -> None:  # pragma: no cover - UI
        self.table.setRowCount(len(usuarios))

        for row, usuario in enumerate(usuarios):
            valores = {
                self._columns.id: str(usuario.id),
                self._columns.first_name: usuario.first_name,
                self._columns.last_name: usuario.last_name,
                self._columns.email: usuario.email,
                self._columns.department: usuario.department,
            }
            for column, texto in valores.items():
                self.table.setItem(row, column, QTableWidgetItem(texto))

            btn_edit = QPushButton("Edit")
            btn_edit.clicked.connect(lambda _=False, u=usuario: self._on_edit(u))
            btn_delete = QPushButton("Delete")
            btn_delete.clicked.connect(lambda _=False, u=usuario: self._on_delete(u))

            acciones = QWidget()
            acciones_layout = QHBoxLayout(acciones)
            acciones_layout.setContentsMargins(2, 2, 2, 2)
            acciones_layout.addWidget(btn_edit)
            acciones_layout.addWidget(btn_delete)
            self.table.setCellWidget(row, self._columns.actions, acciones)

        self.table.resizeColumnsToContents()

    def _populate_pages(self) -> None:  # pragma: no cover - UI
        while self.pages_bar.count():
            item = self.pages_bar.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

        self.pages_bar.addStretch(1)
        for page in self.pagination.page_numbers():
            boton = QPushButton(str(page))
            boton.setCheckable(True)
            boton.setChecked(page == self.pagination.current_page)
            boton.clicked.connect(lambda _=False, p=page: self.pagination.on_page_select(p))
            self.pages_bar.addWidget(boton)
        self.pages_bar.addStretch(1)


__all__ = ["MainWindow"]
