"""Tests de UserStore."""

from __future__ import annotations

import threading

import pytest

from conftest import FakeAPIClient, make_user
from usuarios_app.core.errors import OperationKind
from usuarios_app.core.services import UserStore
from usuarios_app.infrastructure.api_client import APIError
from usuarios_app.infrastructure.repositories import UserRepository
from usuarios_app.models.user import Company, User


class TestLoad:
    """UserStore.load()"""

    def test_replaces_list(self, fake_api: FakeAPIClient, store: UserStore) -> None:
        assert store.load()
        assert [u.id for u in store.users] == list(range(1, 13))
        assert fake_api.calls == [("list", None)]

    def test_load_twice_is_idempotent(self, store: UserStore) -> None:
        store.load()
        primero = store.users
        store.load()
        assert store.users == primero

    def test_load_does_not_merge(self, fake_api: FakeAPIClient, loaded_store: UserStore) -> None:
        fake_api.usuarios = [make_user(50).to_dict()]
        loaded_store.load()
        assert [u.id for u in loaded_store.users] == [50]

    def test_failure_keeps_list_and_sets_error(
        self, fake_api: FakeAPIClient, loaded_store: UserStore
    ) -> None:
        antes = loaded_store.users
        fake_api.fail_on.add("list")

        assert loaded_store.load() is False

        assert loaded_store.users == antes
        assert loaded_store.error == OperationKind.FETCH.message
        assert loaded_store.error == "Failed to fetch users. Please try again later."


class TestAdd:
    """UserStore.add()"""

    def test_appends_with_server_id(self, fake_api: FakeAPIClient, loaded_store: UserStore) -> None:
        record = User(id=None, name="Jane Doe", email="jane@x.com", company=Company(name="Eng"))

        assert loaded_store.add(record)

        nuevo = loaded_store.users[-1]
        assert nuevo == User(id=99, name="Jane Doe", email="jane@x.com", company=Company(name="Eng"))
        assert len(loaded_store.users) == 13

    def test_sends_record_without_id(self, fake_api: FakeAPIClient, loaded_store: UserStore) -> None:
        loaded_store.add(User(id="", name="Jane Doe", email="jane@x.com"))
        operacion, datos = fake_api.calls[-1]
        assert operacion == "create"
        assert "id" not in datos

    def test_failure_leaves_list_unchanged(
        self, fake_api: FakeAPIClient, loaded_store: UserStore
    ) -> None:
        antes = loaded_store.users
        fake_api.fail_on.add("create")

        assert loaded_store.add(make_user(0)) is False

        assert loaded_store.users == antes
        assert loaded_store.error == OperationKind.ADD.message

    def test_duplicate_server_id_is_rejected(
        self, fake_api: FakeAPIClient, loaded_store: UserStore
    ) -> None:
        fake_api.next_id = 3
        antes = loaded_store.users

        assert loaded_store.add(User(id=None, name="Otro Usuario", email="o@x.com")) is False

        assert loaded_store.users == antes
        assert loaded_store.error == OperationKind.ADD.message
        ids = [u.id for u in loaded_store.users]
        assert len(ids) == len(set(ids))


class TestUpdate:
    """UserStore.update()"""

    def test_replaces_entry_and_clears_editing(self, loaded_store: UserStore) -> None:
        original = loaded_store.users[6]
        loaded_store.begin_edit(original)
        editado = User(id=original.id, name="Nuevo Nombre", email="n@x.com", company=Company("QA"))

        assert loaded_store.update(editado)

        assert loaded_store.users[6] == editado
        assert loaded_store.editing is None
        assert len(loaded_store.users) == 12

    def test_sends_full_record_keyed_by_id(
        self, fake_api: FakeAPIClient, loaded_store: UserStore
    ) -> None:
        editado = User(id=4, name="A B", email="a@b.com", company=Company("C"))
        loaded_store.update(editado)
        assert fake_api.calls[-1] == ("replace", (4, editado.to_dict()))

    def test_failure_keeps_list_and_editing(
        self, fake_api: FakeAPIClient, loaded_store: UserStore
    ) -> None:
        original = loaded_store.users[0]
        loaded_store.begin_edit(original)
        antes = loaded_store.users
        fake_api.fail_on.add("replace")

        assert loaded_store.update(User(id=1, name="X Y", email="x@y.com")) is False

        assert loaded_store.users == antes
        assert loaded_store.editing == original
        assert loaded_store.error == "Failed to edit user. Please try again."


class TestRemove:
    """UserStore.remove()"""

    def test_removes_by_id(self, fake_api: FakeAPIClient, loaded_store: UserStore) -> None:
        assert loaded_store.remove(7)
        assert 7 not in [u.id for u in loaded_store.users]
        assert fake_api.calls[-1] == ("delete", 7)

    def test_failure_sets_error(self, fake_api: FakeAPIClient, loaded_store: UserStore) -> None:
        fake_api.fail_on.add("delete")
        assert loaded_store.remove(7) is False
        assert 7 in [u.id for u in loaded_store.users]
        assert loaded_store.error == OperationKind.DELETE.message


class TestErrorsAndNotifications:
    """Último error y avisos de cambio de estado."""

    def test_new_error_overwrites_previous(
        self, fake_api: FakeAPIClient, loaded_store: UserStore
    ) -> None:
        fake_api.fail_on.update({"create", "delete"})
        loaded_store.add(make_user(0))
        loaded_store.remove(1)
        assert loaded_store.error == OperationKind.DELETE.message

    def test_success_clears_error(self, fake_api: FakeAPIClient, loaded_store: UserStore) -> None:
        fake_api.fail_on.add("delete")
        loaded_store.remove(1)
        assert loaded_store.error is not None

        fake_api.fail_on.clear()
        assert loaded_store.remove(1)
        assert loaded_store.error is None

    def test_subscribers_notified_on_success_and_failure(
        self, fake_api: FakeAPIClient, store: UserStore
    ) -> None:
        avisos: list[int] = []
        unsubscribe = store.subscribe(lambda: avisos.append(len(store.users)))

        store.load()
        fake_api.fail_on.add("delete")
        store.remove(1)
        unsubscribe()
        store.load()

        assert avisos == [12, 12]

    def test_non_api_errors_propagate(self) -> None:
        class Roto(FakeAPIClient):
            def obtener_usuarios(self):
                raise RuntimeError("bug")

        store = UserStore(UserRepository(Roto()))
        with pytest.raises(RuntimeError):
            store.load()


class TestSerialization:
    """Una llamada en curso por tipo de operación."""

    def test_same_kind_calls_do_not_overlap(self, remote_users) -> None:
        en_curso = 0
        maximo = 0
        contador = threading.Lock()
        barrera = threading.Event()

        class Lento(FakeAPIClient):
            def eliminar_usuario(self, user_id):
                nonlocal en_curso, maximo
                with contador:
                    en_curso += 1
                    maximo = max(maximo, en_curso)
                barrera.wait(0.05)
                with contador:
                    en_curso -= 1
                return super().eliminar_usuario(user_id)

        store = UserStore(UserRepository(Lento(remote_users)))
        store.load()
        hilos = [threading.Thread(target=store.remove, args=(i,)) for i in range(1, 6)]
        for hilo in hilos:
            hilo.start()
        for hilo in hilos:
            hilo.join()

        assert maximo == 1
        assert [u.id for u in store.users] == list(range(6, 13))

    def _delete_in_flight(self, remote_users, *, falla: bool):
        en_vuelo = threading.Event()
        liberar = threading.Event()

        class Bloqueado(FakeAPIClient):
            def eliminar_usuario(self, user_id):
                en_vuelo.set()
                assert liberar.wait(5)
                if falla:
                    raise APIError("conexión cerrada")
                return super().eliminar_usuario(user_id)

        store = UserStore(UserRepository(Bloqueado(remote_users)))
        hilo = threading.Thread(target=store.remove, args=(1,))
        hilo.start()
        assert en_vuelo.wait(5)
        return store, hilo, liberar

    def test_other_kinds_run_while_delete_in_flight(self, remote_users) -> None:
        store, hilo_delete, liberar = self._delete_in_flight(remote_users, falla=False)

        hilo_load = threading.Thread(target=store.load)
        hilo_load.start()
        hilo_load.join(5)
        assert not hilo_load.is_alive()
        assert [u.id for u in store.users] == list(range(1, 13))

        liberar.set()
        hilo_delete.join(5)

        # load terminó primero; el delete se aplica sobre la lista ya cargada
        assert [u.id for u in store.users] == list(range(2, 13))
        assert store.error is None

    def test_last_completion_sets_error(self, remote_users) -> None:
        store, hilo_delete, liberar = self._delete_in_flight(remote_users, falla=True)

        assert store.load()
        assert store.error is None

        liberar.set()
        hilo_delete.join(5)

        assert [u.id for u in store.users] == list(range(1, 13))
        assert store.error == OperationKind.DELETE.message
