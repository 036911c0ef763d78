# -*- coding: utf-8 -*-
"""
Fixtures compartidas: contenedor limpio (datos semilla), reloj fijo,
servicios y cliente Flask.
"""
import pytest

from inventory_dashboard.app_container import AppContainer, get_container
from inventory_dashboard.main import app
from inventory_dashboard.services import FixedClock


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def container(clock):
    """Contenedor nuevo por test: los repositorios vuelven a la semilla."""
    AppContainer.reset_instance()
    c = get_container(clock)
    yield c
    AppContainer.reset_instance()


@pytest.fixture
def inventory_service(container):
    return container.inventory_service


@pytest.fixture
def user_service(container):
    return container.user_service


@pytest.fixture
def users(container):
    """Usuarios semilla por nombre de acceso."""
    return {u.username: u for u in container.user_repo.list()}


@pytest.fixture
def client(container):
    app.config['TESTING'] = True
    with app.test_client() as c:
        yield c


@pytest.fixture
def login(client):
    """Inicia sesión vía API y devuelve la respuesta JSON."""
    def _login(username, password):
        r = client.post('/api/login', json={'username': username, 'password': password})
        assert r.status_code == 200, r.get_json()
        return r.get_json()
    return _login
