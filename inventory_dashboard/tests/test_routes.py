# -*- coding: utf-8 -*-
"""
Tests de la API Flask: sesión, tablero, inventario, usuarios y errores JSON
"""
import pytest
from werkzeug.routing import RequestRedirect

from inventory_dashboard.main import app, handle_http_error


# =========================================================================
# SESIÓN
# =========================================================================

def test_login_stores_user_without_password(client, login):
    body = login('admin', 'admin123')
    assert body['ok'] is True
    assert body['user']['username'] == 'admin'
    assert 'password' not in body['user']

    with client.session_transaction() as s:
        assert s['currentUser']['id'] == '1'
        assert 'password' not in s['currentUser']


def test_login_with_wrong_password(client):
    r = client.post('/api/login', json={'username': 'admin', 'password': 'nope'})
    assert r.status_code == 401
    assert r.get_json() == {
        'ok': False, 'error': 'Usuario o contraseña incorrecta.', 'code': 'INVALID_CREDENTIALS'
    }


def test_login_requires_both_fields(client):
    r = client.post('/api/login', json={'username': 'admin'})
    assert r.status_code == 400
    assert r.get_json()['errors'] == {'password': 'Campo requerido'}


def test_session_restore_and_logout(client, login):
    assert client.get('/api/session').get_json()['user'] is None
    login('support', 'support123')
    assert client.get('/api/session').get_json()['user']['username'] == 'support'

    assert client.post('/api/logout').status_code == 200
    assert client.get('/api/session').get_json()['user'] is None


def test_session_survives_data_reset(client, login, container):
    """La sesión guardada no se vuelve a validar contra el repositorio."""
    login('admin', 'admin123')
    client.post('/api/users', json={
        'username': 'temp', 'name': 'Temp', 'email': 'temp@company.com',
        'password': 'temp1', 'permissions': ['view'],
    })
    login('temp', 'temp1')
    container.reset()
    assert container.user_service.authenticate('temp', 'temp1') is None

    r = client.get('/api/session')
    assert r.get_json()['user']['username'] == 'temp'
    assert client.get('/api/dashboard').status_code == 200


def test_protected_routes_require_login(client):
    for path in ('/api/dashboard', '/api/items', '/api/analytics', '/api/users'):
        r = client.get(path)
        assert r.status_code == 401
        assert r.get_json()['code'] == 'NOT_AUTHENTICATED'


def test_security_headers(client):
    r = client.get('/health')
    assert r.status_code == 200
    assert r.headers['X-Frame-Options'] == 'DENY'
    assert r.headers['X-Content-Type-Options'] == 'nosniff'


def test_unknown_route_answers_json(client):
    r = client.get('/api/nothing-here')
    assert r.status_code == 404
    assert r.get_json()['ok'] is False
    assert r.get_json()['code'] == 'NOT_FOUND'


# =========================================================================
# TABLERO
# =========================================================================

def test_admin_dashboard_is_system_wide(client, login):
    login('admin', 'admin123')
    body = client.get('/api/dashboard').get_json()
    assert body['title'] == 'System Overview'
    assert body['summary'] == {
        'department': None, 'totalItems': 12, 'availableItems': 6,
        'lowStockItems': 4, 'outOfStockItems': 2,
    }
    assert [i['id'] for i in body['recent']] == ['2', '11', '7', '8', '5']
    assert [i['id'] for i in body['outOfStock']] == ['3', '9']


def test_department_dashboard_is_scoped(client, login):
    login('hrmanager', 'hr123')
    body = client.get('/api/dashboard').get_json()
    assert body['title'] == 'HR Department Dashboard'
    assert body['summary']['department'] == 'HR'
    assert body['summary']['totalItems'] == 2
    assert [i['id'] for i in body['lowStock']] == ['5']
    assert {i['department'] for i in body['recent']} == {'HR'}


def test_analytics_distribution_only_for_admin(client, login):
    login('salesrep', 'sales123')
    body = client.get('/api/analytics').get_json()
    assert body['statusCounts'] == {'available': 1, 'low': 1, 'out-of-stock': 0}
    assert body['departmentDistribution'] == []

    login('admin', 'admin123')
    body = client.get('/api/analytics').get_json()
    assert body['topCategories'][0] == {'category': 'Hardware', 'count': 3}
    assert len(body['departmentDistribution']) == 6


def test_summary_endpoint_scope(client, login):
    login('clerk', 'clerk123')
    assert client.get('/api/summary').get_json()['summary']['department'] == 'Clerks'
    r = client.get('/api/summary?department=IT')
    assert r.status_code == 403
    assert r.get_json()['code'] == 'NOT_AUTHORIZED'

    login('admin', 'admin123')
    body = client.get('/api/summary?department=Electric').get_json()
    assert body['summary']['totalItems'] == 2
    assert client.get('/api/summary?department=Mars').status_code == 400


def test_options_prefill_department(client, login):
    login('electric', 'electric123')
    body = client.get('/api/options').get_json()
    assert body['defaultDepartment'] == 'Electric'
    assert 'Office Supplies' in body['categories']
    assert body['can'] == {'view': True, 'edit': True, 'add': True, 'delete': True}

    login('admin', 'admin123')
    assert client.get('/api/options').get_json()['defaultDepartment'] == 'IT'


# =========================================================================
# INVENTARIO
# =========================================================================

def test_items_are_scoped_and_filterable(client, login):
    login('support', 'support123')
    body = client.get('/api/items').get_json()
    assert [i['id'] for i in body['items']] == ['8', '9']
    assert body['categories'] == ['Accessories', 'Hardware']

    body = client.get('/api/items?status=out-of-stock').get_json()
    assert [i['id'] for i in body['items']] == ['9']
    body = client.get('/api/items?q=headset').get_json()
    assert [i['id'] for i in body['items']] == ['8']


def test_read_item_outside_scope_is_forbidden(client, login):
    login('support', 'support123')
    assert client.get('/api/items/8').status_code == 200
    assert client.get('/api/items/1').status_code == 403
    assert client.get('/api/items/404').status_code == 404


def test_create_item(client, login):
    login('clerk', 'clerk123')
    r = client.post('/api/items', json={
        'name': 'Stapler', 'description': 'Heavy duty stapler', 'quantity': '3',
        'category': 'Office Supplies', 'location': 'Mail Room',
    })
    assert r.status_code == 201
    item = r.get_json()['item']
    assert item['department'] == 'Clerks'
    assert item['status'] == 'low'
    assert item['addedBy'] == '6'
    assert client.get(f"/api/items/{item['id']}").status_code == 200


def test_create_item_validation_error(client, login):
    login('admin', 'admin123')
    r = client.post('/api/items', json={'name': '', 'quantity': -1})
    assert r.status_code == 400
    body = r.get_json()
    assert body['code'] == 'VALIDATION_ERROR'
    assert set(body['errors']) == {'name', 'description', 'category', 'location', 'quantity'}


def test_create_item_without_permission(client, login):
    login('salesrep', 'sales123')
    r = client.post('/api/items', json={
        'name': 'Pens', 'description': 'Blue pens', 'quantity': 10,
        'category': 'Office Supplies', 'location': 'Sales Office',
    })
    assert r.status_code == 403


def test_setting_status_directly_is_rejected(client, login):
    login('admin', 'admin123')
    r = client.patch('/api/items/1', json={'status': 'out-of-stock'})
    assert r.status_code == 422
    assert r.get_json()['code'] == 'INVARIANT_VIOLATION'
    assert client.get('/api/items/1').get_json()['item']['status'] == 'available'


def test_patch_and_put_item(client, login):
    login('itmanager', 'it123')
    r = client.patch('/api/items/1', json={'quantity': '5'})
    assert r.status_code == 200
    assert r.get_json()['item']['status'] == 'low'

    r = client.put('/api/items/1', json={'name': 'Only a name'})
    assert r.status_code == 400

    r = client.put('/api/items/1', json={
        'name': 'Dell Latitude 7450', 'description': 'Refreshed model', 'department': 'IT',
        'quantity': 0, 'category': 'Hardware', 'location': 'IT Storage Room A',
    })
    assert r.status_code == 200
    assert r.get_json()['item']['status'] == 'out-of-stock'


def test_edit_outside_scope_via_api(client, login):
    login('support', 'support123')
    r = client.patch('/api/items/1', json={'quantity': 1})
    assert r.status_code == 403


def test_delete_item_via_api(client, login):
    login('electric', 'electric123')
    assert client.delete('/api/items/11').status_code == 200
    assert client.get('/api/items/11').status_code == 404
    assert client.delete('/api/items/11').status_code == 404


# =========================================================================
# USUARIOS
# =========================================================================

def test_users_are_admin_only(client, login):
    login('itmanager', 'it123')
    r = client.get('/api/users')
    assert r.status_code == 403
    assert client.delete('/api/users/4').status_code == 403


def test_user_crud(client, login):
    login('admin', 'admin123')
    r = client.post('/api/users', json={
        'username': 'auditor', 'name': 'Ana Auditor', 'email': 'auditor@company.com',
        'password': 'audit1', 'department': 'HR', 'isAdmin': False, 'permissions': ['view'],
    })
    assert r.status_code == 201
    user = r.get_json()['user']
    assert user['department'] == 'HR'
    assert 'password' not in user

    r = client.put(f"/api/users/{user['id']}", json={'permissions': ['view', 'add'], 'password': ''})
    assert r.status_code == 200
    assert r.get_json()['user']['permissions'] == ['view', 'add']

    users = client.get('/api/users?q=auditor').get_json()['users']
    assert [u['username'] for u in users] == ['auditor']

    assert client.delete(f"/api/users/{user['id']}").status_code == 200
    assert client.get('/api/users?q=auditor').get_json()['users'] == []


def test_duplicate_username_is_conflict(client, login):
    login('admin', 'admin123')
    r = client.post('/api/users', json={
        'username': 'support', 'name': 'Other', 'email': 'other@company.com',
        'password': 'x', 'permissions': ['view'],
    })
    assert r.status_code == 409
    assert r.get_json()['code'] == 'DUPLICATE'


def test_invalid_user_form(client, login):
    login('admin', 'admin123')
    r = client.post('/api/users', json={
        'username': 'bad', 'name': 'Bad', 'email': 'not-an-email', 'password': 'x',
        'permissions': [],
    })
    assert r.status_code == 400
    assert set(r.get_json()['errors']) == {'email', 'permissions'}


@pytest.mark.parametrize('method,payload', [
    ('delete', None),
    ('put', {'isAdmin': False}),
])
def test_seed_admin_is_protected_via_api(client, login, method, payload):
    login('admin', 'admin123')
    call = getattr(client, method)
    r = call('/api/users/1', json=payload) if payload is not None else call('/api/users/1')
    assert r.status_code == 403
    assert r.get_json()['code'] == 'PROTECTED_RESOURCE'


@pytest.mark.parametrize('payload,field', [
    ({'password': 12345}, 'password'),
    ({'permissions': 5}, 'permissions'),
])
def test_user_update_with_wrong_types_is_validation_error(client, login, payload, field):
    login('admin', 'admin123')
    r = client.put('/api/users/2', json=payload)
    assert r.status_code == 400
    assert field in r.get_json()['errors']


def test_created_user_password_must_be_text(client, login):
    login('admin', 'admin123')
    r = client.post('/api/users', json={
        'username': 'nina', 'name': 'Nina Paz', 'email': 'nina@company.com',
        'password': 12345, 'permissions': ['view'],
    })
    assert r.status_code == 400
    assert r.get_json()['errors'] == {'password': 'Debe ser texto'}

    r = client.post('/api/users', json={
        'username': 'nina', 'name': 'Nina Paz', 'email': 'nina@company.com',
        'password': '12345', 'permissions': ['view'],
    })
    assert r.status_code == 201
    login('nina', '12345')


def test_redirects_keep_location_header():
    with app.test_request_context('/api/items/'):
        redirect = RequestRedirect('http://localhost/api/items')
        assert handle_http_error(redirect) is redirect
        response = redirect.get_response()
        assert response.status_code == 308
        assert response.headers['Location'] == 'http://localhost/api/items'
