# -*- coding: utf-8 -*-
"""
Tests de alcance por departamento y permisos
"""
import pytest

from inventory_dashboard.models import Department, Permission, User
from inventory_dashboard.services import (
    can_perform,
    default_department_for,
    is_in_scope,
    visible_items,
)


def test_admin_sees_every_item_in_order(inventory_service, users):
    items = inventory_service.all_items()
    visible = visible_items(users['admin'], items)
    assert [i.id for i in visible] == [i.id for i in items]
    assert len(visible) == 12


def test_non_admin_sees_only_own_department(inventory_service, users):
    items = inventory_service.all_items()
    visible = visible_items(users['hrmanager'], items)
    assert [i.id for i in visible] == ['4', '5']
    assert all(i.department == Department.HR for i in visible)


def test_no_user_sees_nothing(inventory_service):
    assert visible_items(None, inventory_service.all_items()) == []


def test_view_is_always_granted_to_authenticated_users(users):
    assert can_perform(users['salesrep'], Permission.VIEW)
    assert can_perform(users['salesrep'], 'view')


@pytest.mark.parametrize('username,action,expected', [
    ('salesrep', 'add', False),
    ('salesrep', 'edit', False),
    ('hrmanager', 'add', True),
    ('hrmanager', 'delete', False),
    ('support', 'edit', True),
    ('electric', 'delete', True),
])
def test_capabilities_follow_stored_permissions(users, username, action, expected):
    assert can_perform(users[username], action) is expected


def test_admin_has_every_permission_even_if_list_is_short():
    boss = User(id='x', username='boss', is_admin=True, permissions=[Permission.VIEW])
    for action in Permission:
        assert can_perform(boss, action)


def test_unknown_action_or_missing_user_is_denied(users):
    assert can_perform(users['admin'], 'export') is False
    assert can_perform(None, 'view') is False


def test_scope_check(users):
    assert is_in_scope(users['admin'], Department.SALES)
    assert is_in_scope(users['support'], 'Support')
    assert not is_in_scope(users['support'], Department.IT)
    assert not is_in_scope(users['support'], 'Marketing')
    assert not is_in_scope(None, Department.IT)


def test_default_department(users):
    assert default_department_for(users['admin']) == Department.IT
    assert default_department_for(users['clerk']) == Department.CLERKS
    assert default_department_for(None) == Department.IT
