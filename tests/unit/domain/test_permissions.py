"""
Name: Capability Table Tests

Responsibilities:
  - Pin the role -> action matrix
  - Validate public-workspace read access for non-members
"""

from uuid import uuid4

import pytest

from conftest import make_workspace
from sharespace.domain.entities import Role
from sharespace.domain.permissions import (
    CAPABILITIES,
    PUBLIC_ACTIONS,
    Action,
    allows,
    can_view_workspace,
    workspace_allows,
)

pytestmark = pytest.mark.unit

_EXPECTED = {
    Action.VIEW: (True, True, True),
    Action.UPLOAD: (True, True, True),
    Action.SOFT_DELETE: (True, True, True),
    Action.RESTORE: (True, True, True),
    Action.PURGE: (False, False, True),
    Action.RENAME_MOVE: (False, True, True),
    Action.INVITE_MEMBER: (False, True, True),
    Action.MANAGE_MEMBERS: (False, False, True),
    Action.UPDATE_WORKSPACE: (False, False, True),
    Action.DELETE_WORKSPACE: (False, False, True),
}


@pytest.mark.parametrize("action", list(Action))
def test_capability_matrix(action):
    viewer, editor, owner = _EXPECTED[action]
    assert allows(Role.VIEWER, action) is viewer
    assert allows(Role.EDITOR, action) is editor
    assert allows(Role.OWNER, action) is owner


def test_every_role_has_an_entry_and_roles_are_nested():
    assert set(CAPABILITIES) == set(Role)
    assert CAPABILITIES[Role.VIEWER] <= CAPABILITIES[Role.EDITOR]
    assert CAPABILITIES[Role.EDITOR] <= CAPABILITIES[Role.OWNER]


def test_capability_table_is_read_only():
    with pytest.raises(TypeError):
        CAPABILITIES[Role.VIEWER] = frozenset()


def test_non_member_of_private_workspace_has_no_access():
    ws = make_workspace(uuid4())
    stranger = uuid4()

    assert can_view_workspace(ws, stranger) is False
    assert all(not workspace_allows(ws, stranger, a) for a in Action)


def test_non_member_of_public_workspace_can_only_view():
    ws = make_workspace(uuid4(), is_public=True)

    for actor in (uuid4(), None):
        assert can_view_workspace(ws, actor) is True
        for action in Action:
            assert workspace_allows(ws, actor, action) is (action in PUBLIC_ACTIONS)


def test_member_rights_follow_role_even_in_public_workspace():
    viewer = uuid4()
    ws = make_workspace(uuid4(), members={viewer: Role.VIEWER}, is_public=True)

    assert workspace_allows(ws, viewer, Action.UPLOAD) is True
    assert workspace_allows(ws, viewer, Action.PURGE) is False
