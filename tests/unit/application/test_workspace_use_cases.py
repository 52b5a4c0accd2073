"""
Name: Workspace Use Case Tests

Responsibilities:
  - Create / update / delete workspaces
  - Join by access code, invite by email
  - Role changes, ownership transfer and member removal rules
"""

import threading
from uuid import uuid4

import pytest

from conftest import T0
from sharespace.application.usecases.files import UploadFileInput, UploadFileUseCase
from sharespace.application.usecases.workspace import (
    CreateWorkspaceInput,
    CreateWorkspaceUseCase,
    DeleteWorkspaceUseCase,
    GetWorkspaceUseCase,
    InviteMemberInput,
    InviteMemberUseCase,
    JoinWorkspaceUseCase,
    ListMembersUseCase,
    ListWorkspacesUseCase,
    RemoveMemberInput,
    RemoveMemberUseCase,
    SetMemberRoleInput,
    SetMemberRoleUseCase,
    UpdateWorkspaceInput,
    UpdateWorkspaceUseCase,
    WorkspaceErrorCode,
)
from sharespace.domain.entities import Role

pytestmark = pytest.mark.unit


# =============================================================================
# Create / Get / List
# =============================================================================


class TestCreateWorkspace:
    def test_creator_becomes_single_owner(self, workspace_repo, clock):
        owner = uuid4()
        use_case = CreateWorkspaceUseCase(workspace_repo, clock=clock)

        result = use_case.execute(
            CreateWorkspaceInput(name="  Team  ", description="Docs", actor_id=owner)
        )

        assert result.error is None
        ws = result.workspace
        assert ws.name == "Team"
        assert ws.owner_id == owner
        assert ws.owner_ids() == [owner]
        assert len(ws.access_code) == 8
        assert workspace_repo.get_workspace_by_access_code(ws.access_code).id == ws.id

    def test_blank_name_is_validation_error(self, workspace_repo):
        result = CreateWorkspaceUseCase(workspace_repo).execute(
            CreateWorkspaceInput(name="  ", description="Docs", actor_id=uuid4())
        )
        assert result.error.code == WorkspaceErrorCode.VALIDATION_ERROR

    def test_access_code_collision_is_retried(self, workspace_repo, seeded_workspace):
        seeded_workspace(uuid4(), access_code="taken123")
        codes = iter(["taken123", "fresh456"])
        use_case = CreateWorkspaceUseCase(
            workspace_repo, code_factory=lambda _length: next(codes)
        )

        result = use_case.execute(
            CreateWorkspaceInput(name="Team", description="Docs", actor_id=uuid4())
        )

        assert result.error is None
        assert result.workspace.access_code == "fresh456"

    def test_persistent_collision_is_conflict(self, workspace_repo, seeded_workspace):
        seeded_workspace(uuid4(), access_code="taken123")
        use_case = CreateWorkspaceUseCase(
            workspace_repo, code_factory=lambda _length: "taken123"
        )

        result = use_case.execute(
            CreateWorkspaceInput(name="Team", description="Docs", actor_id=uuid4())
        )

        assert result.error.code == WorkspaceErrorCode.CONFLICT


class TestGetAndListWorkspaces:
    def test_private_workspace_hidden_from_stranger(self, workspace_repo, seeded_workspace):
        ws = seeded_workspace(uuid4())

        result = GetWorkspaceUseCase(workspace_repo).execute(ws.id, uuid4())

        assert result.error.code == WorkspaceErrorCode.FORBIDDEN

    def test_public_workspace_readable_anonymously(self, workspace_repo, seeded_workspace):
        ws = seeded_workspace(uuid4(), is_public=True)

        result = GetWorkspaceUseCase(workspace_repo).execute(ws.id, None)

        assert result.error is None
        assert result.workspace.id == ws.id

    def test_unknown_workspace_is_not_found(self, workspace_repo):
        result = GetWorkspaceUseCase(workspace_repo).execute(uuid4(), uuid4())
        assert result.error.code == WorkspaceErrorCode.NOT_FOUND

    def test_list_only_member_workspaces(self, workspace_repo, seeded_workspace):
        me = uuid4()
        mine = seeded_workspace(me, name="Mine")
        joined = seeded_workspace(uuid4(), members={me: Role.VIEWER}, name="Joined")
        seeded_workspace(uuid4(), name="Other")

        result = ListWorkspacesUseCase(workspace_repo).execute(me)

        assert {ws.id for ws in result.workspaces} == {mine.id, joined.id}


# =============================================================================
# Update / Delete
# =============================================================================


class TestUpdateWorkspace:
    def test_owner_updates_details(self, workspace_repo, seeded_workspace):
        owner = uuid4()
        ws = seeded_workspace(owner)

        result = UpdateWorkspaceUseCase(workspace_repo).execute(
            UpdateWorkspaceInput(
                workspace_id=ws.id,
                actor_id=owner,
                name="Renamed",
                description="New",
                is_public=True,
            )
        )

        assert result.error is None
        assert result.workspace.name == "Renamed"
        assert result.workspace.is_public is True
        assert result.workspace.access_code == ws.access_code

    def test_editor_cannot_update(self, workspace_repo, seeded_workspace):
        editor = uuid4()
        ws = seeded_workspace(uuid4(), members={editor: Role.EDITOR})

        result = UpdateWorkspaceUseCase(workspace_repo).execute(
            UpdateWorkspaceInput(
                workspace_id=ws.id, actor_id=editor, name="X", description="Y"
            )
        )

        assert result.error.code == WorkspaceErrorCode.FORBIDDEN


class TestDeleteWorkspace:
    def test_owner_delete_removes_files_and_blobs(
        self, workspace_repo, file_repo, blob_store, seeded_workspace, clock
    ):
        owner = uuid4()
        ws = seeded_workspace(owner)
        upload = UploadFileUseCase(file_repo, workspace_repo, blob_store, clock=clock)
        for name in ("a.txt", "b.txt"):
            upload.execute(
                UploadFileInput(
                    content=b"x", filename=name, actor_id=owner, workspace_id=ws.id
                )
            )
        assert len(blob_store) == 2

        result = DeleteWorkspaceUseCase(workspace_repo, file_repo, blob_store).execute(
            ws.id, owner
        )

        assert result.error is None
        assert result.deleted is True
        assert result.files_removed == 2
        assert result.storage_cleaned is True
        assert workspace_repo.get_workspace(ws.id) is None
        assert file_repo.list_workspace_files(ws.id) == []
        assert len(blob_store) == 0

    def test_editor_cannot_delete(self, workspace_repo, file_repo, blob_store, seeded_workspace):
        editor = uuid4()
        ws = seeded_workspace(uuid4(), members={editor: Role.EDITOR})

        result = DeleteWorkspaceUseCase(workspace_repo, file_repo, blob_store).execute(
            ws.id, editor
        )

        assert result.error.code == WorkspaceErrorCode.FORBIDDEN
        assert workspace_repo.get_workspace(ws.id) is not None


# =============================================================================
# Join / Invite
# =============================================================================


class TestJoinWorkspace:
    def test_join_adds_viewer_at_end(self, workspace_repo, seeded_workspace, clock):
        owner, joiner = uuid4(), uuid4()
        ws = seeded_workspace(owner, access_code="join1234")

        result = JoinWorkspaceUseCase(workspace_repo, clock=clock).execute(
            joiner, "join1234"
        )

        assert result.error is None
        assert result.membership.role is Role.VIEWER
        assert result.membership.joined_at == T0
        stored = workspace_repo.get_workspace(ws.id)
        assert [m.user_id for m in stored.list_members()] == [owner, joiner]

    def test_invalid_code_is_not_found(self, workspace_repo):
        result = JoinWorkspaceUseCase(workspace_repo).execute(uuid4(), "nope")

        assert result.error.code == WorkspaceErrorCode.NOT_FOUND
        assert result.error.resource == "AccessCode"

    def test_join_twice_is_conflict(self, workspace_repo, seeded_workspace):
        owner = uuid4()
        seeded_workspace(owner, access_code="join1234")

        result = JoinWorkspaceUseCase(workspace_repo).execute(owner, "join1234")

        assert result.error.code == WorkspaceErrorCode.CONFLICT


class TestInviteMember:
    def test_editor_invites_registered_user(
        self, workspace_repo, identity_provider, users, seeded_workspace
    ):
        editor = uuid4()
        invitee = users.create(email="bob@example.com")
        ws = seeded_workspace(uuid4(), members={editor: Role.EDITOR})

        result = InviteMemberUseCase(workspace_repo, identity_provider).execute(
            InviteMemberInput(workspace_id=ws.id, actor_id=editor, email=" Bob@Example.com ")
        )

        assert result.error is None
        assert result.membership.user_id == invitee.id
        assert result.membership.role is Role.VIEWER

    def test_viewer_cannot_invite(
        self, workspace_repo, identity_provider, users, seeded_workspace
    ):
        viewer = uuid4()
        users.create(email="bob@example.com")
        ws = seeded_workspace(uuid4(), members={viewer: Role.VIEWER})

        result = InviteMemberUseCase(workspace_repo, identity_provider).execute(
            InviteMemberInput(workspace_id=ws.id, actor_id=viewer, email="bob@example.com")
        )

        assert result.error.code == WorkspaceErrorCode.FORBIDDEN

    def test_unknown_email_is_not_found(
        self, workspace_repo, identity_provider, seeded_workspace
    ):
        owner = uuid4()
        ws = seeded_workspace(owner)

        result = InviteMemberUseCase(workspace_repo, identity_provider).execute(
            InviteMemberInput(workspace_id=ws.id, actor_id=owner, email="ghost@example.com")
        )

        assert result.error.code == WorkspaceErrorCode.NOT_FOUND
        assert result.error.resource == "User"

    def test_existing_member_is_conflict(
        self, workspace_repo, identity_provider, users, seeded_workspace
    ):
        owner = uuid4()
        bob = users.create(email="bob@example.com")
        ws = seeded_workspace(owner, members={bob.id: Role.VIEWER})

        result = InviteMemberUseCase(workspace_repo, identity_provider).execute(
            InviteMemberInput(workspace_id=ws.id, actor_id=owner, email="bob@example.com")
        )

        assert result.error.code == WorkspaceErrorCode.CONFLICT


# =============================================================================
# Roles / Transfer / Removal
# =============================================================================


class TestSetMemberRole:
    def test_owner_promotes_viewer_to_editor(self, workspace_repo, seeded_workspace):
        owner, viewer = uuid4(), uuid4()
        ws = seeded_workspace(owner, members={viewer: Role.VIEWER})

        result = SetMemberRoleUseCase(workspace_repo).execute(
            SetMemberRoleInput(
                workspace_id=ws.id, actor_id=owner, target_user_id=viewer, role="editor"
            )
        )

        assert result.error is None
        assert workspace_repo.get_workspace(ws.id).role_of(viewer) is Role.EDITOR

    def test_setting_owner_transfers_ownership(self, workspace_repo, seeded_workspace):
        owner, editor = uuid4(), uuid4()
        ws = seeded_workspace(owner, members={editor: Role.EDITOR})

        result = SetMemberRoleUseCase(workspace_repo).execute(
            SetMemberRoleInput(
                workspace_id=ws.id, actor_id=owner, target_user_id=editor, role=Role.OWNER
            )
        )

        assert result.error is None
        stored = workspace_repo.get_workspace(ws.id)
        assert stored.owner_id == editor
        assert stored.owner_ids() == [editor]
        assert stored.role_of(owner) is Role.EDITOR

    def test_concurrent_transfers_by_same_owner(self, workspace_repo, seeded_workspace):
        owner, first, second = uuid4(), uuid4(), uuid4()
        ws = seeded_workspace(owner, members={first: Role.EDITOR, second: Role.EDITOR})
        use_case = SetMemberRoleUseCase(workspace_repo)
        barrier = threading.Barrier(2)
        results = {}

        def transfer(target):
            barrier.wait()
            results[target] = use_case.execute(
                SetMemberRoleInput(
                    workspace_id=ws.id, actor_id=owner, target_user_id=target, role="owner"
                )
            )

        threads = [threading.Thread(target=transfer, args=(t,)) for t in (first, second)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        winners = [target for target, r in results.items() if r.error is None]
        losers = [r for r in results.values() if r.error is not None]
        assert len(winners) == 1
        assert [r.error.code for r in losers] == [WorkspaceErrorCode.FORBIDDEN]
        stored = workspace_repo.get_workspace(ws.id)
        assert stored.owner_ids() == winners
        assert stored.owner_id == winners[0]
        assert stored.role_of(owner) is Role.EDITOR

    def test_former_owner_loses_management_rights(self, workspace_repo, seeded_workspace):
        owner, editor, viewer = uuid4(), uuid4(), uuid4()
        ws = seeded_workspace(owner, members={editor: Role.EDITOR, viewer: Role.VIEWER})
        use_case = SetMemberRoleUseCase(workspace_repo)
        use_case.execute(
            SetMemberRoleInput(
                workspace_id=ws.id, actor_id=owner, target_user_id=editor, role="owner"
            )
        )

        result = use_case.execute(
            SetMemberRoleInput(
                workspace_id=ws.id, actor_id=owner, target_user_id=viewer, role="editor"
            )
        )

        assert result.error.code == WorkspaceErrorCode.FORBIDDEN

    def test_owner_cannot_demote_self(self, workspace_repo, seeded_workspace):
        owner = uuid4()
        ws = seeded_workspace(owner)

        result = SetMemberRoleUseCase(workspace_repo).execute(
            SetMemberRoleInput(
                workspace_id=ws.id, actor_id=owner, target_user_id=owner, role="viewer"
            )
        )

        assert result.error.code == WorkspaceErrorCode.CONFLICT
        assert workspace_repo.get_workspace(ws.id).owner_ids() == [owner]

    def test_invalid_role_is_validation_error(self, workspace_repo, seeded_workspace):
        owner, viewer = uuid4(), uuid4()
        ws = seeded_workspace(owner, members={viewer: Role.VIEWER})

        result = SetMemberRoleUseCase(workspace_repo).execute(
            SetMemberRoleInput(
                workspace_id=ws.id, actor_id=owner, target_user_id=viewer, role="admin"
            )
        )

        assert result.error.code == WorkspaceErrorCode.VALIDATION_ERROR

    def test_non_member_target_is_not_found(self, workspace_repo, seeded_workspace):
        owner = uuid4()
        ws = seeded_workspace(owner)

        result = SetMemberRoleUseCase(workspace_repo).execute(
            SetMemberRoleInput(
                workspace_id=ws.id, actor_id=owner, target_user_id=uuid4(), role="editor"
            )
        )

        assert result.error.code == WorkspaceErrorCode.NOT_FOUND
        assert result.error.resource == "Member"

    def test_editor_cannot_change_roles(self, workspace_repo, seeded_workspace):
        editor, viewer = uuid4(), uuid4()
        ws = seeded_workspace(uuid4(), members={editor: Role.EDITOR, viewer: Role.VIEWER})

        result = SetMemberRoleUseCase(workspace_repo).execute(
            SetMemberRoleInput(
                workspace_id=ws.id, actor_id=editor, target_user_id=viewer, role="editor"
            )
        )

        assert result.error.code == WorkspaceErrorCode.FORBIDDEN


class TestRemoveMember:
    def test_owner_removes_member(self, workspace_repo, seeded_workspace):
        owner, viewer = uuid4(), uuid4()
        ws = seeded_workspace(owner, members={viewer: Role.VIEWER})

        result = RemoveMemberUseCase(workspace_repo).execute(
            RemoveMemberInput(workspace_id=ws.id, actor_id=owner, target_user_id=viewer)
        )

        assert result.error is None
        assert not result.workspace.is_member(viewer)

    def test_member_can_leave(self, workspace_repo, seeded_workspace):
        viewer = uuid4()
        ws = seeded_workspace(uuid4(), members={viewer: Role.VIEWER})

        result = RemoveMemberUseCase(workspace_repo).execute(
            RemoveMemberInput(workspace_id=ws.id, actor_id=viewer, target_user_id=viewer)
        )

        assert result.error is None
        assert not workspace_repo.get_workspace(ws.id).is_member(viewer)

    def test_owner_cannot_leave(self, workspace_repo, seeded_workspace):
        owner = uuid4()
        ws = seeded_workspace(owner)

        result = RemoveMemberUseCase(workspace_repo).execute(
            RemoveMemberInput(workspace_id=ws.id, actor_id=owner, target_user_id=owner)
        )

        assert result.error.code == WorkspaceErrorCode.CONFLICT

    def test_editor_cannot_remove_others(self, workspace_repo, seeded_workspace):
        editor, viewer = uuid4(), uuid4()
        ws = seeded_workspace(uuid4(), members={editor: Role.EDITOR, viewer: Role.VIEWER})

        result = RemoveMemberUseCase(workspace_repo).execute(
            RemoveMemberInput(workspace_id=ws.id, actor_id=editor, target_user_id=viewer)
        )

        assert result.error.code == WorkspaceErrorCode.FORBIDDEN


class TestListMembers:
    def test_members_enriched_with_user_profile(
        self, workspace_repo, user_repo, users, seeded_workspace
    ):
        alice = users.create(email="alice@example.com", name="Alice")
        bob = users.create(email="bob@example.com", name="Bob")
        ws = seeded_workspace(alice.id, members={bob.id: Role.VIEWER})

        result = ListMembersUseCase(workspace_repo, user_repo).execute(ws.id, bob.id)

        assert result.error is None
        assert [(m.email, m.role) for m in result.members] == [
            ("alice@example.com", Role.OWNER),
            ("bob@example.com", Role.VIEWER),
        ]
