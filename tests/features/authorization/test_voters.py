"""Tests for the resource voters."""

import pytest

from docmanager.features.authorization.voters import (
    ClientVoter,
    DocumentVoter,
    RoleVoter,
    UserVoter,
    VoteResult,
)
from docmanager.features.resources.entities import Category, Client, Document

from tests.fakes import T0, make_user


@pytest.fixture
def client():
    return Client(id=10, name="Acme", email="acme@example.com", created_at=T0)


@pytest.fixture
def document():
    return Document(id=20, title="Invoice.pdf", client_id=10, category_id=None)


class TestSupports:

    def test_client_collection_attributes(self):
        voter = ClientVoter()
        assert voter.supports("clients.view_list")
        assert voter.supports("clients.view_documents_column")
        assert not voter.supports("documents.view_list")

    def test_client_instance_attributes(self, client):
        voter = ClientVoter()
        assert voter.supports("clients.view_details", client)
        assert voter.supports("clients.delete", client)
        assert not voter.supports("clients.view_list", client)
        assert not voter.supports("clients.create", client)

    def test_foreign_subject_abstains(self, document):
        assert ClientVoter().vote("clients.edit", document, make_user(2, "a@example.com")) == VoteResult.ABSTAIN

    def test_unrelated_subject_type(self):
        category = Category(id=1, name="Invoices")
        assert not DocumentVoter().supports("documents.edit", category)

    def test_document_instance_attributes(self, document):
        voter = DocumentVoter()
        assert voter.supports("documents.download", document)
        assert not voter.supports("documents.create_upload", document)
        assert voter.supports("documents.create_upload")

    def test_user_voter(self):
        voter = UserVoter()
        target = make_user(5, "t@example.com")
        assert voter.supports("users.create")
        assert not voter.supports("users.create", target)
        assert voter.supports("users.assign_roles", target)

    def test_legacy_aliases_only_without_subject(self, client):
        voter = ClientVoter()
        assert voter.supports("CLIENT_VIEW")
        assert not voter.supports("CLIENT_VIEW", client)

    def test_role_voter_prefix(self):
        assert RoleVoter().supports("ROLE_ANYTHING")
        assert not RoleVoter().supports("clients.view_list")


class TestVote:

    def test_anonymous_denied(self):
        assert ClientVoter().vote("clients.view_list", None, None) == VoteResult.DENIED

    def test_admin_granted_everything(self, admin, document):
        assert DocumentVoter().vote("documents.delete", document, admin) == VoteResult.GRANTED
        assert RoleVoter().vote("ROLE_AUDITOR", None, admin) == VoteResult.GRANTED

    def test_defaults_user(self, alice, document):
        voter = DocumentVoter()
        assert voter.vote("documents.delete", document, alice) == VoteResult.GRANTED
        assert UserVoter().vote("users.view", None, alice) == VoteResult.DENIED

    def test_explicit_list(self, reader, client):
        voter = ClientVoter()
        assert voter.vote("clients.view_details", client, reader) == VoteResult.GRANTED
        assert voter.vote("clients.edit", client, reader) == VoteResult.DENIED

    @pytest.mark.parametrize(
        "legacy, granted",
        [
            ("DOCUMENT_VIEW", True),
            ("DOCUMENT_DOWNLOAD", False),
            ("DOCUMENT_UPLOAD", False),
            ("DOCUMENT_MANAGE", False),
        ],
    )
    def test_document_legacy_aliases(self, reader, legacy, granted):
        expected = VoteResult.GRANTED if granted else VoteResult.DENIED
        assert DocumentVoter().vote(legacy, None, reader) == expected

    def test_manage_maps_to_edit_only(self):
        editor = make_user(8, "ed@example.com", permissions=["documents.edit"])
        assert DocumentVoter().canonical_permission("DOCUMENT_MANAGE") == "documents.edit"
        assert DocumentVoter().vote("DOCUMENT_MANAGE", None, editor) == VoteResult.GRANTED
        assert DocumentVoter().vote("DOCUMENT_DELETE", None, editor) == VoteResult.DENIED

    def test_client_view_alias_is_list(self, reader):
        assert ClientVoter().canonical_permission("CLIENT_VIEW") == "clients.view_list"
        assert ClientVoter().vote("CLIENT_VIEW", None, reader) == VoteResult.GRANTED

    def test_role_voter_uses_effective_roles(self, alice):
        voter = RoleVoter()
        assert voter.vote("ROLE_USER", None, alice) == VoteResult.GRANTED
        assert voter.vote("ROLE_ADMIN", None, alice) == VoteResult.DENIED

    def test_unknown_key_abstains(self, alice):
        assert ClientVoter().supports("clients.archive") is False
        assert ClientVoter().vote("clients.archive", None, alice) == VoteResult.ABSTAIN
