"""Client family voter."""

from ...permissions.catalog import Permission
from ...resources.entities import Client
from .base import ResourceVoter


class ClientVoter(ResourceVoter):
    family = "client"
    subject_type = Client

    instance_attributes = frozenset({
        Permission.CLIENTS_VIEW_DETAILS.value,
        Permission.CLIENTS_EDIT.value,
        Permission.CLIENTS_DELETE.value,
    })

    collection_attributes = frozenset({
        Permission.CLIENTS_VIEW_LIST.value,
        Permission.CLIENTS_VIEW_DETAILS.value,
        Permission.CLIENTS_CREATE.value,
        Permission.CLIENTS_EDIT.value,
        Permission.CLIENTS_DELETE.value,
        Permission.CLIENTS_VIEW_DOCUMENTS_COLUMN.value,
        Permission.CLIENTS_VIEW_ACTIONS_COLUMN.value,
        Permission.CLIENTS_VIEW_BUTTON.value,
    })

    legacy_aliases = {
        "CLIENT_VIEW": Permission.CLIENTS_VIEW_LIST.value,
        "CLIENT_CREATE": Permission.CLIENTS_CREATE.value,
        "CLIENT_EDIT": Permission.CLIENTS_EDIT.value,
        "CLIENT_DELETE": Permission.CLIENTS_DELETE.value,
    }
