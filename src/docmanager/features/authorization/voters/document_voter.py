"""Document family voter."""

from ...permissions.catalog import Permission
from ...resources.entities import Document
from .base import ResourceVoter


class DocumentVoter(ResourceVoter):
    family = "document"
    subject_type = Document

    instance_attributes = frozenset({
        Permission.DOCUMENTS_VIEW_DETAILS.value,
        Permission.DOCUMENTS_EDIT.value,
        Permission.DOCUMENTS_DELETE.value,
        Permission.DOCUMENTS_DOWNLOAD.value,
    })

    collection_attributes = frozenset({
        Permission.DOCUMENTS_VIEW_LIST.value,
        Permission.DOCUMENTS_VIEW_DETAILS.value,
        Permission.DOCUMENTS_CREATE_UPLOAD.value,
        Permission.DOCUMENTS_EDIT.value,
        Permission.DOCUMENTS_DELETE.value,
        Permission.DOCUMENTS_DOWNLOAD.value,
    })

    # DOCUMENT_MANAGE predates the split into edit/delete and maps to edit only.
    legacy_aliases = {
        "DOCUMENT_VIEW": Permission.DOCUMENTS_VIEW_LIST.value,
        "DOCUMENT_DOWNLOAD": Permission.DOCUMENTS_DOWNLOAD.value,
        "DOCUMENT_UPLOAD": Permission.DOCUMENTS_CREATE_UPLOAD.value,
        "DOCUMENT_EDIT": Permission.DOCUMENTS_EDIT.value,
        "DOCUMENT_DELETE": Permission.DOCUMENTS_DELETE.value,
        "DOCUMENT_MANAGE": Permission.DOCUMENTS_EDIT.value,
    }
