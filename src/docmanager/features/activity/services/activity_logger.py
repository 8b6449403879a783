"""Audit logging of document and client operations.

Called by the document and client handlers, which live outside this package.
"""

import logging
from typing import Optional, Union

from ...resources.entities import Client, Document
from ...users.entities.user import User
from ..entities.activity_log import ActivityAction, ActivityLog
from ..repositories.activity_log_repository import ActivityLogRepository

logger = logging.getLogger(__name__)


class ActivityLogger:
    """Records who did what; one row per operation."""

    def __init__(self, repository: ActivityLogRepository):
        self.repository = repository

    async def log(
        self,
        user: User,
        action: Union[ActivityAction, str],
        document: Optional[Document] = None,
        client: Optional[Client] = None,
        details: Optional[str] = None,
    ) -> ActivityLog:
        """Persist one entry. A document entry also references its owning client."""
        if client is not None:
            client_id = client.id
        else:
            client_id = document.client_id if document else None

        entry = ActivityLog(
            user_id=user.id,
            action=action.value if isinstance(action, ActivityAction) else str(action),
            document_id=document.id if document else None,
            client_id=client_id,
            details=details,
        )
        saved = await self.repository.add(entry)
        logger.debug(f"Activity {saved.action} recorded for user {user.id}")
        return saved

    async def log_upload(self, user: User, document: Document) -> ActivityLog:
        return await self.log(user, ActivityAction.UPLOAD, document, details=f"Uploaded: {document.title}")

    async def log_delete(self, user: User, document: Document) -> ActivityLog:
        return await self.log(user, ActivityAction.DELETE, document, details=f"Moved to trash: {document.title}")

    async def log_permanent_delete(self, user: User, document: Document) -> ActivityLog:
        return await self.log(
            user, ActivityAction.PERMANENT_DELETE, document, details=f"Permanently deleted: {document.title}"
        )

    async def log_download(self, user: User, document: Document) -> ActivityLog:
        return await self.log(user, ActivityAction.DOWNLOAD, document, details=f"Downloaded: {document.title}")

    async def log_restore(self, user: User, document: Document) -> ActivityLog:
        return await self.log(
            user, ActivityAction.RESTORE, document, details=f"Restored from trash: {document.title}"
        )

    async def log_edit(self, user: User, document: Document) -> ActivityLog:
        return await self.log(user, ActivityAction.EDIT, document, details=f"Edited: {document.title}")

    async def log_client_create(self, user: User, client: Client) -> ActivityLog:
        return await self.log(user, ActivityAction.CLIENT_CREATE, client=client, details=f"Created client: {client.name}")

    async def log_client_edit(self, user: User, client: Client) -> ActivityLog:
        return await self.log(user, ActivityAction.CLIENT_EDIT, client=client, details=f"Edited client: {client.name}")

    async def log_client_delete(self, user: User, client: Client) -> ActivityLog:
        return await self.log(user, ActivityAction.CLIENT_DELETE, client=client, details=f"Deleted client: {client.name}")
