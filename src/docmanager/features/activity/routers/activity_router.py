"""Recent activity endpoint used by the dashboard."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ....config.constants import Roles
from ....dependencies import get_activity_repository
from ...authorization.dependencies import require_granted
from ..repositories.activity_log_repository import ActivityLogRepository

router = APIRouter()


class ActivityLogResponse(BaseModel):
    id: int
    user_id: int
    action: str
    action_label: str
    document_id: Optional[int] = None
    client_id: Optional[int] = None
    details: Optional[str] = None
    created_at: str


@router.get(
    "/recent",
    response_model=List[ActivityLogResponse],
    summary="Most recent activity",
    dependencies=[Depends(require_granted(Roles.USER))],
)
async def recent_activity(
    repository: Annotated[ActivityLogRepository, Depends(get_activity_repository)],
    limit: int = Query(10, ge=1, le=100),
) -> List[ActivityLogResponse]:
    entries = await repository.find_recent(limit)
    return [
        ActivityLogResponse(
            id=entry.id,
            user_id=entry.user_id,
            action=entry.action,
            action_label=entry.action_label,
            document_id=entry.document_id,
            client_id=entry.client_id,
            details=entry.details,
            created_at=entry.created_at.isoformat(),
        )
        for entry in entries
    ]
