from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from dosomething.auth import AuthenticatedUser, get_current_user
from dosomething.events.dependencies import get_event_store
from dosomething.events.repository.write_models import EventStore

router = APIRouter()

UPDATE_MEMORY_URL = "/memories/{memory_id}"


class UpdateMemoryRequest(BaseModel):
    date: str | None = None
    location: str | None = None


class UpdateMemoryResponse(BaseModel):
    message: str


@router.put(UPDATE_MEMORY_URL, response_model=UpdateMemoryResponse)
async def update_memory(
    memory_id: UUID,
    request: UpdateMemoryRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    store: EventStore = Depends(get_event_store),
) -> UpdateMemoryResponse:
    await store.update_memory(memory_id, date=request.date, location=request.location)
    return UpdateMemoryResponse(message="Memory updated successfully!")
