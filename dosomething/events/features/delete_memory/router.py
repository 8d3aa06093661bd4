from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from dosomething.auth import AuthenticatedUser, get_current_user
from dosomething.events.dependencies import get_event_store
from dosomething.events.repository.write_models import EventStore
from dosomething.events.schemas import MemoryResponse, SuccessMessage

router = APIRouter()

DELETE_MEMORY_URL = "/memories/{memory_id}/delete"


class DeleteMemoryResponse(BaseModel):
    deleted: MemoryResponse
    success: SuccessMessage


@router.delete(DELETE_MEMORY_URL, response_model=DeleteMemoryResponse)
async def delete_memory(
    memory_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    store: EventStore = Depends(get_event_store),
) -> DeleteMemoryResponse:
    deleted = await store.delete_memory(memory_id)
    return DeleteMemoryResponse(
        deleted=MemoryResponse.from_dto(deleted),
        success=SuccessMessage(message="Memory forgotten successfully!"),
    )
