from uuid import UUID

from fastapi import APIRouter, Depends

from dosomething.events.dependencies import get_event_read_model
from dosomething.events.repository.read_models import EventReadModel
from dosomething.events.schemas import MemoryResponse

router = APIRouter()

LIST_MEMORIES_URL = "/memories"


@router.get(LIST_MEMORIES_URL, response_model=list[MemoryResponse] | MemoryResponse)
async def list_memories(
    id: UUID | None = None,
    read_model: EventReadModel = Depends(get_event_read_model),
):
    """Every memory, or the single memory ``id``."""
    if id is not None:
        return MemoryResponse.from_dto(await read_model.get_memory(id))
    return [MemoryResponse.from_dto(m) for m in await read_model.list_memories()]
