from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from dosomething.auth import AuthenticatedUser, get_current_user
from dosomething.events.dependencies import get_rsvp_orchestrator
from dosomething.events.orchestrator import RsvpOrchestrator
from dosomething.events.schemas import EventResponse, SuccessMessage

router = APIRouter()

PHOTO_UPLOAD_URL = "/events/photo-upload"


class PhotoUploadRequest(BaseModel):
    id: UUID
    # base64, optionally as a data URL
    image: str = ""
    date: str = ""
    location: str = ""


class PhotoUploadResponse(BaseModel):
    updatedEvent: EventResponse
    success: SuccessMessage


@router.post(PHOTO_UPLOAD_URL, response_model=PhotoUploadResponse)
async def upload_photo(
    request: PhotoUploadRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: RsvpOrchestrator = Depends(get_rsvp_orchestrator),
) -> PhotoUploadResponse:
    updated = await orchestrator.add_memory(
        user,
        request.id,
        image_b64=request.image,
        memory_date=request.date,
        location=request.location,
    )
    return PhotoUploadResponse(
        updatedEvent=EventResponse.from_dto(updated),
        success=SuccessMessage(message="Photo uploaded successfully!"),
    )
