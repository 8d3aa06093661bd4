from fastapi import APIRouter, Depends
from pydantic import BaseModel

from dosomething.users.dtos import RegisteredUserDTO
from dosomething.users.features.register_user.write_model import (
    RegisterUserWriteModel,
    SqlRegisterUserWriteModel,
)

router = APIRouter()

REGISTER_USER_URL = "/users/register"


class RegisterUserRequest(BaseModel):
    # plain strings; the write model reports every bad field at once
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    notify: str = ""
    profile_pic: str | None = None


class UserResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    notify: str
    profile_pic: str | None = None


class RegisterUserResponse(BaseModel):
    user: UserResponse
    token: str
    success: dict[str, str]


def get_register_user_write_model() -> RegisterUserWriteModel:
    """Dependency to get the registration write model instance."""
    return SqlRegisterUserWriteModel()


@router.post(REGISTER_USER_URL, response_model=RegisterUserResponse)
async def register_user(
    request: RegisterUserRequest,
    write_model: RegisterUserWriteModel = Depends(get_register_user_write_model),
) -> RegisterUserResponse:
    registered: RegisteredUserDTO = await write_model.register_user(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        phone=request.phone,
        notify=request.notify,
        profile_pic=request.profile_pic,
    )
    user = registered.user
    return RegisterUserResponse(
        user=UserResponse(
            id=str(user.uuid),
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone=user.phone,
            notify=user.notify.value,
            profile_pic=user.profile_pic,
        ),
        token=registered.token,
        success={"message": "Registered successfully!"},
    )
