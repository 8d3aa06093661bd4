from fastapi import APIRouter

from .features.register_user.router import router as register_user_router

router = APIRouter()

router.include_router(register_user_router)
