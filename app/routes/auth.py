from fastapi import APIRouter, Depends
from app.core.auth import get_current_user
from app.schemas.user_schema import UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=UserRead)
def me_route(user=Depends(get_current_user)):
    return user
