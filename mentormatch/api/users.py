from fastapi import APIRouter, Depends

from mentormatch import models
from mentormatch.schemas.user import UserOut
from mentormatch.utils.security import get_current_user

router = APIRouter(prefix="/api/user", tags=["Users"])


@router.get("/me")
def get_me(current_user: models.User = Depends(get_current_user)):
    return {"success": True, "user": UserOut.from_user(current_user).to_json()}
