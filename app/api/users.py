from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging
from app.models.user import User, ErrorResponse
from app.services.user_service import UserNotFound, UserRepository, get_user_repository

router = APIRouter(prefix='/users', tags=['Users'])

log = logging.getLogger(__name__)

@router.get("", response_model=list[User])
async def list_users(repo: UserRepository = Depends(get_user_repository)):
    log.info('GET /users')
    return await repo.list_all()

@router.get("/{user_id}", response_model=User, responses={404: {"model": ErrorResponse}})
async def get_user(user_id: str, repo: UserRepository = Depends(get_user_repository)):
    log.info(f'GET /users/{user_id}')
    result = await repo.find_by_id(user_id)
    if isinstance(result, UserNotFound):
        log.warning(f"====== NO USER WITH ID: {user_id} ======")
        return JSONResponse(status_code=404, content={"error": "User not found"})
    return result
