from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from core.db import get_db
from core.pagination import PageRequest, page_request
from schemas.common import Page, PathId
from schemas.users import UserIn, UserOut
from services import users as user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=Page[UserOut])
def list_users(page: PageRequest = Depends(page_request), db: Session = Depends(get_db)):
    return user_service.list_users(db, page)


@router.get("/search", response_model=Page[UserOut])
def search_users(
    query: str = Query(..., min_length=1, description="Matches username, email, first or last name"),
    page: PageRequest = Depends(page_request),
    db: Session = Depends(get_db),
):
    return user_service.search_users(db, query, page)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: PathId, db: Session = Depends(get_db)):
    return user_service.get_user(db, user_id)


@router.post("", response_model=UserOut, status_code=201)
def create_user(data: UserIn, db: Session = Depends(get_db)):
    return user_service.create_user(db, data)


@router.put("/{user_id}", response_model=UserOut)
def update_user(user_id: PathId, data: UserIn, db: Session = Depends(get_db)):
    return user_service.update_user(db, user_id, data)


@router.delete("/{user_id}", status_code=204, response_class=Response)
def delete_user(user_id: PathId, db: Session = Depends(get_db)):
    user_service.delete_user(db, user_id)
    return Response(status_code=204)
