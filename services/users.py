import logging
from typing import Any, Dict

from sqlalchemy import or_
from sqlalchemy.orm import Session

from core.db import commit_or_raise
from core.errors import DuplicateResourceError, InvalidArgumentError, NotFoundError
from core.pagination import LIKE_ESCAPE, PageRequest, like_pattern, paginate
from models.order import Order
from models.user import User
from schemas.users import UserIn

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "id": User.id,
    "username": User.username,
    "email": User.email,
    "firstName": User.first_name,
    "lastName": User.last_name,
    "createdAt": User.created_at,
}


def _get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError.for_resource("User", user_id)
    return user


def _username_taken(db: Session, username: str) -> bool:
    return db.query(User.id).filter(User.username == username).first() is not None


def _email_taken(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).first() is not None


def _order_count(db: Session, user_id: int) -> int:
    return db.query(Order.id).filter(Order.user_id == user_id).count()


def list_users(db: Session, page: PageRequest) -> Dict[str, Any]:
    return paginate(db.query(User), page, SORTABLE_FIELDS, tiebreak=User.id)


def search_users(db: Session, term: str, page: PageRequest) -> Dict[str, Any]:
    pattern = like_pattern(term)
    query = db.query(User).filter(
        or_(
            User.username.ilike(pattern, escape=LIKE_ESCAPE),
            User.email.ilike(pattern, escape=LIKE_ESCAPE),
            User.first_name.ilike(pattern, escape=LIKE_ESCAPE),
            User.last_name.ilike(pattern, escape=LIKE_ESCAPE),
        )
    )
    return paginate(query, page, SORTABLE_FIELDS, tiebreak=User.id)


def get_user(db: Session, user_id: int) -> User:
    return _get_user(db, user_id)


def create_user(db: Session, data: UserIn) -> User:
    if _username_taken(db, data.username):
        raise DuplicateResourceError(f"Username already exists: {data.username}")
    email = data.email.lower()
    if _email_taken(db, email):
        raise DuplicateResourceError(f"Email already exists: {email}")

    user = User(
        username=data.username,
        email=email,
        first_name=data.first_name.strip(),
        last_name=data.last_name.strip(),
    )
    db.add(user)
    commit_or_raise(db, DuplicateResourceError(f"Username or email already exists: {user.username}, {email}"))
    db.refresh(user)
    logger.info("Created user %s (%s)", user.id, user.username)
    return user


def update_user(db: Session, user_id: int, data: UserIn) -> User:
    user = _get_user(db, user_id)
    email = data.email.lower()
    # Only check uniqueness for values that actually change
    if user.username != data.username and _username_taken(db, data.username):
        raise DuplicateResourceError(f"Username already exists: {data.username}")
    if user.email != email and _email_taken(db, email):
        raise DuplicateResourceError(f"Email already exists: {email}")

    user.username = data.username
    user.email = email
    user.first_name = data.first_name.strip()
    user.last_name = data.last_name.strip()
    commit_or_raise(db, DuplicateResourceError(f"Username or email already exists: {data.username}, {email}"))
    db.refresh(user)
    logger.info("Updated user %s", user_id)
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = _get_user(db, user_id)
    order_count = _order_count(db, user_id)
    if order_count:
        raise InvalidArgumentError(f"User {user_id} still has {order_count} order(s) and cannot be deleted")
    db.delete(user)
    commit_or_raise(db, InvalidArgumentError(f"User {user_id} still has orders and cannot be deleted"))
    logger.info("Deleted user %s", user_id)
