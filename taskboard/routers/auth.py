import logging
from typing import Optional

import bcrypt
from fastapi import APIRouter, Depends, HTTPException, status

from ..config import BCRYPT_ROUNDS
from ..database import Storage, get_storage
from ..models import find_by_email, new_task_list, new_user, public_user
from ..schemas.user import Credentials, SignupRequest, User as UserSchema

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_CREDENTIALS = "Email and password are required."
EMAIL_IN_USE = "Email already in use."
INVALID_CREDENTIALS = "Invalid email or password"


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a password against its hash."""
    if not hashed_password:
        return False
    password_bytes = plain_password.encode('utf-8')[:72]
    hashed_bytes = hashed_password.encode('utf-8') if isinstance(hashed_password, str) else hashed_password
    try:
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except ValueError:
        # Not a bcrypt hash at all
        logger.warning("Stored password hash is malformed")
        return False


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with a fresh per-user salt."""
    password_bytes = password.encode('utf-8')[:72]  # Truncate to 72 bytes (bcrypt limit)
    salt = bcrypt.gensalt(rounds=rounds or BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


@router.post("/signup", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    storage: Storage = Depends(get_storage),
):
    """Create a user together with its default task list."""
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail=MISSING_CREDENTIALS)

    # Hashing is slow; do it before taking the store lock.
    hashed_password = get_password_hash(payload.password)

    with storage.transaction() as db:
        if find_by_email(db["users"], payload.email):
            raise HTTPException(status_code=400, detail=EMAIL_IN_USE)

        user = new_user(payload.email, hashed_password, created_at=payload.created_at)
        task_list = new_task_list(user["id"])
        user["defaultTaskListId"] = task_list["id"]

        db["users"].append(user)
        db["taskLists"].append(task_list)

    logger.info("Signed up user %s with default list %s", user["id"], task_list["id"])
    return public_user(user)


@router.post("/login", response_model=UserSchema)
def login(
    payload: Credentials,
    storage: Storage = Depends(get_storage),
):
    """Check credentials and return the public user record."""
    if not payload.email or not payload.password:
        raise HTTPException(status_code=400, detail=MISSING_CREDENTIALS)

    user = find_by_email(storage.get("users"), payload.email)
    if not user or not user.get("passwordHash"):
        raise HTTPException(status_code=400, detail=INVALID_CREDENTIALS)

    if not verify_password(payload.password, user["passwordHash"]):
        logger.debug("Wrong password for user %s", user.get("id"))
        raise HTTPException(status_code=400, detail=INVALID_CREDENTIALS)

    return public_user(user)
