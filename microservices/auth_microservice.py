import logging
from typing import Optional

import jwt
from fastapi import Header, HTTPException

from config import settings

logger = logging.getLogger(__name__)


def decode_user_id(token: str) -> Optional[str]:
    # tokens carry the user id as "id" or as the subject
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])
    except jwt.PyJWTError as e:
        logger.info("Rejected token: %s", e)
        return None
    user_id = payload.get("id") or payload.get("userId") or payload.get("sub")
    return str(user_id) if user_id else None


def get_current_user_id(token: Optional[str] = Header(None)) -> str:
    if not token:
        raise HTTPException(status_code=401, detail="Not Authorized Login Again")
    user_id = decode_user_id(token)
    if not user_id:
        raise HTTPException(status_code=401, detail="Not Authorized Login Again")
    return user_id
