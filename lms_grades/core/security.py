from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from lms_grades.core.config import ACCESS_TOKEN_EXPIRE, ALGORITHM, SECRET_KEY


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or ACCESS_TOKEN_EXPIRE)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    # raises jwt.InvalidTokenError (expired, bad signature, malformed)
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
