from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt

from app.core.config import settings
from app.models.identity import IdentityClaim


def create_access_token(claim: IdentityClaim, expires_minutes: Optional[int] = None) -> str:
    """
    로컬 개발/테스트용 access token 발급.
    실제 로그인/토큰 발급은 인증 서버 담당이고, 이 서비스는 검증만 합니다.
    """
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    to_encode = {"sub": claim.subject_id, "role": claim.role.value}
    if claim.student_id is not None:
        to_encode["studentId"] = claim.student_id
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
