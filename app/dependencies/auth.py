from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from pydantic import ValidationError

from app.core.config import settings
from app.models.identity import IdentityClaim

security = HTTPBearer(auto_error=False)

# 토큰 검증 실패용 공통 예외
credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


def decode_identity_claim(token: str) -> IdentityClaim:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        # 토큰 자체가 잘못됐거나 만료된 경우
        raise credentials_exception

    subject_id = payload.get("sub")
    if subject_id is None:
        raise credentials_exception
    try:
        return IdentityClaim(
            subject_id=str(subject_id),
            role=payload.get("role"),
            student_id=payload.get("studentId"),
        )
    except ValidationError:
        # role 이 없거나 ADMIN / STUDENT 가 아닌 경우
        raise credentials_exception


def get_identity_claim(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> IdentityClaim:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return decode_identity_claim(credentials.credentials)
