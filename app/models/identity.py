# /app/models/identity.py
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Role(str, Enum):
    ADMIN = "ADMIN"
    STUDENT = "STUDENT"


class IdentityClaim(BaseModel):
    """ 검증된 access token 에서 꺼낸 호출자 정보 """

    subject_id: str
    role: Role
    student_id: Optional[str] = None  # role == STUDENT 일 때만 존재

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def is_student(self, student_id: str) -> bool:
        return (
            self.role == Role.STUDENT
            and self.student_id is not None
            and self.student_id == student_id
        )
