# /app/models/enrollment.py
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class EnrollmentRecord(BaseModel):
    """ 학생 한 명의 프로필과 수강 과목 목록 (enrollments.json 의 한 항목) """

    student_id: str = Field(alias="studentId")
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    program: Optional[str] = None
    courses: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        extra = "allow"  # 외부 seeder 가 쓴 추가 필드는 그대로 보존

    @field_validator("student_id", mode="before")
    @classmethod
    def _student_id_as_str(cls, value):
        if isinstance(value, (int, str)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("courses", mode="before")
    @classmethod
    def _normalize_courses(cls, value):
        # 예전 레코드는 courses 가 없거나 숫자 course id 를 가질 수 있음
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [normalize_course_id(c) for c in value]
        return value

    def has_course(self, course_id: str) -> bool:
        return course_id in self.courses

    def to_document(self) -> dict:
        """ 파일에 쓸 형태: 원래 없던 필드는 null 로 채우지 않음 """
        document = self.model_dump(by_alias=True, exclude_unset=True)
        # 기본값 리스트에 append 한 경우도 unset 으로 남으므로 직접 반영
        if "courses" in self.model_fields_set or self.courses:
            document["courses"] = list(self.courses)
        return document

    def to_detail(self) -> dict:
        return {
            "studentId": self.student_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "program": self.program,
            "courses": list(self.courses),
        }


def normalize_course_id(value) -> str:
    """ 비교 가능한 문자열 형태로 변환 (대소문자/공백 변환 없음) """
    if isinstance(value, bool):
        raise ValueError("course id must be a string or an integer")
    if isinstance(value, (int, str)):
        return str(value)
    raise ValueError("course id must be a string or an integer")
