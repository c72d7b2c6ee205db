# /app/schemas/enrollment.py
from pydantic import BaseModel, Field, StrictInt, StrictStr
from typing import Any, List, Optional, Union


class CourseRequest(BaseModel):
    # true / 1.0 같은 값이 "1" 로 바뀌지 않도록 strict 타입 사용
    course_id: Union[StrictStr, StrictInt] = Field(alias="courseId")

    class Config:
        populate_by_name = True


class CourseItem(BaseModel):
    courseId: str


class EnrollmentSummary(BaseModel):
    studentId: str
    courses: List[CourseItem]


class StudentEnrollmentDetail(BaseModel):
    studentId: str
    firstName: Optional[str]
    lastName: Optional[str]
    program: Optional[str]
    courses: List[str]


class CourseChange(BaseModel):
    studentId: str
    courseId: str


class ResetResult(BaseModel):
    restored: int


class ErrorDetail(BaseModel):
    code: str
    detail: Optional[Any] = None


class ApiResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Any] = None
    error: Optional[ErrorDetail] = None


class EnrollmentListResponse(ApiResponse):
    data: List[EnrollmentSummary]


class StudentEnrollmentResponse(ApiResponse):
    data: StudentEnrollmentDetail


class CourseChangeResponse(ApiResponse):
    data: CourseChange


class ResetResponse(ApiResponse):
    data: ResetResult
