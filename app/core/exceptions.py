# /app/core/exceptions.py
"""
수강신청 도메인 예외 모음

policy / service / store 에서 발생하는 모든 실패는 아래 타입 중 하나입니다.
각 예외는 고정된 code 와 HTTP status 를 가지고 있어서, app.main 의 exception handler 가
메시지를 파싱하지 않고도 응답 envelope 을 만들 수 있습니다.
"""
from fastapi import status


class EnrollmentError(Exception):
    code = "enrollment_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Something is wrong, please try again"

    def __init__(self, message: str = None, detail: str = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class InvalidInput(EnrollmentError):
    code = "invalid_input"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class Forbidden(EnrollmentError):
    code = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden access"


class NotFound(EnrollmentError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource does not exists"


class StudentNotFound(NotFound):
    code = "student_not_found"
    default_message = "Student does not exists"


class EnrollmentNotFound(NotFound):
    code = "enrollment_not_found"
    default_message = "Enrollment does not exists"


class EnrollmentConflict(EnrollmentError):
    code = "conflict"
    status_code = status.HTTP_409_CONFLICT
    default_message = "studentId && courseId is already exists"


class StorageUnavailable(EnrollmentError):
    code = "storage_unavailable"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
