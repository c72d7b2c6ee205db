# /app/services/enrollment_service.py
import logging
from typing import List, Optional

from app.core.exceptions import (
    EnrollmentConflict,
    EnrollmentNotFound,
    InvalidInput,
    StudentNotFound,
)
from app.db.store import EnrollmentStore
from app.models.enrollment import EnrollmentRecord, normalize_course_id

MAX_IDENTIFIER_LENGTH = 256


def validate_student_id(student_id) -> str:
    # 형식 제한 없음: 저장소에 있는 값이면 그대로 조회 가능해야 함
    if not isinstance(student_id, str) or not student_id:
        raise InvalidInput("Invalid studentId", detail="studentId must be a non-empty string")
    if len(student_id) > MAX_IDENTIFIER_LENGTH:
        raise InvalidInput("Invalid studentId", detail=f"studentId must be at most {MAX_IDENTIFIER_LENGTH} characters")
    return student_id


def validate_course_id(course_id) -> str:
    try:
        normalized = normalize_course_id(course_id)
    except ValueError as e:
        raise InvalidInput("Invalid courseId", detail=str(e)) from e
    if not normalized:
        raise InvalidInput("Invalid courseId", detail="courseId must not be empty")
    if len(normalized) > MAX_IDENTIFIER_LENGTH:
        raise InvalidInput("Invalid courseId", detail=f"courseId must be at most {MAX_IDENTIFIER_LENGTH} characters")
    return normalized


def _find_record(records: List[EnrollmentRecord], student_id: str) -> Optional[EnrollmentRecord]:
    return next((r for r in records if r.student_id == student_id), None)


def list_all(store: EnrollmentStore) -> List[dict]:
    """ 모든 학생의 수강 과목 목록 (관리자용) """
    return [
        {
            "studentId": record.student_id,
            "courses": [{"courseId": c} for c in record.courses],
        }
        for record in store.load_all()
    ]


def get_one(store: EnrollmentStore, student_id: str) -> dict:
    """ studentId 로 학생 정보 + 수강 과목 조회 """
    student_id = validate_student_id(student_id)
    record = _find_record(store.load_all(), student_id)
    if record is None:
        raise StudentNotFound()
    return record.to_detail()


def add_course(store: EnrollmentStore, student_id: str, course_id) -> dict:
    student_id = validate_student_id(student_id)
    course_id = validate_course_id(course_id)

    with store.transaction() as records:
        record = _find_record(records, student_id)
        if record is None:
            raise StudentNotFound()
        # 중복 체크: 이미 수강신청된 과목이면 저장하지 않음
        if record.has_course(course_id):
            raise EnrollmentConflict()
        record.courses.append(course_id)
        store.replace_all(records)

    logging.info(f"Course {course_id} added for student {student_id}")
    return {"studentId": student_id, "courseId": course_id}


def remove_course(store: EnrollmentStore, student_id: str, course_id) -> dict:
    student_id = validate_student_id(student_id)
    course_id = validate_course_id(course_id)

    with store.transaction() as records:
        record = _find_record(records, student_id)
        if record is None:
            raise StudentNotFound()
        try:
            index = record.courses.index(course_id)
        except ValueError:
            raise EnrollmentNotFound()
        del record.courses[index]
        store.replace_all(records)

    logging.info(f"Course {course_id} removed for student {student_id}")
    return {"studentId": student_id, "courseId": course_id}


def reset_enrollments(store: EnrollmentStore) -> int:
    """ seed 스냅샷으로 전체 수강 정보 초기화, 복원된 레코드 수 반환 """
    return store.reset()
