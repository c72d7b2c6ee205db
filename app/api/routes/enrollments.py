from fastapi import APIRouter, Depends, Body

from app.db.store import EnrollmentStore
from app.dependencies.auth import get_identity_claim
from app.dependencies.store import get_store
from app.models.identity import IdentityClaim
from app.schemas.enrollment import (
    CourseRequest,
    EnrollmentListResponse, StudentEnrollmentResponse, CourseChangeResponse, ResetResponse,
)
from app.services import enrollment_service
from app.services.policy import Operation, authorize

router = APIRouter()


# =========================
# 관리자 전용 API
# =========================

@router.get("", response_model=EnrollmentListResponse, summary="전체 수강 정보 조회 (관리자)")
def list_enrollments(
    claim: IdentityClaim = Depends(get_identity_claim),
    store: EnrollmentStore = Depends(get_store),
):
    """
    모든 학생의 studentId 와 수강 과목(courseId) 목록을 반환합니다.
    """
    authorize(claim, Operation.LIST_ALL)
    return {
        "success": True,
        "message": "Enrollments Information",
        "data": enrollment_service.list_all(store),
    }


@router.api_route("/reset", methods=["POST", "GET"], response_model=ResetResponse,
                  summary="수강 정보 초기화 (관리자)")
def reset_enrollments(
    claim: IdentityClaim = Depends(get_identity_claim),
    store: EnrollmentStore = Depends(get_store),
):
    """
    enrollments 데이터를 seed 스냅샷으로 되돌립니다.
    기존 클라이언트 호환을 위해 GET 도 허용합니다.
    """
    authorize(claim, Operation.RESET)
    restored = enrollment_service.reset_enrollments(store)
    return {
        "success": True,
        "message": "enrollments database has been reset",
        "data": {"restored": restored},
    }


# =========================
# 학생 수강 정보 API
# =========================

@router.get("/{student_id}", response_model=StudentEnrollmentResponse, summary="학생 수강 정보 조회")
def get_student_enrollment(
    student_id: str,
    claim: IdentityClaim = Depends(get_identity_claim),
    store: EnrollmentStore = Depends(get_store),
):
    """
    관리자는 모든 학생, 학생은 본인 정보만 조회할 수 있습니다.
    """
    authorize(claim, Operation.GET_ONE, student_id)
    return {
        "success": True,
        "message": "Student Information",
        "data": enrollment_service.get_one(store, student_id),
    }


@router.post("/{student_id}", response_model=CourseChangeResponse, summary="수강신청 (학생 본인)")
def add_course(
    student_id: str,
    req: CourseRequest = Body(...),
    claim: IdentityClaim = Depends(get_identity_claim),
    store: EnrollmentStore = Depends(get_store),
):
    authorize(claim, Operation.ADD_COURSE, student_id)
    result = enrollment_service.add_course(store, student_id, req.course_id)
    return {
        "success": True,
        "message": f"Student {result['studentId']} && Course {result['courseId']} has been added succesfully",
        "data": result,
    }


@router.delete("/{student_id}", response_model=CourseChangeResponse, summary="수강취소 (학생 본인)")
def remove_course(
    student_id: str,
    req: CourseRequest = Body(...),
    claim: IdentityClaim = Depends(get_identity_claim),
    store: EnrollmentStore = Depends(get_store),
):
    authorize(claim, Operation.REMOVE_COURSE, student_id)
    result = enrollment_service.remove_course(store, student_id, req.course_id)
    return {
        "success": True,
        "message": f"Student {result['studentId']} && {result['courseId']} has been deleted successfully",
        "data": result,
    }
