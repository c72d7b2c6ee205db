# /app/services/policy.py
import logging
from enum import Enum
from typing import Optional

from app.core.exceptions import Forbidden
from app.models.identity import IdentityClaim


class Operation(str, Enum):
    LIST_ALL = "list_all"
    RESET = "reset"
    GET_ONE = "get_one"
    ADD_COURSE = "add_course"
    REMOVE_COURSE = "remove_course"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


_ADMIN_ONLY = {Operation.LIST_ALL, Operation.RESET}
_SELF_STUDENT_ONLY = {Operation.ADD_COURSE, Operation.REMOVE_COURSE}


def decide(claim: IdentityClaim, operation: Operation, target_student_id: Optional[str] = None) -> Decision:
    """
    (호출자, 작업, 대상 학생) -> ALLOW / DENY
    학생 존재 여부는 보지 않습니다. 존재 확인은 ALLOW 이후 service 에서 합니다.
    """
    if operation in _ADMIN_ONLY:
        return Decision.ALLOW if claim.is_admin else Decision.DENY

    if operation == Operation.GET_ONE:
        if claim.is_admin or claim.is_student(target_student_id):
            return Decision.ALLOW
        return Decision.DENY

    # 관리자는 학생 대신 수강신청/취소를 할 수 없음
    if operation in _SELF_STUDENT_ONLY:
        return Decision.ALLOW if claim.is_student(target_student_id) else Decision.DENY

    return Decision.DENY


def authorize(claim: IdentityClaim, operation: Operation, target_student_id: Optional[str] = None) -> None:
    if decide(claim, operation, target_student_id) == Decision.ALLOW:
        return

    logging.warning(
        f"Policy denied {operation.value} for {claim.role.value} {claim.subject_id} "
        f"(target={target_student_id})"
    )
    if operation in _SELF_STUDENT_ONLY:
        raise Forbidden("You are not allowed to modify another student's data")
    raise Forbidden()
