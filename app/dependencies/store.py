from functools import lru_cache

from app.core.config import settings
from app.db.store import EnrollmentStore


@lru_cache
def get_store() -> EnrollmentStore:
    """ 프로세스 전체에서 하나의 store (= 하나의 lock) 를 공유 """
    return EnrollmentStore(settings.ENROLLMENTS_DATA_PATH, settings.ENROLLMENTS_SEED_PATH)
