# /app/db/store.py
"""
enrollments.json 기반 레코드 저장소

- 저장 형식은 EnrollmentRecord 배열 하나로 된 JSON 문서입니다 (레코드 단위 접근 불가).
- 모든 변경은 load -> 메모리에서 수정 -> replace_all 로 문서 전체를 교체합니다.
- replace_all 은 임시 파일에 쓴 뒤 os.replace 로 교체하므로, 읽는 쪽은 항상
  이전 문서 또는 새 문서 중 하나만 보게 됩니다.
- 변경 요청끼리는 하나의 전역 lock 으로 직렬화합니다 (transaction()).
"""
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

from pydantic import ValidationError

from app.core.exceptions import StorageUnavailable
from app.models.enrollment import EnrollmentRecord


class EnrollmentStore:
    def __init__(self, data_path: Union[str, Path], seed_path: Optional[Union[str, Path]] = None):
        self.data_path = Path(data_path)
        self.seed_path = Path(seed_path) if seed_path else None
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # 읽기
    # ------------------------------------------------------------------
    def load_all(self) -> List[EnrollmentRecord]:
        return self._read_records(self.data_path)

    def load_seed(self) -> List[EnrollmentRecord]:
        if self.seed_path is None:
            raise StorageUnavailable(detail="seed snapshot is not configured")
        return self._read_records(self.seed_path)

    # ------------------------------------------------------------------
    # 쓰기
    # ------------------------------------------------------------------
    def replace_all(self, records: Sequence[EnrollmentRecord]) -> None:
        documents = [record.to_document() for record in records]
        _ensure_unique_ids(documents, source="replacement")
        with self._lock:
            self._atomic_write(documents)

    def reset(self, seed_records: Optional[Sequence[EnrollmentRecord]] = None) -> int:
        with self._lock:
            records = list(seed_records) if seed_records is not None else self.load_seed()
            self.replace_all(records)
        logging.info(f"Enrollment store reset to seed snapshot ({len(records)} records)")
        return len(records)

    @contextmanager
    def transaction(self) -> Iterator[List[EnrollmentRecord]]:
        """
        load + replace 구간을 전역 lock 으로 감쌉니다.
        블록 안에서 받은 리스트를 수정한 뒤 replace_all 을 호출하면 됩니다.
        """
        with self._lock:
            yield self.load_all()

    def ensure_initialized(self) -> bool:
        """ 데이터 파일이 없으면 seed 로 생성 (이미 있으면 건드리지 않음) """
        with self._lock:
            if self.data_path.exists():
                return False
            self.reset()
            logging.info(f"Enrollment store bootstrapped at {self.data_path}")
            return True

    # ------------------------------------------------------------------
    # 내부 구현
    # ------------------------------------------------------------------
    def _read_records(self, path: Path) -> List[EnrollmentRecord]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError as e:
            raise StorageUnavailable(detail=f"data file not found: {path.name}") from e
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StorageUnavailable(detail=f"data file is unreadable: {path.name}") from e

        if not isinstance(raw, list):
            raise StorageUnavailable(detail=f"data file must contain a list: {path.name}")

        try:
            records = [EnrollmentRecord.model_validate(item) for item in raw]
        except ValidationError as e:
            raise StorageUnavailable(detail=f"data file contains an invalid record: {path.name}") from e

        _ensure_unique_ids([r.to_document() for r in records], source=path.name)
        return records

    def _atomic_write(self, documents: list) -> None:
        directory = self.data_path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.data_path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(documents, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.data_path)
            tmp_name = None
        except OSError as e:
            logging.error(f"Failed to write enrollment store {self.data_path}: {e}")
            raise StorageUnavailable(detail="failed to persist enrollments") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)


def _ensure_unique_ids(documents: list, source: str) -> None:
    seen = set()
    for doc in documents:
        sid = doc["studentId"]
        if sid in seen:
            raise StorageUnavailable(detail=f"duplicate studentId {sid} in {source}")
        seen.add(sid)
