# /app/main.py
import logging
import time
from logging.handlers import RotatingFileHandler
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# --- Core / Config ---
from app.core.config import settings
from app.core.exceptions import EnrollmentError, StorageUnavailable
from app.dependencies.store import get_store

# --- API Routers ---
from app.api.routes import enrollments as enrollments_router

# --- 미들웨어 import ---
from fastapi.middleware.cors import CORSMiddleware


def configure_logging():
    handlers = [logging.StreamHandler()]
    if settings.LOG_FILE:
        handlers.append(RotatingFileHandler(settings.LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3))
    logging.basicConfig(
        level=settings.LOG_LEVEL, # INFO 레벨 이상의 로그를 모두 출력하도록 설정
        format="%(asctime)s - %(levelname)s - %(message)s", # 로그 형식 지정
        handlers=handlers,
        force=True # 다른 라이브러리에 의해 이미 설정되었더라도 강제로 재설정
    )


configure_logging()


# --- Lifespan (애플리케이션 시작/종료 이벤트) ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # 데이터 파일이 없으면 seed 스냅샷으로 생성
    if settings.ENROLLMENTS_BOOTSTRAP_SEED:
        get_store().ensure_initialized()

    yield

# --- FastAPI App Instance ---
app = FastAPI(
    title="Enrollments API",
    lifespan=lifespan
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()

    # 다음 미들웨어나 실제 API 엔드포인트를 호출
    response = await call_next(request)

    process_time = time.time() - start_time

    # 응답 헤더에 처리 시간 추가
    response.headers["X-Process-Time"] = str(process_time)

    # 로그에 API 경로와 처리 시간 기록
    logging.info(
        f"Request processed: {request.method} {request.url.path} - Completed in {process_time:.4f} secs"
    )

    return response


# --- 예외 -> 응답 envelope 변환 ---
def _error_response(status_code: int, message: str, code: str, detail=None, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "error": {"code": code, "detail": detail},
        },
        headers=headers,
    )


@app.exception_handler(StorageUnavailable)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailable):
    # 내부 경로 등은 로그에만 남기고 응답에는 일반 메시지만 노출
    logging.error(f"Storage unavailable on {request.method} {request.url.path}: {exc.detail}")
    return _error_response(exc.status_code, exc.message, exc.code)


@app.exception_handler(EnrollmentError)
async def enrollment_error_handler(request: Request, exc: EnrollmentError):
    return _error_response(exc.status_code, exc.message, exc.code, exc.detail)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg")}
        for err in exc.errors()
    ]
    return _error_response(400, "Invalid input", "invalid_input", errors)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    code = "unauthenticated" if exc.status_code == 401 else "http_error"
    return _error_response(exc.status_code, str(exc.detail), code, headers=getattr(exc, "headers", None))


# --- CORS 미들웨어 설정 ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- 라우트 등록 ---
app.include_router(
    enrollments_router.router,
    prefix="/api/v2/enrollments",
    tags=["enrollments"]
)
