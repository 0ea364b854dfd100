import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.deps import get_job_service
from app.api.routes import convert
from app.core.config import settings
from app.core.exceptions import ConverterException
from app.models import HealthResponse
from app.services import OutputRetention

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기 관리"""
    # 시작시 실행
    settings.ensure_directories()

    # 만료 파일 정리 스케줄러 시작
    retention = OutputRetention(
        file_manager=get_job_service().file_manager,
        retention_hours=settings.FILE_RETENTION_HOURS,
    )
    await retention.start_cleanup_scheduler(
        interval_minutes=settings.CLEANUP_INTERVAL_MINUTES
    )
    logger.info(f"변환 서비스 시작 (port={settings.PORT}, env={settings.ENV})")

    yield

    # 종료시 실행
    retention.stop_cleanup_scheduler()


app = FastAPI(
    title="File Converter",
    description="문서/스프레드시트/이미지 포맷 변환 서비스",
    version="0.1.0",
    lifespan=lifespan,
    # 프로덕션에서는 docs/openapi 비활성화
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
    openapi_url="/openapi.json" if not settings.is_production else None,
)


# =============================================================================
# 미들웨어 설정
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    expose_headers=["X-Request-ID", "Content-Disposition"],
    max_age=600,  # preflight 캐시 10분
)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """보안 헤더 추가 미들웨어"""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"

    if settings.is_production:
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )

    return response


# =============================================================================
# 에러 핸들러 (모든 에러 응답은 {"error": message})
# =============================================================================

def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers={"X-Request-ID": request.headers.get("X-Request-ID", "")},
    )


@app.exception_handler(ConverterException)
async def converter_exception_handler(request: Request, exc: ConverterException):
    """커스텀 예외 핸들러"""
    return _error_response(request, exc.status_code, exc.detail)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """라우팅/정적 파일 HTTP 예외 핸들러"""
    return _error_response(request, exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """요청 검증 실패 핸들러"""
    messages = [
        f"{'.'.join(str(loc) for loc in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    ]
    return _error_response(request, 422, "; ".join(messages) or "Invalid request")


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """일반 예외 핸들러 (프로덕션에서 상세 에러 숨김)"""
    logger.exception("처리되지 않은 예외")
    detail = "Conversion failed" if settings.is_production else (str(exc) or "Conversion failed")
    return _error_response(request, 500, detail)


# =============================================================================
# 엔드포인트
# =============================================================================

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """헬스 체크 엔드포인트"""
    return {"status": "healthy"}


# API 라우터 등록
app.include_router(convert.router, prefix="/api", tags=["convert"])

# 변환 결과 정적 제공 (디렉토리 목록 비활성화)
app.mount(
    settings.OUTPUT_URL_PREFIX,
    StaticFiles(directory=settings.OUTPUT_DIR, html=False, check_dir=False),
    name="outputs",
)

# 프론트엔드 번들 (디렉토리가 있을 때만)
if settings.PUBLIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=settings.PUBLIC_DIR, html=True), name="public")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT)
