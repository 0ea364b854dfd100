from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.core.config import get_settings
from app.services import ConverterFactory, FileManager, JobService


@lru_cache
def get_job_service() -> JobService:
    """JobService 싱글톤 (프로세스 시작 시 한 번 구성, 이후 읽기 전용)"""
    settings = get_settings()
    return JobService(
        file_manager=FileManager(
            upload_dir=settings.UPLOAD_DIR,
            output_dir=settings.OUTPUT_DIR,
            max_file_size=settings.MAX_FILE_SIZE_BYTES,
        ),
        converter_factory=ConverterFactory(
            timeout=settings.CONVERSION_TIMEOUT_SECONDS,
            soffice_path=settings.SOFFICE_PATH,
        ),
        output_url_prefix=settings.OUTPUT_URL_PREFIX,
        allowed_extensions=settings.ALLOWED_EXTENSIONS,
        allowed_mime_types=settings.ALLOWED_MIME_TYPES,
    )


JobServiceDep = Annotated[JobService, Depends(get_job_service)]
