import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from fastapi import UploadFile

from app.core.exceptions import (
    ConversionFailedException,
    ConverterException,
    FileTooLargeException,
    FileTypeNotAllowedException,
    JobNotFoundException,
    NoFileProvidedException,
)
from app.models import ConvertedFile, ConvertResponse
from app.services.converter_factory import ConverterFactory
from app.services.file_manager import FileManager
from app.utils.file_validator import is_allowed_upload, validate_file_signature

logger = logging.getLogger(__name__)


@dataclass
class Job:
    """변환 작업 (출력 디렉토리가 존재하는 동안 유효)"""

    job_id: str
    output_dir: Path


class JobService:
    """
    변환 작업 처리

    업로드 저장 -> 작업 디렉토리 생성 -> 디스패처 호출 -> 공개 URL 매핑
    """

    def __init__(
        self,
        file_manager: FileManager,
        converter_factory: ConverterFactory,
        output_url_prefix: str,
        allowed_extensions: Iterable[str],
        allowed_mime_types: Iterable[str],
    ):
        self.file_manager = file_manager
        self.converter_factory = converter_factory
        self.output_url_prefix = output_url_prefix.rstrip("/")
        self.allowed_extensions = tuple(allowed_extensions)
        self.allowed_mime_types = tuple(allowed_mime_types)

    async def ingest(self, upload: UploadFile) -> Path:
        """
        업로드 파일 검증 후 저장

        Raises:
            FileTypeNotAllowedException: 허용 목록에 없는 파일
            FileTooLargeException: 파일 크기 초과
        """
        if not is_allowed_upload(
            upload.filename,
            upload.content_type,
            self.allowed_extensions,
            self.allowed_mime_types,
        ):
            raise FileTypeNotAllowedException()

        # Content-Length로 사전 크기 검증 (있는 경우)
        if upload.size and upload.size > self.file_manager.max_file_size:
            raise FileTooLargeException(max(1, self.file_manager.max_file_size // (1024 * 1024)))

        saved_path, _ = await self.file_manager.save_upload(
            file=upload.file, filename=upload.filename
        )

        if not validate_file_signature(saved_path):
            self.file_manager.delete_file(saved_path)
            raise FileTypeNotAllowedException()

        return saved_path

    def create_job(self) -> Job:
        """새 작업 ID 발급 및 출력 디렉토리 생성"""
        job_id = str(uuid.uuid4())
        output_dir = self.file_manager.create_job_dir(job_id)
        return Job(job_id=job_id, output_dir=output_dir)

    def to_public_file(self, job: Job, path: Path) -> ConvertedFile:
        """출력 경로 -> {name, url}"""
        return ConvertedFile(
            name=path.name,
            url=f"{self.output_url_prefix}/{job.job_id}/{path.name}",
        )

    async def run_job(self, input_path: Path, target_format: str) -> ConvertResponse:
        """
        저장된 파일로 변환 작업 실행

        Args:
            input_path: 저장된 업로드 파일 경로
            target_format: 목표 포맷 토큰

        Returns:
            ConvertResponse (jobId, files)
        """
        try:
            job = self.create_job()
            logger.info(f"작업 생성: job_id={job.job_id}, input={input_path.name}")

            outputs = await self.converter_factory.convert(
                input_path=input_path,
                target_format=target_format,
                output_dir=job.output_dir,
            )
        except ConverterException as e:
            logger.error(f"변환 실패 ({input_path.name} -> {target_format}): {e.detail}")
            raise
        except Exception as e:
            logger.exception(f"변환 실패 ({input_path.name} -> {target_format})")
            raise ConversionFailedException(str(e) or "Conversion failed")

        files: List[ConvertedFile] = [self.to_public_file(job, path) for path in outputs]
        return ConvertResponse(job_id=job.job_id, files=files)

    async def handle_convert(
        self, upload: Optional[UploadFile], target_format: Optional[str]
    ) -> ConvertResponse:
        """
        업로드 파일 변환

        Args:
            upload: 업로드 파일 (없으면 None)
            target_format: 목표 포맷 토큰

        Raises:
            NoFileProvidedException: 파일 누락
        """
        if upload is None or not upload.filename:
            raise NoFileProvidedException()

        input_path = await self.ingest(upload)
        return await self.run_job(input_path, target_format or "")

    def delete_job(self, job_id: str) -> None:
        """
        작업 출력 디렉토리 삭제

        Raises:
            JobNotFoundException: 잘못된 ID 또는 존재하지 않는 작업
        """
        try:
            normalized = str(uuid.UUID(job_id))
        except ValueError:
            raise JobNotFoundException(job_id)

        if normalized != job_id or not self.file_manager.delete_directory(
            self.file_manager.job_dir(job_id)
        ):
            raise JobNotFoundException(job_id)

        logger.info(f"작업 삭제: job_id={job_id}")
