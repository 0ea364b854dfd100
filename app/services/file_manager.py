import asyncio
import logging
import shutil
import time
from datetime import datetime, timedelta
from pathlib import Path
from typing import BinaryIO, Optional, Tuple

import aiofiles

from app.core.config import settings
from app.core.exceptions import FileTooLargeException, FilesystemException
from app.utils.file_validator import sanitize_filename

logger = logging.getLogger(__name__)


class FileManager:
    """
    파일 관리자

    - 업로드 파일 저장 (`{timestamp}-{originalName}`)
    - 작업별 출력 디렉토리 생성/삭제
    - 오래된 파일 정리
    """

    def __init__(
        self,
        upload_dir: Optional[Path] = None,
        output_dir: Optional[Path] = None,
        max_file_size: Optional[int] = None,
    ):
        self.upload_dir = upload_dir or settings.UPLOAD_DIR
        self.output_dir = output_dir or settings.OUTPUT_DIR
        self.max_file_size = max_file_size or settings.MAX_FILE_SIZE_BYTES

        # 디렉토리 생성
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def _generate_upload_filename(self, original_filename: str) -> str:
        """업로드 파일명 생성 (밀리초 타임스탬프 접두사)"""
        timestamp = int(time.time() * 1000)
        return f"{timestamp}-{sanitize_filename(original_filename)}"

    async def save_upload(
        self,
        file: BinaryIO,
        filename: str,
        max_size: Optional[int] = None,
    ) -> Tuple[Path, int]:
        """
        업로드 파일 저장

        Args:
            file: 파일 객체 (read() 메서드 필요)
            filename: 원본 파일명
            max_size: 최대 크기 (bytes), None이면 생성 시 설정값 사용

        Returns:
            (저장 경로, 파일 크기)

        Raises:
            FileTooLargeException: 파일 크기 초과
        """
        max_size = max_size or self.max_file_size
        save_path = self.upload_dir / self._generate_upload_filename(filename)

        total_size = 0
        chunk_size = 1024 * 1024  # 1MB 청크
        size_exceeded = False

        try:
            async with aiofiles.open(save_path, "wb") as f:
                while True:
                    # 동기 read를 비동기로 실행
                    chunk = await asyncio.to_thread(file.read, chunk_size)
                    if not chunk:
                        break

                    total_size += len(chunk)

                    if total_size > max_size:
                        size_exceeded = True
                        break

                    await f.write(chunk)
        finally:
            # 크기 초과 시 부분 파일 정리
            if size_exceeded:
                save_path.unlink(missing_ok=True)

        if size_exceeded:
            raise FileTooLargeException(max(1, max_size // (1024 * 1024)))

        logger.info(f"업로드 저장 완료: {save_path.name} ({total_size} bytes)")
        return save_path, total_size

    def job_dir(self, job_id: str) -> Path:
        """작업 출력 디렉토리 경로"""
        return self.output_dir / job_id

    def create_job_dir(self, job_id: str) -> Path:
        """
        작업 출력 디렉토리 생성

        Raises:
            FilesystemException: 디렉토리 생성 실패
        """
        path = self.job_dir(job_id)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemException(f"Failed to create job directory: {e}")
        return path

    def delete_file(self, file_path: Path) -> bool:
        """
        파일 삭제

        Returns:
            삭제 성공 여부
        """
        try:
            if file_path.exists():
                file_path.unlink()
                return True
            return False
        except OSError as e:
            logger.warning(f"파일 삭제 실패: {file_path} ({e})")
            return False

    def delete_directory(self, dir_path: Path) -> bool:
        """
        디렉토리 삭제 (내용 포함)

        Raises:
            FilesystemException: 삭제 실패

        Returns:
            삭제 여부 (디렉토리가 없으면 False)
        """
        if not dir_path.is_dir():
            return False

        try:
            shutil.rmtree(dir_path)
        except OSError as e:
            raise FilesystemException(f"Failed to delete directory: {e}")
        return True

    def cleanup_old_files(
        self,
        directory: Optional[Path] = None,
        max_age_hours: Optional[float] = None,
    ) -> int:
        """
        오래된 파일 정리

        Args:
            directory: 정리할 디렉토리 (None이면 upload/output 둘 다)
            max_age_hours: 최대 보관 시간

        Returns:
            삭제된 항목 수
        """
        max_age = max_age_hours if max_age_hours is not None else settings.FILE_RETENTION_HOURS
        cutoff_time = datetime.now() - timedelta(hours=max_age)
        deleted_count = 0

        directories = [directory] if directory else [self.upload_dir, self.output_dir]

        for dir_path in directories:
            if not dir_path.exists():
                continue

            for item in dir_path.iterdir():
                try:
                    mtime = datetime.fromtimestamp(item.stat().st_mtime)
                    if mtime >= cutoff_time:
                        continue
                    if item.is_dir():
                        shutil.rmtree(item)
                    else:
                        item.unlink()
                    deleted_count += 1
                except OSError as e:
                    logger.warning(f"만료 파일 정리 실패: {item} ({e})")

        return deleted_count
