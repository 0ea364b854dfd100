import asyncio
import logging
from typing import Optional

from app.services.file_manager import FileManager

logger = logging.getLogger(__name__)


class OutputRetention:
    """
    업로드/작업 결과 보관 정책

    - 보관 시간이 지난 업로드 파일과 작업 디렉토리를 주기적으로 삭제
    """

    def __init__(self, file_manager: FileManager, retention_hours: float):
        self.file_manager = file_manager
        self.retention_hours = retention_hours
        self._cleanup_task: Optional[asyncio.Task] = None

    def cleanup_expired(self) -> int:
        """
        만료된 파일 정리

        Returns:
            삭제된 항목 수
        """
        count = self.file_manager.cleanup_old_files(max_age_hours=self.retention_hours)
        if count > 0:
            logger.info(f"{count}개 만료 항목 삭제됨")
        return count

    async def start_cleanup_scheduler(self, interval_minutes: float = 10) -> None:
        """
        주기적 정리 스케줄러 시작

        Args:
            interval_minutes: 정리 간격 (분)
        """
        async def cleanup_loop():
            while True:
                await asyncio.sleep(interval_minutes * 60)
                try:
                    await asyncio.to_thread(self.cleanup_expired)
                except Exception:
                    logger.exception("만료 항목 정리 실패")

        self._cleanup_task = asyncio.create_task(cleanup_loop())

    def stop_cleanup_scheduler(self) -> None:
        """정리 스케줄러 중지"""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            self._cleanup_task = None
