import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import FrozenSet, List, Optional

from app.core.exceptions import (
    ConversionFailedException,
    ConversionTimeoutException,
    ConverterException,
    FilesystemException,
)
from app.models import ConversionRequest, ConversionResult, ConversionStrategy
from app.utils.file_validator import sanitize_filename

logger = logging.getLogger(__name__)


class BaseConverter(ABC):
    """변환기 추상 베이스 클래스"""

    # 처리 가능한 입력 확장자 / 목표 포맷 ('.' 제외, 소문자)
    source_extensions: FrozenSet[str] = frozenset()
    target_formats: FrozenSet[str] = frozenset()

    @property
    @abstractmethod
    def strategy(self) -> ConversionStrategy:
        """변환 전략 이름 (예: 'csv-to-xlsx')"""
        pass

    def supports(self, source_ext: str, target_format: str) -> bool:
        """(입력 확장자, 목표 포맷) 조합 처리 가능 여부"""
        return source_ext in self.source_extensions and target_format in self.target_formats

    def get_output_path(self, output_dir: Path, filename: str) -> Path:
        """출력 파일 경로 생성 (안전한 파일명 사용, 출력 디렉토리 밖 금지)"""
        output_path = output_dir / sanitize_filename(filename)

        if not output_path.resolve().is_relative_to(output_dir.resolve()):
            raise ConversionFailedException("Invalid output path")

        return output_path

    @abstractmethod
    def _convert_sync(self, request: ConversionRequest) -> ConversionResult:
        """동기 변환 실행 (서브클래스에서 구현)"""
        pass

    async def convert(
        self, request: ConversionRequest, timeout: Optional[float] = None
    ) -> ConversionResult:
        """
        비동기 변환 실행

        시간 초과 시 대기만 중단되고 워커 스레드는 끝까지 실행된다 (파이썬 스레드는 강제 종료 불가).
        늦게 끝난 쓰기는 작업 디렉토리에 남을 수 있으며, 보관 주기 정리에서 함께 삭제된다.
        LibreOffice는 자체 subprocess 타임아웃으로 자식 프로세스를 종료한다.

        Args:
            request: 변환 요청
            timeout: 최대 변환 시간 (초), None이면 무제한

        Returns:
            출력 파일 경로 목록 (모든 쓰기가 끝난 뒤 반환)
        """
        request.output_dir.mkdir(parents=True, exist_ok=True)

        try:
            outputs: List[Path] = await asyncio.wait_for(
                asyncio.to_thread(self._convert_sync, request), timeout=timeout
            )
        except asyncio.TimeoutError:
            raise ConversionTimeoutException(timeout)
        except ConverterException:
            raise
        except OSError as e:
            raise FilesystemException(f"File I/O failed during conversion: {e}")
        except Exception as e:
            raise ConversionFailedException(f"Conversion failed: {e}")

        missing = [path.name for path in outputs if not path.exists()]
        if missing:
            raise ConversionFailedException(
                f"Conversion produced no output file: {', '.join(missing)}"
            )

        return outputs
