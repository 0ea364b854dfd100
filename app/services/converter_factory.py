import logging
from pathlib import Path
from typing import List, Optional, Sequence

from app.core.exceptions import UnsupportedConversionException
from app.models import ConversionRequest, ConversionResult
from app.services.converters import (
    BaseConverter,
    CsvToXlsxConverter,
    DocumentToPdfConverter,
    ImageConverter,
    PassthroughConverter,
    PdfToImagesConverter,
    XlsxToCsvConverter,
)

logger = logging.getLogger(__name__)


class ConverterFactory:
    """
    변환 디스패처

    (입력 확장자, 목표 포맷) 조합을 우선순위 순서로 평가해 첫 번째로 맞는 변환기를 실행한다.
    마지막 규칙(동일 포맷 복사)은 모든 확장자를 받으므로 항상 맨 뒤에 둔다.
    상태가 없으므로 작업 디렉토리만 다르면 동시에 호출해도 안전하다.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        soffice_path: Optional[str] = None,
        converters: Optional[Sequence[BaseConverter]] = None,
    ):
        self.timeout = timeout
        self._converters: List[BaseConverter] = list(converters) if converters is not None else [
            DocumentToPdfConverter(soffice_path=soffice_path, timeout=timeout),
            XlsxToCsvConverter(),
            CsvToXlsxConverter(),
            ImageConverter(),
            PdfToImagesConverter(),
            PassthroughConverter(),
        ]

    def get_converter(self, source_ext: str, target_format: str) -> BaseConverter:
        """
        조합에 맞는 변환기 반환

        Args:
            source_ext: 입력 확장자 ('.' 제외, 소문자)
            target_format: 목표 포맷 토큰 (소문자)

        Returns:
            첫 번째로 일치하는 BaseConverter

        Raises:
            UnsupportedConversionException: 일치하는 규칙이 없는 경우
        """
        for converter in self._converters:
            if converter.supports(source_ext, target_format):
                return converter

        raise UnsupportedConversionException(source_ext, target_format)

    def is_supported(self, source_ext: str, target_format: str) -> bool:
        """조합 지원 여부"""
        return any(c.supports(source_ext, target_format) for c in self._converters)

    async def convert(
        self, input_path: Path, target_format: str, output_dir: Path
    ) -> ConversionResult:
        """
        파일 변환

        Args:
            input_path: 입력 파일 경로
            target_format: 목표 포맷 토큰 (예: 'pdf', 'csv', 'png')
            output_dir: 결과를 기록할 작업 디렉토리

        Returns:
            출력 파일 경로 목록

        Raises:
            UnsupportedConversionException: 지원하지 않는 조합
            ConversionFailedException: 변환 라이브러리 오류
        """
        request = ConversionRequest(
            input_path=input_path,
            target_format=target_format,
            output_dir=output_dir,
        )
        converter = self.get_converter(request.source_extension, request.target_format)

        logger.info(
            f"변환 시작: {request.input_path.name} -> {request.target_format} "
            f"(strategy={converter.strategy})"
        )
        return await converter.convert(request, timeout=self.timeout)
