import logging

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from app.core.exceptions import ConversionFailedException, RasterizationNotSupportedException
from app.models import ConversionRequest, ConversionResult
from app.services.converters.base import BaseConverter

logger = logging.getLogger(__name__)


class PdfToImagesConverter(BaseConverter):
    """
    PDF → 이미지 변환기 (미구현)

    렌더링 엔진이 없으므로 PDF를 읽어 유효성만 확인한 뒤 501을 반환한다.
    PDF를 그대로 복사해 이미지인 척 돌려주지 않는다.
    """

    source_extensions = frozenset({"pdf"})
    target_formats = frozenset({"png", "jpg", "images"})

    @property
    def strategy(self) -> str:
        return "pdf-to-images"

    def _convert_sync(self, request: ConversionRequest) -> ConversionResult:
        try:
            page_count = len(PdfReader(request.input_path).pages)
        except PyPdfError as e:
            raise ConversionFailedException(f"Invalid PDF: {e}")

        logger.info(
            f"PDF 래스터화 미지원: {request.input_path.name} ({page_count}페이지)"
        )
        raise RasterizationNotSupportedException(page_count)
