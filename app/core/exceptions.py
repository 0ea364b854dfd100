from fastapi import HTTPException, status


class ConverterException(HTTPException):
    """변환 서비스 기본 예외"""

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "Conversion failed",
    ):
        super().__init__(status_code=status_code, detail=detail)


class NoFileProvidedException(ConverterException):
    """업로드 파일 누락 예외"""

    def __init__(self):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )


class FileTooLargeException(ConverterException):
    """파일 크기 초과 예외"""

    def __init__(self, max_size_mb: int):
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the {max_size_mb}MB upload limit",
        )


class FileTypeNotAllowedException(ConverterException):
    """허용되지 않은 파일 타입 예외"""

    def __init__(self):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File type not allowed",
        )


class UnsupportedConversionException(ConverterException):
    """지원하지 않는 변환 조합 예외 (클라이언트 요청 오류)"""

    def __init__(self, source_ext: str, target_format: str):
        self.source_ext = source_ext
        self.target_format = target_format
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Conversion from .{source_ext} to {target_format or '(none)'} is not supported",
        )


class ConversionFailedException(ConverterException):
    """변환 실패 예외 (외부 라이브러리 오류)"""

    def __init__(self, message: str = "Conversion failed"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=message,
        )


class FilesystemException(ConverterException):
    """디렉토리/파일 I/O 예외"""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=message,
        )


class RasterizationNotSupportedException(ConverterException):
    """PDF → 이미지 변환 미구현 예외"""

    def __init__(self, page_count: int):
        super().__init__(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            detail=f"PDF to image rasterization is not implemented (document has {page_count} pages)",
        )


class ConversionTimeoutException(ConverterException):
    """변환 시간 초과 예외"""

    def __init__(self, timeout_seconds: float):
        super().__init__(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail=f"Conversion did not finish within {timeout_seconds:g} seconds",
        )


class JobNotFoundException(ConverterException):
    """작업을 찾을 수 없음 예외"""

    def __init__(self, job_id: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Job not found: {job_id}",
        )
