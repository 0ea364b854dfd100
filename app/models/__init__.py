from app.models.types import ConversionResult, ConversionStrategy
from app.models.request import ConversionRequest
from app.models.response import (
    ConvertedFile,
    ConvertResponse,
    DeleteJobResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "ConversionResult",
    "ConversionStrategy",
    "ConversionRequest",
    "ConvertedFile",
    "ConvertResponse",
    "DeleteJobResponse",
    "ErrorResponse",
    "HealthResponse",
]
