"""공용 타입 정의"""

from pathlib import Path
from typing import List, Literal

ConversionStrategy = Literal[
    "document-to-pdf",
    "xlsx-to-csv",
    "csv-to-xlsx",
    "image",
    "pdf-to-images",
    "passthrough",
]

# 단일 변환 요청이 생성한 출력 파일 경로 (순서 유지)
ConversionResult = List[Path]
