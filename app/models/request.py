from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class ConversionRequest(BaseModel):
    """변환 요청 (요청마다 생성, 저장하지 않음)"""

    input_path: Path = Field(..., description="입력 파일 경로")
    target_format: str = Field(..., description="목표 포맷 토큰 (예: pdf, csv, png)")
    output_dir: Path = Field(..., description="작업 출력 디렉토리")

    @field_validator("target_format", mode="before")
    @classmethod
    def normalize_target_format(cls, v):
        """목표 포맷 정규화 (공백 제거, 소문자, 선행 '.' 제거)"""
        if v is None:
            return ""
        return str(v).strip().lower().lstrip(".")

    @property
    def source_extension(self) -> str:
        """입력 파일 확장자 (소문자, '.' 제외)"""
        return self.input_path.suffix.lower().lstrip(".")

    @property
    def base_name(self) -> str:
        """입력 파일의 확장자를 제외한 이름"""
        return self.input_path.stem
