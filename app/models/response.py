from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ConvertedFile(BaseModel):
    """변환 결과 파일"""

    name: str = Field(..., description="파일명")
    url: str = Field(..., description="다운로드 URL")


class ConvertResponse(BaseModel):
    """변환 완료 응답"""

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., alias="jobId", description="작업 ID")
    files: List[ConvertedFile] = Field(default_factory=list, description="변환 결과 파일 목록")


class DeleteJobResponse(BaseModel):
    """작업 삭제 응답"""

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., alias="jobId", description="작업 ID")
    deleted: bool = Field(default=True, description="삭제 여부")


class ErrorResponse(BaseModel):
    """에러 응답"""

    error: str = Field(..., description="에러 메시지")


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="healthy", description="서버 상태")
