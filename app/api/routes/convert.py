from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile

from app.api.deps import JobServiceDep
from app.models import ConvertResponse, DeleteJobResponse, ErrorResponse

router = APIRouter()


@router.post(
    "/convert",
    response_model=ConvertResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        501: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def convert_file(
    job_service: JobServiceDep,
    file: Optional[UploadFile] = File(None, description="변환할 파일"),
    target_format: Optional[str] = Form(None, alias="targetFormat", description="목표 포맷"),
):
    """
    파일 변환 API

    - **file**: 변환할 파일 (docx, pdf, png, jpg, xlsx, csv)
    - **targetFormat**: 목표 포맷 (예: `pdf`, `csv`, `xlsx`, `png`, `webp`)

    변환이 끝나면 작업 ID와 결과 파일 URL 목록을 반환합니다.
    """
    return await job_service.handle_convert(file, target_format)


@router.delete(
    "/jobs/{job_id}",
    response_model=DeleteJobResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_job(job_id: str, job_service: JobServiceDep):
    """
    작업 결과 삭제

    - **job_id**: 변환 작업 ID

    작업 출력 디렉토리와 그 안의 파일을 모두 삭제합니다.
    """
    job_service.delete_job(job_id)
    return DeleteJobResponse(job_id=job_id)
