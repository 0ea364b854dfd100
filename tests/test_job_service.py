"""작업 서비스 테스트"""

import io
import uuid

import pytest
from fastapi import UploadFile
from openpyxl import load_workbook
from starlette.datastructures import Headers

from app.core.exceptions import (
    FileTypeNotAllowedException,
    JobNotFoundException,
    NoFileProvidedException,
    UnsupportedConversionException,
)


def make_upload(content: bytes, filename: str, content_type: str = "application/octet-stream"):
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        size=len(content),
        headers=Headers({"content-type": content_type}),
    )


@pytest.mark.asyncio
class TestHandleConvert:
    """handle_convert()"""

    async def test_no_file(self, job_service):
        with pytest.raises(NoFileProvidedException) as exc_info:
            await job_service.handle_convert(None, "xlsx")

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "No file uploaded"

    async def test_csv_to_xlsx(self, job_service, file_manager):
        upload = make_upload(b"a,b\n1,2\n", "data.csv", "text/csv")

        response = await job_service.handle_convert(upload, "xlsx")

        assert uuid.UUID(response.job_id)
        assert len(response.files) == 1
        converted = response.files[0]
        assert converted.name.endswith("-data.xlsx")
        assert converted.url == f"/outputs/{response.job_id}/{converted.name}"

        output_path = file_manager.job_dir(response.job_id) / converted.name
        rows = list(load_workbook(output_path).active.iter_rows(values_only=True))
        assert rows == [("a", "b"), ("1", "2")]

    async def test_each_job_gets_its_own_directory(self, job_service):
        first = await job_service.handle_convert(make_upload(b"a\n", "x.csv"), "xlsx")
        second = await job_service.handle_convert(make_upload(b"a\n", "x.csv"), "xlsx")

        assert first.job_id != second.job_id

    async def test_disallowed_type(self, job_service, file_manager):
        upload = make_upload(b"hello", "notes.txt", "text/plain")

        with pytest.raises(FileTypeNotAllowedException):
            await job_service.handle_convert(upload, "pdf")
        assert list(file_manager.upload_dir.iterdir()) == []

    async def test_allowed_by_mime_type(self, job_service):
        """확장자가 없어도 MIME 타입이 허용되면 통과"""
        upload = make_upload(b"a,b\n", "export", "text/csv")

        with pytest.raises(UnsupportedConversionException):
            await job_service.handle_convert(upload, "xlsx")

    async def test_signature_mismatch(self, job_service, file_manager):
        upload = make_upload(b"not really a png", "photo.png", "image/png")

        with pytest.raises(FileTypeNotAllowedException):
            await job_service.handle_convert(upload, "jpg")
        assert list(file_manager.upload_dir.iterdir()) == []

    async def test_unsupported_conversion(self, job_service, file_manager):
        upload = make_upload(b"a,b\n", "data.csv", "text/csv")

        with pytest.raises(UnsupportedConversionException) as exc_info:
            await job_service.handle_convert(upload, "png")

        assert exc_info.value.detail == "Conversion from .csv to png is not supported"
        for job_dir in file_manager.output_dir.iterdir():
            assert list(job_dir.iterdir()) == []

    async def test_missing_target_format(self, job_service):
        upload = make_upload(b"a,b\n", "data.csv", "text/csv")

        with pytest.raises(UnsupportedConversionException):
            await job_service.handle_convert(upload, None)


@pytest.mark.asyncio
class TestDeleteJob:
    """delete_job()"""

    async def test_delete(self, job_service, file_manager):
        response = await job_service.handle_convert(make_upload(b"a\n", "d.csv"), "xlsx")

        job_service.delete_job(response.job_id)

        assert not file_manager.job_dir(response.job_id).exists()

    @pytest.mark.parametrize("job_id", [str(uuid.uuid4()), "../uploads", "not-a-uuid"])
    async def test_unknown_job(self, job_service, job_id):
        with pytest.raises(JobNotFoundException) as exc_info:
            job_service.delete_job(job_id)
        assert exc_info.value.status_code == 404
