"""HTTP API 엔드투엔드 테스트"""

import io

import pytest
from httpx import ASGITransport, AsyncClient
from openpyxl import load_workbook
from PIL import Image

from main import app


def _ten_row_csv() -> bytes:
    lines = ["id,name"] + [f"{i},item-{i}" for i in range(1, 10)]
    return ("\n".join(lines) + "\n").encode("utf-8")


def _png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), (0, 128, 255)).save(buffer, format="PNG")
    return buffer.getvalue()


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
class TestConvertEndpoint:
    """POST /api/convert"""

    async def test_csv_to_xlsx_end_to_end(self):
        """10행 CSV -> XLSX 변환 후 URL로 내려받기"""
        async with _client() as client:
            response = await client.post(
                "/api/convert",
                files={"file": ("data.csv", _ten_row_csv(), "text/csv")},
                data={"targetFormat": "xlsx"},
            )
            assert response.status_code == 200
            body = response.json()
            assert set(body) == {"jobId", "files"}
            assert len(body["files"]) == 1

            converted = body["files"][0]
            assert converted["url"] == f"/outputs/{body['jobId']}/{converted['name']}"

            download = await client.get(converted["url"])
            assert download.status_code == 200

        worksheet = load_workbook(io.BytesIO(download.content)).active
        rows = list(worksheet.iter_rows(values_only=True))
        assert len(rows) == 10
        assert rows[0] == ("id", "name")

    async def test_image_conversion(self):
        async with _client() as client:
            response = await client.post(
                "/api/convert",
                files={"file": ("pic.png", _png_bytes(), "image/png")},
                data={"targetFormat": "webp"},
            )
            assert response.status_code == 200
            (converted,) = response.json()["files"]
            assert converted["name"].endswith("-pic.webp")

            download = await client.get(converted["url"])

        with Image.open(io.BytesIO(download.content)) as image:
            assert image.format == "WEBP"

    async def test_no_file(self):
        async with _client() as client:
            response = await client.post("/api/convert", data={"targetFormat": "xlsx"})

        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded"}

    async def test_unsupported_conversion(self):
        async with _client() as client:
            response = await client.post(
                "/api/convert",
                files={"file": ("pic.png", _png_bytes(), "image/png")},
                data={"targetFormat": "xlsx"},
            )

        assert response.status_code == 400
        assert "not supported" in response.json()["error"]

    async def test_file_type_not_allowed(self):
        async with _client() as client:
            response = await client.post(
                "/api/convert",
                files={"file": ("run.exe", b"MZ\x90\x00", "application/x-msdownload")},
                data={"targetFormat": "pdf"},
            )

        assert response.status_code == 400
        assert response.json() == {"error": "File type not allowed"}

    async def test_pdf_to_images_not_implemented(self, pdf_file):
        async with _client() as client:
            response = await client.post(
                "/api/convert",
                files={"file": ("doc.pdf", pdf_file.read_bytes(), "application/pdf")},
                data={"targetFormat": "images"},
            )

        assert response.status_code == 501
        assert "not implemented" in response.json()["error"]


@pytest.mark.asyncio
class TestOutputs:
    """GET /outputs, DELETE /api/jobs"""

    async def _convert(self, client: AsyncClient) -> dict:
        response = await client.post(
            "/api/convert",
            files={"file": ("data.csv", b"a,b\n", "text/csv")},
            data={"targetFormat": "csv"},
        )
        assert response.status_code == 200
        return response.json()

    async def test_passthrough_download_is_identical(self):
        async with _client() as client:
            body = await self._convert(client)
            download = await client.get(body["files"][0]["url"])

        assert download.content == b"a,b\n"

    async def test_directory_listing_disabled(self):
        async with _client() as client:
            body = await self._convert(client)
            response = await client.get(f"/outputs/{body['jobId']}/")

        assert response.status_code == 404
        assert "error" in response.json()

    async def test_delete_job(self):
        async with _client() as client:
            body = await self._convert(client)

            response = await client.delete(f"/api/jobs/{body['jobId']}")
            assert response.status_code == 200
            assert response.json() == {"jobId": body["jobId"], "deleted": True}

            gone = await client.get(body["files"][0]["url"])
            assert gone.status_code == 404

            again = await client.delete(f"/api/jobs/{body['jobId']}")
            assert again.status_code == 404
            assert "Job not found" in again.json()["error"]
