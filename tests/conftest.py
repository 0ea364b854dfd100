"""공용 테스트 픽스처"""

import csv
import os
import tempfile
from pathlib import Path

# 앱 임포트 전에 업로드/출력 경로를 임시 디렉토리로 지정
_TEST_ROOT = Path(tempfile.mkdtemp(prefix="file-converter-tests-"))
os.environ["ENV"] = "testing"
os.environ["UPLOAD_DIR"] = str(_TEST_ROOT / "uploads")
os.environ["OUTPUT_DIR"] = str(_TEST_ROOT / "outputs")
os.environ["PUBLIC_DIR"] = str(_TEST_ROOT / "public")
os.environ["SOFFICE_PATH"] = str(_TEST_ROOT / "bin" / "soffice")
(_TEST_ROOT / "uploads").mkdir(parents=True, exist_ok=True)
(_TEST_ROOT / "outputs").mkdir(parents=True, exist_ok=True)

import pytest  # noqa: E402
from openpyxl import Workbook  # noqa: E402
from PIL import Image  # noqa: E402
from pypdf import PdfWriter  # noqa: E402

from app.services import ConverterFactory, FileManager, JobService  # noqa: E402


def write_csv(path: Path, rows) -> Path:
    """CSV 파일 작성 (표준 방언)"""
    with open(path, "w", encoding="utf-8", newline="") as f:
        csv.writer(f).writerows(rows)
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def csv_file(tmp_path: Path) -> Path:
    path = tmp_path / "data.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")
    return path


@pytest.fixture
def multi_sheet_xlsx(tmp_path: Path) -> Path:
    """시트 3개짜리 워크북"""
    workbook = Workbook()
    first = workbook.active
    first.title = "First"
    first.append(["name", "qty"])
    first.append(["apple", 3])

    second = workbook.create_sheet("Second")
    second.append(["x", None, "z"])

    third = workbook.create_sheet("Third")
    third.append(['say "hi"', "a,b"])

    path = tmp_path / "book.xlsx"
    workbook.save(path)
    return path


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    path = tmp_path / "logo.png"
    Image.new("RGBA", (8, 6), (255, 0, 0, 128)).save(path, format="PNG")
    return path


@pytest.fixture
def pdf_file(tmp_path: Path) -> Path:
    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    writer.add_blank_page(width=72, height=72)
    path = tmp_path / "doc.pdf"
    with open(path, "wb") as f:
        writer.write(f)
    return path


@pytest.fixture
def docx_file(tmp_path: Path) -> Path:
    # LibreOffice는 테스트에서 스텁으로 대체되므로 내용은 중요하지 않음
    path = tmp_path / "report.docx"
    path.write_bytes(b"PK\x03\x04 fake docx")
    return path


@pytest.fixture
def factory() -> ConverterFactory:
    return ConverterFactory(timeout=30)


@pytest.fixture
def file_manager(tmp_path: Path) -> FileManager:
    return FileManager(
        upload_dir=tmp_path / "uploads",
        output_dir=tmp_path / "outputs",
        max_file_size=1024 * 1024,
    )


@pytest.fixture
def job_service(file_manager: FileManager, factory: ConverterFactory) -> JobService:
    return JobService(
        file_manager=file_manager,
        converter_factory=factory,
        output_url_prefix="/outputs",
        allowed_extensions=["docx", "pdf", "png", "jpg", "jpeg", "xlsx", "csv"],
        allowed_mime_types=["application/pdf", "image/png", "image/jpeg", "text/csv"],
    )
