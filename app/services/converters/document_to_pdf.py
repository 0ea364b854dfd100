import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from app.core.config import settings
from app.core.exceptions import ConversionFailedException, ConversionTimeoutException
from app.models import ConversionRequest, ConversionResult
from app.services.converters.base import BaseConverter

logger = logging.getLogger(__name__)


class DocumentToPdfConverter(BaseConverter):
    """문서 → PDF 변환기 (LibreOffice headless)"""

    source_extensions = frozenset({"docx", "odt", "doc"})
    target_formats = frozenset({"pdf"})

    def __init__(self, soffice_path: Optional[str] = None, timeout: Optional[float] = None):
        self.soffice_path = soffice_path or settings.SOFFICE_PATH
        self.timeout = timeout

    @property
    def strategy(self) -> str:
        return "document-to-pdf"

    def _build_command(self, input_path: Path, out_dir: Path, profile_dir: Path) -> list[str]:
        """soffice 명령 생성"""
        return [
            self.soffice_path,
            # 호출마다 별도 프로필 사용 (동시 실행 시 프로필 잠금 충돌 방지)
            f"-env:UserInstallation={profile_dir.resolve().as_uri()}",
            "--headless",
            "--norestore",
            "--convert-to",
            "pdf",
            "--outdir",
            str(out_dir),
            str(input_path),
        ]

    def _convert_sync(self, request: ConversionRequest) -> ConversionResult:
        """문서를 PDF로 변환"""
        output_path = self.get_output_path(request.output_dir, f"{request.base_name}.pdf")

        with tempfile.TemporaryDirectory(prefix="soffice-") as work:
            work_dir = Path(work)
            out_dir = work_dir / "out"
            out_dir.mkdir()

            command = self._build_command(request.input_path, out_dir, work_dir / "profile")

            try:
                subprocess.run(
                    command,
                    check=True,
                    capture_output=True,
                    timeout=self.timeout,
                )
            except FileNotFoundError:
                raise ConversionFailedException(
                    f"LibreOffice executable not found: {self.soffice_path}. "
                    "Install LibreOffice or set SOFFICE_PATH."
                )
            except subprocess.TimeoutExpired:
                raise ConversionTimeoutException(self.timeout)
            except subprocess.CalledProcessError as e:
                stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
                raise ConversionFailedException(
                    f"LibreOffice conversion failed: {stderr or f'exit code {e.returncode}'}"
                )

            # LibreOffice는 입력 파일명(stem)으로 결과를 만든다
            rendered = out_dir / f"{request.input_path.stem}.pdf"
            if not rendered.exists():
                raise ConversionFailedException("LibreOffice produced no PDF output")

            shutil.move(str(rendered), output_path)

        logger.info(f"PDF 생성 완료: {output_path.name}")
        return [output_path]
