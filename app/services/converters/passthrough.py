import shutil

from app.models import ConversionRequest, ConversionResult
from app.services.converters.base import BaseConverter


class PassthroughConverter(BaseConverter):
    """동일 포맷 요청 시 원본을 그대로 복사"""

    @property
    def strategy(self) -> str:
        return "passthrough"

    def supports(self, source_ext: str, target_format: str) -> bool:
        return bool(source_ext) and source_ext == target_format

    def _convert_sync(self, request: ConversionRequest) -> ConversionResult:
        output_path = self.get_output_path(request.output_dir, request.input_path.name)
        shutil.copyfile(request.input_path, output_path)
        return [output_path]
