import logging

from PIL import Image, UnidentifiedImageError

from app.core.exceptions import ConversionFailedException
from app.models import ConversionRequest, ConversionResult
from app.services.converters.base import BaseConverter

logger = logging.getLogger(__name__)

# 목표 포맷 토큰 -> Pillow 포맷 이름
PILLOW_FORMATS = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "webp": "WEBP",
    "avif": "AVIF",
}

# 알파 채널/팔레트를 지원하지 않는 포맷
RGB_ONLY_FORMATS = {"JPEG"}


class ImageConverter(BaseConverter):
    """이미지 재인코딩 변환기 (Pillow)"""

    source_extensions = frozenset({"png", "jpg", "jpeg"})
    target_formats = frozenset(PILLOW_FORMATS)

    @property
    def strategy(self) -> str:
        return "image"

    def _convert_sync(self, request: ConversionRequest) -> ConversionResult:
        """이미지를 목표 포맷으로 다시 인코딩"""
        pillow_format = PILLOW_FORMATS[request.target_format]
        output_path = self.get_output_path(
            request.output_dir, f"{request.base_name}.{request.target_format}"
        )

        try:
            with Image.open(request.input_path) as image:
                image.load()

                if pillow_format in RGB_ONLY_FORMATS and image.mode not in ("RGB", "L"):
                    image = image.convert("RGB")

                image.save(output_path, format=pillow_format)
        except UnidentifiedImageError:
            raise ConversionFailedException(
                f"Cannot identify image file: {request.input_path.name}"
            )
        except OSError as e:
            raise ConversionFailedException(f"Image conversion failed: {e}")
        except KeyError:
            # Pillow 빌드에 해당 인코더가 없는 경우
            raise ConversionFailedException(
                f"Image encoder not available: {pillow_format}"
            )

        return [output_path]
