import re
from pathlib import Path
from typing import Iterable, Optional

# 파일명 최대 길이
MAX_FILENAME_LENGTH = 200

# 파일 시그니처 (매직 바이트)
FILE_SIGNATURES = {
    ".pdf": [b"%PDF"],
    ".png": [b"\x89PNG\r\n\x1a\n"],
    ".jpg": [b"\xff\xd8\xff"],
    ".jpeg": [b"\xff\xd8\xff"],
    # OOXML 문서는 ZIP 컨테이너
    ".docx": [b"PK\x03\x04"],
    ".xlsx": [b"PK\x03\x04"],
    ".csv": None,  # 텍스트 파일은 시그니처 없음
}


def sanitize_filename(filename: str) -> str:
    """
    파일명 정제 (Path Traversal 방지)

    - 경로 구분자 제거
    - 위험 문자 제거
    - '..' 시퀀스 제거
    - 길이 제한
    """
    if not filename:
        return "unnamed"

    # 경로 구분자 및 위험 문자 제거
    sanitized = re.sub(r'[<>:"/\\|?*\x00-\x1f]', "_", filename)

    # '..' 시퀀스 제거
    sanitized = sanitized.replace("..", "_")

    # 앞뒤 공백 및 점 제거
    sanitized = sanitized.strip(". ")

    if not sanitized:
        return "unnamed"

    return sanitized[:MAX_FILENAME_LENGTH]


def get_extension(filename: str) -> str:
    """파일명에서 확장자 추출 (소문자, '.' 제외)"""
    return Path(filename).suffix.lower().lstrip(".")


def is_allowed_upload(
    filename: str,
    content_type: Optional[str],
    allowed_extensions: Iterable[str],
    allowed_mime_types: Iterable[str],
) -> bool:
    """
    업로드 허용 여부 확인 (MIME 타입 또는 확장자 중 하나만 맞으면 허용)

    Args:
        filename: 원본 파일명
        content_type: 클라이언트가 보낸 MIME 타입
        allowed_extensions: 허용 확장자 목록 ('.' 제외)
        allowed_mime_types: 허용 MIME 타입 목록

    Returns:
        허용되면 True
    """
    mime = (content_type or "").split(";")[0].strip().lower()
    if mime and mime in {m.lower() for m in allowed_mime_types}:
        return True

    ext = get_extension(filename)
    return bool(ext) and ext in {e.lower().lstrip(".") for e in allowed_extensions}


def validate_file_signature(file_path: Path) -> bool:
    """
    파일 시그니처(매직 바이트) 검증

    Args:
        file_path: 검증할 파일 경로 (확장자로 예상 시그니처 결정)

    Returns:
        시그니처가 유효하면 True
    """
    signatures = FILE_SIGNATURES.get(file_path.suffix.lower())

    # 시그니처가 정의되지 않은 확장자는 통과
    if signatures is None:
        return True

    try:
        with open(file_path, "rb") as f:
            header = f.read(16)
    except OSError:
        return False

    return any(header.startswith(sig) for sig in signatures)
