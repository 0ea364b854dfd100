from app.utils.file_validator import (
    get_extension,
    is_allowed_upload,
    sanitize_filename,
    validate_file_signature,
)

__all__ = [
    "get_extension",
    "is_allowed_upload",
    "sanitize_filename",
    "validate_file_signature",
]
