from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """파일 변환 서비스 설정"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # 서버
    ENV: Literal["development", "production", "testing"] = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = ["http://localhost:3000"]

    # 파일 제한
    MAX_FILE_SIZE_MB: int = 200
    ALLOWED_EXTENSIONS: Annotated[List[str], NoDecode] = ["docx", "pdf", "png", "jpg", "jpeg", "xlsx", "csv"]
    ALLOWED_MIME_TYPES: Annotated[List[str], NoDecode] = [
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/pdf",
        "image/png",
        "image/jpeg",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "text/csv",
    ]

    # 경로
    UPLOAD_DIR: Path = Path("./uploads")
    OUTPUT_DIR: Path = Path("./outputs")
    PUBLIC_DIR: Path = Path("./public")
    OUTPUT_URL_PREFIX: str = "/outputs"

    # 파일 보관 시간
    FILE_RETENTION_HOURS: int = 24
    CLEANUP_INTERVAL_MINUTES: int = 10

    # 변환
    CONVERSION_TIMEOUT_SECONDS: float = 300
    SOFFICE_PATH: str = "soffice"

    @field_validator("ALLOWED_ORIGINS", "ALLOWED_EXTENSIONS", "ALLOWED_MIME_TYPES", mode="before")
    @classmethod
    def parse_comma_list(cls, v):
        """콤마로 구분된 문자열을 리스트로 파싱"""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("OUTPUT_URL_PREFIX")
    @classmethod
    def normalize_url_prefix(cls, v: str) -> str:
        """URL 프리픽스 정규화 ('/outputs/' -> '/outputs')"""
        return "/" + v.strip("/")

    @property
    def MAX_FILE_SIZE_BYTES(self) -> int:
        """파일당 최대 크기 (bytes)"""
        return self.MAX_FILE_SIZE_MB * 1024 * 1024

    @property
    def is_production(self) -> bool:
        """프로덕션 환경 여부"""
        return self.ENV == "production"

    def ensure_directories(self) -> None:
        """업로드/출력 디렉토리 생성"""
        self.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
        self.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    """설정 싱글톤 반환 (캐싱)"""
    return Settings()


# 기본 설정 인스턴스 (get_settings()와 동일 인스턴스 사용)
settings = get_settings()
