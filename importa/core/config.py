from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ImportaSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="IMPORTA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Reporting
    report_path: Optional[str] = "report.txt"  # None -> report goes to the log

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Formatters
    strict_numbers: bool = False  # integer/float yield None on non-numeric text

    @field_validator("report_path", "log_file", mode="before")
    @classmethod
    def blank_as_none(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper()


settings = ImportaSettings()
