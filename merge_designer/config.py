"""Application configuration."""
import os
from typing import List
from dataclasses import dataclass, field

from merge_designer.domain.exceptions import ConfigurationError


@dataclass
class ExportConfig:
    """Document export configuration."""
    font_name: str = "Inter"
    bold: bool = True
    page_margin_inches: float = 0.5
    label_page_margin_inches: float = 0.15
    label_safe_margin_inches: float = 0.9
    label_cell_margin_twips: int = 8
    filename_prefix: str = "mail-merge"


@dataclass
class ImportConfig:
    """Dataset import configuration."""
    supported_extensions: List[str] = field(default_factory=lambda: [".csv", ".xlsx", ".xlsm", ".xls"])
    max_upload_bytes: int = 10 * 1024 * 1024


@dataclass
class ApiConfig:
    """HTTP API configuration."""
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


class Config:
    """Application configuration."""

    def __init__(self):
        self._export_config = None
        self._import_config = None
        self._api_config = None

    @property
    def export(self) -> ExportConfig:
        """Get export configuration."""
        if self._export_config is None:
            font_name = os.getenv("MERGE_DESIGNER_FONT") or ExportConfig.font_name
            self._export_config = ExportConfig(font_name=font_name)
        return self._export_config

    @property
    def dataset_import(self) -> ImportConfig:
        """Get dataset import configuration."""
        if self._import_config is None:
            max_mb = _env_float("MERGE_DESIGNER_MAX_UPLOAD_MB", 10)
            if max_mb <= 0:
                raise ConfigurationError("MERGE_DESIGNER_MAX_UPLOAD_MB must be positive")
            self._import_config = ImportConfig(max_upload_bytes=int(max_mb * 1024 * 1024))
        return self._import_config

    @property
    def api(self) -> ApiConfig:
        """Get API configuration."""
        if self._api_config is None:
            raw = os.getenv("MERGE_DESIGNER_CORS_ORIGINS", "*")
            origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
            self._api_config = ApiConfig(allowed_origins=origins or ["*"])
        return self._api_config


# Global configuration instance
config = Config()
