"""
Upload limits configuration.

File count, size, and MIME type constraints for document uploads.

Dependencies: pydantic_settings
System role: Upload validation configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class UploadSettings(BaseSettings):
    """Settings for multipart document uploads."""

    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_",
        case_sensitive=False,
        extra="ignore",
    )

    max_files: int = Field(default=10, description="Maximum files per upload request")
    max_file_size: int = Field(
        default=10 * 1024 * 1024,
        description="Maximum size of a single file in bytes (default 10MB)",
    )
    allowed_mime_types: list[str] = Field(
        default=[
            "application/pdf",
            "text/plain",
            "application/msword",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        ],
        description="Accepted upload content types",
    )
