"""Configuration models describing checkfile settings."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CheckFileBaseModel(BaseModel):
    """Shared configuration for checkfile Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class DetectionSettings(CheckFileBaseModel):
    """Content-type oracle options.

    Attributes:
        backend: ``file`` runs the file(1) utility, ``magic`` uses libmagic in-process.
        file_command: Executable invoked by the ``file`` backend.
    """

    backend: Literal["file", "magic"] = "file"
    file_command: str = "file"


class ProgressSettings(CheckFileBaseModel):
    """Options for the on-demand progress probe.

    Attributes:
        signal: Name of the signal that triggers a progress snapshot.
        timestamp_format: ``strftime`` format for the run start time.
    """

    signal: str = "SIGUSR1"
    timestamp_format: str = "%Y.%m.%d_%Hh%M:%S"

    @field_validator("signal")
    @classmethod
    def _upper_signal(cls, value: str) -> str:
        return value.strip().upper()


class LoggingSettings(CheckFileBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: str = "WARNING"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown logging level '{value}'")
        return normalized


class CheckFileConfig(CheckFileBaseModel):
    """Top-level configuration struct for checkfile.

    Attributes:
        detection: Oracle selection.
        progress: Progress probe settings.
        logging: Logging configuration.
    """

    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    progress: ProgressSettings = Field(default_factory=ProgressSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


__all__ = [
    "CheckFileBaseModel",
    "DetectionSettings",
    "ProgressSettings",
    "LoggingSettings",
    "CheckFileConfig",
]
