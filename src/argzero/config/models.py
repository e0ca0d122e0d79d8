"""
Pydantic models for ArgZero configuration validation.
"""

from typing import List, Optional
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from enum import Enum


class LogLevel(str, Enum):
    """Supported log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AppConfig(BaseModel):
    """Application-level configuration settings."""

    name: str = Field(default="ArgZero Shell", description="Application display name")
    version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    data_dir: str = Field(default="~/.argzero", description="Application workspace directory")
    verbose_logging: bool = Field(default=False, description="Enable verbose debug logging")

    log_file: Optional[str] = Field(default=None, description="Optional JSON log file location")
    max_log_size_mb: int = Field(default=10, ge=1, le=1000, description="Maximum log file size")
    backup_count: int = Field(default=5, ge=1, le=100, description="Number of backup log files")
    log_format: str = Field(
        default="%(levelname)-8s | %(name)s | %(message)s",
        description="Console log format string"
    )

    @field_validator('data_dir')
    @classmethod
    def expand_path(cls, v):
        """Expand user home directory in paths."""
        return str(Path(v).expanduser())

    @field_validator('log_file')
    @classmethod
    def expand_log_file(cls, v):
        if v is None:
            return v
        return str(Path(v).expanduser())


# Name of the sub-directory of the workspace that holds extension modules.
MODULE_SUBDIRECTORY = "arg0"


class DiscoveryConfig(BaseModel):
    """Where extension modules are looked for and how they are recognised."""

    module_folders: List[str] = Field(
        default_factory=list,
        description="Directories scanned for extension modules (defaults to '.' and <data_dir>/arg0)"
    )
    scan_pattern: str = Field(default="*_arg0.py", description="Glob pattern for extension module files")
    scan_on_startup: bool = Field(default=True, description="Scan module folders before dispatching")

    @field_validator('module_folders', mode='before')
    @classmethod
    def split_folders(cls, v):
        """Accept a comma-delimited string as well as a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [part.strip() for part in v.split(',') if part.strip()]
        return v

    @field_validator('module_folders')
    @classmethod
    def expand_folders(cls, v):
        return [str(Path(folder).expanduser()) for folder in v]

    @field_validator('scan_pattern')
    @classmethod
    def validate_pattern(cls, v):
        if not v or not v.strip():
            raise ValueError("scan_pattern must not be empty")
        return v.strip()


class DispatchConfig(BaseModel):
    """Argument tokenization and dispatch behavior."""

    flag_marker: str = Field(default="/", description="Character that starts a flag token")
    value_delimiter: str = Field(default=":", description="Separates a flag name from its value")
    reserved_leading_tokens: int = Field(
        default=0, ge=0, le=16,
        description="Tokens after the keyword that are skipped before parsing"
    )
    pause_flag: str = Field(default="/pause", description="Process argument that pauses before dispatch")
    pause_prompt: str = Field(default="Press enter to continue", description="Prompt shown when pausing")
    provider_suffix: str = Field(default="Provider", description="Naming suffix stripped from provider types")

    @field_validator('flag_marker', 'value_delimiter')
    @classmethod
    def single_character(cls, v):
        if len(v) != 1:
            raise ValueError("must be exactly one character")
        return v

    @model_validator(mode='after')
    def validate_separators(self):
        if self.flag_marker == self.value_delimiter:
            raise ValueError("flag_marker and value_delimiter must differ")
        return self


class ArgZeroConfig(BaseModel):
    """Main configuration model."""

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    app: AppConfig = Field(default_factory=AppConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    dispatch: DispatchConfig = Field(default_factory=DispatchConfig)

    @model_validator(mode='after')
    def default_module_folders(self):
        """Fill in the conventional folders when none were configured."""
        if not self.discovery.module_folders:
            self.discovery.module_folders = [
                ".",
                str(Path(self.app.data_dir) / MODULE_SUBDIRECTORY),
            ]
        return self
