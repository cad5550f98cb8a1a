"""Configuration system for the TaxDesk portal.

This module provides Pydantic Settings-based configuration with environment
variable support and sensible defaults for the intake, review and workspace
services.

Usage:
    from taxdesk_portal.config import TaxDeskConfig

    # Load from environment variables and .env file
    config = TaxDeskConfig()

    # Access intake settings
    if config.intake.auto_classify:
        print("Uploads are classified from their filename")

    # Access workspace settings
    print(config.workspace.export_format)
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taxdesk_core.report_generator import SUPPORTED_FORMATS


class IntakeConfig(BaseSettings):
    """Document intake settings.

    Environment Variables:
        TAXDESK_INTAKE_AUTO_CLASSIFY: Classify uploads without an explicit type
        TAXDESK_INTAKE_SEED_FIELDS: Create placeholder fields on upload
        TAXDESK_INTAKE_STORAGE_BUCKET: Bucket name used in stored file paths
    """

    model_config = SettingsConfigDict(
        env_prefix="TAXDESK_INTAKE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    auto_classify: bool = Field(
        default=True,
        description="Classify uploads from their filename when no type is given",
    )
    seed_fields: bool = Field(
        default=True,
        description="Create one placeholder field row per expected field",
    )
    storage_bucket: str = Field(
        default="tax-documents",
        description="Storage bucket name used to build file paths",
    )

    @field_validator("storage_bucket")
    @classmethod
    def validate_storage_bucket(cls, v: str) -> str:
        """Ensure bucket name is not empty."""
        if not v or not v.strip():
            raise ValueError("Storage bucket cannot be empty")
        return v.strip()


class WorkspaceConfig(BaseSettings):
    """Tax-prep workspace settings.

    Environment Variables:
        TAXDESK_WORKSPACE_EXPORT_FORMAT: Summary export format (text, markdown)
        TAXDESK_WORKSPACE_EXPORT_DIR: Directory summary exports are written to
    """

    model_config = SettingsConfigDict(
        env_prefix="TAXDESK_WORKSPACE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    export_format: str = Field(
        default="text",
        description="Summary export format",
    )
    export_dir: str = Field(
        default="./exports",
        description="Directory for written summary exports",
    )

    @field_validator("export_format")
    @classmethod
    def validate_export_format(cls, v: str) -> str:
        """Validate and normalize export format."""
        v_lower = v.lower().strip()
        if v_lower not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Invalid export format: {v}. Must be one of: {SUPPORTED_FORMATS}"
            )
        return v_lower


class TaxDeskConfig(BaseSettings):
    """Root configuration for the TaxDesk portal.

    Combines all configuration subsections. Supports loading from
    environment variables and .env files.

    Environment Variables:
        TAXDESK_ENV: Environment name (development, staging, production, test)
        TAXDESK_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)

    Example:
        # Override specific settings
        config = TaxDeskConfig(
            intake=IntakeConfig(seed_fields=False),
            workspace=WorkspaceConfig(export_format="markdown"),
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="TAXDESK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment settings
    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Nested configuration
    intake: IntakeConfig = Field(default_factory=IntakeConfig)
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.env == "development"

    @property
    def is_debug(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"
