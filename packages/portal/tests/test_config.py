"""Tests for the configuration system."""

import pytest

from taxdesk_portal.config import (
    IntakeConfig,
    TaxDeskConfig,
    WorkspaceConfig,
)


class TestIntakeConfig:
    """Test suite for IntakeConfig."""

    def test_default_values(self):
        """IntakeConfig should have sensible defaults."""
        config = IntakeConfig()

        assert config.auto_classify is True
        assert config.seed_fields is True
        assert config.storage_bucket == "tax-documents"

    def test_storage_bucket_validation(self):
        """Storage bucket cannot be empty."""
        with pytest.raises(ValueError):
            IntakeConfig(storage_bucket="")

        with pytest.raises(ValueError):
            IntakeConfig(storage_bucket="   ")

    def test_from_environment(self, monkeypatch):
        """IntakeConfig should load from environment variables."""
        monkeypatch.setenv("TAXDESK_INTAKE_AUTO_CLASSIFY", "false")
        monkeypatch.setenv("TAXDESK_INTAKE_SEED_FIELDS", "false")
        monkeypatch.setenv("TAXDESK_INTAKE_STORAGE_BUCKET", "uploads")

        config = IntakeConfig()

        assert config.auto_classify is False
        assert config.seed_fields is False
        assert config.storage_bucket == "uploads"


class TestWorkspaceConfig:
    """Test suite for WorkspaceConfig."""

    def test_default_values(self):
        config = WorkspaceConfig()

        assert config.export_format == "text"
        assert config.export_dir == "./exports"

    def test_export_format_validation(self):
        """Only text and markdown exports are supported."""
        WorkspaceConfig(export_format="text")
        WorkspaceConfig(export_format="markdown")

        with pytest.raises(ValueError):
            WorkspaceConfig(export_format="pdf")

    def test_export_format_case_insensitive(self):
        config = WorkspaceConfig(export_format="Markdown")
        assert config.export_format == "markdown"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("TAXDESK_WORKSPACE_EXPORT_FORMAT", "markdown")
        monkeypatch.setenv("TAXDESK_WORKSPACE_EXPORT_DIR", "/tmp/exports")

        config = WorkspaceConfig()

        assert config.export_format == "markdown"
        assert config.export_dir == "/tmp/exports"


class TestTaxDeskConfig:
    """Test suite for TaxDeskConfig."""

    def test_default_values(self):
        """TaxDeskConfig should have sensible defaults."""
        config = TaxDeskConfig()

        assert config.env == "development"
        assert config.log_level == "INFO"

        # Check nested configs have defaults
        assert config.intake.auto_classify is True
        assert config.workspace.export_format == "text"

    def test_custom_nested_config(self):
        """Should accept custom nested configuration."""
        config = TaxDeskConfig(
            intake=IntakeConfig(seed_fields=False),
            workspace=WorkspaceConfig(export_format="markdown"),
        )

        assert config.intake.seed_fields is False
        assert config.workspace.export_format == "markdown"

    def test_environment_validation(self):
        """Environment should be validated."""
        TaxDeskConfig(env="development")
        TaxDeskConfig(env="staging")
        TaxDeskConfig(env="production")
        TaxDeskConfig(env="test")

        with pytest.raises(ValueError):
            TaxDeskConfig(env="invalid")

    def test_environment_case_insensitive(self):
        config = TaxDeskConfig(env="PRODUCTION")
        assert config.env == "production"

    def test_log_level_validation(self):
        """Log level should be validated and normalized."""
        assert TaxDeskConfig(log_level="debug").log_level == "DEBUG"
        assert TaxDeskConfig(log_level="Warning").log_level == "WARNING"

        with pytest.raises(ValueError):
            TaxDeskConfig(log_level="INVALID")

    def test_environment_properties(self):
        """is_production / is_development follow env."""
        config = TaxDeskConfig(env="production")
        assert config.is_production is True
        assert config.is_development is False

        config = TaxDeskConfig(env="development")
        assert config.is_production is False
        assert config.is_development is True

    def test_is_debug_property(self):
        """is_debug should return True only at DEBUG log level."""
        assert TaxDeskConfig(log_level="DEBUG").is_debug is True
        assert TaxDeskConfig(log_level="INFO").is_debug is False

    def test_from_environment(self, monkeypatch):
        """TaxDeskConfig should load from environment variables."""
        monkeypatch.setenv("TAXDESK_ENV", "production")
        monkeypatch.setenv("TAXDESK_LOG_LEVEL", "WARNING")

        config = TaxDeskConfig()

        assert config.env == "production"
        assert config.log_level == "WARNING"

    def test_loads_from_dotenv_file(self, tmp_path):
        """TaxDeskConfig should load from a .env file in the working directory."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "TAXDESK_ENV=staging\n"
            "TAXDESK_LOG_LEVEL=ERROR\n"
            "TAXDESK_INTAKE_SEED_FIELDS=false\n"
            "TAXDESK_WORKSPACE_EXPORT_FORMAT=markdown\n"
        )

        config = TaxDeskConfig()

        assert config.env == "staging"
        assert config.log_level == "ERROR"
        assert config.intake.seed_fields is False
        assert config.workspace.export_format == "markdown"

    def test_validates_on_instantiation(self):
        """Configuration should validate on instantiation."""
        with pytest.raises(ValueError):
            TaxDeskConfig(env="invalid-env")

        with pytest.raises(ValueError):
            TaxDeskConfig(workspace=WorkspaceConfig(export_format="docx"))
