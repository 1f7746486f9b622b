"""Tests for the configuration system."""

from decimal import Decimal

import pytest

from custody_core.config import CustodyCoreConfig, DraftDefaults, load_config
from custody_core.exceptions import ConfigurationError
from custody_core.models import YesNo


class TestDraftDefaults:
    """Test suite for DraftDefaults."""

    def test_default_values(self):
        """DraftDefaults should match a blank child form."""
        defaults = DraftDefaults()

        assert defaults.p1_percent == 50
        assert defaults.percent_of_year_eligible == Decimal("100")
        assert defaults.support_eligible == YesNo.YES
        assert defaults.eligible_child_tax_credit is True
        assert defaults.eligible_other_dependent_tax_credit is False
        assert defaults.eligible_eic is True

    def test_p1_percent_validation(self):
        """P1 percent must be within 0..100."""
        DraftDefaults(p1_percent=0)
        DraftDefaults(p1_percent=100)

        with pytest.raises(ValueError):
            DraftDefaults(p1_percent=-1)

        with pytest.raises(ValueError):
            DraftDefaults(p1_percent=101)

    def test_from_environment(self, monkeypatch):
        """DraftDefaults should load from environment variables."""
        monkeypatch.setenv("CUSTODY_DRAFT_P1_PERCENT", "70")
        monkeypatch.setenv("CUSTODY_DRAFT_SUPPORT_ELIGIBLE", "NO")
        monkeypatch.setenv("CUSTODY_DRAFT_ELIGIBLE_EIC", "false")

        defaults = DraftDefaults()

        assert defaults.p1_percent == 70
        assert defaults.support_eligible == YesNo.NO
        assert defaults.eligible_eic is False


class TestCustodyCoreConfig:
    """Test suite for CustodyCoreConfig."""

    def test_default_values(self, monkeypatch):
        """Config should have sensible defaults."""
        monkeypatch.delenv("CUSTODY_ENV", raising=False)
        monkeypatch.delenv("CUSTODY_LOG_LEVEL", raising=False)
        config = CustodyCoreConfig()

        assert config.env == "development"
        assert config.log_level == "INFO"
        assert config.log_format == "console"
        assert isinstance(config.drafts, DraftDefaults)
        assert config.is_production is False
        assert config.is_debug is False

    def test_environment_validation(self):
        """Environment should be validated and normalized."""
        assert CustodyCoreConfig(env="PRODUCTION").env == "production"
        assert CustodyCoreConfig(env="test").env == "test"

        with pytest.raises(ValueError):
            CustodyCoreConfig(env="invalid")

    def test_log_level_validation(self):
        """Log level should be validated and upper-cased."""
        config = CustodyCoreConfig(log_level="debug")
        assert config.log_level == "DEBUG"
        assert config.is_debug is True

        with pytest.raises(ValueError):
            CustodyCoreConfig(log_level="LOUD")

    def test_log_format_validation(self):
        """Log format must be console or json."""
        assert CustodyCoreConfig(log_format="JSON").log_format == "json"

        with pytest.raises(ValueError):
            CustodyCoreConfig(log_format="xml")

    def test_from_environment(self, monkeypatch):
        """Config should load from environment variables."""
        monkeypatch.setenv("CUSTODY_ENV", "production")
        monkeypatch.setenv("CUSTODY_LOG_LEVEL", "WARNING")

        config = CustodyCoreConfig()

        assert config.env == "production"
        assert config.log_level == "WARNING"
        assert config.is_production is True

    def test_loads_from_dotenv_file(self, tmp_path, monkeypatch):
        """Config should read a .env file in the working directory."""
        (tmp_path / ".env").write_text("CUSTODY_LOG_LEVEL=ERROR\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("CUSTODY_LOG_LEVEL", raising=False)

        assert CustodyCoreConfig().log_level == "ERROR"


class TestLoadConfig:
    """Tests for load_config."""

    def test_overrides(self):
        """Keyword overrides are applied."""
        config = load_config(log_level="DEBUG", drafts=DraftDefaults(p1_percent=65))

        assert config.log_level == "DEBUG"
        assert config.drafts.p1_percent == 65

    def test_invalid_setting_raises_configuration_error(self):
        """Validation failures surface as ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(log_level="LOUD")

        assert exc_info.value.config_key == "log_level"
        assert exc_info.value.actual == "LOUD"
        assert exc_info.value.recoverable is False
