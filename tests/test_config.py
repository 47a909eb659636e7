"""Integration tests for configuration module."""

import warnings
from pathlib import Path

import pytest

from reconciler.config import ConfigurationError, DatePosted, load_config
from reconciler.config.duration import DurationParseError, parse_duration, validate_duration_range
from reconciler.config.environment import load_environment_config
from reconciler.config.validators import check_for_warnings

# Test fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"


def write_config(tmp_path: Path, text: str) -> Path:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(text)
    return config_file


class TestConfigurationLoading:
    """Test configuration loading from YAML files."""

    def test_load_valid_config(self, mock_env_vars):
        app_config, env_config = load_config(FIXTURES_DIR / "valid_config.yaml")

        assert app_config.search_queries == [
            "mechanical engineer Denver Colorado",
            "HVAC MEP engineer Denver Colorado",
        ]
        assert app_config.search.pages_per_query == 2
        assert app_config.search.country == "us"
        assert app_config.search.date_posted == DatePosted.WEEK
        assert app_config.reference_store.url == "https://example.supabase.co"
        assert app_config.reference_store.page_size == 500
        assert app_config.report.unmatched_preview_limit == 10
        assert app_config.scan_interval_seconds == 7 * 86400
        assert app_config.logging.level == "DEBUG"
        assert app_config.logging.format == "json"
        assert app_config.advanced.http_request_timeout == 45
        assert app_config.advanced.user_agent == "ReconcilerTest/1.0"

        assert env_config.rapidapi_key == "test-rapidapi-key"
        assert env_config.supabase_service_key == "test-service-key"

    def test_load_minimal_config_applies_defaults(self, mock_env_vars):
        app_config, _ = load_config(FIXTURES_DIR / "minimal_config.yaml")

        assert app_config.search.start_page == 1
        assert app_config.search.pages_per_query == 2
        assert app_config.search.country == "us"
        assert app_config.search.date_posted == "month"
        assert app_config.reference_store.companies_table == "companies"
        assert app_config.reference_store.tracking_table == "tracking"
        assert app_config.reference_store.page_size == 1000
        assert app_config.report.unmatched_preview_limit == 20
        assert app_config.scan_interval == "7d"
        assert app_config.scan_interval_seconds == 604800
        assert app_config.logging.level == "INFO"
        assert app_config.advanced.http_request_timeout == 30

    def test_supabase_url_env_overrides_config(self, mock_env_vars, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://other.supabase.co/")

        app_config, env_config = load_config(FIXTURES_DIR / "minimal_config.yaml")

        assert app_config.reference_store.url == "https://other.supabase.co"
        assert env_config.supabase_url == "https://other.supabase.co"

    def test_config_file_not_found(self, mock_env_vars):
        with pytest.raises(ConfigurationError, match="Configuration file not found"):
            load_config(Path("does/not/exist.yaml"))

    def test_invalid_yaml_syntax(self, tmp_path, mock_env_vars):
        config_file = write_config(tmp_path, "search_queries: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            load_config(config_file)

    def test_empty_file(self, tmp_path, mock_env_vars):
        config_file = write_config(tmp_path, "")

        with pytest.raises(ConfigurationError, match="empty"):
            load_config(config_file)

    def test_top_level_list(self, tmp_path, mock_env_vars):
        config_file = write_config(tmp_path, "- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(config_file)

    def test_missing_credentials_fail_before_anything_else(self, monkeypatch):
        monkeypatch.delenv("RAPIDAPI_KEY", raising=False)
        monkeypatch.delenv("SUPABASE_SERVICE_KEY", raising=False)

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(FIXTURES_DIR / "minimal_config.yaml")

        assert "RAPIDAPI_KEY" in str(exc_info.value)
        assert "SUPABASE_SERVICE_KEY" in str(exc_info.value)


class TestConfigurationValidation:
    """Test schema validation errors."""

    def test_missing_search_queries(self, tmp_path, mock_env_vars):
        config_file = write_config(tmp_path, 'reference_store:\n  url: "https://x.supabase.co"\n')

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_file)

        assert "Missing required field: search_queries" in str(exc_info.value)

    def test_empty_search_queries(self, tmp_path, mock_env_vars):
        config_file = write_config(
            tmp_path, 'search_queries: []\nreference_store:\n  url: "https://x.supabase.co"\n'
        )

        with pytest.raises(ConfigurationError, match="search_queries"):
            load_config(config_file)

    def test_blank_search_query(self, tmp_path, mock_env_vars):
        config_file = write_config(
            tmp_path, 'search_queries: ["  "]\nreference_store:\n  url: "https://x.supabase.co"\n'
        )

        with pytest.raises(ConfigurationError, match="empty or whitespace-only"):
            load_config(config_file)

    def test_duplicate_queries_are_kept(self, tmp_path, mock_env_vars):
        config_file = write_config(
            tmp_path,
            'search_queries: ["hvac engineer ", "hvac engineer", "cad engineer"]\n'
            'reference_store:\n  url: "https://x.supabase.co"\n',
        )

        with pytest.warns(UserWarning, match="will run more than once"):
            app_config, _ = load_config(config_file)

        assert app_config.search_queries == ["hvac engineer", "hvac engineer", "cad engineer"]

    def test_missing_reference_store(self, tmp_path, mock_env_vars):
        config_file = write_config(tmp_path, 'search_queries: ["hvac engineer"]\n')

        with pytest.raises(ConfigurationError, match="reference_store"):
            load_config(config_file)

    def test_invalid_store_url(self, tmp_path, mock_env_vars):
        config_file = write_config(
            tmp_path, 'search_queries: ["hvac engineer"]\nreference_store:\n  url: "x.supabase.co"\n'
        )

        with pytest.raises(ConfigurationError, match="http"):
            load_config(config_file)

    def test_invalid_date_posted(self, tmp_path, mock_env_vars):
        config_file = write_config(
            tmp_path,
            'search_queries: ["hvac engineer"]\nsearch:\n  date_posted: yesterday\n'
            'reference_store:\n  url: "https://x.supabase.co"\n',
        )

        with pytest.raises(ConfigurationError, match="date_posted"):
            load_config(config_file)

    def test_scan_interval_too_short(self, tmp_path, mock_env_vars):
        config_file = write_config(
            tmp_path,
            'search_queries: ["hvac engineer"]\nscan_interval: "15m"\n'
            'reference_store:\n  url: "https://x.supabase.co"\n',
        )

        with pytest.raises(ConfigurationError, match="too short"):
            load_config(config_file)

    def test_timeout_out_of_range(self, tmp_path, mock_env_vars):
        config_file = write_config(
            tmp_path,
            'search_queries: ["hvac engineer"]\nadvanced:\n  http_request_timeout: 1\n'
            'reference_store:\n  url: "https://x.supabase.co"\n',
        )

        with pytest.raises(ConfigurationError, match="http_request_timeout"):
            load_config(config_file)


class TestConfigurationWarnings:
    """Test non-fatal configuration warnings."""

    def test_no_warnings_for_default_style_config(self):
        assert check_for_warnings({"search_queries": ["a", "b"], "scan_interval": "7d"}) == []

    def test_quota_warning(self):
        config = {"search_queries": [f"q{i}" for i in range(30)], "search": {"pages_per_query": 2}}

        messages = check_for_warnings(config)

        assert any("API quota" in m for m in messages)

    def test_short_interval_warning(self):
        messages = check_for_warnings({"search_queries": ["a"], "scan_interval": "6h"})

        assert any("Short scan_interval" in m for m in messages)

    def test_zero_preview_warning(self):
        messages = check_for_warnings({"search_queries": ["a"], "report": {"unmatched_preview_limit": 0}})

        assert any("unmatched_preview_limit is 0" in m for m in messages)

    def test_unparseable_interval_left_to_schema(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert check_for_warnings({"search_queries": ["a"], "scan_interval": "soon"}) == []


class TestDurationParsing:
    """Test duration parsing functionality."""

    def test_parse_human_readable_hours(self):
        assert parse_duration("12h") == 43200

    def test_parse_human_readable_days(self):
        assert parse_duration("7d") == 604800

    def test_parse_human_readable_combined(self):
        assert parse_duration("1d12h") == 129600

    def test_parse_iso8601_days(self):
        assert parse_duration("P7D") == 604800

    def test_parse_iso8601_weeks(self):
        assert parse_duration("P1W") == 604800

    def test_parse_iso8601_time(self):
        assert parse_duration("PT1H30M") == 5400

    @pytest.mark.parametrize("value", ["7days", "P", "PT", "abc", "P1Y"])
    def test_parse_invalid_format(self, value):
        with pytest.raises(DurationParseError):
            parse_duration(value)

    def test_parse_empty_string(self):
        with pytest.raises(DurationParseError, match="empty"):
            parse_duration("  ")

    def test_parse_zero(self):
        with pytest.raises(DurationParseError, match="zero"):
            parse_duration("0h")

    def test_validate_duration_range_too_short(self):
        with pytest.raises(DurationParseError, match="too short"):
            validate_duration_range(1800)

    def test_validate_duration_range_too_long(self):
        with pytest.raises(DurationParseError, match="too long"):
            validate_duration_range(8 * 86400)

    def test_validate_duration_range_valid(self):
        validate_duration_range(3600)
        validate_duration_range(7 * 86400)


class TestEnvironmentVariables:
    """Test environment variable loading."""

    def test_load_valid_environment_config(self, mock_env_vars):
        env_config = load_environment_config()

        assert env_config.rapidapi_key == "test-rapidapi-key"
        assert env_config.supabase_service_key == "test-service-key"
        assert env_config.supabase_url is None
        assert env_config.log_level is None

    def test_missing_required_env_var(self, mock_env_vars, monkeypatch):
        monkeypatch.delenv("SUPABASE_SERVICE_KEY")

        with pytest.raises(ConfigurationError) as exc_info:
            load_environment_config()

        assert "SUPABASE_SERVICE_KEY" in str(exc_info.value)
        assert "RAPIDAPI_KEY" not in exc_info.value.errors[0]

    def test_blank_key_is_missing(self, mock_env_vars, monkeypatch):
        monkeypatch.setenv("RAPIDAPI_KEY", "   ")

        with pytest.raises(ConfigurationError, match="RAPIDAPI_KEY"):
            load_environment_config()

    def test_invalid_supabase_url(self, mock_env_vars, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "example.supabase.co")

        with pytest.raises(ConfigurationError, match="SUPABASE_URL"):
            load_environment_config()

    def test_log_level_uppercased(self, mock_env_vars, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert load_environment_config().log_level == "DEBUG"

    def test_invalid_log_level(self, mock_env_vars, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
            load_environment_config()

    def test_repr_hides_credentials(self, mock_env_vars):
        env_config = load_environment_config()

        assert "test-rapidapi-key" not in repr(env_config)
        assert "test-service-key" not in repr(env_config)
