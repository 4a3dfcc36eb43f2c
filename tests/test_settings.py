"""Tests for Settings validation."""

import pytest
from pydantic import ValidationError


class TestSettingsDefaults:
    def test_settings_created_with_overrides(self, settings):
        assert settings.outline_chapter_count == 3
        assert settings.delegate_timeout_seconds == 5.0

    def test_default_policy_values(self, tmp_path):
        from config.settings import Settings
        # Use _env_file=None to test code defaults without .env overrides
        s = Settings(_env_file=None, log_dir=tmp_path / "logs")
        assert s.outline_chapter_count == 10
        assert s.integrity_risk_threshold == 40
        assert s.integrity_max_chars == 5000
        assert s.narration_preview_chars == 1000
        assert s.delegate_timeout_seconds == 300.0

    def test_default_model_names(self, tmp_path):
        from config.settings import Settings
        s = Settings(_env_file=None, log_dir=tmp_path / "logs")
        assert s.llm_model_writing == "claude-opus-4-6"
        assert s.llm_model_integrity == "claude-haiku-4-5"
        assert s.image_model == "gemini-2.5-flash-image"
        assert s.tts_model == "gemini-2.5-flash-preview-tts"
        assert s.tts_voice == "Kore"

    def test_gemini_key_from_env(self, tmp_path, monkeypatch):
        from config.settings import Settings
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")
        s = Settings(_env_file=None, log_dir=tmp_path / "logs")
        assert s.gemini_api_key == "test-key"

    def test_log_dir_parent_created(self, tmp_path):
        from config.settings import Settings
        Settings(_env_file=None, log_dir=tmp_path / "nested" / "logs")
        assert (tmp_path / "nested").is_dir()


class TestSettingsValidation:
    def test_zero_chapter_count_raises(self, tmp_path):
        from config.settings import Settings
        with pytest.raises(ValidationError, match=">= 1"):
            Settings(_env_file=None, log_dir=tmp_path / "logs", outline_chapter_count=0)

    def test_threshold_out_of_range_raises(self, tmp_path):
        from config.settings import Settings
        with pytest.raises(ValidationError, match="integrity_risk_threshold"):
            Settings(_env_file=None, log_dir=tmp_path / "logs", integrity_risk_threshold=101)

    def test_threshold_bounds_accepted(self, tmp_path):
        from config.settings import Settings
        assert Settings(_env_file=None, log_dir=tmp_path / "logs", integrity_risk_threshold=0).integrity_risk_threshold == 0
        assert Settings(_env_file=None, log_dir=tmp_path / "logs", integrity_risk_threshold=100).integrity_risk_threshold == 100

    def test_non_positive_length_raises(self, tmp_path):
        from config.settings import Settings
        with pytest.raises(ValidationError, match="Length limit"):
            Settings(_env_file=None, log_dir=tmp_path / "logs", narration_preview_chars=0)

    def test_non_positive_timeout_raises(self, tmp_path):
        from config.settings import Settings
        with pytest.raises(ValidationError, match="delegate_timeout_seconds"):
            Settings(_env_file=None, log_dir=tmp_path / "logs", delegate_timeout_seconds=0)


class TestGetSettings:
    def test_cached_instance(self, monkeypatch, tmp_path):
        import config.settings as settings_module
        monkeypatch.setattr(settings_module, "_settings_instance", None)
        monkeypatch.chdir(tmp_path)
        first = settings_module.get_settings()
        assert settings_module.get_settings() is first
