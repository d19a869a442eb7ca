import pytest
from pydantic import ValidationError

from tracker.logic.types import DifficultyMatch
from tracker.server.settings import TrackerServerSettings, parse_origins


class TestTrackerServerSettings:
    def test_defaults(self, monkeypatch):
        for name in ("DATABASE_PATH", "PICTURE_DIR", "CORS_ORIGINS", "DIFFICULTY_MATCH"):
            monkeypatch.delenv(f"TRACKER_{name}", raising=False)
        settings = TrackerServerSettings()

        assert settings.database_path == "backend/storage.db"
        assert settings.picture_dir == "backend/media"
        assert settings.cors_origins == []
        assert settings.difficulty_match is DifficultyMatch.ADVERSARY_LEVEL

    def test_cors_origins_json_array(self, monkeypatch):
        monkeypatch.setenv("TRACKER_CORS_ORIGINS", '["http://a.com","http://b.com"]')
        assert TrackerServerSettings().cors_origins == ["http://a.com", "http://b.com"]

    def test_cors_origins_csv(self, monkeypatch):
        monkeypatch.setenv("TRACKER_CORS_ORIGINS", "http://a.com, http://b.com")
        assert TrackerServerSettings().cors_origins == ["http://a.com", "http://b.com"]

    def test_cors_origins_malformed_json_rejected(self, monkeypatch):
        monkeypatch.setenv("TRACKER_CORS_ORIGINS", '["http://a.com"')
        with pytest.raises(ValidationError, match="cors_origins"):
            TrackerServerSettings()

    def test_difficulty_match_from_env(self, monkeypatch):
        monkeypatch.setenv("TRACKER_DIFFICULTY_MATCH", "total")
        assert TrackerServerSettings().difficulty_match is DifficultyMatch.TOTAL

    def test_unknown_difficulty_match_rejected(self, monkeypatch):
        monkeypatch.setenv("TRACKER_DIFFICULTY_MATCH", "vibes")
        with pytest.raises(ValidationError, match="difficulty_match"):
            TrackerServerSettings()

    @pytest.mark.parametrize("field", ["log_dir", "database_path", "picture_dir"])
    def test_empty_paths_rejected(self, field):
        with pytest.raises(ValidationError, match=field):
            TrackerServerSettings(**{field: ""})


class TestParseOrigins:
    def test_list_passes_through(self):
        assert parse_origins(["http://a.com"]) == ["http://a.com"]

    def test_empty_string_means_no_origins(self):
        assert parse_origins("  ") == []

    def test_json_must_hold_strings(self):
        with pytest.raises(ValueError, match="array of strings"):
            parse_origins("[1, 2]")
