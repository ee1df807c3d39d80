"""Config loading: defaults, profile overlay, accessors."""

from raceledger.config import Settings, get_settings, load_config


def test_missing_config_dir_gives_defaults(tmp_path):
    settings = get_settings(config_dir=tmp_path)
    assert settings.db_path == "data/raceledger.duckdb"
    assert settings.default_user == "local"
    assert settings.api_port == 8000
    assert settings.logging_level == "INFO"


def test_profile_overlay_deep_merges(tmp_path):
    (tmp_path / "default.toml").write_text(
        '[storage]\ndb_path = "a.duckdb"\n\n[logging]\nlevel = "info"\nformat = "console"\n'
    )
    (tmp_path / "dev.toml").write_text('[logging]\nlevel = "debug"\n')
    raw = load_config("dev", tmp_path)
    assert raw["logging"] == {"level": "debug", "format": "console"}
    settings = Settings.from_dict(raw)
    assert settings.db_path == "a.duckdb"
    assert settings.logging_level == "DEBUG"
    assert settings.logging_level_num == 10


def test_unknown_profile_ignored(tmp_path):
    (tmp_path / "default.toml").write_text('[api]\nport = 9001\n')
    assert get_settings("prod", tmp_path).api_port == 9001
