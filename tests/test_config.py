from pathlib import Path

from core.config import AppSettings, read_env_file, write_user_env_vars


def test_write_user_env_vars_merges(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# old\nNEURALEARN_AI_MODEL='old-model'\nOTHER=1\n", encoding="utf-8")

    write_user_env_vars({"NEURALEARN_AI_MODEL": "new-model", "NEURALEARN_AI_API_KEY": "k"}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert lines[1:] == ["NEURALEARN_AI_API_KEY=k", "NEURALEARN_AI_MODEL=new-model", "OTHER=1"]


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("NEURALEARN_AI_MODEL", "env-model")
    monkeypatch.setenv("NEURALEARN_DATA_DIR", str(tmp_path))
    settings = AppSettings()
    assert settings.ai_model == "env-model"
    assert settings.resolved_data_dir() == Path(tmp_path)


def test_default_data_dir_is_under_user_config():
    settings = AppSettings(data_dir=None)
    assert settings.resolved_data_dir().name == "courses"


def test_read_env_file_skips_junk(tmp_path):
    path = tmp_path / ".env"
    path.write_text('# comment\n\nnot a pair\nA="1"\n=orphan\n', encoding="utf-8")
    assert read_env_file(path) == {"A": "1"}
    assert read_env_file(tmp_path / "missing") == {}
