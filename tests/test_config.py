import json
import os

import nobg.llm.client as client
import nobg.llm.prompt as prompt
from nobg.config import CONFIG_DIR, SETTINGS_PATH, Settings, config_path, load_settings


def test_missing_settings_file_gives_defaults(tmp_path):
    settings = load_settings(str(tmp_path / "settings.json"))
    assert settings == Settings()
    assert settings.chroma_color == "#00FF00"


def test_settings_override_and_unknown_keys(tmp_path, capsys):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"resolution": "2k", "temperature": 0.4, "colour": "red"}), encoding="utf-8")
    settings = load_settings(str(path))
    assert settings.resolution == "2k"
    assert settings.temperature == 0.4
    assert "Unknown setting 'colour'" in capsys.readouterr().out


def test_broken_settings_file_warns(tmp_path, capsys):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(str(path)) == Settings()
    assert "Warning" in capsys.readouterr().out


def test_config_files_resolve_under_config_dir():
    assert client.CONFIG_PATH == config_path("models.json")
    assert prompt.PROMPTS_PATH == config_path("prompts.json")
    assert SETTINGS_PATH == config_path("settings.json")
    for path in (client.CONFIG_PATH, prompt.PROMPTS_PATH, SETTINGS_PATH):
        assert os.path.isabs(path)
        assert os.path.dirname(path) == os.path.abspath(CONFIG_DIR)
