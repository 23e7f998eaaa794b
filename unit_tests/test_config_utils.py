from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from jump_common.config_utils import JumpConfigError, get_config_path, load_jump_config  # noqa: E402
from jump_common.constants import DEFAULT_DB_PATH, DEFAULT_MAX_ENTRIES, ENV_CONFIG_PATH, ENV_DB_PATH  # noqa: E402


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(ENV_DB_PATH, raising=False)
    monkeypatch.delenv(ENV_CONFIG_PATH, raising=False)


def test_missing_config_file_gives_defaults(tmp_path: Path):
    config = load_jump_config(tmp_path / "absent.yaml")

    assert config.db_path == DEFAULT_DB_PATH
    assert config.max_entries == DEFAULT_MAX_ENTRIES
    assert config.fuzzy_matching is True


def test_values_are_read_from_yaml(tmp_path: Path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "db_path: ~/jump.db\n"
        "max_entries: 250\n"
        "fuzzy_matching: false\n"
        "fuzzy_min_ratio: 90\n"
    )

    config = load_jump_config(config_path)

    assert config.db_path == Path("~/jump.db").expanduser()
    assert config.max_entries == 250
    assert config.fuzzy_matching is False
    assert config.fuzzy_min_ratio == 90


def test_empty_config_file_gives_defaults(tmp_path: Path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("")

    assert load_jump_config(config_path).max_entries == DEFAULT_MAX_ENTRIES


def test_env_db_path_wins_over_file(tmp_path: Path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("db_path: /from/file.db\n")
    monkeypatch.setenv(ENV_DB_PATH, str(tmp_path / "from_env.db"))

    assert load_jump_config(config_path).db_path == tmp_path / "from_env.db"


@pytest.mark.parametrize("content", [
    "max_entries: 0\n",
    "max_entries: lots\n",
    "fuzzy_matching: maybe\n",
    "fuzzy_min_ratio: 150\n",
    "unknown_key: 1\n",
    "- just\n- a list\n",
    "db_path: [unclosed\n",
])
def test_invalid_config_is_rejected(tmp_path: Path, content: str):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(content)

    with pytest.raises(JumpConfigError):
        load_jump_config(config_path)


def test_config_path_resolution(tmp_path: Path, monkeypatch):
    assert get_config_path(str(tmp_path / "explicit.yaml")) == tmp_path / "explicit.yaml"

    monkeypatch.setenv(ENV_CONFIG_PATH, str(tmp_path / "env.yaml"))
    assert get_config_path() == tmp_path / "env.yaml"
