from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from available_tools.jump_tools import t_jump, t_jump_import  # noqa: E402
from jump_common.constants import ENV_CONFIG_PATH, ENV_DB_PATH, ENV_DEBUG  # noqa: E402
from jump_common.frecent_paths import PathFrecency  # noqa: E402


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.delenv(ENV_DB_PATH, raising=False)
    monkeypatch.delenv(ENV_CONFIG_PATH, raising=False)
    monkeypatch.delenv(ENV_DEBUG, raising=False)
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)
    return tmp_path


def run_jump(workspace: Path, *args: str) -> int:
    common = ["--db", str(workspace / "data" / "jump.db"), "--config", str(workspace / "no_config.yaml")]
    return t_jump.main(common + list(args))


def test_add_dir_then_jump(workspace: Path, capsys):
    project = workspace / "code" / "my-project"
    project.mkdir(parents=True)

    assert run_jump(workspace, "--add_dir", str(project)) == 0
    capsys.readouterr()
    assert run_jump(workspace, "--dir", "--", "project") == 0

    assert capsys.readouterr().out.strip() == str(project)
    assert (workspace / "data" / "jump.db").stat().st_size > 0


def test_add_dir_ignores_non_directories(workspace: Path):
    assert run_jump(workspace, "--add_dir", str(workspace / "missing")) == 1

    engine = PathFrecency.load(workspace / "data" / "jump.db")
    assert engine.items_with_frecency() == []


def test_add_dir_records_the_directory_as_given(workspace: Path, monkeypatch):
    plain = workspace / "proj"
    quoted = workspace / "proj'"
    dollar = workspace / "$JUMP_TEST_VAR"
    for path in (plain, quoted, dollar):
        path.mkdir()
    monkeypatch.setenv("JUMP_TEST_VAR", "proj")

    assert run_jump(workspace, "--add_dir", str(quoted)) == 0
    assert run_jump(workspace, "--add_dir", str(dollar)) == 0

    engine = PathFrecency.load(workspace / "data" / "jump.db")
    assert sorted(path for path, _ in engine.items_with_frecency()) == sorted([str(quoted), str(dollar)])


def test_jump_without_match_prints_nothing(workspace: Path, capsys):
    assert run_jump(workspace, "--dir", "--", "zzz9") == 1
    assert capsys.readouterr().out == ""


def test_jump_to_directory_relative_to_cwd(workspace: Path, capsys):
    (workspace / "elsewhere" / "sub").mkdir()

    assert run_jump(workspace, "--dir", "--", "sub") == 0

    assert capsys.readouterr().out.strip() == str(workspace / "elsewhere" / "sub")
    engine = PathFrecency.load(workspace / "data" / "jump.db")
    assert [path for path, _ in engine.items_with_frecency()] == [str(workspace / "elsewhere" / "sub")]


def test_list_shows_best_first(workspace: Path, capsys):
    rare = workspace / "rare"
    often = workspace / "often"
    rare.mkdir()
    often.mkdir()
    run_jump(workspace, "--add_dir", str(rare))
    for _ in range(3):
        run_jump(workspace, "--add_dir", str(often))
    capsys.readouterr()

    assert run_jump(workspace, "--list") == 0

    lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
    assert lines[0].split()[0] == "Score"
    assert lines[1].endswith(str(often))
    assert lines[2].endswith(str(rare))


def test_interactive_pick_uses_menu_choice(workspace: Path, capsys, monkeypatch):
    first = workspace / "alpha" / "target"
    second = workspace / "beta" / "target"
    first.mkdir(parents=True)
    second.mkdir(parents=True)
    run_jump(workspace, "--add_dir", str(first))
    run_jump(workspace, "--add_dir", str(second))
    capsys.readouterr()

    def pick_last(options, menu_title=None):
        return options[-1]

    monkeypatch.setattr(t_jump, "interactive_select_with_arrows", pick_last)

    assert run_jump(workspace, "--dir", "--interactive", "--", "target") == 0
    assert capsys.readouterr().out.strip() in {str(first), str(second)}


def test_corrupt_database_aborts(workspace: Path):
    db_path = workspace / "data" / "jump.db"
    db_path.parent.mkdir()
    db_path.write_bytes(b"\xc1\xc1\xc1")

    with pytest.raises(SystemExit) as exc_info:
        run_jump(workspace, "--list")
    assert exc_info.value.code == 1


@pytest.mark.parametrize("shell, marker", [
    ("bash", "PROMPT_COMMAND"),
    ("zsh", "add-zsh-hook chpwd"),
    ("fish", "--on-variable PWD"),
])
def test_init_prints_shell_integration(workspace: Path, capsys, shell: str, marker: str):
    assert run_jump(workspace, "--init", shell) == 0

    out = capsys.readouterr().out
    assert marker in out
    assert "--add_dir" in out
    assert "t_jump.py" in out
    assert "__FRECENT_JUMP_CMD__" not in out


def test_import_autojump(workspace: Path, capsys):
    kept = workspace / "kept"
    kept.mkdir()
    data_file = workspace / "autojump.txt"
    data_file.write_text(f"12.0\t{kept}\n3.0\t{workspace / 'gone'}\n")

    exit_code = t_jump_import.main([
        "--source", "autojump",
        "--path", str(data_file),
        "--db", str(workspace / "data" / "jump.db"),
        "--config", str(workspace / "no_config.yaml"),
    ])

    assert exit_code == 0
    engine = PathFrecency.load(workspace / "data" / "jump.db")
    assert [path for path, _ in engine.items_with_frecency()] == [str(kept)]


def test_import_missing_data_file(workspace: Path):
    assert t_jump_import.main(["--source", "fasd", "--path", str(workspace / "nope"), "--db", str(workspace / "jump.db")]) == 1
