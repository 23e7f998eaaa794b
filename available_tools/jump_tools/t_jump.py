#!/usr/bin/env python3
from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from jump_common import *
from jump_common.config_utils import JumpConfig, JumpConfigError, get_config_path, load_jump_config
from jump_common.file_utils import ensure_parent_dir, is_existing_dir, to_path_str
from jump_common.format_utils import format_scored_paths
from jump_common.frecent_paths import ScoredPath
from jump_common.interactive_menu import OptionData, interactive_select_with_arrows
from jump_common.python_misc_utils import get_arg_value
from jump_common.shell_init import build_shell_init
from jump_common.tools_utils import POSITIONAL_SEPARATOR, ToolTemplate, build_examples_epilog

ARG_QUERY = "query"


def get_tool_templates() -> List[ToolTemplate]:
    return [
        ToolTemplate(
            name="Shell setup",
            extra_description="Print the bash integration, defines z/zi and the cd hook",
            args={ARG_INIT: SHELL_BASH},
            usage_note="Add `eval \"$(<this command>)\"` to ~/.bashrc",
        ),
        ToolTemplate(
            name="Record a visit",
            extra_description="What the cd hook runs on every directory change",
            args={ARG_ADD_DIR: "/path/to/project"},
        ),
        ToolTemplate(
            name="Jump target",
            extra_description="Print the best match for 'proj' (z proj)",
            args={ARG_DIR: True, POSITIONAL_SEPARATOR: "proj"},
        ),
        ToolTemplate(
            name="Pick interactively",
            extra_description="Choose among all matches for 'dev/tool' (zi dev/tool)",
            args={ARG_DIR: True, ARG_INTERACTIVE_LONG: True, POSITIONAL_SEPARATOR: "dev/tool"},
        ),
        ToolTemplate(
            name="List ranking",
            extra_description="Show every known directory with its score",
            args={ARG_LIST: True},
        ),
    ]


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Jump to frecently visited directories by typing a fragment of their path.")
    parser.formatter_class = argparse.RawTextHelpFormatter
    parser.epilog = build_examples_epilog(get_tool_templates(), Path(__file__))

    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument(ARG_ADD_DIR, metavar="PATH", help="Record a visit to an existing directory.")
    action.add_argument(ARG_DIR, action="store_true", help="Print the directory best matching the query.")
    action.add_argument(ARG_LIST, action="store_true", help="List matches for the query (or every entry) best first.")
    action.add_argument(ARG_INIT, choices=SUPPORTED_SHELLS, help="Print shell integration code.")

    parser.add_argument(ARG_QUERY, nargs="*", help="Path fragment(s), joined with spaces.")
    parser.add_argument(ARG_INTERACTIVE_SHORT, ARG_INTERACTIVE_LONG, action="store_true",
                        help="With --dir, choose among the candidates from a menu.")
    parser.add_argument(ARG_DB_PATH, help="Database file (default: config db_path).")
    parser.add_argument(ARG_CONFIG_PATH, help=f"YAML config file (default: ${ENV_CONFIG_PATH} or {DEFAULT_CONFIG_PATH}).")
    parser.add_argument(ARG_VERBOSE_SHORT, ARG_VERBOSE_LONG, action="store_true", help="Debug logging on stderr.")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> JumpConfig:
    config_arg = get_arg_value(args, ARG_CONFIG_PATH)
    config = load_jump_config(get_config_path(config_arg))
    db_arg = get_arg_value(args, ARG_DB_PATH)
    if db_arg:
        config.db_path = Path(db_arg)
    return config


def open_database(config: JumpConfig) -> PathFrecency:
    ensure_parent_dir(config.db_path)
    matchers = default_matchers(fuzzy=config.fuzzy_matching, fuzzy_min_ratio=config.fuzzy_min_ratio)
    return PathFrecency.load(config.db_path, max_entries=config.max_entries, matchers=matchers)


def add_dir(engine: PathFrecency, dir_path: str) -> int:
    # dir_path is already absolute, recorded exactly as the shell reported it
    if not is_existing_dir(dir_path):
        LOG_DEBUG(f"Not recording {dir_path}: not a directory")
        return 1
    if to_path_str(Path(dir_path)) is None:
        LOG_DEBUG(f"Not recording {dir_path!r}: not representable as UTF-8")
        return 1
    engine.visit(dir_path)
    return 0


def pick_interactively(candidates: List[ScoredPath], query: str) -> Optional[str]:
    options = [OptionData(title=f"{score:.3f}  {path}", data=path) for path, score in reversed(candidates)]
    title = f"Jump to ({query})" if query else "Jump to"
    selected = interactive_select_with_arrows(options, menu_title=title)
    if selected is None:
        return None
    return selected.data


def resolve_dir(engine: PathFrecency, query: str, interactive: bool = False) -> Optional[str]:
    """Return the directory to jump to, or None if nothing matches."""
    if query:
        # A directory reachable from here as typed wins, the way `cd` would treat it
        relative_path = os.path.expanduser(query)
        if engine.maybe_add_relative_to(Path.cwd(), relative_path):
            return os.path.abspath(os.path.join(Path.cwd(), relative_path))
        candidates = engine.directory_matches(query)
    elif interactive:
        candidates = engine.items_with_frecency()
    else:
        return None

    if not candidates:
        return None
    if interactive:
        return pick_interactively(candidates, query)
    return candidates[-1][0]


def list_entries(engine: PathFrecency, query: str) -> int:
    entries = engine.directory_matches(query) if query else engine.items_with_frecency()
    if not entries:
        LOG(f"No directories match '{query}'" if query else "No directories recorded yet")
        return 1 if query else 0
    print(format_scored_paths(entries))
    return 0


def save(engine: PathFrecency) -> int:
    try:
        engine.save_to_disk()
    except FrecencySaveError as e:
        LOG_EXCEPTION(e, msg=f"Could not save {engine.path}", exit=False)
        return 1
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    set_debug_logging(get_arg_value(args, ARG_VERBOSE_LONG) or os.environ.get(ENV_DEBUG) == "1")

    shell = get_arg_value(args, ARG_INIT)
    if shell:
        print(build_shell_init(shell, sys.executable, Path(__file__).resolve()))
        return 0

    try:
        config = load_config(args)
        engine = open_database(config)
    except (JumpConfigError, FrecencyDatabaseError, OSError) as e:
        LOG_EXCEPTION(e, msg="Could not open the frecency database")

    query = " ".join(get_arg_value(args, ARG_QUERY))
    if get_arg_value(args, ARG_ADD_DIR):
        exit_code = add_dir(engine, get_arg_value(args, ARG_ADD_DIR))
    elif get_arg_value(args, ARG_DIR):
        target = resolve_dir(engine, query, interactive=get_arg_value(args, ARG_INTERACTIVE_LONG))
        if target is None:
            LOG_DEBUG(f"No match for '{query}'")
            exit_code = 1
        else:
            print(target)
            exit_code = 0
    else:
        exit_code = list_entries(engine, query)

    return save(engine) or exit_code


if __name__ == "__main__":
    sys.exit(main())
