#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from jump_common import *
from jump_common.config_utils import JumpConfigError, get_config_path, load_jump_config
from jump_common.file_utils import ensure_parent_dir, read_file_content
from jump_common.importers import import_weighted_paths, parse_autojump, parse_fasd
from jump_common.python_misc_utils import get_arg_value
from jump_common.tools_utils import ToolTemplate, build_examples_epilog

IMPORT_PARSERS = {
    IMPORT_SOURCE_AUTOJUMP: parse_autojump,
    IMPORT_SOURCE_FASD: parse_fasd,
}

DEFAULT_IMPORT_PATHS = {
    IMPORT_SOURCE_AUTOJUMP: AUTOJUMP_DB_PATH,
    IMPORT_SOURCE_FASD: FASD_DB_PATH,
}


def get_tool_templates() -> List[ToolTemplate]:
    return [
        ToolTemplate(
            name="Import autojump",
            extra_description=f"Seed the database from {AUTOJUMP_DB_PATH}",
            args={ARG_IMPORT_SOURCE: IMPORT_SOURCE_AUTOJUMP},
        ),
        ToolTemplate(
            name="Import fasd from a custom file",
            extra_description="Seed the database from a copied fasd data file",
            args={ARG_IMPORT_SOURCE: IMPORT_SOURCE_FASD, ARG_IMPORT_PATH: "/path/to/backup/.fasd"},
        ),
    ]


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import directory history from another jumper into the frecency database.")
    parser.formatter_class = argparse.RawTextHelpFormatter
    parser.epilog = build_examples_epilog(get_tool_templates(), Path(__file__))
    parser.add_argument(ARG_IMPORT_SOURCE, required=True, choices=list(IMPORT_PARSERS), help="Which tool's data file to read.")
    parser.add_argument(ARG_IMPORT_PATH, help="Data file to read (default: the tool's standard location).")
    parser.add_argument(ARG_DB_PATH, help="Database file (default: config db_path).")
    parser.add_argument(ARG_CONFIG_PATH, help="YAML config file.")
    parser.add_argument(ARG_VERBOSE_SHORT, ARG_VERBOSE_LONG, action="store_true", help="Debug logging on stderr.")
    return parser.parse_args(argv)


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    set_debug_logging(get_arg_value(args, ARG_VERBOSE_LONG))

    source = get_arg_value(args, ARG_IMPORT_SOURCE)
    import_path = Path(get_arg_value(args, ARG_IMPORT_PATH) or DEFAULT_IMPORT_PATHS[source])
    if not import_path.is_file():
        LOG(f"ERROR: {source} data file not found: {import_path}")
        return 1

    try:
        config = load_jump_config(get_config_path(get_arg_value(args, ARG_CONFIG_PATH)))
        db_path = Path(get_arg_value(args, ARG_DB_PATH) or config.db_path)
        ensure_parent_dir(db_path)
        engine = PathFrecency.load(db_path, max_entries=config.max_entries)
        entries = IMPORT_PARSERS[source](read_file_content(import_path, errors="replace"))
    except (JumpConfigError, FrecencyDatabaseError, OSError) as e:
        LOG_EXCEPTION(e, msg=f"Could not import {source} history")

    imported = import_weighted_paths(engine, entries)
    try:
        engine.save_to_disk()
    except FrecencySaveError as e:
        LOG_EXCEPTION(e, msg=f"Could not save {db_path}", exit=False)
        return 1

    LOG(f"Imported {imported} of {len(entries)} {source} entries into {db_path}", highlight=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
