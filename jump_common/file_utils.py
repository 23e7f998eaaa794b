import os
from pathlib import Path
from typing import Optional, Union

from jump_common.core_utils import LOG_DEBUG


def is_existing_dir(path: Union[str, Path]) -> bool:
    try:
        return os.path.isdir(path)
    except (OSError, ValueError):
        # Embedded NUL or an undecodable name
        return False


def to_path_str(path: Path) -> Optional[str]:
    """Return the path as a str that survives an encode round-trip, or None."""
    path_str = str(path)
    try:
        path_str.encode('utf-8')
    except UnicodeEncodeError:
        return None
    return path_str


def ensure_parent_dir(file_path: Path) -> None:
    if not file_path.parent.exists():
        LOG_DEBUG(f"Creating directory {file_path.parent}")
        file_path.parent.mkdir(parents=True, exist_ok=True)


def remove_file(file_path: Union[str, Path]) -> None:
    if os.path.exists(file_path):
        os.remove(file_path)


def read_file_content(file_path: Union[str, Path], encoding='utf-8', errors=None) -> str:
    """Reads the content of a file and returns it as a string."""
    with open(file_path, 'r', encoding=encoding, errors=errors) as f:
        return f.read()
