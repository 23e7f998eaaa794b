import shlex
from typing import List, Sequence, Tuple, Union

from tabulate import tabulate


def quote(s: Union[str, List[str], None]) -> Union[str, List[str]]:
    """Quote a string, list of strings, or None value for shell safety."""
    if s is None:
        return '""'
    elif isinstance(s, list):
        return [shlex.quote(str(item)) for item in s]
    elif not isinstance(s, str):
        s = str(s)
    return shlex.quote(s)


def format_scored_paths(scored_paths: Sequence[Tuple[str, float]], precision: int = 4) -> str:
    """Render (path, score) pairs as a table, best first."""
    rows = [(f"{score:.{precision}f}", path) for path, score in reversed(scored_paths)]
    return tabulate(rows, headers=["Score", "Path"], tablefmt="plain", disable_numparse=True)
