from pathlib import Path
from typing import Any, Dict, List

from jump_common.format_utils import quote

POSITIONAL_SEPARATOR = "--"


class ToolTemplate:
    """One documented invocation of a tool, shown in its --help epilog."""
    name: str
    extra_description: str
    args: Dict[str, Any]  # {flag: value}; True for bare flags, POSITIONAL_SEPARATOR for the query
    usage_note: str = ""

    def __init__(self, name: str, extra_description: str = "", args: Dict[str, Any] = None, usage_note: str = ""):
        self.name = name
        self.extra_description = extra_description
        self.args = args or {}
        self.usage_note = usage_note

    def to_command(self, script_path: Path) -> str:
        parts: List[str] = [quote(script_path)]
        positional: List[str] = []
        for arg, value in self.args.items():
            if arg == POSITIONAL_SEPARATOR:
                positional.extend(value if isinstance(value, list) else [value])
            elif isinstance(value, bool):
                if value:
                    parts.append(arg)
            elif isinstance(value, list):
                parts.append(arg)
                parts.extend(quote(v) for v in value)
            else:
                parts.extend([arg, quote(value)])
        if positional:
            parts.append(POSITIONAL_SEPARATOR)
            parts.extend(quote(v) for v in positional)
        return " ".join(parts)


def build_examples_epilog(templates: List[ToolTemplate], script_path: Path) -> str:
    if not templates:
        return ""

    lines: List[str] = ["Examples:"]
    for i, template in enumerate(templates, 1):
        lines.append("")
        lines.append(f"# Example {i}: {template.name}")
        if template.extra_description:
            lines.append(f"# {template.extra_description}")
        if template.usage_note:
            lines.append(f"# Note: {template.usage_note}")
        lines.append(template.to_command(script_path))
    return "\n".join(lines)
