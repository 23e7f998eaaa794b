"""Shell snippets wiring `z`/`zi` and a directory-change hook to the jump tool."""
from pathlib import Path
from typing import Dict

from jump_common.constants import SHELL_BASH, SHELL_FISH, SHELL_ZSH
from jump_common.format_utils import quote

CMD_PLACEHOLDER = "__FRECENT_JUMP_CMD__"

BASH_INIT = r"""
__frecent_jump_hook() {
    if [[ "${__frecent_jump_last_dir}" != "${PWD}" ]]; then
        __frecent_jump_last_dir="${PWD}"
        __FRECENT_JUMP_CMD__ --add_dir "${PWD}" >/dev/null
    fi
}

case ";${PROMPT_COMMAND};" in
    *";__frecent_jump_hook;"*) ;;
    *) PROMPT_COMMAND="__frecent_jump_hook${PROMPT_COMMAND:+;${PROMPT_COMMAND}}" ;;
esac

z() {
    if [[ $# -eq 0 ]]; then
        cd ~ || return
        return
    fi
    local target
    target="$(__FRECENT_JUMP_CMD__ --dir -- "$@")" && [[ -n "${target}" ]] && cd -- "${target}"
}

zi() {
    local target
    target="$(__FRECENT_JUMP_CMD__ --dir --interactive -- "$@")" && [[ -n "${target}" ]] && cd -- "${target}"
}
"""

ZSH_INIT = r"""
autoload -Uz add-zsh-hook

__frecent_jump_hook() {
    __FRECENT_JUMP_CMD__ --add_dir "${PWD}" >/dev/null
}
add-zsh-hook chpwd __frecent_jump_hook

z() {
    if [[ $# -eq 0 ]]; then
        cd ~
        return
    fi
    local target
    target="$(__FRECENT_JUMP_CMD__ --dir -- "$@")" && [[ -n "${target}" ]] && cd -- "${target}"
}

zi() {
    local target
    target="$(__FRECENT_JUMP_CMD__ --dir --interactive -- "$@")" && [[ -n "${target}" ]] && cd -- "${target}"
}
"""

FISH_INIT = r"""
function __frecent_jump_hook --on-variable PWD
    __FRECENT_JUMP_CMD__ --add_dir "$PWD" >/dev/null
end

function z
    if test (count $argv) -eq 0
        cd ~
        return
    end
    set -l target (__FRECENT_JUMP_CMD__ --dir -- $argv)
    and test -n "$target"
    and cd -- $target
end

function zi
    set -l target (__FRECENT_JUMP_CMD__ --dir --interactive -- $argv)
    and test -n "$target"
    and cd -- $target
end
"""

SHELL_INIT_TEMPLATES: Dict[str, str] = {
    SHELL_BASH: BASH_INIT,
    SHELL_ZSH: ZSH_INIT,
    SHELL_FISH: FISH_INIT,
}


def build_shell_init(shell: str, python_executable: str, tool_path: Path) -> str:
    if shell not in SHELL_INIT_TEMPLATES:
        raise ValueError(f"Unsupported shell '{shell}', expected one of {', '.join(SHELL_INIT_TEMPLATES)}")
    cmd = f"{quote(python_executable)} {quote(str(tool_path))}"
    return SHELL_INIT_TEMPLATES[shell].replace(CMD_PLACEHOLDER, cmd).lstrip("\n")
