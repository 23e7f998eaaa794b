import os
from pathlib import Path

# PATHS
XDG_DATA_HOME = Path(os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share")
XDG_CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
APP_NAME = "frecent_jump"
DEFAULT_DB_PATH = XDG_DATA_HOME / APP_NAME / f"{APP_NAME}.db"
DEFAULT_CONFIG_PATH = XDG_CONFIG_HOME / APP_NAME / "config.yaml"
AUTOJUMP_DB_PATH = XDG_DATA_HOME / "autojump" / "autojump.txt"
FASD_DB_PATH = Path.home() / ".fasd"

# ENV KEYS
ENV_CONFIG_PATH = "FRECENT_JUMP_CONFIG"
ENV_DB_PATH = "FRECENT_JUMP_DB"
ENV_DEBUG = "FRECENT_JUMP_DEBUG"

# FRECENCY
DEFAULT_MAX_ENTRIES = 1000
DEFAULT_HALF_LIFE_SECONDS = 60 * 60 * 24 * 14
MAX_VISIT_WEIGHT_EXPONENT = 512
DB_FORMAT_VERSION = 1

# RANKING
MATCH_WEIGHT = 0.8
FRECENCY_WEIGHT = 0.2
DEFAULT_FUZZY_MIN_RATIO = 75

# IMPORT SOURCES
IMPORT_SOURCE_AUTOJUMP = "autojump"
IMPORT_SOURCE_FASD = "fasd"

# SHELLS
SHELL_BASH = "bash"
SHELL_ZSH = "zsh"
SHELL_FISH = "fish"
SUPPORTED_SHELLS = [SHELL_BASH, SHELL_ZSH, SHELL_FISH]

# Argument name constants
ARGUMENT_LONG_PREFIX = "--"
ARGUMENT_SHORT_PREFIX = "-"
ARG_ADD_DIR = f"{ARGUMENT_LONG_PREFIX}add_dir"
ARG_DIR = f"{ARGUMENT_LONG_PREFIX}dir"
ARG_LIST = f"{ARGUMENT_LONG_PREFIX}list"
ARG_INTERACTIVE_LONG = f"{ARGUMENT_LONG_PREFIX}interactive"
ARG_INTERACTIVE_SHORT = f"{ARGUMENT_SHORT_PREFIX}i"
ARG_INIT = f"{ARGUMENT_LONG_PREFIX}init"
ARG_DB_PATH = f"{ARGUMENT_LONG_PREFIX}db"
ARG_CONFIG_PATH = f"{ARGUMENT_LONG_PREFIX}config"
ARG_VERBOSE_LONG = f"{ARGUMENT_LONG_PREFIX}verbose"
ARG_VERBOSE_SHORT = f"{ARGUMENT_SHORT_PREFIX}v"
ARG_IMPORT_SOURCE = f"{ARGUMENT_LONG_PREFIX}source"
ARG_IMPORT_PATH = f"{ARGUMENT_LONG_PREFIX}path"
