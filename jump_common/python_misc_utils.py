import os

from jump_common.constants import ARG_ADD_DIR, ARG_CONFIG_PATH, ARG_DB_PATH, ARG_IMPORT_PATH

PATH_ARGS = [ARG_ADD_DIR, ARG_DB_PATH, ARG_CONFIG_PATH, ARG_IMPORT_PATH]


def get_arg_value(args, arg_name: str):
    """Get argument attribute from argparse.Namespace using its CLI name."""
    dest_key = arg_name.lstrip('-').replace('-', '_')
    value = getattr(args, dest_key)
    if isinstance(value, str) and arg_name in PATH_ARGS:
        # abspath, not resolve: a symlinked $PWD is stored the way the user reached it
        return os.path.abspath(os.path.expanduser(value))
    return value
