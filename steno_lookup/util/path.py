""" Module for parsing user file paths. """

import os
import sys

from ..errors import HomeNotFoundError

# Default user path components are for Linux, since it has several possible platform identifiers.
DEFAULT_USERPATH_COMPONENTS = (".local", "share", "{0}")
# User path components specific to Windows and Mac OS.
PLATFORM_USERPATH_COMPONENTS = {"win32": ("AppData", "Local", "{0}", "{0}"),
                                "darwin": ("Library", "Application Support", "{0}")}


def home_directory() -> str:
    """ Return the current user's home directory. expanduser() gives back the ~ unchanged if it fails. """
    home = os.path.expanduser("~")
    if home == "~" or not home:
        raise HomeNotFoundError("~")
    return home


def expand_tilde(path:str, home:str=None) -> str:
    """ Replace a leading ~ in <path> with the user's home directory (or <home> if given).
        Paths without a leading ~ (and paths like ~user) are returned unchanged. """
    if path != "~" and not path.startswith(("~/", "~" + os.sep)):
        return path
    if home is None:
        try:
            home = home_directory()
        except HomeNotFoundError:
            raise HomeNotFoundError(path) from None
    rel_path = path[2:]
    if not rel_path:
        return home
    # A root home directory must not end up with a doubled separator.
    return os.path.join(home, rel_path)


def user_data_directory(app_name:str, home:str=None) -> str:
    """ Find an application's user data directory based on a platform-specific path expansion.
        app_name - Name of app for which to find data files in the user's home directory. """
    path_components = PLATFORM_USERPATH_COMPONENTS.get(sys.platform) or DEFAULT_USERPATH_COMPONENTS
    path_fmt = os.path.join("~", *path_components)
    path = path_fmt.format(app_name)
    return expand_tilde(path, home)
