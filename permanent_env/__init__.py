# (c) Andrew Chen (https://github.com/achen1296)

""" This module is for setting permanent environment variables. For temporary environment variables, os.environ can be used.

On Unix, export statements are appended to the login shell's profile. On Windows, variables are written to the user's Environment registry key. Set PERMANENT_ENV_BACKEND to unix, registry, or powershell to choose a different backend.

Note that append and prepend do not order values the same way on every backend: on Unix, append("PATH", "X") writes export PATH="X:$PATH" (X ends up first), while on Windows it adds X as the last segment. See the backend classes for details. """

import os

from .backends import Backend, process_get
from .consts import *
from .errors import *
from .locator import ensure_powershell_profile, find_profile, home_directory, open_environment_key, open_profile, profile_path
from .powershell import PowerShellProfileBackend
from .registry import RegistryBackend, broadcast_environment_change
from .unix import UnixProfileBackend

BACKENDS: dict[str, type[Backend]] = {
    UnixProfileBackend.name: UnixProfileBackend,
    RegistryBackend.name: RegistryBackend,
    PowerShellProfileBackend.name: PowerShellProfileBackend,
}


def default_backend() -> Backend:
    """ A new backend every time, so no file or registry handle outlives a single call. """
    name = os.environ.get(BACKEND_VARIABLE)
    if not name:
        name = RegistryBackend.name if WINDOWS else UnixProfileBackend.name
    try:
        backend_class = BACKENDS[name.lower()]
    except KeyError:
        raise UnknownBackendException(name, BACKENDS) from None
    return backend_class()


def check_or_set(name: str, value, *, output=False) -> bool:
    """ Sets the variable only if it is not already set to a non-empty value. Returns whether anything was written. """
    return default_backend().check_or_set(name, value, output=output)


def set(name: str, value, *, output=False):
    """ Sets the variable without checking if it exists. On Unix, this leaves two assignments in the profile if it was already set, so prefer check_or_set unless you are certain it is not. On Windows, the old value is overwritten. """
    default_backend().set(name, value, output=output)


def append(name: str, value, *, output=False):
    """ Useful for adding a folder to PATH. On Unix the value is placed before the old value (export NAME="value:$NAME"); on Windows it becomes the last segment, and nothing happens if it is already there. """
    return default_backend().append(name, value, output=output)


def prepend(name: str, value, *, output=False):
    """ On Unix the value is placed after the old value (export NAME="$NAME:value"); on Windows it becomes the first segment, and nothing happens if it is already there. """
    return default_backend().prepend(name, value, output=output)


def get(name: str) -> str:
    """ On Unix this reads the current process's environment, so values set with this module are not visible until a new shell is started. On Windows it reads the registry directly. """
    return default_backend().get(name)
