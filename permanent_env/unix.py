# (c) Andrew Chen (https://github.com/achen1296)

from pathlib import Path

from .backends import Backend, process_get
from .consts import *
from .locator import find_profile, profile_path


class UnixProfileBackend(Backend):
    """ Appends export statements to the login shell's profile (see locator.PROFILE_CANDIDATES for which one). Nothing is quoted or escaped: values containing spaces or shell characters must be quoted by the caller, e.g. set("DUMMY", '"/some thing"').

    Every call adds a new line, so setting the same variable twice leaves two assignments (the last one wins when the profile is sourced), and append/prepend lines accumulate. """

    name = "unix"

    def __init__(self, home: PathLike | None = None):
        """ If home is not specified, the user's home directory is looked up on each call. """
        self.home = None if home is None else Path(home)

    def target(self) -> str:
        return str(profile_path(self.home))

    def _write(self, line: str, action: str, *, output=False):
        profile, path = find_profile(self.home)
        with profile:
            profile.write(f"\n{line}\n")
            profile.flush()
        if output:
            print(f"{action} {line} -> <{path}>")

    def set(self, name: str, value, *, output=False):
        self._write(f"export {name}={value}", "Set", output=output)

    def append(self, name: str, value, *, output=False):
        """ Writes export NAME="value:$NAME", so the new value comes *before* the old one when the shell expands it. This is the opposite order from the Windows backends' append. """
        self._write(f'export {name}="{value}{UNIX_SEPARATOR}${name}"',
                    "Appended", output=output)

    def prepend(self, name: str, value, *, output=False):
        """ Writes export NAME="$NAME:value", so the new value comes *after* the old one when the shell expands it. This is the opposite order from the Windows backends' prepend. """
        self._write(f'export {name}="${name}{UNIX_SEPARATOR}{value}"',
                    "Prepended", output=output)

    def get(self, name: str) -> str:
        """ Reads the current process's environment, not the profile: a set() in this process is not visible here until a new shell sources the profile. """
        return process_get(name)
