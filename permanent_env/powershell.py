# (c) Andrew Chen (https://github.com/achen1296)

from pathlib import Path

from more_itertools import first, rlocate

from .backends import Backend, process_get
from .consts import *
from .locator import default_powershell_profile, ensure_powershell_profile, read_script


class PowerShellProfileBackend(Backend):
    """ Inserts commands into the PowerShell profile, just before the end marker of its permanent_env section. The commands call helper functions defined at the top of that section, so nothing takes effect until the next PowerShell session starts. append and prepend follow the registry backend's ordering (value goes at the end or the start of the ;-separated list) and skip values that are already present when the profile runs. """

    name = "powershell"

    def __init__(self, profile: PathLike | None = None):
        """ If profile is not specified, the default location under the user's home directory is used. """
        self.profile = None if profile is None else Path(profile)

    def _profile_path(self) -> Path:
        if self.profile is None:
            return default_powershell_profile()
        return self.profile

    def target(self) -> str:
        return str(self._profile_path())

    def _insert(self, command: str, *, output=False):
        path = ensure_powershell_profile(self._profile_path(), output=output)
        text, encoding = read_script(path)
        lines = text.splitlines(keepends=True)
        end = first(rlocate(lines, lambda line: line.strip() == END_MARKER))
        lines.insert(end, f"{command}\n")
        path.write_text("".join(lines), encoding=encoding)
        if output:
            print(f"Added {command} -> <{path}>")

    def set(self, name: str, value, *, output=False):
        self._insert(f"setenv_set {name} {value}", output=output)

    def append(self, name: str, value, *, output=False):
        self._insert(f"setenv_append {name} {value}", output=output)

    def prepend(self, name: str, value, *, output=False):
        self._insert(f"setenv_prepend {name} {value}", output=output)

    def get(self, name: str) -> str:
        return process_get(name)

    def _set_missing(self, name: str, value, *, output=False):
        # checked again when the profile runs, in case another session set it in the meantime
        self._insert(f"setenv_set_if_not_exist {name} {value}", output=output)
