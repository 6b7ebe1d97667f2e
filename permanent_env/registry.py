# (c) Andrew Chen (https://github.com/achen1296)

""" Stores variables under HKEY_CURRENT_USER\\Environment, which is where `setx` and the System Properties dialog put per-user variables. Unlike the Unix profile, writes here overwrite, so repeating an operation does not pile up duplicates. """

from typing import Callable

from .backends import Backend, list_append, list_prepend
from .consts import *
from .errors import *
from .locator import open_environment_key


def broadcast_environment_change():
    """ Tells top-level windows (Explorer in particular) that the environment changed, so programs started afterwards see the new values without logging out. """
    import ctypes
    return ctypes.windll.user32.SendMessageTimeoutW(HWND_BROADCAST, WM_SETTINGCHANGE, 0, ENVIRONMENT_SUBKEY, SMTO_ABORTIFHUNG, BROADCAST_TIMEOUT_MS, None)


class RegistryBackend(Backend):
    name = "registry"

    def __init__(self, winreg=None, *, notify=True):
        """ winreg defaults to the standard library module; anything with the same interface can be passed instead. If notify is True, a settings change is broadcast after each write. """
        if winreg is None:
            try:
                import winreg
            except ImportError as exc:
                raise BackendUnavailableException(self.name, str(exc)) from exc
        self.winreg = winreg
        self.notify = notify

    def target(self) -> str:
        return f"HKEY_CURRENT_USER\\{ENVIRONMENT_SUBKEY}"

    def _query(self, key, name: str) -> tuple[str, int]:
        try:
            value, value_type = self.winreg.QueryValueEx(key, name)
        except FileNotFoundError:
            raise VariableNotFoundException(name) from None
        except OSError as exc:
            raise RegistryException.from_os_error(name, exc) from exc
        if value_type not in (self.winreg.REG_SZ, self.winreg.REG_EXPAND_SZ) or not isinstance(value, str):
            raise UnsupportedEncodingException(name)
        return value, value_type

    def _store(self, key, name: str, value: str, value_type: int):
        try:
            self.winreg.SetValueEx(key, name, 0, value_type, value)
        except OSError as exc:
            raise RegistryWriteException.from_os_error(name, exc) from exc

    def _written(self, message: str, output: bool):
        if self.notify:
            broadcast_environment_change()
        if output:
            print(f"{message} -> <{self.target()}>")

    def get(self, name: str) -> str:
        with open_environment_key(self.winreg, self.winreg.KEY_READ) as key:
            return self._query(key, name)[0]

    def set(self, name: str, value, *, output=False):
        """ Overwrites any existing value. Values containing % are stored as REG_EXPAND_SZ so references like %USERPROFILE% keep working. """
        value = str(value)
        if "%" in value:
            value_type = self.winreg.REG_EXPAND_SZ
        else:
            value_type = self.winreg.REG_SZ
        with open_environment_key(self.winreg) as key:
            self._store(key, name, value, value_type)
        self._written(f"Set {name}={value}", output)

    def _merge(self, name: str, value, merge: Callable[[str, str, str], str | None], action: str, output: bool) -> bool:
        value = str(value)
        with open_environment_key(self.winreg) as key:
            # raises before anything is written if the variable is missing
            current, value_type = self._query(key, name)
            merged = merge(current, value, WINDOWS_SEPARATOR)
            if merged is None:
                if output:
                    print(
                        f"{value} is already in {name}, not changing <{self.target()}>")
                return False
            self._store(key, name, merged, value_type)
        self._written(f"{action} {value} to {name}", output)
        return True

    def append(self, name: str, value, *, output=False) -> bool:
        """ Adds value as the last ;-separated segment unless it is already one of the segments. The variable must already exist. Returns whether anything was written. """
        return self._merge(name, value, list_append, "Appended", output)

    def prepend(self, name: str, value, *, output=False) -> bool:
        """ Adds value as the first ;-separated segment unless it is already one of the segments. The variable must already exist. Returns whether anything was written. """
        return self._merge(name, value, list_prepend, "Prepended", output)
