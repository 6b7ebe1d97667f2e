"""Shared fixtures: a fake home directory and an in-memory winreg."""

import pytest

HKEY_CURRENT_USER = 0x80000001
KEY_READ = 0x20019
KEY_ALL_ACCESS = 0xF003F
REG_SZ = 1
REG_EXPAND_SZ = 2
REG_DWORD = 4
ERROR_ACCESS_DENIED = 5


class FakeKey:
    """A handle to the fake Environment key, usable as a context manager."""

    def __init__(self, registry: "FakeWinreg", access: int) -> None:
        self.registry = registry
        self.access = access
        self.closed = False

    def __enter__(self) -> "FakeKey":
        return self

    def __exit__(self, *exc_info) -> None:
        self.closed = True


class FakeWinreg:
    """Just enough of the winreg module for HKEY_CURRENT_USER\\Environment."""

    HKEY_CURRENT_USER = HKEY_CURRENT_USER
    KEY_READ = KEY_READ
    KEY_ALL_ACCESS = KEY_ALL_ACCESS
    REG_SZ = REG_SZ
    REG_EXPAND_SZ = REG_EXPAND_SZ
    REG_DWORD = REG_DWORD

    def __init__(self) -> None:
        self.values: dict[str, tuple[object, int]] = {}
        self.writes: list[tuple[str, object, int]] = []
        self.opened: list[FakeKey] = []
        self.open_error: int | None = None
        self.query_error: int | None = None
        self.write_error: int | None = None

    def _lookup(self, name: str) -> str | None:
        # value names are case-insensitive
        for existing in self.values:
            if existing.lower() == name.lower():
                return existing
        return None

    def OpenKey(self, key, sub_key, reserved=0, access=KEY_READ):
        assert key == HKEY_CURRENT_USER
        assert sub_key == "Environment"
        if self.open_error is not None:
            exc = OSError(self.open_error, "Access is denied")
            exc.winerror = self.open_error
            raise exc
        handle = FakeKey(self, access)
        self.opened.append(handle)
        return handle

    def QueryValueEx(self, key: FakeKey, name: str):
        assert not key.closed
        if self.query_error is not None:
            exc = OSError(self.query_error, "Access is denied")
            exc.winerror = self.query_error
            raise exc
        existing = self._lookup(name)
        if existing is None:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        return self.values[existing]

    def SetValueEx(self, key: FakeKey, name: str, reserved, value_type: int, value) -> None:
        assert not key.closed
        assert key.access == KEY_ALL_ACCESS
        if self.write_error is not None:
            exc = OSError(self.write_error, "Access is denied")
            exc.winerror = self.write_error
            raise exc
        existing = self._lookup(name) or name
        self.values[existing] = (value, value_type)
        self.writes.append((existing, value, value_type))


@pytest.fixture
def fake_winreg() -> FakeWinreg:
    return FakeWinreg()


@pytest.fixture
def home(tmp_path, monkeypatch):
    """An empty home directory that Path.home() also points at."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home
