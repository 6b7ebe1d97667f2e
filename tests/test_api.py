"""Tests for the module-level functions and backend selection."""

from pathlib import Path

import pytest

import permanent_env
from permanent_env.backends import list_append, list_prepend, split_segments
from permanent_env.consts import BACKEND_VARIABLE, WINDOWS


class TestListMerge:
    """Verify the ;-separated list policy shared by the Windows backends."""

    def test_split_empty(self) -> None:
        """An empty value has no segments."""
        assert split_segments("", ";") == []

    def test_append(self) -> None:
        """The value goes last."""
        assert list_append("a;b", "c", ";") == "a;b;c"

    def test_prepend(self) -> None:
        """The value goes first."""
        assert list_prepend("a;b", "c", ";") == "c;a;b"

    def test_present_returns_none(self) -> None:
        """An exact match means there is nothing to write."""
        assert list_append("a;b", "b", ";") is None
        assert list_prepend("a;b", "a", ";") is None

    def test_partial_match_is_not_present(self) -> None:
        """Only whole segments count."""
        assert list_append("C:\\tools\\bin", "C:\\tools", ";") == "C:\\tools\\bin;C:\\tools"

    def test_trailing_separator(self) -> None:
        """A trailing separator is not an empty last segment."""
        assert split_segments("a;b;", ";") == ["a", "b"]
        assert list_append("a;", "b", ";") == "a;b"
        assert list_prepend("a;", "b", ";") == "b;a"

    def test_inner_empty_segment_kept(self) -> None:
        """Only the trailing empty segment is dropped."""
        assert list_append("a;;b", "c", ";") == "a;;b;c"

    def test_existing_duplicates_kept(self) -> None:
        """Duplicates already stored are left alone."""
        assert list_append("a;a", "b", ";") == "a;a;b"


class TestDefaultBackend:
    """Verify how the backend is chosen."""

    def test_platform_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without an override, the platform decides."""
        monkeypatch.delenv(BACKEND_VARIABLE, raising=False)
        expected = "registry" if WINDOWS else "unix"
        assert permanent_env.BACKENDS[expected] is type(permanent_env.default_backend())

    def test_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The environment variable selects another backend."""
        monkeypatch.setenv(BACKEND_VARIABLE, "PowerShell")
        assert isinstance(permanent_env.default_backend(), permanent_env.PowerShellProfileBackend)

    def test_unknown(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An unknown name is rejected."""
        monkeypatch.setenv(BACKEND_VARIABLE, "fish")
        with pytest.raises(ValueError):
            permanent_env.default_backend()

    def test_new_backend_each_call(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Nothing is cached between calls."""
        monkeypatch.setenv(BACKEND_VARIABLE, "unix")
        assert permanent_env.default_backend() is not permanent_env.default_backend()


class TestModuleFunctions:
    """Verify the module-level operations on the Unix backend."""

    @pytest.fixture(autouse=True)
    def unix(self, home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(BACKEND_VARIABLE, "unix")

    def test_set_append_prepend(self, home: Path) -> None:
        """Each call adds one line to the profile."""
        permanent_env.set("DUMMY", '"/something"')
        permanent_env.append("PATH", "$HOME/some/cool/bin")
        permanent_env.prepend("PATH", "/opt/bin")
        assert (home / ".bash_profile").read_text() == (
            '\nexport DUMMY="/something"\n'
            '\nexport PATH="$HOME/some/cool/bin:$PATH"\n'
            '\nexport PATH="$PATH:/opt/bin"\n'
        )

    def test_check_or_set(self, home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Only an unset variable is written."""
        monkeypatch.delenv("PERMANENT_ENV_TEST", raising=False)
        monkeypatch.setenv("PERMANENT_ENV_OTHER", "1")
        assert permanent_env.check_or_set("PERMANENT_ENV_TEST", 1) is True
        assert permanent_env.check_or_set("PERMANENT_ENV_OTHER", 1) is False
        assert (home / ".bash_profile").read_text() == "\nexport PERMANENT_ENV_TEST=1\n"

    def test_get(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """get reads the process environment."""
        monkeypatch.setenv("PERMANENT_ENV_TEST", "value")
        assert permanent_env.get("PERMANENT_ENV_TEST") == "value"

    def test_get_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """get on a missing variable raises."""
        monkeypatch.delenv("PERMANENT_ENV_TEST", raising=False)
        with pytest.raises(permanent_env.VariableNotFoundException):
            permanent_env.get("PERMANENT_ENV_TEST")
