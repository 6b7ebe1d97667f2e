# (c) Andrew Chen (https://github.com/achen1296)

""" Finds the place where permanent assignments are stored: the login shell's profile on Unix, the user's Environment registry key or a PowerShell profile on Windows. Nothing here is cached; every caller gets a freshly opened target. """

import codecs
import os
from pathlib import Path
from typing import IO

from more_itertools import first_true

from .consts import *
from .errors import *

POWERSHELL_TEMPLATE = f"""{BEGIN_MARKER}
function setenv_set([string]$Name, [string]$Value) {{
    Set-Item -Path "Env:$Name" -Value $Value
}}

function setenv_set_if_not_exist([string]$Name, [string]$Value) {{
    if (-not (Test-Path "Env:$Name") -or -not (Get-Item -Path "Env:$Name").Value) {{
        setenv_set $Name $Value
    }}
}}

function setenv_segments([string]$Name) {{
    $current = (Get-Item -Path "Env:$Name" -ErrorAction SilentlyContinue).Value
    if (-not $current) {{ return ,@() }}
    $segments = @($current -split "{WINDOWS_SEPARATOR}")
    if ($segments[-1] -eq "") {{ $segments = @($segments[0..($segments.Count - 2)]) }}
    return ,$segments
}}

function setenv_append([string]$Name, [string]$Value) {{
    $segments = setenv_segments $Name
    if ($segments -cnotcontains $Value) {{
        setenv_set $Name (($segments + $Value) -join "{WINDOWS_SEPARATOR}")
    }}
}}

function setenv_prepend([string]$Name, [string]$Value) {{
    $segments = setenv_segments $Name
    if ($segments -cnotcontains $Value) {{
        setenv_set $Name ((@($Value) + $segments) -join "{WINDOWS_SEPARATOR}")
    }}
}}
{END_MARKER}
"""


def home_directory() -> Path:
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise NoHomeDirectoryException() from exc
    # expanduser gives back "~" unchanged when there is nothing to expand it to
    if str(home) == "~":
        raise NoHomeDirectoryException()
    return home


def _open_candidate(home: Path, candidate: ProfileCandidate) -> IO[str]:
    # flags are rebuilt for every candidate so an earlier attempt can never change a later one
    flags = os.O_WRONLY | os.O_APPEND
    if candidate.create:
        flags |= os.O_CREAT
    fd = os.open(home / candidate.filename, flags, 0o644)
    return os.fdopen(fd, "a", encoding="utf-8")


def open_profile(home: PathLike, candidates=PROFILE_CANDIDATES) -> tuple[IO[str], Path]:
    """ Tries each candidate in order and returns the first one that opens in append mode, along with its path. If all of them fail, the OSError from the last attempt is raised. """
    home = Path(home)
    last_exc: OSError | None = None
    for candidate in candidates:
        try:
            return _open_candidate(home, candidate), home / candidate.filename
        except OSError as exc:
            last_exc = exc
    if last_exc is None:
        raise ValueError("No profile candidates given")
    raise last_exc


def find_profile(home: PathLike | None = None) -> tuple[IO[str], Path]:
    if home is None:
        home = home_directory()
    return open_profile(home)


def _writable(path: Path) -> bool:
    # same test open_profile applies by opening for writing
    return path.is_file() and os.access(path, os.W_OK)


def profile_path(home: PathLike | None = None) -> Path:
    """ The profile that find_profile would write to, without opening or creating anything. """
    if home is None:
        home = home_directory()
    home = Path(home)
    existing = first_true(PROFILE_CANDIDATES, pred=lambda c: c.create or _writable(home / c.filename))
    return home / existing.filename


def open_environment_key(winreg, access: int | None = None):
    """ Opens HKEY_CURRENT_USER\\Environment. The returned handle can be used as a context manager. """
    if access is None:
        access = winreg.KEY_ALL_ACCESS
    try:
        return winreg.OpenKey(winreg.HKEY_CURRENT_USER, ENVIRONMENT_SUBKEY, 0, access)
    except OSError as exc:
        raise RegistryOpenException.from_os_error(
            f"HKEY_CURRENT_USER\\{ENVIRONMENT_SUBKEY}", exc) from exc


def default_powershell_profile(home: PathLike | None = None) -> Path:
    if home is None:
        home = home_directory()
    return Path(home).joinpath(*POWERSHELL_PROFILE)


def has_markers(text: str) -> bool:
    lines = [line.strip() for line in text.splitlines()]
    return BEGIN_MARKER in lines and END_MARKER in lines


SCRIPT_BOMS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def read_script(path: PathLike) -> tuple[str, str]:
    """ Reads a PowerShell script and returns its text along with the encoding to write it back in. Windows PowerShell 5.1 writes UTF-16 with a BOM when redirecting to a file, so the BOM decides; without one, UTF-8 is assumed. """
    data = Path(path).read_bytes()
    encoding = first_true(SCRIPT_BOMS, default=(b"", "utf-8"),
                          pred=lambda bom: data.startswith(bom[0]))[1]
    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise UnsupportedEncodingException(str(path), "Profile") from exc
    # write_text translates newlines again on the way out
    return text.replace("\r\n", "\n"), encoding


def ensure_powershell_profile(path: PathLike | None = None, *, output=False) -> Path:
    """ Makes sure the profile script exists and contains both markers, creating the folders and the script or appending the template as needed. Returns the script path. """
    if path is None:
        path = default_powershell_profile()
    path = Path(path)
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(POWERSHELL_TEMPLATE, encoding="utf-8")
        if output:
            print(f"Created <{path}>")
    else:
        text, encoding = read_script(path)
        if not has_markers(text):
            if text and not text.endswith("\n"):
                text += "\n"
            # rewritten rather than appended so a UTF-16 profile does not get a second BOM
            path.write_text(text + POWERSHELL_TEMPLATE, encoding=encoding)
            if output:
                print(f"Added permanent_env section to <{path}>")
    return path
