# (c) Andrew Chen (https://github.com/achen1296)

import os
import platform
from typing import NamedTuple

PathLike = str | os.PathLike

WINDOWS = platform.system() == "Windows"

BACKEND_VARIABLE = "PERMANENT_ENV_BACKEND"
""" Name of the environment variable that overrides the platform's default backend """


class ProfileCandidate(NamedTuple):
    filename: str
    create: bool = False


PROFILE_CANDIDATES = (
    ProfileCandidate(".bash_profile"),
    ProfileCandidate(".bash_login"),
    ProfileCandidate(".profile"),
    # only created when none of the login shell's files exist
    ProfileCandidate(".bash_profile", create=True),
)

UNIX_SEPARATOR = ":"
WINDOWS_SEPARATOR = ";"

ENVIRONMENT_SUBKEY = "Environment"

POWERSHELL_PROFILE = ("Documents", "WindowsPowerShell",
                      "Microsoft.PowerShell_profile.ps1")
""" Location of the PowerShell profile relative to the home directory """

BEGIN_MARKER = "# >>> permanent_env >>>"
END_MARKER = "# <<< permanent_env <<<"

HWND_BROADCAST = 0xFFFF
WM_SETTINGCHANGE = 0x001A
SMTO_ABORTIFHUNG = 0x0002
BROADCAST_TIMEOUT_MS = 5000
