# (c) Andrew Chen (https://github.com/achen1296)


class PermanentEnvironmentException(Exception):
    pass


class NoHomeDirectoryException(PermanentEnvironmentException):
    def __init__(self):
        super().__init__("No home directory")


class VariableNotFoundException(PermanentEnvironmentException, KeyError):
    def __init__(self, name: str):
        super().__init__(f"Environment variable {name} is not set")
        self.name = name

    def __str__(self):
        # KeyError would otherwise show the message in quotes
        return self.args[0]


class UnsupportedEncodingException(PermanentEnvironmentException, ValueError):
    def __init__(self, name: str, kind: str = "Environment variable"):
        super().__init__(f"{kind} {name} does not hold valid text")
        self.name = name


class RegistryException(PermanentEnvironmentException):
    """ code is the native Windows error code, if there was one. """

    action = "get environment variable"

    def __init__(self, name: str, code: int | None = None):
        super().__init__(f"Failed to {self.action} {name}, Error code: {code}")
        self.name = name
        self.code = code

    @classmethod
    def from_os_error(cls, name: str, exc: OSError):
        return cls(name, getattr(exc, "winerror", None) or exc.errno)


class RegistryOpenException(RegistryException):
    action = "open registry key"


class RegistryWriteException(RegistryException):
    action = "set environment variable"


class BackendException(PermanentEnvironmentException):
    pass


class UnknownBackendException(BackendException, ValueError):
    def __init__(self, name: str, known):
        super().__init__(
            f"Unknown backend {name!r}, expected one of {', '.join(known)}")
        self.name = name


class BackendUnavailableException(BackendException):
    def __init__(self, name: str, reason: str):
        super().__init__(f"The {name} backend is not available: {reason}")
        self.name = name
