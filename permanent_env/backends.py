# (c) Andrew Chen (https://github.com/achen1296)

import os
import sys
from abc import ABC, abstractmethod

from .errors import *


def process_get(name: str) -> str:
    """ Reads the variable from this process's environment, not from any persistence target. Raises VariableNotFoundException if it is absent and UnsupportedEncodingException if it is not valid text. """
    if os.supports_bytes_environ:
        raw = os.environb.get(os.fsencode(name))
        if raw is None:
            raise VariableNotFoundException(name)
        try:
            return raw.decode(sys.getfilesystemencoding())
        except UnicodeDecodeError as exc:
            raise UnsupportedEncodingException(name) from exc
    try:
        value = os.environ[name]
    except KeyError:
        raise VariableNotFoundException(name) from None
    try:
        # lone surrogates from the wide-character environment block
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise UnsupportedEncodingException(name) from exc
    return value


def split_segments(value: str, separator: str) -> list[str]:
    """ An empty value has no segments rather than one empty segment, and a trailing separator (common in Windows Path values) does not count as an empty last segment. Empty segments elsewhere are kept. """
    segments = value.split(separator)
    if segments[-1] == "":
        segments.pop()
    return segments


def list_append(current: str, value: str, separator: str) -> str | None:
    """ Returns the new joined value with value at the end, or None if value is already one of the segments. """
    segments = split_segments(current, separator)
    if value in segments:
        return None
    segments.append(value)
    return separator.join(segments)


def list_prepend(current: str, value: str, separator: str) -> str | None:
    """ Returns the new joined value with value at the start, or None if value is already one of the segments. """
    segments = split_segments(current, separator)
    if value in segments:
        return None
    segments.insert(0, value)
    return separator.join(segments)


class Backend(ABC):
    """ A way of storing environment variables permanently. Implementations do not hold on to their target between calls. """

    name = ""

    @abstractmethod
    def set(self, name: str, value, *, output=False):
        """ Assigns value to name without checking for an existing assignment. """

    @abstractmethod
    def append(self, name: str, value, *, output=False):
        pass

    @abstractmethod
    def prepend(self, name: str, value, *, output=False):
        pass

    @abstractmethod
    def get(self, name: str) -> str:
        pass

    @abstractmethod
    def target(self) -> str:
        """ Human-readable description of where this backend writes. """

    def is_set(self, name: str) -> bool:
        try:
            return bool(self.get(name))
        except (VariableNotFoundException, UnsupportedEncodingException, RegistryException):
            return False

    def check_or_set(self, name: str, value, *, output=False) -> bool:
        """ Sets the variable only if get does not find a non-empty value for it. Returns whether anything was written. This is not atomic: another writer can get in between the check and the write. """
        if self.is_set(name):
            if output:
                print(f"{name} is already set, not changing <{self.target()}>")
            return False
        self._set_missing(name, value, output=output)
        return True

    def _set_missing(self, name: str, value, *, output=False):
        self.set(name, value, output=output)
