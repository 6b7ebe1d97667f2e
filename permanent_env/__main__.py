# (c) Andrew Chen (https://github.com/achen1296)

import cmd
import inspect
import shlex
import sys

from . import default_backend
from .errors import PermanentEnvironmentException


class PermanentEnvironmentCmd(cmd.Cmd):
    """ Commands:
    - set NAME VALUE
    - append NAME VALUE
    - prepend NAME VALUE
    - check_or_set NAME VALUE
    - get NAME
    - where
    - exit/quit

    Arguments are split like a shell would, so quote values containing spaces. To write quotes into a Unix profile, quote them again, e.g. set DUMMY '"/some thing"' """

    prompt = "env>> "
    aliases = {"quit": "exit", "?": "help"}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # set by onecmd so one-shot use can report failure
        self.failed = False

    def onecmd(self, line: str):
        """ Splits the arguments and passes them separately to the do_ methods. Library errors are printed rather than ending the console. """
        self.failed = False
        try:
            args = shlex.split(line)
        except ValueError as exc:
            self._error(exc)
            return None
        if not args:
            return self.emptyline()
        command, *args = args
        command = self.aliases.get(command, command)
        func = getattr(self, "do_" + command, None)
        if func is None:
            return self.default(line)
        try:
            inspect.signature(func).bind(*args)
        except TypeError:
            self._error(f"Wrong number of arguments for {command}")
            return None
        self.lastcmd = line
        try:
            return func(*args)
        except (PermanentEnvironmentException, OSError) as exc:
            self._error(exc)
        return None

    def emptyline(self):
        # do not repeat the last command like cmd.Cmd does
        return None

    def default(self, line: str):
        self._error(f"Unknown command: {line}")

    def _error(self, message):
        self.failed = True
        print(message, file=sys.stderr)

    def do_set(self, name: str, value: str):
        """ Set NAME to VALUE without checking whether it is already set. """
        default_backend().set(name, value, output=True)

    def do_append(self, name: str, value: str):
        """ Append VALUE to the list in NAME. """
        default_backend().append(name, value, output=True)

    def do_prepend(self, name: str, value: str):
        """ Prepend VALUE to the list in NAME. """
        default_backend().prepend(name, value, output=True)

    def do_check_or_set(self, name: str, value: str):
        """ Set NAME to VALUE only if NAME is not already set. """
        default_backend().check_or_set(name, value, output=True)

    def do_get(self, name: str):
        """ Print the value of NAME. """
        print(default_backend().get(name))

    def do_where(self):
        """ Print the backend in use and where it writes. """
        backend = default_backend()
        print(f"{backend.name}: {backend.target()}")

    def do_exit(self):
        """ Exit the console. """
        return True

    def do_EOF(self):
        print()
        return True

    def do_help(self, arg: str = ""):
        """ List commands, or show help for one. """
        super().do_help(arg)


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    console = PermanentEnvironmentCmd()
    if argv:
        console.onecmd(shlex.join(argv))
        return 1 if console.failed else 0
    try:
        console.cmdloop()
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
