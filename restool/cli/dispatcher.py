import logging
import sys
from inspect import getdoc

from docopt import docopt, DocoptExit

from ..config.error import ConfigError
from .error import CommandError, CommandNotFoundError, ArgumentError

log = logging.getLogger(__name__)


class Dispatcher:
    """
    Dispatcher runs a command class against argv.

    The doc-string of the class is its docopt usage. Its `commands` tuple
    names the methods that can be called; each method has its own usage in
    its doc-string and returns what should be written out, either a string
    or an iterable of lines.
    """

    def __init__(self, command, out=None, posarg_name="<command>", restarg_name="<args>"):
        self.root = command
        self.version = getattr(command, "__version__", None)
        self.out = out
        self._posarg_name = posarg_name
        self._restarg_name = restarg_name

    def run(self, argv):
        try:
            result = self.run_command(argv)
        except ConfigError as e:
            raise CommandError(f"Configuration error: {e}") from e

        self.write(result)
        return result

    def run_command(self, argv):
        options = self.parse(self.root, argv, options_first=True)

        name = options.get(self._posarg_name) or ""
        key = name.replace("-", "_")
        if key and key not in getattr(self.root, "commands", ()):
            raise CommandNotFoundError(self.root, name)

        # The command class decides what to do without a sub-command.
        command = self.root(options)
        if not key:
            return None

        handler = getattr(command, key)
        sub_options = self.parse(handler, options.get(self._restarg_name) or [])

        log.debug("Running command '%s'", name)
        return handler(sub_options)

    def parse(self, command, argv, options_first=False):
        doc = (getdoc(command) or "").strip("\n")
        if not doc:
            raise ArgumentError(command, argv)

        try:
            options = docopt(doc, argv=argv, help=False, options_first=options_first)
        except DocoptExit:
            raise CommandError("Invalid arguments.", command)

        if options.get("--help"):
            self.write(doc)
            sys.exit()

        if options.get("--version"):
            if self.version is None:
                raise ArgumentError(command, "--version")

            self.write(self.version)
            sys.exit()

        return options

    def write(self, result):
        if result is None:
            return
        if isinstance(result, str):
            result = [result]

        out = self.out or sys.stdout
        for line in result:
            print(line, file=out)
