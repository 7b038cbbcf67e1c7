import logging
import sys
from inspect import getdoc

from .. import (
    __version__ as package_version,
    __name__ as package_name,
)
from ..config.aggregator import Aggregator
from ..config.loader import Loader
from .error import CommandError, CommandNotFoundError
from .dispatcher import Dispatcher

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class Restool:
    """restool compiles REST service configuration into models.

    Usage:
        restool [options]
        restool [options] <command> [<args>...]

    Options:
        --config-dir DIR  Directory holding the restool configuration
                          [default: config]
        --verbose, -v     Log the files read and the services built
        --help            Print help message and exit
        --version         Print version and exit

    Available commands include:
        list     List the services declared in the configuration
        show     Build a service and print its model
        help     Get help on a command
        version  Show the restool version information
    """

    def __init__(self, options):
        if not options.get("<command>", ""):
            raise CommandError("No command is given", Restool)
        self.global_option = options

        logging.basicConfig(
            level=logging.DEBUG if options.get("--verbose") else logging.WARNING,
            format=LOG_FORMAT,
        )
        self.loader = Loader(Aggregator(options.get("--config-dir") or "config"))

    commands = ("list", "show", "help", "version")
    __version__ = "{} {}".format(package_name, package_version)

    def list(self, options):
        """list prints the name of every declared service, in the order
        restool finds them.

        Usage:
            list [options]

            Options:
                --help     Print help message and exit
        """
        return self.loader.service_names()

    def show(self, options):
        """show builds a service and prints its model.

        Usage:
            show [options] <service>

            Options:
                --help     Print help message and exit
        """
        service = self.loader.load(options["<service>"])
        return format_service(service)

    def help(self, options):
        """help print the help message of a command

        Usage:
            help <command>
        """
        name = options.get("<command>", "").strip()
        if name not in self.commands:
            raise CommandNotFoundError(self.help, name)

        return getdoc(getattr(self, name))

    def version(self, _):
        """version print restool version

        Usage:
            version
        """
        return self.__version__


def _format_field(field):
    return f"{field.key} ({field.metonym}) {field.type!r}"


def format_service(service):
    lines = [
        f"{service.name}  {service.base_url}",
        f"  timeout: {service.timeout}",
        f"  ssl_verify: {service.ssl_verify}",
    ]

    if service.basic_auth is not None:
        lines.append(f"  basic_auth: {service.basic_auth.user}")

    pool = service.persistent_connection
    if pool is not None:
        lines.append(
            f"  persistent: pool_size={pool.pool_size} "
            f"warn_timeout={pool.warn_timeout} force_retry={pool.force_retry}"
        )

    lines.append("  operations:")
    for operation in service.operations:
        params = ", ".join(operation.uri_params)
        lines.append(
            f"    {operation.name}: {operation.method} {operation.path} [{params}]"
        )
        if operation.response is not None:
            for field in operation.response.fields:
                lines.append(f"      {_format_field(field)}")

    if service.representations:
        lines.append("  representations:")
        for name, representation in service.representations.items():
            lines.append(f"    {name}:")
            for field in representation.fields:
                lines.append(f"      {_format_field(field)}")

    return "\n".join(lines)


def main():
    dispatcher = Dispatcher(Restool)
    dispatcher.run(sys.argv[1:])
