"""Command line option parsing."""

import abc

from typing import Type

from configargparse import (
    ArgumentParser,
    ArgumentTypeError,
    Namespace,
    YAMLConfigFileParser,
)

from .error import ArgsParseError
from .util import BoundedInt

CAT_CHECK = "check"
CAT_START = "start"

DEFAULT_INVITATION_TIMEOUT = 10


class ArgumentGroup(abc.ABC):
    """A class representing a group of related command line arguments."""

    GROUP_NAME = None

    @abc.abstractmethod
    def add_arguments(self, parser: ArgumentParser):
        """Add arguments to the provided argument parser."""

    @abc.abstractmethod
    def get_settings(self, args: Namespace) -> dict:
        """Extract settings from the parsed arguments."""


class group:
    """Decorator for registering argument groups."""

    _registered = []

    def __init__(self, *categories):
        """Initialize the decorator."""
        self.categories = tuple(categories)

    def __call__(self, group_cls: ArgumentGroup):
        """Register a class in the given categories."""
        setattr(group_cls, "CATEGORIES", self.categories)
        self._registered.append((self.categories, group_cls))
        return group_cls

    @classmethod
    def get_registered(cls, category: str = None):
        """Fetch the set of registered classes in a category."""
        return (
            grp
            for (cats, grp) in cls._registered
            if category is None or category in cats
        )


def create_argument_parser(*, prog: str = None):
    """Create am instance of an arg parser, force yaml format for external config."""
    return ArgumentParser(config_file_parser_class=YAMLConfigFileParser, prog=prog)


def load_argument_groups(parser: ArgumentParser, *groups: Type[ArgumentGroup]):
    """
    Log a set of argument groups into a parser.

    Returns:
        A callable to convert loaded arguments into a settings dictionary

    """
    group_inst = []
    for group in groups:
        g_parser = parser.add_argument_group(group.GROUP_NAME)
        inst = group()
        inst.add_arguments(g_parser)
        group_inst.append(inst)

    def get_settings(args: Namespace):
        settings = {}
        try:
            for group in group_inst:
                settings.update(group.get_settings(args))
        except ArgsParseError as e:
            parser.print_help()
            raise e
        return settings

    return get_settings


@group(CAT_START)
class AdminGroup(ArgumentGroup):
    """Admin server settings."""

    GROUP_NAME = "Admin"

    def add_arguments(self, parser: ArgumentParser):
        """Add admin-specific command line arguments to the parser."""
        parser.add_argument(
            "--admin",
            type=str,
            nargs=2,
            metavar=("<host>", "<port>"),
            env_var="INVRES_ADMIN",
            help=(
                "Specify the host and port on which to run the administrative server. "
                "The server accepts invitation URLs to check at "
                "'POST /invitations/check'."
            ),
        )

    def get_settings(self, args: Namespace) -> dict:
        """Extract admin settings."""
        settings = {}
        if not args.admin:
            raise ArgsParseError("Parameter --admin must be provided")
        host, port = args.admin
        try:
            port = BoundedInt(min=1, max=65535)(port)
        except ArgumentTypeError as e:
            raise ArgsParseError(f"Invalid admin port: {port}") from e
        settings["admin.host"] = host
        settings["admin.port"] = port
        return settings


@group(CAT_CHECK, CAT_START)
class GeneralGroup(ArgumentGroup):
    """General settings."""

    GROUP_NAME = "General"

    def add_arguments(self, parser: ArgumentParser):
        """Add general command line arguments to the parser."""
        parser.add_argument(
            "--arg-file",
            is_config_file=True,
            help=(
                "Load arguments from the specified file.  Note that "
                "this file *must* be in YAML format."
            ),
        )

    def get_settings(self, args: Namespace) -> dict:
        """Extract general settings."""
        return {}


@group(CAT_CHECK, CAT_START)
class InvitationGroup(ArgumentGroup):
    """Invitation resolution settings."""

    GROUP_NAME = "Invitation"

    def add_arguments(self, parser: ArgumentParser):
        """Add invitation-specific command line arguments to the parser."""
        parser.add_argument(
            "--invitation-timeout",
            type=BoundedInt(min=1),
            metavar="<seconds>",
            default=DEFAULT_INVITATION_TIMEOUT,
            env_var="INVRES_INVITATION_TIMEOUT",
            help=(
                "Time limit in seconds for the request that follows an invitation "
                f"URL redirect. Default: {DEFAULT_INVITATION_TIMEOUT}."
            ),
        )

    def get_settings(self, args: Namespace) -> dict:
        """Extract invitation settings."""
        return {"invitations.request_timeout": args.invitation_timeout}


@group(CAT_CHECK, CAT_START)
class LoggingGroup(ArgumentGroup):
    """Logging settings."""

    GROUP_NAME = "Logging"

    def add_arguments(self, parser: ArgumentParser):
        """Add logging-specific command line arguments to the parser."""
        parser.add_argument(
            "--log-config",
            dest="log_config",
            type=str,
            metavar="<path-to-config>",
            default=None,
            env_var="INVRES_LOG_CONFIG",
            help="Specifies a custom logging configuration file",
        )
        parser.add_argument(
            "--log-file",
            dest="log_file",
            type=str,
            metavar="<log-file>",
            default=None,
            env_var="INVRES_LOG_FILE",
            help=(
                "Overrides the output destination for the root logger (as defined "
                "by the log config file) to the named <log-file>."
            ),
        )
        parser.add_argument(
            "--log-level",
            dest="log_level",
            type=str,
            metavar="<log-level>",
            default=None,
            env_var="INVRES_LOG_LEVEL",
            help=(
                "Specifies a custom logging level as one of: "
                "('debug', 'info', 'warning', 'error', 'critical')"
            ),
        )

    def get_settings(self, args: Namespace) -> dict:
        """Extract logging settings."""
        settings = {}
        if args.log_config:
            settings["log.config"] = args.log_config
        if args.log_file:
            settings["log.file"] = args.log_file
        if args.log_level:
            settings["log.level"] = args.log_level
        return settings
