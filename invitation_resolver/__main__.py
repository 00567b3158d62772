"""invitation_resolver package entry point."""

import sys


def run(args):
    """Execute invitation-resolver."""
    from .commands import run_command  # noqa

    if len(args) > 1 and args[1] and args[1][0] != "-":
        command = args[1]
        args = args[2:]
    else:
        command = None
        args = args[1:]

    run_command(command, args)


def main(args=None):
    """Execute default entry point."""
    run(sys.argv if args is None else args)


if __name__ == "__main__":
    main()
