"""Base class for argparse-driven command-line apps.

Subclasses provide the parser and a ``(command, subcommand) -> handler``
dispatch table. The base runs ``before_command``/``after_command`` around the
selected handler and turns uncaught errors into a one-line message, or a full
traceback with ``--verbose``.
"""

from __future__ import annotations

import argparse
import functools
import logging
import sys
import traceback
from typing import Callable

Handler = Callable[[argparse.Namespace], int]


class CliApp:
    def __init__(self) -> None:
        self._did_exec_cmd = False

    def build_parser(self) -> argparse.ArgumentParser:
        raise NotImplementedError

    def dispatch_table(self) -> dict[tuple[str, str], Handler]:
        raise NotImplementedError

    def action(self, func: Handler) -> Handler:
        """Wrap *func* so the before/after hooks run around it."""

        @functools.wraps(func)
        def wrapper(args: argparse.Namespace) -> int:
            self._did_exec_cmd = True
            self.before_command(args)
            rc = func(args)
            self.after_command(args)
            return rc

        return wrapper

    @staticmethod
    def fix(first: str | None, rest: list[str] | None) -> list[str]:
        """Join an optional first positional and a variadic tail into one list."""
        if first is not None and rest:
            return [first] + list(rest)
        if first:
            return [first]
        return []

    def before_command(self, args: argparse.Namespace) -> None:
        pass

    def after_command(self, args: argparse.Namespace) -> None:
        pass

    def main(self, argv: list[str] | None = None) -> int:
        parser = self.build_parser()
        args = parser.parse_args(argv)
        verbose = getattr(args, "verbose", False)

        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )

        handler = self.dispatch_table().get(
            (getattr(args, "command", None) or "", getattr(args, "subcommand", None) or "")
        )
        try:
            rc = self.action(handler)(args) if handler else 0
        except Exception as e:  # top-level reporting for the whole CLI
            if verbose:
                traceback.print_exc()
            else:
                print(e, file=sys.stderr)
            return 1

        if not self._did_exec_cmd:
            parser.print_help()
        return rc
