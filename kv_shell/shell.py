import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

from kv_shell.command import CommandError, parse_command
from logkv.models.exceptions import StoreError

logger = logging.getLogger()


class ShellExit(Exception):
    """Raised by the exit command to stop the read loop."""


@dataclass
class CommandSpec:
    handler: Callable[..., str | None]
    arity: int
    usage: str


class Shell:
    def __init__(self, prompt: str = "logkv> "):
        self.prompt = prompt
        self.commands: dict[str, CommandSpec] = {}

        self.command("exit", usage="exit", aliases=["quit"])(self._exit)
        self.command("help", usage="help")(self._help)

    def command(
        self,
        name: str,
        arity: int = 0,
        usage: str | None = None,
        aliases: list[str] | None = None,
    ):
        """Decorator for registering command handlers"""
        if arity < 0:
            raise ValueError(f"arity must be >= 0, got {arity}")

        def decorator(handler):
            spec = CommandSpec(handler=handler, arity=arity, usage=usage or name)
            for command_name in [name, *(aliases or [])]:
                self.commands[command_name.lower()] = spec
            return handler
        return decorator

    def _exit(self) -> None:
        raise ShellExit()

    def _help(self) -> str:
        usages = sorted({spec.usage for spec in self.commands.values()})
        return "commands: " + ", ".join(usages)

    def execute(self, line: str) -> str | None:
        """
        Run a single input line.

        Returns:
            Text to print, or None if there is nothing to show.

        Raises:
            CommandError: If the line is malformed, the command unknown, or
                the argument count wrong.
            ShellExit: If the command asks the shell to stop.
            StoreError: Propagated from the command handler.
        """
        command = parse_command(line)
        if command is None:
            return None

        spec = self.commands.get(command.name)
        if spec is None:
            raise CommandError(f"unknown command: {command.name} (try 'help')")

        if command.arity() != spec.arity:
            raise CommandError(f"usage: {spec.usage}")

        logger.debug(f"--> {command.name} {command.args}")
        return spec.handler(*command.args)

    def run(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        """Read and execute lines until exit or end of input"""
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout

        while True:
            stdout.write(self.prompt)
            stdout.flush()

            line = stdin.readline()
            if not line:
                stdout.write("\n")
                break

            try:
                output = self.execute(line)
            except ShellExit:
                break
            except (CommandError, StoreError) as e:
                stdout.write(f"error: {e}\n")
                continue

            if output is not None:
                stdout.write(f"{output}\n")
