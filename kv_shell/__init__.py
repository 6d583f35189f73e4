from kv_shell.command import Command, CommandError, parse_command
from kv_shell.shell import Shell, ShellExit

__all__ = ["Command", "CommandError", "Shell", "ShellExit", "parse_command"]
