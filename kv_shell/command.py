import shlex
from dataclasses import dataclass, field


class CommandError(Exception):
    """Raised when an input line cannot be turned into a valid command."""


@dataclass
class Command:
    name: str
    args: list[str] = field(default_factory=list)

    def arity(self) -> int:
        return len(self.args)


def parse_command(line: str) -> Command | None:
    """
    Split an input line into a command name and its arguments.

    Tokens follow shell quoting rules, so `set "a key" 'a value'` has two
    arguments. Blank lines give None.

    Raises:
        CommandError: If the line has unbalanced quotes.
    """
    if line is None:
        raise ValueError("line cannot be None")

    try:
        tokens = shlex.split(line)
    except ValueError as e:
        raise CommandError(f"cannot parse input: {e}") from e

    if not tokens:
        return None

    return Command(name=tokens[0].lower(), args=tokens[1:])
