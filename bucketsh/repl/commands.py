"""Shell commands and the dispatcher that runs them.

Every command is a plain function taking the current level and the full
argument list (command name first) and returning the level that should be
current afterwards. Only ``cd`` ever returns a different level; commands
that take a path resolve it for their own use and leave the session where
it was.
"""

from functools import partial
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional
import logging

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bucketsh.vfs import Level, resolve, split_key_path

logger = logging.getLogger(__name__)
console = Console()

CommandFunc = Callable[[Level, List[str]], Level]


class ExitSession(Exception):
    """Raised by the exit command to end the shell loop."""
    pass


def _error(message: str) -> None:
    console.print(f"[red]{message}[/red]")


def ls(level: Level, args: List[str]) -> Level:
    """List keys for buckets and values at this level.

    Usage: ls [path]

    Buckets are shown with a trailing '/'.
    """
    target = level
    if len(args) > 1:
        target = resolve(level, args[1])

    if target is None:
        _error(f"Unable to list path {escape(args[1])}")
        return level

    for entry in target.list():
        console.out(entry, highlight=False)
    return level


def cd(level: Level, args: List[str]) -> Level:
    """Change bucket level.

    Usage: cd [path]

    '..' goes back. With no path, goes to the root.
    """
    if len(args) < 2:
        return level.root()

    path = args[1]
    target = resolve(level, path)
    if target is None:
        _error(f"Unable to change directory to {escape(path)}")
        return level
    return target


def pwd(level: Level, args: List[str]) -> Level:
    """Print the path of the current bucket.

    Usage: pwd
    """
    console.out(level.path, highlight=False)
    return level


def get(level: Level, args: List[str], raw: bool = False) -> Level:
    """Dump the value stored at a key.

    Usage: get <path>

    The path may lead through buckets: get people/alice
    """
    if len(args) < 2:
        _error("Missing key in get command")
        return level

    target, key = split_key_path(level, args[1])
    data = target.get(key) if target is not None else None

    if data is None:
        _error(f"No data at key {escape(key)}")
    elif raw:
        console.out(format_raw(data), highlight=False)
    else:
        console.out(data.decode("utf-8", errors="replace"), highlight=False)
    return level


def format_raw(data: bytes) -> str:
    """Format bytes as a byte array, e.g. b"hi" -> "[104 105]"."""
    return "[" + " ".join(str(b) for b in data) + "]"


def put(level: Level, args: List[str]) -> Level:
    """Add a value at a key.

    Usage: put <path> <value>

    Quote values that contain spaces: put motto "carpe diem"
    """
    if len(args) < 3:
        _error("Put command must specify key and value")
        return level

    path, value = args[1], args[2]
    target, key = split_key_path(level, path)
    if target is None:
        _error(f"Unable to put {escape(value)} at path {escape(path)}")
    else:
        target.put(key, value)
    return level


def mkdir(level: Level, args: List[str]) -> Level:
    """Create a new bucket.

    Usage: mkdir <path>
    """
    if len(args) < 2:
        _error("Mkdir command must specify key")
        return level

    path = args[1]
    target, key = split_key_path(level, path)
    if target is None:
        _error(f"Unable to create bucket at path {escape(path)}")
    else:
        target.mkdir(key)
    return level


def exit_(level: Level, args: List[str]) -> Level:
    """Exit the shell.

    Usage: exit
    """
    raise ExitSession()


def help_(level: Level, args: List[str], commands: Mapping[str, CommandFunc]) -> Level:
    """Show help information.

    Usage: help [command]
    """
    if len(args) > 1:
        name = args[1]
        func = commands.get(name)
        if func is None:
            _error(f"Unknown command: {escape(name)}")
        else:
            console.print(f"[bold]{escape(name)}[/bold]")
            console.print(_describe(func) or "No documentation available.", markup=False)
        return level

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Command", style="cyan")
    table.add_column("Description", style="white")

    for usage, description in HELP_ROWS:
        table.add_row(escape(usage), description)

    console.print(table)
    return level


def _describe(func: CommandFunc) -> Optional[str]:
    # partial objects carry their own docstring; use the wrapped function's
    func = getattr(func, "func", func)
    return func.__doc__


HELP_ROWS = [
    ("ls [path]", "List keys for buckets and values at this level. '/' denotes buckets"),
    ("cd [path]", "Change bucket level. '..' goes back"),
    ("pwd", "Print the current bucket path"),
    ("get <path>", "Dump bucket entry"),
    ("put <path> <value>", "Add bucket entry"),
    ("mkdir <path>", "Create a new bucket"),
    ("help [command]", "Show this help, or help for one command"),
    ("exit", "Exit program"),
]


def build_commands(raw: bool = False) -> Mapping[str, CommandFunc]:
    """Build the read-only command table.

    Args:
        raw: Dump values from ``get`` as byte arrays instead of strings

    Returns:
        Mapping of command name to command function
    """
    table = {
        "ls": ls,
        "cd": cd,
        "pwd": pwd,
        "get": partial(get, raw=raw),
        "put": put,
        "mkdir": mkdir,
        "exit": exit_,
        "quit": exit_,
    }
    commands = MappingProxyType(table)
    table["help"] = partial(help_, commands=commands)
    return commands


class Dispatcher:
    """Runs commands against the session's current level.

    The current level is the only state carried between commands; each
    command's result replaces it.
    """

    def __init__(self, commands: Mapping[str, CommandFunc], level: Level):
        self.commands = commands
        self.level = level

    def dispatch(self, args: List[str]) -> Level:
        """Run one command.

        Args:
            args: Argument list, command name first

        Returns:
            The new current level

        Raises:
            ExitSession: If the command ends the session
        """
        if not args:
            return self.level

        func = self.commands.get(args[0])
        if func is None:
            _error(f"Unrecognized command: {escape(args[0])}")
            return self.level

        logger.debug(f"Dispatching {args[0]} at {self.level.path}")
        self.level = func(self.level, args)
        return self.level
