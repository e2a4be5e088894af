"""Interactive REPL shell for bucket navigation."""

import sys
from typing import Callable, Optional
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory, InMemoryHistory
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.markup import escape

from bucketsh.config import BshConfig, ShellConfig
from bucketsh.store import BucketStore
from bucketsh.vfs import RootLevel, complete_path
from bucketsh.repl.commands import Dispatcher, ExitSession, build_commands
from bucketsh.repl.tokenizer import split_args, split_partial

logger = logging.getLogger(__name__)


class PathCompleter(Completer):
    """Tab completion for bucket paths."""

    def __init__(self, shell: "BucketShell"):
        self.shell = shell

    def get_completions(self, document, complete_event):
        """Get path completion candidates."""
        args, partial, quoted = split_partial(document.text_before_cursor)

        # Only complete arguments, not the command name
        if partial is None:
            if not args:
                return
            partial = ""
        elif not args:
            return

        for candidate in complete_path(self.shell.level, partial):
            if not quoted and any(ch.isspace() for ch in candidate):
                candidate = '"' + candidate
            yield Completion(candidate, start_position=-len(partial))


class BucketShell:
    """Interactive shell for navigating a bucket store.

    Provides a Linux-like shell interface with commands:
    - cd, pwd, ls: Navigate the bucket tree
    - get, put: Read and write values
    - mkdir: Create buckets
    - help: Show available commands
    - exit, quit: Exit the shell
    """

    def __init__(
        self,
        store: BucketStore,
        raw: bool = False,
        config: Optional[BshConfig] = None,
        input_func: Optional[Callable[[str], str]] = None,
    ):
        """Initialize the REPL shell.

        Args:
            store: Open store; its transaction spans the whole session
            raw: Dump values as byte arrays instead of strings
            config: Shell configuration (defaults if None)
            input_func: Reads one line given a prompt; raises EOFError at
                end of input (default: prompt_toolkit on a terminal)
        """
        self.store = store
        self.config = config or BshConfig()
        self.console = Console()
        self.dispatcher = Dispatcher(build_commands(raw=raw), RootLevel(store))
        self._input = input_func or self._default_input()

    @property
    def level(self):
        """The current level."""
        return self.dispatcher.level

    def _default_input(self) -> Callable[[str], str]:
        if not sys.stdin.isatty():
            # Piped commands, one per line
            return input

        history_file = self.config.shell.history_file
        history = FileHistory(history_file) if history_file else InMemoryHistory()
        session = PromptSession(
            history=history,
            completer=PathCompleter(self),
            style=Style.from_dict(
                {
                    "prompt": "ansicyan bold",
                }
            ),
        )
        return session.prompt

    def get_prompt(self) -> str:
        """Generate prompt showing current path.

        Returns:
            Prompt string like "bsh:/people $ "
        """
        try:
            return self.config.shell.prompt.format(path=self.level.path)
        except (KeyError, IndexError, AttributeError, ValueError) as e:
            logger.warning(f"Invalid prompt template {self.config.shell.prompt!r}: {e!r}. Using default prompt")
            self.config.shell.prompt = ShellConfig().prompt
            return self.config.shell.prompt.format(path=self.level.path)

    def run(self):
        """Run the shell main loop until exit or end of input."""
        self.console.print("Type 'help' for list of commands")

        while True:
            try:
                line = self._input(self.get_prompt()).strip()
                self.execute(line)
            except ExitSession:
                break
            except KeyboardInterrupt:
                self.console.print("\nUse 'exit' to exit the shell.")
                continue
            except EOFError:
                break
            except Exception as e:
                logger.debug("Command failed", exc_info=True)
                self.console.print(f"[red]Error:[/red] {escape(str(e))}", style="bold")

        self.console.print()

    def execute(self, line: str):
        """Parse and execute a command line.

        Args:
            line: Command line to execute
        """
        args = split_args(line)
        if args:
            self.dispatcher.dispatch(args)
