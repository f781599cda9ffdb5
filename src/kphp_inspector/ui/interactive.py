"""
Interactive console of the inspector.

Displays a '>' prompt and waits for a command: f {query}, src {query},
cl {query} and a few others. Executes it and prompts again until 'quit',
Ctrl+D or Ctrl+C. When a query matches many files, a selection menu is shown
and no other command can be entered until it is closed.
"""

from typing import Callable, Optional
import logging

from rich.console import Console
from rich.text import Text

from ..models.artifacts import ArtifactKind
from ..models.config import InspectorConfig
from ..models.search_query import SearchQuery
from ..tools.cpp_parser import ExtractionError, extract_class, extract_function
from ..tools.disambiguator import Disambiguator
from ..tools.locator import CandidateLocator
from .console import console as default_console, print_error, print_not_found
from .menu import choose_interactively
from .printer import print_class_info, print_function_info, print_function_source


logger = logging.getLogger(__name__)

PROMPT = "> "

QUIT_COMMANDS = {'exit', 'q', 'quit'}
HELP_COMMANDS = {'?', 'h', 'help', 'about', 'f'}
# Cyrillic 'а' is what 'f' types with a Russian keyboard layout
FUNCTION_INFO_PREFIXES = ('f ', 'а ')
FUNCTION_SRC_PREFIXES = ('src ',)
CLASS_INFO_PREFIXES = ('class ', 'cl ')


def _query_after_command(cmd: str) -> str:
    return cmd[cmd.index(' ') + 1:].strip()


class InspectorSession:
    """
    Executes inspector commands against one generated tree.

    Attributes:
        config: Inspector configuration
        locator: Finds candidate files for queries
        disambiguator: Picks one file when several match
        console: Where results are printed
    """

    def __init__(self, config: InspectorConfig,
                 locator: Optional[CandidateLocator] = None,
                 disambiguator: Optional[Disambiguator] = None,
                 console: Optional[Console] = None):
        self.config = config
        self.console = console or default_console
        self.locator = locator or CandidateLocator(config)
        self.disambiguator = disambiguator or Disambiguator(
            lambda labels: choose_interactively(labels, console=self.console)
        )

    def print_help(self) -> None:
        commands = [
            ("f {query}", "print info of function"),
            ("src {query}", "print cpp source code of function"),
            ("cl {query}", "print info about class instance"),
            ("q[uit]", "close interactive console"),
        ]
        for command, description in commands:
            line = Text(command.ljust(12), style="label")
            line.append(f"- {description}")
            self.console.print(line)
        self.console.print(Text(
            "Examples of {query}: reorderTags, messages_send, ClassName method, \\Full\\FQN::method() . "
            "If many functions found, menu is displayed."
        ))

    def show_function_info(self, q: str) -> None:
        self._show_function(q, print_function_info)

    def show_function_source(self, q: str) -> None:
        self._show_function(q, print_function_source)

    def _show_function(self, q: str, printer: Callable) -> None:
        candidates = self.locator.find_function_candidates(SearchQuery(raw=q))
        if not candidates:
            print_not_found(f"No function found for query '{q}'", self.console)
            return

        chosen = self.disambiguator.resolve(candidates, ArtifactKind.FUNCTION)
        if chosen is None:
            return
        try:
            artifact = extract_function(chosen, self.config.header_extension)
        except ExtractionError as e:
            logger.warning(f"Extraction failed: {e}")
            print_error(str(e))
            return
        printer(artifact, self.console)

    def show_class_info(self, q: str) -> None:
        candidates = self.locator.find_class_candidates(SearchQuery(raw=q))
        if not candidates:
            print_not_found(f"No class found for query '{q}' (maybe, it's not an instance class?)", self.console)
            return

        chosen = self.disambiguator.resolve(candidates, ArtifactKind.CLASS)
        if chosen is None:
            return
        try:
            artifact = extract_class(chosen)
        except ExtractionError as e:
            logger.warning(f"Extraction failed: {e}")
            print_error(str(e))
            return
        print_class_info(artifact, self.console)

    def execute(self, cmd: str) -> bool:
        """
        Execute one console command.

        Args:
            cmd: Line entered by the user

        Returns:
            False when the console should close
        """
        cmd = cmd.strip()
        logger.debug(f"Command: {cmd!r}")

        if cmd == '':
            pass
        elif cmd in QUIT_COMMANDS:
            return False
        elif cmd in HELP_COMMANDS:
            self.print_help()
        elif cmd.startswith(FUNCTION_INFO_PREFIXES):
            self.show_function_info(_query_after_command(cmd))
        elif cmd.startswith(FUNCTION_SRC_PREFIXES):
            self.show_function_source(_query_after_command(cmd))
        elif cmd.startswith(CLASS_INFO_PREFIXES):
            self.show_class_info(_query_after_command(cmd))
        else:
            self.console.print(Text(f"Unrecognized command: {cmd}"))

        return True

    def run(self) -> None:
        """Prompt for commands until the user quits."""
        while True:
            try:
                line = self.console.input(PROMPT)
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                return
            if not self.execute(line):
                return
