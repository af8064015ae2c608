"""Command parsing and dispatch, plus small string helpers used by it."""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from .console import in_notice_style, in_warning_style, print_line


def _log_prefix(class_name: str, object_name: str) -> str:
    return f"[{datetime.now():%H:%M:%S}]{class_name}({object_name}):"


class CommandHandler(ABC):
    """Handles one named command; the host fills in the arguments before calling."""

    def __init__(self, command_name: str = "") -> None:
        self.command_name = command_name
        self.named_args: dict[str, str] = {}
        self.unnamed_args: list[str] = []
        self.command_output = ""

    @abstractmethod
    def handle_command(self) -> bool:
        """Run the command; return False when it fails."""

    def debug_lines(self) -> list[str]:
        return [
            f"CommandName: {self.command_name}",
            f"NamedArgs: {self.named_args}",
            f"UnnamedArgs: {self.unnamed_args}",
        ]


class CommandHost:
    """Dispatches command lines, including '|' pipelines, to registered handlers."""

    def __init__(self, listen_stdio: bool = False) -> None:
        self.name = "VICommandHost"
        self.command_output = ""
        self._handlers: dict[str, CommandHandler] = {}
        self._lock = threading.RLock()
        self._listener: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None
        if listen_stdio:
            self.enable_stdio_listener()

    def _prefix(self) -> str:
        return _log_prefix(type(self).__name__, self.name)

    @property
    def handlers(self) -> dict[str, CommandHandler]:
        return dict(self._handlers)

    def add_command_handler(self, handler: CommandHandler) -> bool:
        """Register a handler; False if its command name is already taken."""
        name = handler.command_name
        if name in self._handlers:
            print_line(in_warning_style(
                self._prefix() + f'There is already an instance that can handle the command "{name}". '
                "You cannot add another instance that can handle this command"
            ))
            return False
        self._handlers[name] = handler
        print_line(in_notice_style(self._prefix() + f'The command "{name}" is added.'))
        return True

    def remove_command_handler(self, handler: CommandHandler) -> None:
        name = handler.command_name
        if name in self._handlers:
            del self._handlers[name]
        else:
            print_line(in_warning_style(
                self._prefix() + f'There is no instance that can handle the command "{name}".'
            ))

    def handle_command(self, command: str) -> bool:
        """Run a command line; each pipeline stage receives the previous output."""
        if command == "":
            return False
        with self._lock:
            self.command_output = ""
            tokens = blank_splitter(command)
            if not tokens:
                return False
            stages: list[list[str]] = [[]]
            for token in tokens:
                if token == "|":
                    stages.append([])
                else:
                    stages[-1].append(token)
            for args in stages:
                if not args:
                    print_line(in_warning_style(
                        self._prefix() + 'There is no instance that can handle the command "".'
                    ))
                    return False
                command_name = args[0]
                named_args: dict[str, str] = {}
                unnamed_args: list[str] = []
                index = 1
                while index < len(args):
                    arg = args[index]
                    if arg.startswith("-") or arg.startswith("\\"):
                        value = args[index + 1] if index + 1 < len(args) else ""
                        named_args[arg[1:]] = value
                        index += 2
                    else:
                        unnamed_args.append(arg)
                        index += 1
                if self.command_output != "":
                    unnamed_args.append(self.command_output)
                handler = self._handlers.get(command_name)
                if handler is None:
                    print_line(in_warning_style(
                        self._prefix()
                        + f'There is no instance that can handle the command "{command_name}".'
                    ))
                    return False
                handler.unnamed_args = unnamed_args
                handler.named_args = named_args
                if not handler.handle_command():
                    print_line(in_warning_style(
                        self._prefix() + f'The command "{command_name}" failed to execute.'
                    ))
                    return False
                self.command_output = handler.command_output
            return True

    def _listen(self, stop_event: threading.Event) -> None:
        print_line(in_notice_style(self._prefix() + "The standard input/output listener is started."))
        while not stop_event.is_set():
            line = sys.stdin.readline()
            if line == "":
                break
            line = line.rstrip("\r\n")
            if line == "":
                continue
            if stop_event.is_set():
                break
            self.handle_command(line)
        print_line(in_notice_style(self._prefix() + "The standard input/output listener is stopped."))

    def enable_stdio_listener(self) -> None:
        """Start a background thread that runs each line read from standard input."""
        if self._listener is not None:
            return
        self._stop_event = threading.Event()
        self._listener = threading.Thread(
            target=self._listen, args=(self._stop_event,), name="VIStdIOCommandHandler", daemon=True
        )
        self._listener.start()

    def disable_stdio_listener(self) -> None:
        """Ask the listener to stop after the line it is waiting for."""
        if self._listener is None:
            return
        if self._stop_event is not None:
            self._stop_event.set()
        self._listener = None
        self._stop_event = None


def blank_splitter(text: str) -> list[str]:
    """Split on blanks, keeping double-quoted runs together and '|' as its own token."""
    result: list[str] = []
    current = ""
    in_string = False
    previous = ""
    for ch in text:
        if ch in (" ", "\t") and not in_string:
            if current:
                result.append(current)
                current = ""
        elif ch == "|" and not in_string:
            if current:
                result.append(current)
                current = ""
            result.append("|")
        elif ch == '"' and previous != "\\":
            if in_string:
                if current:
                    result.append(current)
                    current = ""
                in_string = False
            else:
                in_string = True
        else:
            current += ch
        previous = ch
    if current:
        result.append(current)
    return result


def scientific_splitter(text: str, separator: str) -> list[str]:
    """Split on separator unless it is escaped by an odd run of backslashes."""
    result = text.split(separator)
    i = 0
    while i < len(result) - 1:
        part = result[i]
        count = 0
        for j in range(len(part) - 1, 0, -1):
            if part[j] == "\\":
                count += 1
            else:
                break
        if count % 2:
            part = part[:-1].replace("\\\\", "\\")
            result[i] = part + separator + result[i + 1]
            del result[i + 1]
        else:
            result[i] = part.replace("\\\\", "\\")
            i += 1
    return result


def get_indent_level(text: str, level_size: int = 4) -> int:
    """Leading indentation in levels; a tab counts as a whole level."""
    width = 0
    for ch in text:
        if ch == " ":
            width += 1
        elif ch == "\t":
            width += level_size
        else:
            break
    return width // level_size


def get_indent_count(text: str) -> int:
    """Number of leading spaces and tabs."""
    return len(text) - len(text.lstrip(" \t"))


def remove_indent(text: str) -> str:
    return text[get_indent_count(text):]


def standardize_indent(text: str, level_size: int = 4) -> str:
    """Replace leading indentation by spaces, rounded down to whole levels."""
    spaces = get_indent_level(text, level_size) * level_size
    return " " * spaces + remove_indent(text)