"""Framework exception hierarchy."""

from __future__ import annotations

from enum import Enum, auto

from .console import in_error_style, in_warning_style, print_line


class ExceptionType(Enum):
    NONE = auto()
    DIVIDE_BY_ZERO = auto()
    DIMENSION_ERROR = auto()
    BEHAVIOR_ERROR = auto()
    INDEX_OUT_OF_RANGE = auto()
    NULL_POINTER_ERROR = auto()
    FRAMEWORK_NOT_INIT = auto()
    METHOD_IS_INVALID = auto()
    SINGLETON_ERROR = auto()
    OTHERS = auto()


class VisindigoError(Exception):
    """Base error carrying a reason and a help text."""

    exception_type = ExceptionType.OTHERS
    exception_name = "Others"

    def __init__(self, reason: str, help: str = "") -> None:
        super().__init__(reason)
        self.reason = reason
        self.help = help

    def report_lines(self) -> list[str]:
        """The coloured lines printed for an unhandled error."""
        return [
            in_error_style("Visindigo encountered an unhandled exception: " + self.exception_name),
            in_warning_style("Reason: " + self.reason),
            in_warning_style("Help: " + self.help),
        ]

    def print_report(self) -> None:
        for line in self.report_lines():
            print_line(line)


class DimensionError(VisindigoError):
    exception_type = ExceptionType.DIMENSION_ERROR
    exception_name = "Dimension Error"


class SingletonError(VisindigoError):
    exception_type = ExceptionType.SINGLETON_ERROR
    exception_name = "Singleton Error"


class NullPointerError(VisindigoError):
    exception_type = ExceptionType.NULL_POINTER_ERROR
    exception_name = "Null Pointer Error"