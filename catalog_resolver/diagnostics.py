"""
Diagnostics for the compiler run.

Diagnostics are ordinary ``logging`` records. A record may carry a
``source_info`` attribute (passed through ``extra``) naming the location in an
author-written source file the message is about.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

LOGGER_NAME = "catalog_resolver"


@dataclass(frozen=True)
class SourceInfo:
    """Location of a source artifact."""

    file: str | None = None
    start_line: int | None = None
    end_line: int | None = None

    def __str__(self) -> str:
        if self.file is None:
            return "<unknown>"
        if self.start_line is None:
            return self.file
        if self.end_line is None or self.end_line == self.start_line:
            return f"{self.file}:{self.start_line}"
        return f"{self.file}:{self.start_line}-{self.end_line}"


def source_info_of(record: logging.LogRecord) -> SourceInfo | None:
    return getattr(record, "source_info", None)


class DiagnosticFormatter(logging.Formatter):
    """Formats diagnostics as ``level message`` with the source location appended."""

    def __init__(self):
        super().__init__("%(levelname)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        source_info = source_info_of(record)
        if source_info is not None:
            text += f"\n  File: {source_info}"
        return text


class DiagnosticCounter(logging.Handler):
    """Counts the errors and warnings emitted during a run."""

    def __init__(self, level: int = logging.WARNING):
        super().__init__(level)
        self.errors = 0
        self.warnings = 0

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno >= logging.ERROR:
            self.errors += 1
        elif record.levelno >= logging.WARNING:
            self.warnings += 1

    def reset(self) -> None:
        self.errors = 0
        self.warnings = 0


def configure_logging(verbose: bool = False) -> DiagnosticCounter:
    """Attach a console handler and a counter to the package logger.

    Returns:
        The DiagnosticCounter tracking this run
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in list(logger.handlers):
        if isinstance(handler, DiagnosticCounter) or isinstance(handler.formatter, DiagnosticFormatter):
            logger.removeHandler(handler)

    console = logging.StreamHandler()
    console.setFormatter(DiagnosticFormatter())
    logger.addHandler(console)

    counter = DiagnosticCounter()
    logger.addHandler(counter)
    return counter
