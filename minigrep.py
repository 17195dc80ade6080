#!/usr/bin/env python3
from __future__ import annotations

import contextlib
import enum
import logging
import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, TextIO


HELP = """\
Usage: minigrep [PATTERN] [FILE_PATH]
Search for a pattern in the given file

Flags:
    -h, --help          display this help message
    -i, --ignore_case   ignore case distinctions in patterns
"""

HELP_FLAGS = ("-h", "--help")
IGNORE_CASE_FLAGS = ("-i", "--ignore_case")

logger = logging.getLogger("minigrep")


# ----------------------------
# Errors
# ----------------------------
class MinigrepError(Exception):
    """Base class for every error that ends a minigrep run."""


class UsageError(MinigrepError):
    def __init__(self, message: str = "minigrep [PATTERN] [FILE_PATH]") -> None:
        super().__init__(message)


class TooManyParametersError(MinigrepError):
    def __init__(self, message: str = "Too many parameters") -> None:
        super().__init__(message)


class FileReadError(MinigrepError):
    def __init__(self, path: str, cause: Exception) -> None:
        super().__init__(f"Cannot read '{path}': {cause}")
        self.path = path
        self.cause = cause


# ----------------------------
# Config + stats
# ----------------------------
@dataclass(frozen=True)
class Config:
    query: str = ""
    file_path: str = ""
    ignore_case: bool = False
    help: bool = False


@dataclass
class Stats:
    lines_seen: int = 0
    lines_reported: int = 0
    elapsed_s: float = 0.0


# ----------------------------
# Logging
# ----------------------------
def setup_logging() -> None:
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    # Console handler for user-facing errors (stdout is reserved for matches)
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(logging.WARNING)
    ch.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(ch)


# ----------------------------
# Argument parsing
# ----------------------------
class Slot(enum.Enum):
    """Next positional slot a non-flag argument fills."""

    DISCARD = enum.auto()
    QUERY = enum.auto()
    FILE_PATH = enum.auto()
    FULL = enum.auto()


def parse_config(args: Sequence[str]) -> Config:
    """
    Build a Config from the raw argument vector (program name included).

    The program name is not special-cased: it is simply the first positional
    token, and the first positional token is always discarded. Flags may be
    interleaved anywhere; a help flag wins over everything parsed before it.
    """
    if len(args) == 2 and args[1] in HELP_FLAGS:
        return Config(help=True)
    if len(args) < 3:
        raise UsageError()

    query = ""
    file_path = ""
    ignore_case = False

    slot = Slot.DISCARD
    for arg in args:
        if arg in HELP_FLAGS:
            return Config(help=True)
        if arg in IGNORE_CASE_FLAGS:
            ignore_case = True
            continue

        if slot is Slot.DISCARD:
            slot = Slot.QUERY
        elif slot is Slot.QUERY:
            query = arg
            slot = Slot.FILE_PATH
        elif slot is Slot.FILE_PATH:
            file_path = arg
            slot = Slot.FULL
        else:
            raise TooManyParametersError()

    return Config(query=query, file_path=file_path, ignore_case=ignore_case)


# ----------------------------
# Search core
# ----------------------------
def lines(content: str) -> list[str]:
    # Split on "\n" only. A "\r" is dropped only when a "\n" follows it, and
    # a final terminator does not produce an empty last line.
    parts = content.split("\n")
    tail = parts.pop()
    result = [p[:-1] if p.endswith("\r") else p for p in parts]
    if tail:
        result.append(tail)
    return result


def search(query: str, content: str) -> list[str]:
    return [line for line in lines(content) if query in line]


def search_case_insensitive(query: str, content: str) -> list[str]:
    query = query.lower()
    return [line for line in lines(content) if query in line.lower()]


# ----------------------------
# Run
# ----------------------------
def read_content(file_path: str) -> str:
    try:
        with Path(file_path).open("r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeError) as ex:
        raise FileReadError(file_path, ex) from ex


def run(config: Config, out: TextIO | None = None, stats: Stats | None = None) -> None:
    out = sys.stdout if out is None else out
    if stats is None:
        stats = Stats()

    if config.help:
        print(HELP, file=out)
        return

    content = read_content(config.file_path)
    logger.debug("Read %d characters from %s", len(content), config.file_path)

    if config.ignore_case:
        result = search_case_insensitive(config.query, content)
    else:
        result = search(config.query, content)

    stats.lines_seen += content.count("\n") + (1 if content and not content.endswith("\n") else 0)
    for line in result:
        print(line, file=out)
        stats.lines_reported += 1


# ----------------------------
# CLI
# ----------------------------
def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv if argv is None else argv)
    setup_logging()

    logger.debug("Args: %s", " ".join(args))

    stats = Stats()
    t0 = time.perf_counter()

    try:
        config = parse_config(args)
        logger.debug("Options: query=%r file_path=%r ignore_case=%s help=%s",
                     config.query, config.file_path, config.ignore_case, config.help)
        run(config, stats=stats)
        return 0

    except MinigrepError as ex:
        logger.error("%s", ex)
        return 2

    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C).")
        return 130

    except BrokenPipeError:
        # stdout reader went away (e.g. piped into head); silence the exit flush
        logger.debug("Output closed early.")
        with contextlib.suppress(OSError, ValueError):
            os.dup2(os.open(os.devnull, os.O_WRONLY), sys.stdout.fileno())
        return 141

    finally:
        stats.elapsed_s = time.perf_counter() - t0
        logger.debug(
            "Performance: lines_seen=%d lines_reported=%d elapsed=%.6fs",
            stats.lines_seen,
            stats.lines_reported,
            stats.elapsed_s,
        )


if __name__ == "__main__":
    raise SystemExit(main())
