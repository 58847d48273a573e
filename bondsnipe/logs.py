"""Timestamped, colour-tagged console logging mirrored to an hourly log file."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import IO

LOG_DIR = "logs"

_RESET = "\x1b[0m"
_BOLD = "1"
_DIM = "2"
_RED = "31"
_GREEN = "32"
_YELLOW = "33"
_BLUE = "34"
_MAGENTA = "35"
_CYAN = "36"
_WHITE = "37"
_BRIGHT_BLACK = "90"
_BRIGHT_GREEN = "92"
_BRIGHT_PURPLE = "95"


def _style(text: str, *codes: str) -> str:
    if not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}{_RESET}"


@dataclass(frozen=True)
class _TagStyle:
    label: str
    label_codes: tuple[str, ...]
    message_codes: tuple[str, ...] = ()


_STYLES: dict[str, _TagStyle] = {
    "LOG": _TagStyle("LOG", (_DIM, _WHITE)),
    "INFO": _TagStyle("INFO", (_BOLD, _CYAN)),
    "OK": _TagStyle("  OK", (_BOLD, _GREEN), (_GREEN,)),
    "WARN": _TagStyle("WARN", (_BOLD, _YELLOW), (_YELLOW,)),
    "ERR": _TagStyle(" ERR", (_BOLD, _RED), (_RED,)),
    "UPD": _TagStyle(" UPD", (_BOLD, _BLUE)),
    "RES": _TagStyle(" RES", (_BOLD, _CYAN), (_CYAN,)),
    "ALRT": _TagStyle("ALRT", (_BOLD, _MAGENTA), (_MAGENTA,)),
    "DEV": _TagStyle(" DEV", (_BOLD, _BRIGHT_BLACK), (_BRIGHT_BLACK,)),
    "DTRD": _TagStyle("DTRD", (_BOLD, _BRIGHT_PURPLE)),
    "PTRD": _TagStyle("PTRD", (_BOLD, _BRIGHT_GREEN), (_BRIGHT_GREEN,)),
}


class LogWriter:
    """Appends lines to ``<directory>/log_<YYYY-mm-dd_HH>``, flushing each one."""

    def __init__(self, directory: str | Path, now: datetime | None = None) -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        stamp = (now or datetime.now()).strftime("%Y-%m-%d_%H")
        self.path = self.directory / f"log_{stamp}"
        self._lock = threading.Lock()
        self._file: IO[str] | None = self.path.open("a", encoding="utf-8")

    def write(self, message: str) -> None:
        """Append one line and flush it to disk."""
        with self._lock:
            if self._file is None:
                raise ValueError("log writer is closed")
            self._file.write(f"{message}\n")
            self._file.flush()

    def close(self) -> None:
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def __enter__(self) -> "LogWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


_writers: dict[Path, LogWriter] = {}
_writers_lock = threading.Lock()


def _writer_for(directory: Path) -> LogWriter:
    with _writers_lock:
        writer = _writers.get(directory)
        if writer is None:
            writer = LogWriter(directory)
            _writers[directory] = writer
        return writer


def log_to_file(message: str) -> None:
    """Append a line to the shared log file under ``LOG_DIR``."""
    _writer_for(Path(LOG_DIR).resolve()).write(message)


def _timestamp(now: datetime) -> tuple[str, str]:
    return now.strftime("%H:%M:%S"), f"{now.microsecond // 1000:03d}"


def format_line(tag: str, message: str, now: datetime) -> str:
    """Plain log-file form of a message: ``HH:MM:SS.mmm [TAG] message``."""
    ts, ms = _timestamp(now)
    return f"{ts}.{ms} [{tag}] {message}"


def emit(tag: str, message: str) -> str:
    """Print a coloured line for ``tag``, record it in the log file, return the file line."""
    try:
        style = _STYLES[tag]
    except KeyError:
        raise ValueError(f"unknown log tag: {tag!r}") from None
    now = datetime.now()
    ts, ms = _timestamp(now)
    terminal = (
        f"{_style(ts, _DIM)}.{_style(ms, _DIM)} "
        f"{_style(style.label, *style.label_codes)} "
        f"{_style(message, *style.message_codes)}"
    )
    file_line = format_line(tag, message, now)
    print(terminal)
    log_to_file(file_line)
    return file_line


def log(message: str) -> str:
    return emit("LOG", message)


def info(message: str) -> str:
    return emit("INFO", message)


def success(message: str) -> str:
    return emit("OK", message)


def warning(message: str) -> str:
    return emit("WARN", message)


def error(message: str) -> str:
    return emit("ERR", message)


def update(message: str) -> str:
    return emit("UPD", message)


def result(message: str) -> str:
    return emit("RES", message)


def alert(message: str) -> str:
    return emit("ALRT", message)


def dev_log(message: str, enabled: bool) -> str | None:
    """Emit a developer message only when ``enabled`` is true."""
    if not enabled:
        return None
    return emit("DEV", message)


def dev_trade(message: str) -> str:
    return emit("DTRD", message)


def pro_trade(message: str) -> str:
    return emit("PTRD", message)


def solscan(signature: str) -> str:
    """Explorer link for a transaction signature."""
    return f"https://solscan.io/tx/{signature}"