"""Stderr logging with a configurable level."""

import sys

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}

_threshold = LEVELS["info"]


def set_level(name: str) -> str:
    """Apply a level name; unknown names fall back to info. Returns the applied name."""
    global _threshold
    key = (name or "").strip().lower()
    if key == "warning":
        key = "warn"
    if key not in LEVELS:
        key = "info"
    _threshold = LEVELS[key]
    return key


def _emit(level: str, msg: str):
    if LEVELS[level] >= _threshold:
        print(f"[{level.upper()}] {msg}", file=sys.stderr)


def debug(msg: str):
    _emit("debug", msg)


def info(msg: str):
    _emit("info", msg)


def warn(msg: str):
    _emit("warn", msg)


def error(msg: str):
    _emit("error", msg)
