"""Minimal structured logging helper.

Wraps print() to emit key=value pairs with a timestamp and level, or one JSON
object per line when CAVERN_LOG_JSON is enabled. Generation code stays silent;
the pipeline, the world orchestrator and the CLI report through this module.

Usage:
    from cavern.logging_utils import log
    log.info(event="startup", mode="generate")

    with log.timed("level_generated", depth=2) as fields:
        ...
        fields["enemies"] = 16

Non-numeric values are str()'d with spaces replaced. Reserved keys: level, ts.
Level and JSON mode are read per call so tests can flip them with monkeypatch.
"""

from __future__ import annotations

import json
import os
import sys
import time
from contextlib import contextmanager

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "TRUE", "yes", "on")


def _current_level() -> int:
    return LEVELS.get(os.getenv("CAVERN_LOG_LEVEL", "info").lower(), 20)


def _json_mode() -> bool:
    return os.getenv("CAVERN_LOG_JSON", "0") in _TRUTHY


def _kv(key: str, value) -> str:
    if isinstance(value, (int, float)):
        return f"{key}={value}"
    return f"{key}=" + str(value).replace(" ", "_")


def _format(level: str, **fields) -> str:
    present = {k: v for k, v in fields.items() if v is not None}
    stamp = int(time.time())
    if _json_mode():
        return json.dumps({**present, "level": level, "ts": stamp}, separators=(",", ":"), default=str)
    return " ".join([f"level={level}", f"ts={stamp}"] + [_kv(k, v) for k, v in present.items()])


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "cavern"

    def enabled_for(self, lvl: str) -> bool:
        return LEVELS[lvl] >= _current_level()

    def _emit(self, lvl: str, fields: dict):
        if not self.enabled_for(lvl):
            return
        fields.setdefault("logger", self.name)
        stream = sys.stderr if lvl == "error" else sys.stdout
        print(_format(lvl, **fields), file=stream)

    def debug(self, **fields):
        self._emit("debug", fields)

    def info(self, **fields):
        self._emit("info", fields)

    def warn(self, **fields):
        self._emit("warn", fields)

    def error(self, **fields):
        self._emit("error", fields)

    @contextmanager
    def timed(self, event: str, lvl: str = "info", **fields):
        """Emit one ``event`` record on exit with ``elapsed_ms`` added.

        The yielded dict can be filled in inside the block.
        """
        start = time.perf_counter()
        yield fields
        fields["elapsed_ms"] = int((time.perf_counter() - start) * 1000)
        self._emit(lvl, {"event": event, **fields})


_LOGGER_CACHE: dict = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("cavern")
