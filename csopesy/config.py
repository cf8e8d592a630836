"""Emulator configuration read from a ``config.txt`` style file."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class ConfigError(ValueError):
    """Raised when a configuration cannot be read or a value is malformed."""


@dataclass
class Config:
    """Settings that drive the scheduler and process generator."""

    num_cpu: int = 128
    scheduler: str = ""
    quantum_cycles: int = 1
    process_frequency: int = 1
    min_ins: int = 1
    max_ins: int = 100
    delay_per_exec: int = 0


_INT_KEYS = {
    "num-cpu": "num_cpu",
    "quantum-cycles": "quantum_cycles",
    "min-ins": "min_ins",
    "max-ins": "max_ins",
    "delay-per-exec": "delay_per_exec",
}


def _to_int(key: str, value: str) -> int:
    """Read the leading integer of ``value``, ignoring trailing text."""
    match = _INT_PREFIX.match(value)
    if match is None:
        raise ConfigError(f"invalid integer for {key!r}: {value!r}")
    number = int(match.group(1))
    if not _INT_MIN <= number <= _INT_MAX:
        raise ConfigError(f"integer out of range for {key!r}: {value!r}")
    return number


def parse_config(text: str) -> Config:
    """Build a :class:`Config` from ``key value`` lines.

    Lines without a value are skipped, as are unknown keys. A value
    wrapped in double quotes has the quotes removed.
    """
    config = Config()
    for line in text.splitlines():
        key, sep, value = line.partition(" ")
        if not sep or not value:
            continue
        if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
            value = value[1:-1]
        if key == "scheduler":
            config.scheduler = value
        elif key in _INT_KEYS:
            setattr(config, _INT_KEYS[key], _to_int(key, value))
    return config


def load_config(path: str | Path) -> Config:
    """Read and parse the configuration file at ``path``."""
    try:
        text = Path(path).read_text()
    except OSError as exc:
        raise ConfigError(f"cannot open configuration file {str(path)!r}") from exc
    return parse_config(text)