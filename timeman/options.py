"""
Engine options consulted by the time manager.

The host engine owns one EngineOptions instance, updates it from UCI
"setoption" commands, and hands it to the TimeManager, which reads it by
value on every init() call. Field aliases are the UCI option names, so the
model can also be built straight from a dict of UCI names:

    EngineOptions.model_validate({"Move Overhead": 100, "Ponder": True})

Numeric options are clamped into range instead of rejected; a GUI that sends
"Move Overhead 99999" gets the largest overhead we support, not an error.
"""

import logging
import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from timeman.complexity import TimeSignal
from timeman.constants import (
    DEFAULT_MOVE_OVERHEAD,
    DEFAULT_NODESTIME,
    MAX_MOVE_OVERHEAD,
    MAX_NODESTIME,
)

_log = logging.getLogger(__name__)

ENV_PREFIX = "TIMEMAN_"


class EngineOptions(BaseModel):
    """
    Time-management options, keyed by their UCI names.

    Fields:
        move_overhead: "Move Overhead", ms taken off the clock before any
                       budget is computed, to absorb GUI/network latency.
        nodestime:     "nodestime", nodes per millisecond. Non-zero switches
                       the budgets from milliseconds to search nodes.
        ponder:        "Ponder", adds 25% to the optimum budget.
        time_signal:   "Time Signal", which position signal feeds the curves.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    move_overhead: int = Field(default=DEFAULT_MOVE_OVERHEAD, alias="Move Overhead")
    nodestime: int = Field(default=DEFAULT_NODESTIME, alias="nodestime")
    ponder: bool = Field(default=False, alias="Ponder")
    time_signal: TimeSignal = Field(default=TimeSignal.MATERIAL, alias="Time Signal")

    @field_validator("move_overhead")
    @classmethod
    def clamp_move_overhead(cls, v: int) -> int:
        """Clamp Move Overhead to [0, MAX_MOVE_OVERHEAD]."""
        return max(0, min(v, MAX_MOVE_OVERHEAD))

    @field_validator("nodestime")
    @classmethod
    def clamp_nodestime(cls, v: int) -> int:
        """Clamp nodestime to [0, MAX_NODESTIME]."""
        return max(0, min(v, MAX_NODESTIME))

    @field_validator("time_signal", mode="before")
    @classmethod
    def normalize_time_signal(cls, v: Any) -> Any:
        """Accept combo values in any case ("Material", "EVAL", ...)."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def set_option(self, name: str, value: str) -> bool:
        """
        Apply a UCI "setoption name <name> value <value>" pair.

        Option names are matched case-insensitively against the UCI names.
        Unknown names and unparsable values are logged and ignored so that a
        misbehaving GUI cannot take the engine down.

        Args:
            name:  UCI option name, e.g. "Move Overhead".
            value: Raw value string from the command line.

        Returns:
            True if the option was recognised and applied.
        """
        field_name = _UCI_NAMES.get(name.strip().lower())
        if field_name is None:
            _log.warning("options: unknown option %r", name)
            return False

        try:
            setattr(self, field_name, value.strip())
        except ValidationError as exc:
            _log.warning("options: invalid value %r for %s: %s", value, name, exc.errors()[0]["msg"])
            return False

        _log.debug("options: %s = %r", name, getattr(self, field_name))
        return True

    def uci_declarations(self) -> list[str]:
        """UCI "option" lines describing these options, current values as defaults."""
        signals = " ".join(f"var {s.value}" for s in TimeSignal)
        return [
            f"option name Move Overhead type spin default {self.move_overhead} min 0 max {MAX_MOVE_OVERHEAD}",
            f"option name nodestime type spin default {self.nodestime} min 0 max {MAX_NODESTIME}",
            f"option name Ponder type check default {'true' if self.ponder else 'false'}",
            f"option name Time Signal type combo default {self.time_signal.value} {signals}",
        ]


_UCI_NAMES: dict[str, str] = {
    info.alias.lower(): name
    for name, info in EngineOptions.model_fields.items()
}


def options_from_env(prefix: str = ENV_PREFIX, environ: dict[str, str] | None = None) -> EngineOptions:
    """
    Build EngineOptions from environment variables.

    Each field can be overridden by <prefix><FIELD_NAME>, e.g.
    TIMEMAN_MOVE_OVERHEAD=100 or TIMEMAN_PONDER=true. Every override is
    logged so that a tuning run records what it actually played with.

    Raises:
        pydantic.ValidationError: An override could not be parsed. Startup
        configuration errors are not swallowed.
    """
    environ = os.environ if environ is None else environ
    overrides: dict[str, str] = {}
    for name in EngineOptions.model_fields:
        key = prefix + name.upper()
        if key in environ:
            overrides[name] = environ[key]

    options = EngineOptions.model_validate(overrides)
    for name in overrides:
        _log.info("options: %s%s -> %r", prefix, name.upper(), getattr(options, name))
    return options
