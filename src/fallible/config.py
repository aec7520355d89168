"""Configuration: which errors are fatal and how release failures are reported.

Resolve-once, freeze-then-flow: values from overrides and ``FALLIBLE_*``
environment variables pass through the pydantic ``Settings`` wall and come
out as an immutable ``FrozenConfig``. Library code only ever reads
``current_config()``; callers narrow it for a block with ``config_scope``.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
from functools import cache
import importlib
import logging
import os
from typing import TYPE_CHECKING, Any, Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fallible.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

log = logging.getLogger(__name__)

ENV_PREFIX: Final[str] = "FALLIBLE_"

# Conditions that signal the runtime itself is compromised. Anything that is
# not an ``Exception`` (KeyboardInterrupt, SystemExit, GeneratorExit) is fatal
# regardless of this tuple.
BUILTIN_FATAL_TYPES: Final[tuple[type[BaseException], ...]] = (
    MemoryError,
    RecursionError,
)

HINTS: Final[dict[str, str]] = {
    "fatal_errors": (
        "Use dotted import paths such as 'builtins.ZeroDivisionError' or "
        "'mypkg.errors.Fatal', comma-separated in FALLIBLE_FATAL_ERRORS."
    ),
    "release_log_level": (
        "Use a logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number."
    ),
}


def _import_exception_type(path: str) -> Any:
    module_name, _, attr = path.rpartition(".")
    try:
        module = importlib.import_module(module_name or "builtins")
    except ImportError as e:
        raise ValueError(f"cannot import module for {path!r}: {e}") from e
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ValueError(f"{module.__name__!r} has no attribute {attr!r}") from e


# --- Schema (Pydantic wall) ---


class Settings(BaseModel):
    """Pydantic schema for configuration validation and defaults."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    #: Extra exception types that must never be captured into ``Failed``.
    fatal_errors: tuple[type[BaseException], ...] = Field(default=())
    release_log_level: int = Field(default=logging.WARNING, ge=0)

    @field_validator("fatal_errors", mode="before")
    @classmethod
    def import_fatal_errors(cls, v: Any) -> Any:
        """Accept types, dotted paths, or one comma-separated string of paths."""
        if v is None:
            return ()
        if isinstance(v, str):
            v = [part.strip() for part in v.split(",") if part.strip()]
        elif isinstance(v, type):
            v = [v]
        return tuple(
            _import_exception_type(item) if isinstance(item, str) else item
            for item in v
        )

    @field_validator("release_log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Map level names (any case) to their numeric value."""
        if isinstance(v, str):
            name = v.strip().upper()
            if name.isdigit():
                return int(name)
            levels = logging.getLevelNamesMapping()
            if name not in levels:
                raise ValueError(f"unknown logging level {v!r}")
            return levels[name]
        return v


# --- Immutable runtime payload ---


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration consulted by every capture point."""

    fatal_types: tuple[type[BaseException], ...]
    release_log_level: int

    def is_fatal(self, exc: BaseException) -> bool:
        """Return True when *exc* must propagate instead of becoming ``Failed``."""
        return not isinstance(exc, Exception) or isinstance(exc, self.fatal_types)


# --- Loading & resolution ---


_DOTENV_LOADED: bool = False


def _try_load_dotenv() -> None:
    """Load a project ``.env`` once; a broken file never blocks resolution."""
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    try:
        load_dotenv()
    except Exception as e:
        log.debug("Ignoring unreadable .env file: %s", e)


def load_env(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Read ``FALLIBLE_*`` variables that name a ``Settings`` field.

    Unknown variables are skipped so that unrelated tooling sharing the
    prefix cannot break resolution.
    """
    source = os.environ if environ is None else environ
    config: dict[str, Any] = {}
    for key, value in source.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        if field_name in Settings.model_fields:
            config[field_name] = value
    return config


def resolve_config(
    overrides: Mapping[str, Any] | None = None, **kwargs: Any
) -> FrozenConfig:
    """Resolve configuration into a FrozenConfig.

    Precedence: keyword overrides > ``overrides`` mapping > environment > defaults.
    An explicit call also loads a project ``.env`` file (once per process)
    before reading the environment.

    Raises:
        ConfigurationError: If any value fails validation.
    """
    _try_load_dotenv()
    return _resolve({**load_env(), **(overrides or {}), **kwargs})


def _resolve(values: Mapping[str, Any]) -> FrozenConfig:
    try:
        settings = Settings.model_validate(values)
    except ValidationError as e:
        err = e.errors()[0]
        field = str(err["loc"][0]) if err.get("loc") else None
        msg = err.get("msg") or "invalid value"
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, ") :]
        raise ConfigurationError(
            f"Configuration validation failed for {field or 'settings'}: {msg}",
            hint=HINTS.get(field or ""),
        ) from e
    return FrozenConfig(
        fatal_types=BUILTIN_FATAL_TYPES + settings.fatal_errors,
        release_log_level=settings.release_log_level,
    )


@cache
def _default_config() -> FrozenConfig:
    """Process default, read from ``FALLIBLE_*`` variables only.

    Resolved lazily from inside capture and release paths, so it must not
    raise and must not touch ``os.environ``: invalid settings are logged
    once and replaced by the built-in defaults, and ``.env`` files are left
    to explicit ``resolve_config`` calls.
    """
    try:
        return _resolve(load_env())
    except ConfigurationError as e:
        log.warning(
            "Ignoring invalid %s* environment settings, using defaults: %s",
            ENV_PREFIX,
            e,
        )
        return _resolve({})


# --- Scoped configuration ---

_SCOPED: contextvars.ContextVar[FrozenConfig | None] = contextvars.ContextVar(
    "fallible_config", default=None
)


def current_config() -> FrozenConfig:
    """Return the scoped configuration, or the process default."""
    scoped = _SCOPED.get()
    return scoped if scoped is not None else _default_config()


@contextmanager
def config_scope(
    config: FrozenConfig | None = None, **overrides: Any
) -> Generator[FrozenConfig]:
    """Run a block under a specific configuration.

    Example:
        with config_scope(fatal_errors="mypkg.errors.Abort"):
            outcome = Outcome.of(step)  # mypkg.errors.Abort propagates
    """
    if config is not None and overrides:
        raise ConfigurationError(
            "Pass either a FrozenConfig or overrides, not both",
            hint="Build the config with resolve_config(**overrides) first.",
        )
    cfg = config if config is not None else resolve_config(overrides)
    token = _SCOPED.set(cfg)
    try:
        yield cfg
    finally:
        _SCOPED.reset(token)
