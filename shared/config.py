"""
Keyward Configuration
======================

Slotted dataclass sections loaded from TOML: ``[global]``, ``[breach]``,
``[analysis]`` and ``[generator]``.

The analysis core never reads configuration itself: the CLI loads a
:class:`KeywardConfig` and hands explicit values to the components it
builds.  Missing files and missing keys fall back to dataclass defaults.

References:
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

DEFAULT_CONFIG_NAME = "keyward.toml"


# ========================== Section Configs ================================


@dataclass(frozen=False, slots=True)
class BreachConfig:
    """Configuration for the k-anonymity breach lookup.

    Only the five-character SHA-1 prefix ever reaches *api_url*.  Retries
    default to zero: a failed lookup is reported as ``unknown`` and the
    next debounce cycle is the retry.
    """

    api_url: str = "https://api.pwnedpasswords.com"
    timeout: float = 10.0
    max_retries: int = 0
    add_padding: bool = True
    cache_ttl: float = 300.0
    cb_failure_threshold: int = 5
    cb_recovery_timeout: float = 30.0
    user_agent: str = "Keyward/1.0 (Password Analysis Toolkit)"


@dataclass(frozen=False, slots=True)
class AnalysisConfig:
    """Parameters for the debounced analysis pipeline and its history."""

    debounce_ms: int = 300
    history_limit: int = 50
    history_hash_length: int = 12
    check_breaches: bool = True


@dataclass(frozen=False, slots=True)
class GeneratorConfig:
    """Default generation policy used when the CLI receives no overrides."""

    mode: str = "random"
    length: int = 16
    use_uppercase: bool = True
    use_numbers: bool = True
    use_symbols: bool = True
    count: int = 6


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Logging and output settings shared by every command."""

    log_level: str = "WARNING"
    log_file: str = ""
    log_json: bool = False
    output_format: str = "console"
    version: str = "1.0.0"


# =========================== Master Config =================================

# TOML table name -> (attribute, section type)
_SECTIONS: dict[str, tuple[str, type]] = {
    "global": ("global_settings", GlobalConfig),
    "breach": ("breach", BreachConfig),
    "analysis": ("analysis", AnalysisConfig),
    "generator": ("generator", GeneratorConfig),
}


def _section_from(kind: type, table: dict[str, Any]) -> Any:
    """Build *kind* from the keys of *table* it declares; others are ignored."""
    known = {f.name for f in fields(kind)}
    return kind(**{key: value for key, value in table.items() if key in known})


@dataclass(frozen=False, slots=True)
class KeywardConfig:
    """All configuration sections.

    ``KeywardConfig.load()`` reads ``keyward.toml`` from the working
    directory when present; ``KeywardConfig.load("site.toml")`` requires
    the named file to exist.
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    breach: BreachConfig = field(default_factory=BreachConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> KeywardConfig:
        """Read a TOML file over the defaults.

        Raises:
            FileNotFoundError: If *path* was given and does not exist.
        """
        source = Path(path) if path is not None else Path.cwd() / DEFAULT_CONFIG_NAME
        if not source.is_file():
            if path is not None:
                raise FileNotFoundError(f"Configuration file not found: {source}")
            return cls()

        raw = tomllib.loads(source.read_text(encoding="utf-8"))
        sections = {
            attr: _section_from(kind, raw.get(table, {}))
            for table, (attr, kind) in _SECTIONS.items()
        }
        return cls(**sections)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
