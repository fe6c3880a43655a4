"""Configuration loading for directivecheck (.directivecheck.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".directivecheck.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SignalConfig:
    """Extra catalog entries appended to the built-in signal sets."""

    hooks: List[str] = field(default_factory=list)
    client_globals: List[str] = field(default_factory=list)
    client_events: List[str] = field(default_factory=list)
    dynamic_functions: List[str] = field(default_factory=list)
    server_functions: List[str] = field(default_factory=list)


@dataclass
class ScanConfig:
    """Traversal and worker pool settings."""

    workers: int = field(default_factory=lambda: min(8, os.cpu_count() or 1))
    skip_unreadable_dirs: bool = False
    follow_symlinks: bool = True


@dataclass
class DirectiveCheckConfig:
    """Represents the settings defined in .directivecheck.yml."""

    root: Path
    exclude_dirs: List[str] = field(default_factory=list)
    extensions: List[str] = field(default_factory=list)
    signals: SignalConfig = field(default_factory=SignalConfig)
    detectors: Optional[List[str]] = None
    scan: ScanConfig = field(default_factory=ScanConfig)
    report_format: Optional[str] = None


def load_config(config_path: Path) -> DirectiveCheckConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DirectiveCheckConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    signals_data = _as_dict(data.get("signals"))
    signals = SignalConfig(
        hooks=_as_str_list(signals_data.get("hooks")),
        client_globals=_as_str_list(signals_data.get("client_globals")),
        client_events=_as_str_list(signals_data.get("client_events")),
        dynamic_functions=_as_str_list(signals_data.get("dynamic_functions")),
        server_functions=_as_str_list(signals_data.get("server_functions")),
    )

    detectors_data = _as_dict(data.get("detectors"))
    detectors = None
    if "enabled" in detectors_data:
        detectors = _as_str_list(detectors_data.get("enabled"))

    scan_data = _as_dict(data.get("scan"))
    scan = ScanConfig()
    if scan_data:
        workers = _as_int(scan_data.get("workers"))
        if workers is not None:
            if workers < 1:
                raise ConfigError("scan.workers must be a positive integer")
            scan.workers = workers
        skip = _as_bool(scan_data.get("skip_unreadable_dirs"))
        if skip is not None:
            scan.skip_unreadable_dirs = skip
        follow = _as_bool(scan_data.get("follow_symlinks"))
        if follow is not None:
            scan.follow_symlinks = follow

    report_data = _as_dict(data.get("report"))
    report_format = _as_str(report_data.get("format")) if report_data else None

    return DirectiveCheckConfig(
        root=root,
        exclude_dirs=_as_str_list(data.get("exclude_dirs")),
        extensions=[_normalise_extension(ext) for ext in _as_str_list(data.get("extensions"))],
        signals=signals,
        detectors=detectors,
        scan=scan,
        report_format=report_format,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _normalise_extension(value: str) -> str:
    value = value.strip()
    return value if value.startswith(".") else f".{value}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
