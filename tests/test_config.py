"""Tests for directivecheck.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from directivecheck.config import (
    ConfigError,
    DirectiveCheckConfig,
    ScanConfig,
    SignalConfig,
    load_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, DirectiveCheckConfig)
    assert config.root == tmp_path.resolve()
    assert config.exclude_dirs == []
    assert config.extensions == []
    assert config.signals == SignalConfig()
    assert config.detectors is None
    assert config.scan.workers >= 1
    assert config.scan.skip_unreadable_dirs is False
    assert config.scan.follow_symlinks is True
    assert config.report_format is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".directivecheck.yml"
    config_file.write_text(
        """
exclude_dirs:
  - storybook-static
  - coverage
extensions: [tsx, .jsx]
signals:
  hooks: [useRouter, useSearchParams]
  client_globals:
    - localStorage
  client_events: [onKeyDown]
  dynamic_functions: ["crypto.randomUUID()"]
  server_functions: [generateMetadata]
detectors:
  enabled: [hooks, events]
scan:
  workers: 3
  skip_unreadable_dirs: yes
  follow_symlinks: "false"
report:
  format: json
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.exclude_dirs == ["storybook-static", "coverage"]
    assert config.extensions == [".tsx", ".jsx"]
    assert config.signals.hooks == ["useRouter", "useSearchParams"]
    assert config.signals.client_globals == ["localStorage"]
    assert config.signals.client_events == ["onKeyDown"]
    assert config.signals.dynamic_functions == ["crypto.randomUUID()"]
    assert config.signals.server_functions == ["generateMetadata"]
    assert config.detectors == ["hooks", "events"]
    assert isinstance(config.scan, ScanConfig)
    assert config.scan.workers == 3
    assert config.scan.skip_unreadable_dirs is True
    assert config.scan.follow_symlinks is False
    assert config.report_format == "json"


def test_load_config_accepts_directory_path(tmp_path: Path) -> None:
    (tmp_path / ".directivecheck.yml").write_text("exclude_dirs: build\n", encoding="utf-8")

    assert load_config(tmp_path).exclude_dirs == ["build"]


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".directivecheck.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).exclude_dirs == []


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".directivecheck.yml").write_text("- one\n- two\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".directivecheck.yml").write_text("signals: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_non_positive_workers(tmp_path: Path) -> None:
    (tmp_path / ".directivecheck.yml").write_text("scan:\n  workers: 0\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
