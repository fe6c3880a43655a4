"""Renders scan reports for terminals, CI logs and browsers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import ScanReport

FORMATS = ("text", "json", "markdown", "html")

CLEAN_MESSAGE = "All components are correctly configured."
TITLE = 'Missing "use client" Directives'

_TEMPLATE_NAMES = {
    "markdown": "report.md.j2",
    "html": "report.html.j2",
}


def render_report(report: ScanReport, fmt: str = "text", *, explain: bool = False) -> str:
    """Return ``report`` rendered in one of :data:`FORMATS`."""
    fmt = fmt.lower()
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported report format '{fmt}'. Choose from: {', '.join(FORMATS)}")
    if fmt == "text":
        return _render_text(report, explain=explain)
    if fmt == "json":
        return json.dumps(_as_payload(report), indent=2) + "\n"

    template = _create_env().get_template(_TEMPLATE_NAMES[fmt])
    return template.render(
        title=TITLE,
        clean_message=CLEAN_MESSAGE,
        root=str(report.root),
        entries=_entries(report),
        errors=[{"path": _display(report.root, e.path), "message": e.message} for e in report.errors],
        files_scanned=report.files_scanned,
        cancelled=report.cancelled,
    )


def _render_text(report: ScanReport, *, explain: bool) -> str:
    lines: List[str] = []
    if report.is_clean:
        lines.append(CLEAN_MESSAGE)
    else:
        for entry in _entries(report):
            line = entry["path"]
            if explain and entry["signals"]:
                line += f"  [{', '.join(entry['signals'])}]"
            lines.append(line)
    if report.cancelled:
        lines.append("(scan cancelled, results are partial)")
    return "\n".join(lines) + "\n"


def _entries(report: ScanReport) -> List[Dict[str, object]]:
    signals_by_path = {
        item.path: [f"{match.detector}:{match.token}" for match in item.matches]
        for item in report.details
    }
    return [
        {
            "path": _display(report.root, path),
            "absolute": str(path),
            "uri": path.as_uri(),
            "signals": signals_by_path.get(path, []),
        }
        for path in report.flagged
    ]


def _as_payload(report: ScanReport) -> Dict[str, object]:
    return {
        "root": str(report.root),
        "files_scanned": report.files_scanned,
        "flagged": [str(path) for path in report.flagged],
        "errors": [{"path": str(error.path), "message": error.message} for error in report.errors],
        "cancelled": report.cancelled,
    }


def _display(root: Path, path: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def _create_env() -> Environment:
    loader = FileSystemLoader(str(Path(__file__).with_name("templates")))
    return Environment(
        loader=loader,
        autoescape=select_autoescape(["html", "html.j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


__all__ = ["CLEAN_MESSAGE", "FORMATS", "render_report"]
