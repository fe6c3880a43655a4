"""Tests for directivecheck.classifier.core."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from directivecheck.classifier import DirectiveClassifier, classify
from directivecheck.classifier.detectors import HookDetector
from directivecheck.errors import FileReadError
from directivecheck.models import (
    REASON_CLIENT_SIGNAL,
    REASON_DIRECTIVE_PRESENT,
    REASON_NO_CLIENT_SIGNAL,
    REASON_SERVER_ONLY,
)


def _component(tmp_path: Path, content: str, name: str = "Component.tsx") -> Path:
    path = tmp_path / name
    path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
    return path


@pytest.mark.parametrize("directive", ['"use client";', "'use client';", "'use client'"])
def test_directive_present_is_not_flagged(tmp_path: Path, directive: str) -> None:
    path = _component(
        tmp_path,
        f"""
        {directive}
        import {{ useState }} from "react";

        export default function Counter() {{
          const [count, setCount] = useState(0);
          return <button onClick={{() => setCount(count + 1)}}>{{count}}</button>;
        }}
        """,
    )
    assert classify(path) is None


def test_server_only_file_is_not_flagged(tmp_path: Path) -> None:
    path = _component(
        tmp_path,
        """
        export async function getServerSideProps() {
          return { props: {} };
        }

        export default function Page() {
          return <button onClick={() => alert("hi")}>Go</button>;
        }
        """,
    )
    assert classify(path) is None


@pytest.mark.parametrize("name", ["getServerSideProps", "getStaticProps", "getInitialProps"])
def test_every_server_function_short_circuits(tmp_path: Path, name: str) -> None:
    path = _component(tmp_path, f"const x = useState(0);\nexport const loader = {name};\n")
    result = DirectiveClassifier().classify_text(path.read_text(encoding="utf-8"), path)
    assert not result.flagged
    assert result.reason == REASON_SERVER_ONLY


def test_server_function_in_string_still_suppresses(tmp_path: Path) -> None:
    path = _component(tmp_path, 'const doc = "see getStaticProps";\nuseEffect(() => {});\n')
    assert classify(path) is None


def test_event_handler_is_flagged_with_absolute_path(tmp_path: Path, monkeypatch) -> None:
    path = _component(
        tmp_path,
        """
        export function Toolbar({ handleClick }) {
          return <button onClick={handleClick}>Save</button>;
        }
        """,
    )
    monkeypatch.chdir(tmp_path)

    result = classify(Path("Component.tsx"))

    assert result == path.resolve()
    assert result.is_absolute()


def test_global_only_in_line_comment_is_not_flagged(tmp_path: Path) -> None:
    path = _component(
        tmp_path,
        """
        // window.location
        export const Title = () => <h1>Hello</h1>;
        """,
    )
    assert classify(path) is None


def test_global_only_in_string_literal_is_not_flagged(tmp_path: Path) -> None:
    path = _component(tmp_path, "export const hint = 'resize the window';\n")
    assert classify(path) is None


def test_global_usage_is_flagged(tmp_path: Path) -> None:
    path = _component(tmp_path, "export const width = () => window.innerWidth;\n")
    assert classify(path) == path.resolve()


def test_dynamic_call_is_flagged(tmp_path: Path) -> None:
    path = _component(tmp_path, "export const Id = () => <span>{Math.random()}</span>;\n")
    assert classify(path) == path.resolve()


def test_plain_component_is_not_flagged(tmp_path: Path) -> None:
    path = _component(tmp_path, "export const Title = () => <h1>Hello</h1>;\n")
    result = DirectiveClassifier().evaluate(path)
    assert not result.flagged
    assert result.reason == REASON_NO_CLIENT_SIGNAL
    assert result.matches == []


def test_directive_inside_block_comment_does_not_count(tmp_path: Path) -> None:
    path = _component(
        tmp_path,
        """
        /* 'use client' */
        import { useState } from "react";
        export const Toggle = () => useState(false);
        """,
    )
    assert classify(path) == path.resolve()


def test_directive_inside_line_comment_does_not_count(tmp_path: Path) -> None:
    path = _component(tmp_path, "// 'use client'\nexport const T = () => useEffect(() => {});\n")
    assert classify(path) == path.resolve()


def test_directive_anywhere_in_code_counts(tmp_path: Path) -> None:
    path = _component(tmp_path, "useState(0);\nconst marker = \"use client\";\n")
    result = DirectiveClassifier().evaluate(path)
    assert not result.flagged
    assert result.reason == REASON_DIRECTIVE_PRESENT


def test_evaluate_reports_every_matching_signal(tmp_path: Path) -> None:
    path = _component(
        tmp_path,
        """
        export function Clock() {
          const [now, setNow] = useState(Date.now());
          return <div onScroll={() => setNow(Date.now())}>{document.title}</div>;
        }
        """,
    )
    result = DirectiveClassifier().evaluate(path)

    assert result.flagged
    assert result.reason == REASON_CLIENT_SIGNAL
    assert [(m.detector, m.token) for m in result.matches] == [
        ("hooks", "useState"),
        ("globals", "document"),
        ("events", "onScroll"),
        ("dynamic", "Date.now()"),
    ]


def test_custom_detectors_and_server_functions(tmp_path: Path) -> None:
    path = _component(tmp_path, "const r = useRouter();\n")
    classifier = DirectiveClassifier([HookDetector(["useRouter"])])
    assert classifier.classify(path) == path.resolve()

    server_path = _component(tmp_path, "const r = useRouter();\nexport const revalidate = 60;\n", "page.tsx")
    server_aware = DirectiveClassifier([HookDetector(["useRouter"])], server_functions=["revalidate"])
    assert server_aware.classify(server_path) is None


def test_missing_file_raises_read_error(tmp_path: Path) -> None:
    with pytest.raises(FileReadError) as excinfo:
        classify(tmp_path / "gone.tsx")
    assert excinfo.value.path == tmp_path / "gone.tsx"


def test_non_utf8_file_raises_read_error(tmp_path: Path) -> None:
    path = tmp_path / "binary.tsx"
    path.write_bytes(b"\xff\xfe\x00useState")
    with pytest.raises(FileReadError):
        classify(path)


def test_classification_is_deterministic(tmp_path: Path) -> None:
    path = _component(tmp_path, "<input onChange={update} />\n")
    assert classify(path) == classify(path)
