"""
Shared pytest fixtures.

Provides:
- A recording fake math engine so pipeline tests do not depend on the
  exact markup produced by latex2mathml
- Sample resource records in the camelCase form callers send
- Helpers for asserting pydantic validation failures
"""

import pytest
from typing import Any, Type
from pydantic import BaseModel, ValidationError


class RecordingEngine:
    """Math engine that records its calls and returns a tagged placeholder."""

    def __init__(self, fail_on: str | None = None):
        self.calls: list[tuple[str, bool]] = []
        self.fail_on = fail_on

    def render(self, content: str, display_mode: bool) -> str:
        if self.fail_on is not None and self.fail_on in content:
            raise ValueError(f"cannot typeset {content!r}")
        self.calls.append((content, display_mode))
        mode = "block" if display_mode else "inline"
        return f'<math display="{mode}">{content}</math>'


@pytest.fixture
def engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture
def failing_engine() -> RecordingEngine:
    """Engine rejecting any content containing a left brace."""
    return RecordingEngine(fail_on="{")


@pytest.fixture
def image_resources() -> list[dict[str, Any]]:
    return [
        {"id": "graph-1", "type": "IMAGE", "data": {"url": "https://cdn.test/graph.png", "altText": "A graph"}},
        {"id": "logo", "type": "LOGO", "data": {"url": "https://cdn.test/logo.png"}},
        {"id": "snippet", "type": "CODE", "data": {"language": "PYTHON", "content": "print(1)"}},
    ]


@pytest.fixture
def opaque_resources() -> list[dict[str, Any]]:
    """Records whose payloads the renderer never reads."""
    return [
        {"id": "v", "type": "VIDEO", "data": {}},
        {"id": "c", "type": "CODE", "data": {"language": "RUST", "content": "fn main() {}"}},
    ]


@pytest.fixture
def assert_validation_error():
    """Helper to assert that a ValidationError is raised with expected details."""
    def _assert_validation(
        model_class: Type[BaseModel],
        data: dict[str, Any],
        expected_field: str | None = None,
    ) -> ValidationError:
        with pytest.raises(ValidationError) as exc_info:
            model_class(**data)

        error = exc_info.value
        if expected_field:
            field_errors = [e for e in error.errors() if e['loc'][0] == expected_field]
            assert len(field_errors) > 0, f"Expected error for field '{expected_field}' not found"

        return error

    return _assert_validation
