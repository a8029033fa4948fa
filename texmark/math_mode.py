"""
Math-mode rendering.

Recognises ``$$...$$`` and ``\\[...\\]`` (display) then ``\\(...\\)`` and
``$...$`` (inline), in that order, so single dollars never split a double
dollar span. Matching is non-greedy: nested or unbalanced delimiters of
the same kind resolve to the first closing delimiter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Union, runtime_checkable

import latex2mathml.converter

from .core.errors import MathRenderError
from .core.logging import get_logger
from .escapes import EscapeMarkers
from .stages import Stage, stage

logger = get_logger(__name__)

ALLOW_BREAK = r"\allowbreak"

# point \(1,2\) -> point \((1,2)\)
POINT_PATTERN = r"point \\\(([-\d+][-,\d+]*)\\\)"

DISPLAY_DOLLAR_PATTERN = r"\$\$(.*?)\$\$"
DISPLAY_BRACKET_PATTERN = r"\\\[(.*?)\\\]"
INLINE_PAREN_PATTERN = r"\\\((.*?)\\\)"
INLINE_DOLLAR_PATTERN = r"\$(.*?)\$"


@runtime_checkable
class MathEngine(Protocol):
    """Typesetter turning LaTeX math into HTML-embeddable markup."""

    def render(self, content: str, display_mode: bool) -> str:
        ...


class Latex2MathMLEngine:
    """
    Default engine producing MathML via latex2mathml.

    MathML leaves line breaking to the browser, so ``\\allowbreak`` hints
    are dropped before conversion.
    """

    def render(self, content: str, display_mode: bool) -> str:
        content = content.replace(ALLOW_BREAK, "")
        return latex2mathml.converter.convert(
            content, display="block" if display_mode else "inline"
        )


@dataclass(frozen=True)
class FunctionEngine:
    """Adapter for engines given as ``fn(content, display_mode)``."""

    fn: Callable[[str, bool], str]

    def render(self, content: str, display_mode: bool) -> str:
        return self.fn(content, display_mode)


EngineLike = Union[MathEngine, Callable[[str, bool], str]]


def as_engine(engine: EngineLike | None) -> MathEngine:
    if engine is None:
        return Latex2MathMLEngine()
    if isinstance(engine, MathEngine):
        return engine
    return FunctionEngine(engine)


def math_string_replacement(content: str, markers: EscapeMarkers) -> str:
    """
    Prepare math content for the engine.

    Adds a break hint after every comma, then collapses escaped newlines and
    dollar signs to spaces since neither means anything in math mode.
    """
    content = content.replace(",", f", {ALLOW_BREAK} ")
    return markers.strip(content)


def typeset(engine: MathEngine, content: str, display_mode: bool) -> str:
    """Run the engine, re-raising any failure as MathRenderError."""
    try:
        return engine.render(content, display_mode)
    except Exception as e:
        logger.debug(
            "Math engine rejected content",
            extra={"extra_data": {"content": content, "display_mode": display_mode}},
        )
        raise MathRenderError(content, display_mode, str(e)) from e


def math_stages(markers: EscapeMarkers, engine: MathEngine) -> list[Stage]:
    """Point normalisation followed by the four delimiter stages."""

    def render_as(display_mode: bool):
        def _handler(match) -> str:
            return typeset(engine, math_string_replacement(match.group(1), markers), display_mode)
        return _handler

    return [
        stage("point", POINT_PATTERN, r"point \(({0})\)"),
        stage("display_dollar", DISPLAY_DOLLAR_PATTERN, render_as(True)),
        stage("display_bracket", DISPLAY_BRACKET_PATTERN, render_as(True)),
        stage("inline_paren", INLINE_PAREN_PATTERN, render_as(False)),
        stage("inline_dollar", INLINE_DOLLAR_PATTERN, render_as(False)),
    ]
