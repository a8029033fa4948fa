"""
Markup to HTML rendering.

``render_latex`` runs one ordered list of stages over the markup:

    escape -> point fix-up -> math ($$, \\[\\], \\(\\), $) -> styling macros
    -> \\pic -> fill-in blanks -> \\includegraphics -> unescape

Math runs before the styling macros so macros never see raw math, and
image references resolve last because they may sit inside macro output.
Every call builds its own stages, so no state is shared between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

from .core.errors import StageError, TexmarkError
from .core.logging import get_context_logger, get_logger
from .escapes import EscapeMarkers
from .images import includegraphics_stage, resource_texts
from .macros import fill_in_blank_stage, style_stages
from .math_mode import EngineLike, as_engine, math_stages
from .resources import QuestionType, Resource, coerce_resources
from .stages import Stage

logger = get_logger(__name__)


@dataclass
class Pipeline:
    """An ordered list of stages threaded over one working string."""

    stages: list[Stage] = field(default_factory=list)

    @property
    def names(self) -> list[str]:
        return [s.name for s in self.stages]

    def run(self, text: str) -> str:
        for s in self.stages:
            try:
                text = s.apply(text)
            except TexmarkError:
                raise
            except Exception as e:
                raise StageError(s.name, str(e)) from e
        return text


def build_pipeline(
    markers: EscapeMarkers,
    resources: Optional[list[Resource]] = None,
    question_type: Optional[Union[QuestionType, str]] = None,
    engine: EngineLike | None = None,
) -> Pipeline:
    """Assemble the stages for one render call."""
    stages = math_stages(markers, as_engine(engine))
    stages += style_stages()
    stages.append(fill_in_blank_stage(question_type))
    stages.append(includegraphics_stage(resources))
    return Pipeline(stages)


def render_latex(
    markup: str = "",
    resources: Optional[Iterable[Any]] = None,
    question_type: Optional[Union[QuestionType, str]] = None,
    engine: EngineLike | None = None,
) -> str:
    """
    Render markup to HTML.

    Args:
        markup: Author text mixing literal text, macros and math
        resources: Resources referenced by ``\\includegraphics``; records or mappings
        question_type: Enables fill-in-the-blank inputs when FILL_IN_BLANK
        engine: Math typesetter; latex2mathml by default

    Raises:
        MathRenderError: The engine rejected a math span
        StageError: Any other stage failed
    """
    resource_list = coerce_resources(resources) if resources is not None else None
    logger.debug(
        "Rendering markup",
        extra={"extra_data": {
            "length": len(markup),
            "resources": len(resource_list) if resource_list is not None else None,
        }},
    )
    markers = EscapeMarkers.avoiding(markup, *resource_texts(resource_list))
    pipeline = build_pipeline(markers, resource_list, question_type, engine)

    text = markers.encode(markup)
    text = pipeline.run(text)
    return markers.decode(text)


def try_render_latex(
    markup: str = "",
    resources: Optional[Iterable[Any]] = None,
    question_type: Optional[Union[QuestionType, str]] = None,
    engine: EngineLike | None = None,
) -> str:
    """Like ``render_latex`` but returns ``markup`` unchanged on any failure."""
    log = get_context_logger(__name__, question_type=getattr(question_type, "value", question_type))
    try:
        return render_latex(markup, resources, question_type, engine)
    except Exception:
        log.warning("Rendering failed, returning markup unchanged", exc_info=True)
        return markup
