"""
Styling macro expansion.

Each macro is one regex stage with non-greedy capture. Stages run in a
fixed order and never recurse, so a macro inside another macro's argument
is expanded only when its own stage runs after the outer one.
"""

from __future__ import annotations

import itertools
import re
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.config import get_settings
from .core.errors import PicDataError
from .core.logging import get_logger
from .resources import QuestionType
from .stages import Stage, stage

logger = get_logger(__name__)

MONOSPACE_SPAN = (
    "<span class='bg-[#ddd] dark:bg-[#606060] dark:text-[#e0e0e0] px-1 rounded-lg text-lg' "
    "style='font-family: \"Monaco\", \"Menlo\", \"Ubuntu Mono\", \"Consolas\", "
    "\"Source Code Pro\", \"source-code-pro\", monospace'>{0}</span>"
)

# (name, pattern, template) in expansion order
STYLE_MACROS = [
    ("verb", r"\\verb\|(.*?)\|", MONOSPACE_SPAN),
    ("texttt", r"\\texttt\{(.*?)\}", MONOSPACE_SPAN),
    ("textbf", r"\\textbf\{(.*?)\}", "<span class='font-bold'>{0}</span>"),
    ("textit", r"\\textit\{(.*?)\}", "<span class='italic'>{0}</span>"),
    ("underline", r"\\underline\{(.*?)\}", "<span class='underline underline-offset-auto'>{0}</span>"),
    ("fontsize", r"\\fontsize\[(.*?)\]\{(.*?)\}", "<span style='font-size: {0}'>{1}</span>"),
    ("textsuperscript", r"\\textsuperscript\{(.*?)\}", "<sup>{0}</sup>"),
    ("textsubscript", r"\\textsubscript\{(.*?)\}", "<sub>{0}</sub>"),
    ("indent", r"\\indent\[(.*?)\]\{(.*?)\}", "<span style='margin-left: {0}'>{1}</span>"),
    ("centerline", r"\\centerline\{(.*?)\}", "<p class='text-center'>{0}</p>"),
    ("rightline", r"\\rightline\{(.*?)\}", "<p class='text-right'>{0}</p>"),
    ("textcolor", r"\\textcolor\[(.*?)\]\{(.*?)\}", "<span style='color: {0}'>{1}</span>"),
]

PIC_PATTERN = r"\\pic\{(.*?)\}"
BLANK_PATTERN = r"\[(.*?)\]"


class PicSpec(BaseModel):
    """
    Argument of ``\\pic{...}``: the body of a JSON object.

    Example: ``\\pic{"url": "a.png", "alt": "A", "maxHeight": 200}``
    """

    model_config = ConfigDict(populate_by_name=True)

    url: str
    alt: Optional[str] = None
    max_height: Optional[Union[int, float]] = Field(None, alias="maxHeight")
    is_inline: bool = Field(False, alias="isInline")

    @classmethod
    def parse(cls, fragment: str) -> "PicSpec":
        """Parse the text between the braces of a \\pic macro."""
        try:
            return cls.model_validate_json("{" + fragment + "}")
        except ValidationError as e:
            raise PicDataError(fragment, str(e)) from e

    def to_html(self, default_max_height: int) -> str:
        max_height = self.max_height or default_max_height
        layout = "inline-block" if self.is_inline else "mx-2 my-8"
        alt = self.alt if self.alt is not None else ""
        return (
            f"<div class='{layout}'><img style='max-height: {max_height}px;' "
            f"class='mx-auto dark:invert-[0.9]' src='{self.url}' alt='{alt}'/></div>"
        )


def render_pic(match: re.Match) -> str:
    settings = get_settings()
    try:
        spec = PicSpec.parse(match.group(1))
    except PicDataError as e:
        logger.debug(e.message)
        return settings.PIC_ERROR_TEXT
    return spec.to_html(settings.PIC_DEFAULT_MAX_HEIGHT)


def style_stages() -> list[Stage]:
    """The styling macros followed by \\pic."""
    stages = [stage(name, pattern, fmt) for name, pattern, fmt in STYLE_MACROS]
    stages.append(stage("pic", PIC_PATTERN, render_pic))
    return stages


def fill_in_blank_stage(question_type: Optional[Union[QuestionType, str]]) -> Stage:
    """
    Replace ``[...]`` with indexed inputs for fill-in-the-blank questions.

    Indices start at 0 and follow left-to-right order over the whole string.
    The counter belongs to the returned stage, so build one per render call.
    """
    counter = itertools.count()
    enabled = question_type == QuestionType.FILL_IN_BLANK

    def _blank(match: re.Match) -> str:
        if not enabled:
            return match.group(0)
        return f'<input id="replace" index={next(counter)}></input>'

    return stage("fill_in_blank", BLANK_PATTERN, _blank)
