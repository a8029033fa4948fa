"""
Escape handling for literal newlines and escaped dollar signs.

Markup is first split into typed segments. The regex stages work on a flat
string, so the segments are serialized with two marker characters picked
per call from the private-use area and guaranteed absent from every piece
of caller text the call touches. Each marker is framed by single spaces,
which the math sub-pass and the final decode rely on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Union

# Private-use area scanned for markers
_MARKER_FIRST = 0xE000
_MARKER_LAST = 0xF8FF

_ESCAPE_RE = re.compile(r"(\n|\\\$)")

LINE_BREAK = "<br />"


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class EscapedNewline:
    pass


@dataclass(frozen=True)
class EscapedDollar:
    pass


Segment = Union[Text, EscapedNewline, EscapedDollar]


def split_segments(markup: str) -> list[Segment]:
    """Split markup into text runs, newlines and escaped dollar signs."""
    segments: list[Segment] = []
    for piece in _ESCAPE_RE.split(markup):
        if piece == "\n":
            segments.append(EscapedNewline())
        elif piece == "\\$":
            segments.append(EscapedDollar())
        elif piece:
            segments.append(Text(piece))
    return segments


@dataclass(frozen=True)
class EscapeMarkers:
    """
    The pair of marker characters used by one render call.

    Build with ``EscapeMarkers.avoiding(...)`` so that neither marker occurs
    in the markup or in any other caller text spliced into the output.
    """

    newline: str
    dollar: str

    @classmethod
    def avoiding(cls, *texts: str) -> "EscapeMarkers":
        used = set().union(*(set(t) for t in texts)) if texts else set()
        free = (
            chr(code)
            for code in range(_MARKER_FIRST, _MARKER_LAST + 1)
            if chr(code) not in used
        )
        try:
            return cls(newline=next(free), dollar=next(free))
        except StopIteration:
            raise ValueError("No free private-use characters left for escape markers") from None

    @property
    def framed_newline(self) -> str:
        return f" {self.newline} "

    @property
    def framed_dollar(self) -> str:
        return f" {self.dollar} "

    def serialize(self, segments: Iterable[Segment]) -> str:
        """Flatten segments into the working string used by the stages."""
        parts = []
        for segment in segments:
            if isinstance(segment, EscapedNewline):
                parts.append(self.framed_newline)
            elif isinstance(segment, EscapedDollar):
                parts.append(self.framed_dollar)
            else:
                parts.append(segment.content)
        return "".join(parts)

    def encode(self, markup: str) -> str:
        return self.serialize(split_segments(markup))

    def strip(self, math: str) -> str:
        """Collapse every framed marker inside math content to one space."""
        return math.replace(self.framed_newline, " ").replace(self.framed_dollar, " ")

    def decode(self, text: str) -> str:
        """
        Turn markers back into output text.

        Framed newlines become `` <br /> `` and framed dollars become ``$``.
        A marker that lost its framing in some stage is still replaced, so
        no marker survives.
        """
        text = text.replace(self.framed_newline, f" {LINE_BREAK} ")
        text = text.replace(self.framed_dollar, "$")
        return text.replace(self.newline, LINE_BREAK).replace(self.dollar, "$")
