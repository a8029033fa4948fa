"""
Pattern-driven rewrite stages.

A stage is a compiled pattern plus a handler producing the replacement for
each match. Handlers return literal text; nothing they return is expanded
again by the same stage.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Union

Handler = Callable[[re.Match], str]


@dataclass(frozen=True)
class Stage:
    name: str
    pattern: re.Pattern
    handler: Handler

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.handler, text)


def template(fmt: str) -> Handler:
    """Handler filling ``fmt`` positionally with the match groups."""
    def _fill(match: re.Match) -> str:
        return fmt.format(*match.groups())
    return _fill


def stage(name: str, pattern: Union[str, re.Pattern], handler: Union[str, Handler]) -> Stage:
    """Build a Stage; a string handler is treated as a ``template``."""
    if isinstance(handler, str):
        handler = template(handler)
    return Stage(name=name, pattern=re.compile(pattern), handler=handler)
