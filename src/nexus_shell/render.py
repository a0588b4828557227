"""Turn command output carrying ANSI colour tokens into styled spans.

Command output marks colour with ``ESC[<n>m`` tokens.  Only a small set
of codes is understood:

- ``0`` resets to the plain style.
- ``7`` switches to inverse video.
- ``30`` to ``37`` pick a foreground colour.

Any other code is removed from the text and changes nothing.
"""

import html
import re
from dataclasses import dataclass

_TOKEN = re.compile(r"\x1b\[(\d+)m")

RESET = 0
INVERSE = 7

COLOURS: dict[int, str] = {
    30: "black",
    31: "red",
    32: "green",
    33: "yellow",
    34: "blue",
    35: "magenta",
    36: "cyan",
    37: "white",
}


@dataclass(frozen=True)
class Span:
    """A run of text sharing one style."""

    text: str
    colour: str | None = None
    inverse: bool = False

    @property
    def plain(self) -> bool:
        """Return True if the span carries no styling."""
        return self.colour is None and not self.inverse


def parse_spans(text: str) -> list[Span]:
    """Split *text* into styled spans, dropping the control tokens.

    Empty runs between adjacent tokens are not emitted.
    """
    spans: list[Span] = []
    colour: str | None = None
    inverse = False
    position = 0
    for match in _TOKEN.finditer(text):
        if match.start() > position:
            spans.append(Span(text[position : match.start()], colour, inverse))
        position = match.end()
        code = int(match.group(1))
        if code == RESET:
            colour, inverse = None, False
        elif code == INVERSE:
            inverse = True
        elif code in COLOURS:
            colour = COLOURS[code]
    if position < len(text):
        spans.append(Span(text[position:], colour, inverse))
    return spans


def to_plain(text: str) -> str:
    """Return *text* with every colour token removed."""
    return _TOKEN.sub("", text)


def to_html(text: str) -> str:
    """Render *text* as escaped HTML, one ``<span>`` per styled run."""
    parts: list[str] = []
    for span in parse_spans(text):
        body = html.escape(span.text)
        if span.plain:
            parts.append(body)
            continue
        classes = [f"fg-{span.colour}"] if span.colour else []
        if span.inverse:
            classes.append("inverse")
        parts.append(f'<span class="{" ".join(classes)}">{body}</span>')
    return "".join(parts)
