"""Tests for colour-token rendering."""

from nexus_shell.render import Span, parse_spans, to_html, to_plain


class TestParseSpans:
    """Verify splitting text into styled spans."""

    def test_plain_text(self) -> None:
        """Text without tokens is one plain span."""
        assert parse_spans("hello") == [Span("hello")]

    def test_colour_and_reset(self) -> None:
        """A colour applies until reset."""
        assert parse_spans("\x1b[34mdir\x1b[0m file") == [
            Span("dir", colour="blue"),
            Span(" file"),
        ]

    def test_inverse(self) -> None:
        """Code 7 switches to inverse video."""
        assert parse_spans("\x1b[7m15\x1b[0m") == [Span("15", inverse=True)]

    def test_unknown_code_dropped(self) -> None:
        """Unknown codes vanish from the text and change nothing."""
        assert parse_spans("a\x1b[1mb") == [Span("a"), Span("b")]

    def test_colour_and_inverse_combine(self) -> None:
        """A colour set after inverse keeps the inverse flag."""
        assert parse_spans("\x1b[7m\x1b[31mx") == [Span("x", colour="red", inverse=True)]

    def test_empty(self) -> None:
        """Empty text has no spans."""
        assert parse_spans("") == []


class TestRenderers:
    """Verify the HTML and plain renderers."""

    def test_plain_strips_tokens(self) -> None:
        """to_plain removes every token."""
        assert to_plain("\x1b[32mok\x1b[0m done") == "ok done"

    def test_html_wraps_styled_runs(self) -> None:
        """Styled runs become spans with CSS classes."""
        assert to_html("\x1b[31mBANNED\x1b[0m") == '<span class="fg-red">BANNED</span>'

    def test_html_escapes(self) -> None:
        """Markup in output is escaped."""
        assert to_html("<b>&") == "&lt;b&gt;&amp;"

    def test_html_inverse(self) -> None:
        """Inverse runs get the inverse class."""
        assert to_html("\x1b[7m5\x1b[0m") == '<span class="inverse">5</span>'
