"""Tests for the text-processing commands.

grep, sort, uniq and wc read real file content from the session's
filesystem.  sed, awk, cut, tr, diff and tee only describe what they
would do.
"""

from nexus_shell.session import Session
from nexus_shell.shell import Outcome, Shell


def _shell_with(name: str, content: str) -> Shell:
    """Create a shell whose home directory holds one extra file."""
    session = Session()
    session.fs.create_file(f"/home/user/{name}", content)
    return Shell(session)


async def _out(shell: Shell, line: str) -> str:
    """Execute *line* and return its text."""
    return (await shell.execute(line)).text


class TestGrep:
    """Verify grep's flags."""

    async def test_matching_lines(self) -> None:
        """grep prints matching lines."""
        shell = _shell_with("f.txt", "apple\nBanana\ncherry apple")
        assert await _out(shell, "grep apple f.txt") == "apple\ncherry apple"

    async def test_ignore_case(self) -> None:
        """-i matches regardless of case."""
        shell = _shell_with("f.txt", "apple\nBanana")
        assert await _out(shell, "grep -i banana f.txt") == "Banana"

    async def test_line_numbers(self) -> None:
        """-n prefixes line numbers."""
        shell = _shell_with("f.txt", "a\nb\na")
        assert await _out(shell, "grep -n a f.txt") == "1:a\n3:a"

    async def test_count(self) -> None:
        """-c prints the number of matches."""
        shell = _shell_with("f.txt", "a\nb\na")
        assert await _out(shell, "grep -c a f.txt") == "2"

    async def test_invert(self) -> None:
        """-v prints non-matching lines."""
        shell = _shell_with("f.txt", "a\nb\na")
        assert await _out(shell, "grep -v a f.txt") == "b"

    async def test_regex(self) -> None:
        """The pattern is a regular expression."""
        shell = _shell_with("f.txt", "cat\ncot\ndog")
        assert await _out(shell, "grep c.t f.txt") == "cat\ncot"

    async def test_usage(self) -> None:
        """grep with fewer than two arguments prints usage."""
        outcome = await Shell(Session()).execute("grep foo")
        assert outcome == Outcome("grep: usage: grep [OPTION]... PATTERN [FILE]...", is_error=True)

    async def test_missing_file(self) -> None:
        """grep on a missing file is an error."""
        outcome = await Shell(Session()).execute("grep a nope")
        assert outcome.text == "grep: nope: No such file or directory"


class TestSortUniqWc:
    """Verify sort, uniq and wc."""

    async def test_sort(self) -> None:
        """sort orders lines."""
        shell = _shell_with("f.txt", "pear\napple\nfig")
        assert await _out(shell, "sort f.txt") == "apple\nfig\npear"

    async def test_sort_reverse_numeric(self) -> None:
        """-rn sorts numerically, largest first."""
        shell = _shell_with("f.txt", "10\n9\n100")
        assert await _out(shell, "sort -rn f.txt") == "100\n10\n9"

    async def test_sort_unique(self) -> None:
        """-u drops duplicates."""
        shell = _shell_with("f.txt", "b\na\nb")
        assert await _out(shell, "sort -u f.txt") == "a\nb"

    async def test_uniq_counts_globally(self) -> None:
        """uniq collapses repeated lines in first-seen order."""
        shell = _shell_with("f.txt", "a\nb\na\nc")
        assert await _out(shell, "uniq f.txt") == "a\nb\nc"

    async def test_uniq_count(self) -> None:
        """uniq -c prefixes each line with its count."""
        shell = _shell_with("f.txt", "a\na\nb")
        assert await _out(shell, "uniq -c f.txt") == "      2 a\n      1 b"

    async def test_wc(self) -> None:
        """wc prints lines, words and characters."""
        shell = _shell_with("f.txt", "one two\nthree")
        assert await _out(shell, "wc f.txt") == "  2   3 13 f.txt"

    async def test_wc_lines_only(self) -> None:
        """wc -l prints just the line count."""
        shell = _shell_with("f.txt", "one two\nthree")
        assert await _out(shell, "wc -l f.txt") == "2 f.txt"


class TestSimulatedTools:
    """Verify the commands that only describe their effect."""

    async def test_sed(self) -> None:
        """sed describes the edit."""
        out = await _out(Shell(Session()), "sed s/a/b/ notes.txt")
        assert out == "[sed simulation] Would process: s/a/b/ notes.txt"

    async def test_tr(self) -> None:
        """tr describes the translation."""
        assert await _out(Shell(Session()), "tr a b") == "[tr simulation] Would translate a to b"

    async def test_diff(self) -> None:
        """diff describes the comparison."""
        assert await _out(Shell(Session()), "diff a b") == (
            "[diff simulation] Would compare a and b"
        )

    async def test_tee(self) -> None:
        """tee describes the write."""
        assert await _out(Shell(Session()), "tee a b") == "[tee simulation] Would write to a, b"
