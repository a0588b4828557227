"""Simulated programs for installed packages.

Once a package is installed its name becomes runnable.  Nothing really
executes: each known program prints a believable screenful, and every
other package falls back to a version banner built from its registry
record.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import TypeAlias

from nexus_shell.fs.filesystem import FileSystem
from nexus_shell.packages.catalog import InstalledPackage


@dataclass(frozen=True)
class ProgramContext:
    """What a simulated program may look at."""

    cwd: str
    fs: FileSystem
    installed_count: int
    user: str = "user"
    hostname: str = "nexusos"
    clock: Callable[[], datetime] = datetime.now


Program: TypeAlias = Callable[[list[str], ProgramContext], str]


def _btop(args: list[str], ctx: ProgramContext) -> str:
    return """\x1b[32mbtop\x1b[0m - Resource monitor
┌─ CPU ────────────────────────────────────────────────────┐
│ ▁▂▃▄▅▆▇█▇▆▅▄▃▂▁▂▃▄▅▆▇█▇▆▅▄ 45% @ 3.2GHz                 │
│ Core 0: 52%  Core 1: 38%  Core 2: 47%  Core 3: 41%       │
└──────────────────────────────────────────────────────────┘
┌─ Memory ─────────────────────────────────────────────────┐
│ ████████████░░░░░░░░░░░░░░░░░░░░  4.2G / 16G (26%)       │
│ Swap: ░░░░░░░░░░░░░░░░░░░░░░░░░░  0.0G / 2G (0%)         │
└──────────────────────────────────────────────────────────┘
Press 'q' to quit (simulated)"""


def _vim(args: list[str], ctx: ProgramContext) -> str:
    if args:
        return f"""\x1b[7m {args[0]} \x1b[0m
~
~
~                    VIM - Vi IMproved
~
~                     version 8.2
~                 by Bram Moolenaar et al.
~
~           type :q to exit    :help for help
~
-- INSERT --"""
    return """VIM - Vi IMproved 8.2
Usage: vim [arguments] [file ...]
   or: vim [arguments] -

Arguments:
   --                   Only file names after this
   -v                   Vi mode
   -e                   Ex mode
   -R                   Readonly mode
   -m                   Modifications not allowed"""


def _nano(args: list[str], ctx: ProgramContext) -> str:
    if not args:
        return """Usage: nano [OPTIONS] [[+LINE[,COLUMN]] FILE]...

To place the cursor on a specific line of a file, put the line
number with a '+' before the filename."""
    path = f"{ctx.cwd.rstrip('/')}/{args[0]}"
    body = ctx.fs.read(path) if ctx.fs.exists(path) and not ctx.fs.is_dir(path) else ""
    status = "" if body else "[ New File ]"
    return (
        f"  GNU nano 6.2                    {args[0]}\n\n{body}\n\n\n\n\n"
        f"                              {status}\n"
        "^G Help    ^O Write Out   ^W Where Is   ^K Cut       ^T Execute\n"
        "^X Exit    ^R Read File   ^\\ Replace    ^U Paste     ^J Justify"
    )


def _neovim(args: list[str], ctx: ProgramContext) -> str:
    return """NVIM v0.6.1
Build type: Release
Compilation: /usr/bin/cc
Features: +acl +iconv +tui

Run :checkhealth for more info"""


def _git(args: list[str], ctx: ProgramContext) -> str:
    sub = args[0] if args else ""
    if sub == "status":
        return (
            "On branch main\nYour branch is up to date with 'origin/main'.\n\n"
            "nothing to commit, working tree clean"
        )
    if sub == "log":
        today = ctx.clock().strftime("%a %b %d %Y")
        return (
            "commit a1b2c3d4e5f6 (HEAD -> main)\n"
            f"Author: User <{ctx.user}@nexusos.local>\n"
            f"Date:   {today}\n\n    Initial commit"
        )
    if sub == "branch":
        return "* main"
    return """usage: git [-v | --version] [-h | --help] [-C <path>] [-c <name>=<value>]
           [--exec-path[=<path>]] [--html-path] [--man-path] [--info-path]
           [-p | --paginate | -P | --no-pager] [--no-replace-objects] [--bare]
           [--git-dir=<path>] [--work-tree=<path>] [--namespace=<name>]
           <command> [<args>]"""


def _node(args: list[str], ctx: ProgramContext) -> str:
    return 'Welcome to Node.js v18.17.0.\nType ".help" for more information.\n> '


def _python(args: list[str], ctx: ProgramContext) -> str:
    return (
        "Python 3.10.6 (main, Nov 14 2022, 16:10:14) [GCC 11.3.0] on linux\n"
        'Type "help", "copyright", "credits" or "license" for more information.\n>>> '
    )


def _tmux(args: list[str], ctx: ProgramContext) -> str:
    if args:
        return "[tmux session started]"
    return (
        "usage: tmux [-2CluvV] [-c shell-command] [-f file] [-L socket-name]\n"
        "            [-S socket-path] [command [flags]]"
    )


def _tree(args: list[str], ctx: ProgramContext) -> str:
    if not ctx.fs.is_dir(ctx.cwd):
        return "Error reading directory"
    entries = ctx.fs.entries(ctx.cwd)
    lines = ["."]
    for i, (name, info) in enumerate(entries):
        prefix = "└── " if i == len(entries) - 1 else "├── "
        color = "\x1b[34m" if info.is_dir else ""
        lines.append(f"{prefix}{color}{name}\x1b[0m")
    dirs = sum(1 for _, info in entries if info.is_dir)
    lines.append("")
    lines.append(f"{dirs} directories, {len(entries) - dirs} files")
    return "\n".join(lines)


def _ncdu(args: list[str], ctx: ProgramContext) -> str:
    return f"""ncdu 1.15.1 ~ Use the arrow keys to navigate, press ? for help
--- {ctx.cwd} ----------------------------------------------------------------
    4.0 KiB [##########] /Documents
    2.0 KiB [#####     ] /Downloads
    1.0 KiB [##        ]  readme.txt
    0.5 KiB [#         ]  .bashrc

 Total disk usage:   7.5 KiB  Apparent size:   7.5 KiB  Items: 4"""


def _fzf(args: list[str], ctx: ProgramContext) -> str:
    return """fzf 0.29.0
Usage: fzf [options]

  Search mode:
    -x, --extended       Extended-search mode
    -e, --exact          Enable exact-match"""


def _jq(args: list[str], ctx: ProgramContext) -> str:
    return "jq - commandline JSON processor [version 1.6]\nUsage: jq [OPTIONS...] FILTER [FILE...]"


def _docker(args: list[str], ctx: ProgramContext) -> str:
    sub = args[0] if args else ""
    if sub == "ps":
        return "CONTAINER ID   IMAGE     COMMAND   CREATED   STATUS    PORTS     NAMES"
    if sub == "images":
        return "REPOSITORY   TAG       IMAGE ID   CREATED   SIZE"
    return """Usage:  docker [OPTIONS] COMMAND

A self-sufficient runtime for containers

Management Commands:
  container   Manage containers
  image       Manage images
  network     Manage networks
  volume      Manage volumes

Commands:
  build       Build an image from a Dockerfile
  pull        Pull an image or a repository from a registry
  push        Push an image or a repository to a registry
  run         Run a command in a new container"""


def _nginx(args: list[str], ctx: ProgramContext) -> str:
    return (
        "nginx version: nginx/1.18.0 (Ubuntu)\n"
        "Usage: nginx [-?hvVtTq] [-s signal] [-c filename] [-p prefix] [-g directives]"
    )


def _redis(args: list[str], ctx: ProgramContext) -> str:
    return "redis-cli 6.0.16\nType 'help' for help, 'quit' to quit.\n127.0.0.1:6379> "


def _ffmpeg(args: list[str], ctx: ProgramContext) -> str:
    return """ffmpeg version 4.4.2 Copyright (c) 2000-2021 the FFmpeg developers
  built with gcc 11 (Ubuntu 11.3.0-1ubuntu1~22.04)
  configuration: --enable-gpl --enable-version3 --enable-nonfree
  libavutil      56. 70.100 / 56. 70.100
  libavcodec     58.134.100 / 58.134.100"""


def _cmatrix(args: list[str], ctx: ProgramContext) -> str:
    return """\x1b[32m
  01001110 01000101 01011000 01010101 01010011
  1 0 1  0 1 1 0  1 0 0 1  0 1 1 0  0 1 0 1
  0   1    0 1   1    0   0 1    1   0    1
\x1b[0m
Press Ctrl+C to exit the Matrix..."""


def _cowsay(args: list[str], ctx: ProgramContext) -> str:
    message = " ".join(args) or "Hello!"
    width = len(message) + 2
    return (
        f" {'_' * width}\n< {message} >\n {'-' * width}\n"
        "        \\   ^__^\n"
        "         \\  (oo)\\_______\n"
        "            (__)\\       )\\/\\\n"
        "                ||----w |\n"
        "                ||     ||"
    )


_FIGLET_FONT: dict[str, tuple[str, ...]] = {
    "A": ("  ___  ", " / _ \\ ", "/ /_\\ \\", "|  _  |", "| | | |", "\\_| |_/"),
    "B": (" ____  ", "| __ ) ", "|  _ \\ ", "| |_) |", "|____/ ", "       "),
    "C": ("  ____ ", " / ___|", "| |    ", "| |___ ", " \\____|", "       "),
    "D": (" ____  ", "|  _ \\ ", "| | | |", "| |_| |", "|____/ ", "       "),
    "E": (" _____ ", "| ____|", "|  _|  ", "| |___ ", "|_____|", "       "),
    "F": (" _____ ", "|  ___|", "| |_   ", "|  _|  ", "|_|    ", "       "),
    "G": ("  ____ ", " / ___|", "| |  _ ", "| |_| |", " \\____|", "       "),
    "H": (" _   _ ", "| | | |", "| |_| |", "|  _  |", "| | | |", "|_| |_|"),
    "I": (" ___ ", "|_ _|", " | | ", " | | ", "|___|", "     "),
    "J": ("     _ ", "    | |", " _  | |", "| |_| |", " \\___/ ", "       "),
    "K": (" _  __", "| |/ /", "| ' / ", "| . \\ ", "|_|\\_\\", "      "),
    "L": (" _     ", "| |    ", "| |    ", "| |___ ", "|_____|", "       "),
    "M": (" __  __ ", "|  \\/  |", "| |\\/| |", "| |  | |", "|_|  |_|", "        "),
    "N": (" _   _ ", "| \\ | |", "|  \\| |", "| |\\  |", "|_| \\_|", "       "),
    "O": ("  ___  ", " / _ \\ ", "| | | |", "| |_| |", " \\___/ ", "       "),
    "P": (" ____  ", "|  _ \\ ", "| |_) |", "|  __/ ", "|_|    ", "       "),
    "Q": ("  ___  ", " / _ \\ ", "| | | |", "| |_| |", " \\__\\_\\", "       "),
    "R": (" ____  ", "|  _ \\ ", "| |_) |", "|  _ < ", "|_| \\_\\", "       "),
    "S": (" ____  ", "/ ___| ", "\\___ \\ ", " ___) |", "|____/ ", "       "),
    "T": (" _____ ", "|_   _|", "  | |  ", "  | |  ", "  |_|  ", "       "),
    "U": (" _   _ ", "| | | |", "| | | |", "| |_| |", " \\___/ ", "       "),
    "V": ("__     __", "\\ \\   / /", " \\ \\ / / ", "  \\ V /  ", "   \\_/   ", "         "),
    "W": (
        "__        __",
        "\\ \\      / /",
        " \\ \\ /\\ / / ",
        "  \\ V  V /  ",
        "   \\_/\\_/   ",
        "            ",
    ),
    "X": ("__  __", "\\ \\/ /", " \\  / ", " /  \\ ", "/_/\\_\\", "      "),
    "Y": ("__   __", "\\ \\ / /", " \\ V / ", "  | |  ", "  |_|  ", "       "),
    "Z": (" _____", "|__  /", "  / / ", " / /_ ", "/____|", "      "),
    " ": ("   ", "   ", "   ", "   ", "   ", "   "),
    "!": (" _ ", "| |", "| |", "|_|", "(_)", "   "),
    ".": ("   ", "   ", "   ", " _ ", "(_)", "   "),
    "0": ("  ___  ", " / _ \\ ", "| | | |", "| |_| |", " \\___/ ", "       "),
    "1": (" _ ", "/ |", "| |", "| |", "|_|", "   "),
    "2": (" ____  ", "|___ \\ ", "  __) |", " / __/ ", "|_____|", "       "),
    "3": (" _____ ", "|___ / ", "  |_ \\ ", " ___) |", "|____/ ", "       "),
}


def _figlet(args: list[str], ctx: ProgramContext) -> str:
    text = " ".join(args) or "Hello"
    rows = ["" for _ in range(6)]
    for char in text.upper():
        glyph = _FIGLET_FONT.get(char, _FIGLET_FONT[" "])
        for i in range(6):
            rows[i] += glyph[i]
    return "\n".join(rows)


def _sl(args: list[str], ctx: ProgramContext) -> str:
    return """
      ====        ________                ___________
  _D _|  |_______/        \\__I_I_____===__|_________|
   |(_)---  |   H\\________/ |   |        =|___ ___|
   /     |  |   H  |  |     |   |         ||_| |_||
  |      |  |   H  |__--------------------| [___] |
  | ________|___H__/__|_____/[][]~\\_______|       |
  |/ |   |-----------I_____I [][] []  D   |=======|_
__/ =| o |=-~~\\  /~~\\  /~~\\  /~~\\ ____Y___________|__
 |/-=|___|=    ||    ||    ||    |_____/~\\___/
  \\_/      \\O=====O=====O=====O_/      \\_/"""


PROGRAMS: dict[str, Program] = {
    "btop": _btop,
    "vim": _vim,
    "nano": _nano,
    "neovim": _neovim,
    "git": _git,
    "nodejs": _node,
    "python3": _python,
    "ruby": lambda args, ctx: "irb(main):001:0> ",
    "tmux": _tmux,
    "tree": _tree,
    "ncdu": _ncdu,
    "fzf": _fzf,
    "jq": _jq,
    "docker": _docker,
    "nginx": _nginx,
    "redis": _redis,
    "ffmpeg": _ffmpeg,
    "cmatrix": _cmatrix,
    "cowsay": _cowsay,
    "figlet": _figlet,
    "sl": _sl,
}


def run_program(package: InstalledPackage, args: list[str], ctx: ProgramContext) -> str:
    """Return the simulated output of running an installed package."""
    program = PROGRAMS.get(package.name)
    if program is not None:
        return program(args, ctx)
    return (
        f"{package.name} {package.version}\n{package.description}\n\n"
        f"Run '{package.name} --help' for usage information."
    )
