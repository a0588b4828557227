"""The package catalog: everything ``apt`` knows how to install.

Each entry mirrors a line of a real Debian ``Packages`` index: a name, a
version string, a one-line description, a download size label and the
package's **direct** dependencies.  Dependencies of dependencies are
deliberately not followed by the installer; see ``PackageManager``.

``INITIAL_INSTALLED`` is the base system every session starts with.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogEntry:
    """An installable package definition."""

    name: str
    version: str
    description: str
    size_label: str
    dependencies: tuple[str, ...] = ()


@dataclass(frozen=True)
class InstalledPackage:
    """A record in the installed registry (no dependency list retained)."""

    name: str
    version: str
    description: str
    size_label: str


def _entry(name: str, version: str, description: str, size: str, *deps: str) -> CatalogEntry:
    return CatalogEntry(name, version, description, size, tuple(deps))


_ENTRIES: tuple[CatalogEntry, ...] = (
    # Editors
    _entry("vim", "2:8.2.3995-1ubuntu2", "Vi IMproved - enhanced vi editor", "1,806 kB",
           "libncurses6", "vim-runtime"),
    _entry("vim-runtime", "2:8.2.3995-1ubuntu2", "Vi IMproved - Runtime files", "6,789 kB"),
    _entry("nano", "6.2-1", "Small, friendly text editor inspired by Pico", "280 kB"),
    _entry("neovim", "0.6.1-3", "Heavily refactored vim fork", "2,345 kB", "libncurses6"),
    _entry("emacs", "1:27.1+1-3ubuntu5", "GNU Emacs editor (metapackage)", "45,678 kB"),
    _entry("micro", "2.0.10-1", "Modern and intuitive terminal-based text editor", "9,234 kB"),
    # Version control
    _entry("git", "1:2.34.1-1ubuntu1", "Fast, scalable, distributed revision control system",
           "4,567 kB", "libcurl4", "libssl1.1"),
    _entry("git-lfs", "3.0.2-1", "Git extension for versioning large files", "3,456 kB", "git"),
    _entry("subversion", "1.14.1-3ubuntu0.1", "Advanced version control system", "5,678 kB"),
    _entry("mercurial", "6.0-1", "Easy-to-use, scalable distributed version control system",
           "2,345 kB"),
    # Network tools
    _entry("curl", "7.81.0-1ubuntu1.7", "Command line tool for transferring data with URL syntax",
           "227 kB", "libcurl4"),
    _entry("wget", "1.21.2-2ubuntu1", "Retrieves files from the web", "345 kB"),
    _entry("net-tools", "1.60+git20181103.0eebece-1ubuntu5", "NET-3 networking toolkit", "234 kB"),
    _entry("netcat", "1.218-4ubuntu1", "TCP/IP swiss army knife", "45 kB"),
    _entry("nmap", "7.91+dfsg1+really7.80+dfsg1-2ubuntu0.1", "The Network Mapper", "4,567 kB"),
    _entry("tcpdump", "4.99.1-3ubuntu0.1", "Command-line network traffic analyzer", "456 kB"),
    _entry("traceroute", "1:2.1.0-2",
           "Traces the route taken by packets over an IPv4/IPv6 network", "45 kB"),
    _entry("dnsutils", "1:9.18.1-1ubuntu1.3", "Clients provided with BIND 9", "234 kB"),
    _entry("openssh-client", "1:8.9p1-3ubuntu0.1", "Secure shell (SSH) client", "945 kB"),
    _entry("openssh-server", "1:8.9p1-3ubuntu0.1", "Secure shell (SSH) server", "456 kB"),
    # System monitoring
    _entry("htop", "3.0.5-7build2", "Interactive processes viewer", "123 kB", "libncurses6"),
    _entry("btop", "1.2.13-1", "Modern and colorful command line resource monitor", "2,345 kB"),
    _entry("glances", "3.2.4.2+dfsg-1", "Curses-based monitoring tool", "567 kB", "python3"),
    _entry("iotop", "0.6-24-g733f3f8-1.1", "Simple top-like I/O monitor", "45 kB"),
    _entry("lsof", "4.93.2+dfsg-1.1build2", "Utility to list open files", "234 kB"),
    _entry("strace", "5.16-0ubuntu3", "System call tracer", "567 kB"),
    # Languages
    _entry("python3", "3.10.6-1~22.04", "Interactive high-level object-oriented language",
           "567 kB"),
    _entry("python3-pip", "22.0.2+dfsg-1", "Python package installer", "1,345 kB", "python3"),
    _entry("python3-venv", "3.10.6-1~22.04", "Venv module for python3", "12 kB", "python3"),
    _entry("nodejs", "18.17.1-1nodesource1", "Evented I/O for V8 JavaScript", "28,456 kB"),
    _entry("npm", "9.6.7+ds1-1", "Package manager for Node.js", "4,567 kB", "nodejs"),
    _entry("ruby", "1:3.0~exp1", "Interpreter of object-oriented scripting language Ruby",
           "123 kB"),
    _entry("golang", "2:1.18~0ubuntu1", "Go programming language compiler", "45,678 kB"),
    _entry("rustc", "1.59.0+dfsg1-1~ubuntu2", "Rust systems programming language", "23,456 kB"),
    _entry("cargo", "0.60.0ubuntu1-0ubuntu1", "Rust package manager", "8,901 kB", "rustc"),
    _entry("openjdk-17-jdk", "17.0.5+8-2ubuntu1~22.04", "OpenJDK 17 Development Kit",
           "123,456 kB"),
    _entry("php", "2:8.1+92ubuntu1", "Server-side HTML embedded scripting language", "12 kB"),
    _entry("perl", "5.34.0-3ubuntu1.1", "Larry Wall's Practical Extraction and Report Language",
           "567 kB"),
    # Build tools
    _entry("build-essential", "12.9ubuntu3", "Informational list of build-essential packages",
           "23 kB", "gcc", "g++", "make", "libc6-dev"),
    _entry("gcc", "4:11.2.0-1ubuntu1", "GNU C compiler", "45 kB"),
    _entry("g++", "4:11.2.0-1ubuntu1", "GNU C++ compiler", "45 kB"),
    _entry("make", "4.3-4.1build1", "Utility for directing compilation", "234 kB"),
    _entry("cmake", "3.22.1-1ubuntu1", "Cross-platform make system", "8,901 kB"),
    _entry("clang", "1:14.0-55~exp2", "C, C++ and Objective-C compiler", "23,456 kB"),
    # Databases
    _entry("postgresql", "14+238", "Object-relational SQL database", "67 kB"),
    _entry("mysql-server", "8.0.32-0ubuntu0.22.04.2", "MySQL database server", "23,456 kB"),
    _entry("sqlite3", "3.37.2-2ubuntu0.1", "Command line interface for SQLite 3", "234 kB"),
    _entry("redis", "5:6.0.16-1ubuntu1", "Persistent key-value database", "1,234 kB"),
    _entry("mongodb", "6.0.4", "Document-oriented database", "67,890 kB"),
    # Web servers
    _entry("nginx", "1.18.0-6ubuntu14.3", "Small, powerful, scalable web/proxy server",
           "1,234 kB"),
    _entry("apache2", "2.4.52-1ubuntu4.3", "Apache HTTP Server", "2,345 kB"),
    _entry("caddy", "2.6.2-1", "Fast, multi-platform web server with automatic HTTPS",
           "23,456 kB"),
    # Containers
    _entry("docker", "20.10.21-0ubuntu1~22.04.2", "Linux container runtime", "45,678 kB"),
    _entry("docker-compose", "1.29.2-1", "Compose multi-container Docker applications",
           "2,345 kB", "docker"),
    _entry("podman", "3.4.4+ds1-1ubuntu1", "Engine to run OCI-based containers in Pods",
           "23,456 kB"),
    # Terminal utilities
    _entry("tmux", "3.2a-4ubuntu0.1", "Terminal multiplexer", "567 kB", "libncurses6"),
    _entry("screen", "4.9.0-1", "Terminal multiplexer with VT100/ANSI terminal emulation",
           "678 kB"),
    _entry("tree", "2.0.2-1", "Displays an indented directory tree, in color", "56 kB"),
    _entry("ncdu", "1.15.1-1", "NCurses disk usage viewer", "89 kB"),
    _entry("fzf", "0.29.0-1", "General-purpose command-line fuzzy finder", "1,234 kB"),
    _entry("ripgrep", "13.0.0-2ubuntu0.1", "Recursively searches directories for a regex pattern",
           "2,345 kB"),
    _entry("bat", "0.19.0-3", "Cat clone with syntax highlighting and git integration",
           "3,456 kB"),
    _entry("jq", "1.6-2.1ubuntu3", "Lightweight and flexible command-line JSON processor",
           "123 kB"),
    _entry("zsh", "5.8.1-1", "Shell with lots of features", "2,345 kB"),
    _entry("fish", "3.3.1+ds-3", "Friendly interactive shell", "3,456 kB"),
    # Archives
    _entry("zip", "3.0-12build2", "Archiver for .zip files", "234 kB"),
    _entry("unzip", "6.0-26ubuntu3.1", "De-archiver for .zip files", "176 kB"),
    _entry("p7zip-full", "16.02+dfsg-8", "7z and 7za file archivers with high compression ratio",
           "1,234 kB"),
    _entry("xz-utils", "5.2.5-2ubuntu1", "XZ-format compression utilities", "123 kB"),
    _entry("zstd", "1.4.8+dfsg-3build1", "Fast lossless compression algorithm", "456 kB"),
    # Media
    _entry("ffmpeg", "7:4.4.2-0ubuntu0.22.04.1",
           "Tools for transcoding, streaming and playing multimedia", "2,345 kB"),
    _entry("imagemagick", "8:6.9.11.60+dfsg-1.3ubuntu0.22.04.1", "Image manipulation programs",
           "234 kB"),
    _entry("vlc", "3.0.16-1build7", "Multimedia player and streamer", "12,345 kB"),
    # Security
    _entry("openssl", "3.0.2-0ubuntu1.7", "Secure Sockets Layer toolkit", "1,234 kB"),
    _entry("gnupg", "2.2.27-3ubuntu2.1", "GNU privacy guard", "567 kB"),
    _entry("fail2ban", "0.11.2-6", "Ban hosts that cause multiple authentication errors",
           "456 kB"),
    _entry("ufw", "0.36.1-4build1", "Program for managing a Netfilter firewall", "234 kB"),
    # Libraries
    _entry("libncurses6", "6.3-2", "Shared libraries for terminal handling", "345 kB"),
    _entry("libcurl4", "7.81.0-1ubuntu1.7", "Easy-to-use client-side URL transfer library",
           "345 kB"),
    _entry("libssl1.1", "1.1.1f-1ubuntu2.16", "Secure Sockets Layer toolkit - shared libraries",
           "1,318 kB"),
    _entry("libssl3", "3.0.2-0ubuntu1.7", "Secure Sockets Layer toolkit - shared libraries",
           "1,234 kB"),
    _entry("libc6-dev", "2.35-0ubuntu3.1", "GNU C Library: Development Libraries and Header Files",
           "2,345 kB"),
    _entry("zlib1g", "1:1.2.11.dfsg-2ubuntu9.2", "Compression library - runtime", "67 kB"),
    # Fun and misc
    _entry("neofetch", "7.1.0-3", "Shows Linux System Information with Distribution Logo",
           "123 kB"),
    _entry("cowsay", "3.03+dfsg2-8", "Configurable talking cow", "23 kB"),
    _entry("fortune", "1:1.99.1-7build1", "Print a random, hopefully interesting, adage",
           "234 kB"),
    _entry("figlet", "2.2.5-3", "Make large character ASCII banners", "567 kB"),
    _entry("sl", "5.02-1build1", "Correct you if you type `sl` by mistake", "23 kB"),
    _entry("cmatrix", "2.0-3", "Simulates the display from The Matrix", "34 kB"),
    _entry("tldr", "0.5-2", "Simplified and community-driven man pages", "23 kB"),
    _entry("mlocate", "1.1.15-1ubuntu2", "Quickly find files on the filesystem based on their name",
           "67 kB"),
    _entry("rsync", "3.2.3-8ubuntu3.1", "Fast, versatile, remote (and local) file-copying tool",
           "456 kB"),
    _entry("ca-certificates", "20211016ubuntu0.22.04.1", "Common CA certificates", "234 kB"),
)

DEFAULT_CATALOG: dict[str, CatalogEntry] = {entry.name: entry for entry in _ENTRIES}

INITIAL_INSTALLED: tuple[InstalledPackage, ...] = (
    InstalledPackage("bash", "5.0-6", "GNU Bourne Again SHell", "1,234 kB"),
    InstalledPackage("coreutils", "8.30-3", "GNU core utilities", "6,789 kB"),
    InstalledPackage("grep", "3.4-1", "GNU grep pattern matching utility", "456 kB"),
    InstalledPackage("sed", "4.7-1", "GNU stream editor", "234 kB"),
    InstalledPackage("tar", "1.30-6", "GNU tar archiving utility", "567 kB"),
    InstalledPackage("gzip", "1.10-0", "GNU compression utility", "123 kB"),
)
