"""The seeded root filesystem every session boots with.

A fresh terminal does not start from an empty disk.  It starts from a
small but believable Linux layout (a home directory with documents and
dotfiles, a few files under ``/etc`` and ``/var/log``, and the usual
empty top-level directories) so commands like ``ls``, ``cat`` and
``grep`` have something to show from the first keystroke.
"""

from nexus_shell.fs.filesystem import FileSystem

# Directories created in order (parents before children).
_DIRECTORIES: tuple[str, ...] = (
    "/home",
    "/home/user",
    "/home/user/Documents",
    "/home/user/Downloads",
    "/home/user/Music",
    "/home/user/Pictures",
    "/home/user/Videos",
    "/home/user/Desktop",
    "/home/user/.ssh",
    "/etc",
    "/var",
    "/var/log",
    "/var/tmp",
    "/usr",
    "/usr/bin",
    "/usr/local",
    "/usr/local/bin",
    "/usr/share",
    "/tmp",
    "/root",
    "/bin",
    "/dev",
    "/proc",
)

_BASHRC = """# ~/.bashrc: executed by bash for interactive shells

export PATH=$PATH:/usr/local/bin
alias ll='ls -la'
alias cls='clear'"""

_PROFILE = """# ~/.profile: executed by login shells

if [ -n "$BASH_VERSION" ]; then
    if [ -f "$HOME/.bashrc" ]; then
        . "$HOME/.bashrc"
    fi
fi"""

# (path, content, permissions, reported size)
_FILES: tuple[tuple[str, str, str, int], ...] = (
    (
        "/home/user/Documents/report.txt",
        "Quarterly report Q4 2025\n\nSales: $1.2M\nExpenses: $800K\nProfit: $400K",
        "-rw-r--r--",
        58,
    ),
    (
        "/home/user/Documents/notes.md",
        "# Meeting Notes\n\n- Project deadline: Friday\n- Review code changes\n"
        "- Update documentation",
        "-rw-r--r--",
        89,
    ),
    (
        "/home/user/Downloads/installer.sh",
        "#!/bin/bash\necho 'Installing...'",
        "-rwxr-xr-x",
        32,
    ),
    (
        "/home/user/Downloads/data.csv",
        "name,age,city\nAlice,30,NYC\nBob,25,LA\nCharlie,35,Chicago",
        "-rw-r--r--",
        52,
    ),
    ("/home/user/Pictures/photo.jpg", "[Binary image data]", "-rw-r--r--", 2048576),
    (
        "/home/user/readme.txt",
        "Welcome to NexusOS Terminal!\nType 'help' for available commands.\n\n"
        "This is a simulated Linux environment.",
        "-rw-r--r--",
        95,
    ),
    (
        "/home/user/notes.txt",
        "My personal notes:\n- Learn Linux commands\n- Practice shell scripting\n"
        "- Build cool projects",
        "-rw-r--r--",
        88,
    ),
    ("/home/user/.bashrc", _BASHRC, "-rw-r--r--", 124),
    ("/home/user/.profile", _PROFILE, "-rw-r--r--", 145),
    ("/home/user/.ssh/known_hosts", "github.com ssh-rsa AAAAB3...", "-rw-------", 256),
    (
        "/etc/passwd",
        "root:x:0:0:root:/root:/bin/bash\nuser:x:1000:1000:User:/home/user:/bin/bash",
        "-rw-r--r--",
        74,
    ),
    ("/etc/hostname", "nexusos", "-rw-r--r--", 7),
    (
        "/etc/hosts",
        "127.0.0.1   localhost\n::1         localhost\n127.0.1.1   nexusos",
        "-rw-r--r--",
        58,
    ),
    (
        "/etc/os-release",
        'NAME="NexusOS"\nVERSION="2.1.1"\nID=nexusos\nPRETTY_NAME="NexusOS 2.1.1"',
        "-rw-r--r--",
        68,
    ),
    (
        "/var/log/syslog",
        "Jan 15 10:00:00 nexusos systemd[1]: Started NexusOS\n"
        "Jan 15 10:00:01 nexusos kernel: All systems operational",
        "-rw-r-----",
        108,
    ),
    (
        "/var/log/auth.log",
        "Jan 15 10:00:00 nexusos login: User logged in",
        "-rw-r-----",
        45,
    ),
)


def build_filesystem() -> FileSystem:
    """Create a filesystem populated with the standard session layout."""
    fs = FileSystem()
    for directory in _DIRECTORIES:
        fs.create_dir(directory)
    for path, content, permissions, size in _FILES:
        fs.create_file(path, content, permissions=permissions, size=size)
    return fs
