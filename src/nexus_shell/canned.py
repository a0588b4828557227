"""Fixed text for commands that describe a machine that does not exist.

``df``, ``free``, ``ifconfig``, ``ps aux`` and friends have no real
system to inspect, so they print the same believable snapshot every
time.  Manual pages and the ``help`` index live here too.
"""

BANNER = "NexusOS Terminal v1.0.0"
BANNER_HINT = "Type 'help' for available commands."

HELP_CATEGORIES: dict[str, tuple[str, ...]] = {
    "File Operations": (
        "ls", "cd", "pwd", "cat", "head", "tail", "touch", "mkdir", "rm", "rmdir",
        "cp", "mv", "find", "locate", "file",
    ),
    "Text Processing": ("grep", "sed", "awk", "sort", "uniq", "wc", "cut", "tr", "diff", "tee"),
    "System Info": (
        "uname", "hostname", "uptime", "date", "cal", "whoami", "id", "groups", "w", "who", "last",
    ),
    "Process Management": ("ps", "top", "htop", "kill", "killall", "jobs", "bg", "fg", "nohup"),
    "Disk & Memory": ("df", "du", "free", "mount", "umount"),
    "Network": (
        "ping", "ifconfig", "ip", "netstat", "ss", "curl", "wget", "host", "dig", "nslookup",
    ),
    "Permissions": ("chmod", "chown", "chgrp", "umask"),
    "Archives": ("tar", "gzip", "gunzip", "zip", "unzip"),
    "Package Management": ("apt", "apt-get", "dpkg"),
    "User Management": ("useradd", "userdel", "passwd", "su", "sudo"),
    "Misc": (
        "echo", "printf", "clear", "history", "alias", "unalias", "export", "unset", "env",
        "which", "whereis", "man", "info", "exit", "neofetch",
    ),
    "Remote": ("ssh", "scp", "sftp", "rsync"),
}

ADMIN_COMMANDS: tuple[str, ...] = ("users", "sysadmin", "logs", "audit", "shutdown")

PS_SHORT = """  PID TTY          TIME CMD
 1024 pts/0    00:00:00 bash
 1234 pts/0    00:00:00 ps"""

PS_AUX = """USER       PID %CPU %MEM    VSZ   RSS TTY      STAT START   TIME COMMAND
root         1  0.0  0.1 169936 11840 ?        Ss   10:00   0:01 /sbin/init
root         2  0.0  0.0      0     0 ?        S    10:00   0:00 [kthreadd]
user      1001  0.1  0.5 736532 43252 ?        Ssl  10:00   0:02 nexusos-desktop
user      1024  0.0  0.2 524288 16384 pts/0    Ss   10:00   0:00 /bin/bash
user      1156  0.0  0.1 449024  8192 pts/0    S+   10:01   0:00 terminal
user      1234  0.0  0.0  38372  3420 pts/0    R+   {now}   0:00 ps aux"""

TOP = """top - {now} up 5:00,  1 user,  load average: 0.52, 0.58, 0.59
Tasks:  89 total,   1 running,  88 sleeping,   0 stopped,   0 zombie
%Cpu(s):  2.3 us,  0.7 sy,  0.0 ni, 96.7 id,  0.3 wa,  0.0 hi,  0.0 si,  0.0 st
MiB Mem :   7976.8 total,   5234.2 free,   1842.6 used,    900.0 buff/cache
MiB Swap:   2048.0 total,   2048.0 free,      0.0 used.   5834.2 avail Mem

  PID USER      PR  NI    VIRT    RES    SHR S  %CPU  %MEM     TIME+ COMMAND
 1001 user      20   0  736532  43252  31268 S   0.3   0.5   0:02.14 nexusos-desktop
 1024 user      20   0  524288  16384  12288 S   0.0   0.2   0:00.52 bash
    1 root      20   0  169936  11840   8428 S   0.0   0.1   0:01.23 init

Press 'q' to exit (simulated)"""

HTOP = """[htop simulation - Interactive process viewer]

  CPU[||||||||||||                    28.3%]   Tasks: 89, 412 thr; 1 running
  Mem[||||||||||||||||||          4.2G/7.8G]   Load average: 0.52 0.58 0.59
  Swp[                              0K/2.0G]   Uptime: 05:00:00

  PID USER      PRI  NI  VIRT   RES   SHR S CPU% MEM%   TIME+  Command
 1001 user       20   0  719M 42252K 30524K S  0.3  0.5  0:02.14 nexusos-desktop
 1024 user       20   0  512M 16384K 12288K S  0.0  0.2  0:00.52 /bin/bash
    1 root       20   0  166M 11840K  8428K S  0.0  0.1  0:01.23 /sbin/init

F1Help  F2Setup  F3Search  F4Filter  F5Tree  F6SortBy  F7Nice  F8Nice+  F9Kill  F10Quit"""

KILL_SIGNALS = """ 1) SIGHUP       2) SIGINT       3) SIGQUIT      4) SIGILL       5) SIGTRAP
 6) SIGABRT      7) SIGBUS       8) SIGFPE       9) SIGKILL     10) SIGUSR1
11) SIGSEGV     12) SIGUSR2     13) SIGPIPE     14) SIGALRM     15) SIGTERM"""

DF_HUMAN = """Filesystem      Size  Used Avail Use% Mounted on
/dev/sda1        50G   12G   35G  26% /
tmpfs           3.9G     0  3.9G   0% /dev/shm
/dev/sda2       100G   45G   50G  48% /home"""

DF = """Filesystem     1K-blocks     Used Available Use% Mounted on
/dev/sda1       52428800 12582912  36700160  26% /
tmpfs            4096000        0   4096000   0% /dev/shm
/dev/sda2      104857600 47185920  52428800  48% /home"""

FREE_HUMAN = """              total        used        free      shared  buff/cache   available
Mem:          7.8Gi       1.8Gi       5.1Gi        64Mi       900Mi       5.7Gi
Swap:         2.0Gi          0B       2.0Gi"""

FREE = """              total        used        free      shared  buff/cache   available
Mem:        8168448     1886208     5349376       65536      932864     5856256
Swap:       2097152           0     2097152"""

MOUNT = """/dev/sda1 on / type ext4 (rw,relatime)
/dev/sda2 on /home type ext4 (rw,relatime)
tmpfs on /dev/shm type tmpfs (rw,nosuid,nodev)
proc on /proc type proc (rw,nosuid,nodev,noexec,relatime)"""

IFCONFIG = """eth0: flags=4163<UP,BROADCAST,RUNNING,MULTICAST>  mtu 1500
        inet 192.168.1.100  netmask 255.255.255.0  broadcast 192.168.1.255
        inet6 fe80::1  prefixlen 64  scopeid 0x20<link>
        ether 00:11:22:33:44:55  txqueuelen 1000  (Ethernet)
        RX packets 125432  bytes 134567890 (128.3 MiB)
        TX packets 98765  bytes 12345678 (11.7 MiB)

lo: flags=73<UP,LOOPBACK,RUNNING>  mtu 65536
        inet 127.0.0.1  netmask 255.0.0.0
        inet6 ::1  prefixlen 128  scopeid 0x10<host>
        loop  txqueuelen 1000  (Local Loopback)"""

IP_ADDR = """1: lo: <LOOPBACK,UP,LOWER_UP> mtu 65536 qdisc noqueue state UNKNOWN
    inet 127.0.0.1/8 scope host lo
    inet6 ::1/128 scope host
2: eth0: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 qdisc fq_codel state UP
    inet 192.168.1.100/24 brd 192.168.1.255 scope global eth0
    inet6 fe80::1/64 scope link"""

IP_ROUTE = """default via 192.168.1.1 dev eth0 proto dhcp metric 100
192.168.1.0/24 dev eth0 proto kernel scope link src 192.168.1.100"""

NETSTAT = """Active Internet connections (servers and established)
Proto Recv-Q Send-Q Local Address           Foreign Address         State
tcp        0      0 0.0.0.0:22              0.0.0.0:*               LISTEN
tcp        0      0 127.0.0.1:5432          0.0.0.0:*               LISTEN
tcp        0      0 192.168.1.100:22        192.168.1.50:54321      ESTABLISHED"""

SS = """Netid  State   Recv-Q  Send-Q   Local Address:Port   Peer Address:Port  Process
tcp    LISTEN  0       128          0.0.0.0:22        0.0.0.0:*
tcp    LISTEN  0       128        127.0.0.1:5432      0.0.0.0:*
tcp    ESTAB   0       0      192.168.1.100:22   192.168.1.50:54321"""

DIG = """; <<>> DiG 9.16.1-Ubuntu <<>> {domain}
;; global options: +cmd
;; Got answer:
;; ->>HEADER<<- opcode: QUERY, status: NOERROR, id: 12345
;; flags: qr rd ra; QUERY: 1, ANSWER: 1, AUTHORITY: 0, ADDITIONAL: 1

;; QUESTION SECTION:
;{domain}.                  IN      A

;; ANSWER SECTION:
{domain}.           300     IN      A       93.184.216.34

;; Query time: 24 msec
;; SERVER: 8.8.8.8#53(8.8.8.8)
;; WHEN: {now}
;; MSG SIZE  rcvd: 56"""

NSLOOKUP = """Server:         8.8.8.8
Address:        8.8.8.8#53

Non-authoritative answer:
Name:   {domain}
Address: 93.184.216.34"""

WGET = """--{now}--  {url}
Resolving {url}... 93.184.216.34
Connecting to {url}|93.184.216.34|:80... connected.
HTTP request sent, awaiting response... 200 OK
Length: 1256 (1.2K) [text/html]
Saving to: 'index.html'

index.html          100%[===================>]   1.23K  --.-KB/s    in 0s

{now} - 'index.html' saved [1256/1256]"""

SSH = """[Simulated] Connecting to {host}...
The authenticity of host '{host}' can't be established.
ED25519 key fingerprint is SHA256:xxxxxxxxxxxxxxxxxxxxxxxxxxx.
Are you sure you want to continue connecting (yes/no/[fingerprint])? yes
Warning: Permanently added '{host}' (ED25519) to the list of known hosts.
Connection simulated."""

RSYNC = """sending incremental file list
./
file1.txt
file2.txt

sent 1,234 bytes  received 89 bytes  2,646.00 bytes/sec
total size is 5,678  speedup is 4.29"""

W = """USER     TTY      FROM             LOGIN@   IDLE   JCPU   PCPU WHAT
{user:<8} pts/0    :0               10:00    0.00s  0.05s  0.00s terminal"""

NEOFETCH = """
\x1b[34m       .--.        \x1b[0m{user}@{hostname}
\x1b[34m      |o_o |       \x1b[0m-----------
\x1b[34m      |:_/ |       \x1b[33mOS:\x1b[0m NexusOS 1.0.0
\x1b[34m     //   \\ \\      \x1b[33mHost:\x1b[0m Web Browser
\x1b[34m    (|     | )     \x1b[33mKernel:\x1b[0m 1.0.0-nexus
\x1b[34m   /'\\_   _/'`\\    \x1b[33mUptime:\x1b[0m {hours} hours, {mins} mins
\x1b[34m   \\___)=(___/     \x1b[33mPackages:\x1b[0m {packages} (dpkg)
                   \x1b[33mShell:\x1b[0m bash 5.0
                   \x1b[33mTerminal:\x1b[0m NexusOS Terminal
                   \x1b[33mCPU:\x1b[0m Virtual @ Web GHz
                   \x1b[33mMemory:\x1b[0m 1842 MiB / 7976 MiB

                   \x1b[30m███\x1b[31m███\x1b[32m███\x1b[33m███\x1b[34m███\x1b[35m███\x1b[36m███\x1b[37m███\x1b[0m
"""

WHICH_PATHS: dict[str, str] = {
    "ls": "/usr/bin/ls",
    "cat": "/usr/bin/cat",
    "grep": "/usr/bin/grep",
    "bash": "/bin/bash",
    "python": "/usr/bin/python3",
    "node": "/usr/bin/node",
    "vim": "/usr/bin/vim",
    "nano": "/usr/bin/nano",
}


def _man(name: str, summary: str, synopsis: str, description: str) -> str:
    title = f"{name.upper()}(1)"
    header = f"{title:<33}User Commands{title:>33}"
    return (
        f"{header}\n\nNAME\n       {name} - {summary}\n\n"
        f"SYNOPSIS\n       {synopsis}\n\nDESCRIPTION\n{description}"
    )


MAN_PAGES: dict[str, str] = {
    "ls": _man(
        "ls",
        "list directory contents",
        "ls [OPTION]... [FILE]...",
        "       List information about the FILEs (the current directory by default).\n\n"
        "       -a, --all\n              do not ignore entries starting with .\n\n"
        "       -l     use a long listing format\n\n"
        "       -h, --human-readable\n              with -l, print sizes like 1K 234M 2G etc.",
    ),
    "cd": _man(
        "cd",
        "change directory",
        "cd [dir]",
        "       Change the current directory to dir. The default dir is HOME.",
    ),
    "cat": _man(
        "cat",
        "concatenate files and print on the standard output",
        "cat [OPTION]... [FILE]...",
        "       -n, --number\n              number all output lines",
    ),
    "grep": _man(
        "grep",
        "print lines that match patterns",
        "grep [OPTION...] PATTERNS [FILE...]",
        "       -i, --ignore-case\n              ignore case distinctions\n\n"
        "       -n, --line-number\n              prefix each line with line number\n\n"
        "       -c, --count\n              only print count of matching lines\n\n"
        "       -v, --invert-match\n              select non-matching lines",
    ),
    "chmod": _man(
        "chmod",
        "change file mode bits",
        "chmod [OPTION]... MODE[,MODE]... FILE...",
        "       Change the mode of each FILE to MODE.\n\n"
        "       MODE can be numeric (e.g., 755) or symbolic (e.g., u+x).",
    ),
    "ps": _man(
        "ps",
        "report a snapshot of the current processes",
        "ps [options]",
        "       aux    show all processes for all users\n\n"
        "       -ef    show full format listing",
    ),
    "apt": _man(
        "apt",
        "command-line interface for the package manager",
        "apt [options] command [package ...]",
        "       install   install packages and their direct dependencies\n"
        "       remove    remove packages (purge is an alias)\n"
        "       update    refresh the package index\n"
        "       upgrade   upgrade installed packages\n"
        "       list      list packages (--installed for the registry)\n"
        "       search    search names and descriptions\n"
        "       show      show package details",
    ),
}


def man_page(name: str) -> str:
    """Return the manual page for *name*, or the "no entry" text."""
    page = MAN_PAGES.get(name)
    if page is not None:
        return page
    return f"No manual entry for {name}\nSee 'help' for available commands."
