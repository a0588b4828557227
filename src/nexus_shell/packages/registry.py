"""The installed-package registry and the ``apt``/``dpkg`` state machine.

Two pieces of state cooperate here:

- **PackageRegistry**: what is installed right now.  A mutable,
  insertion-ordered map of name to ``InstalledPackage``.  It starts with
  the base system and changes only through ``apt install``/``remove``.
- **PackageManager**: the logic behind ``apt``, ``apt-get`` and
  ``dpkg``.  It consults the static catalog, plans a transaction,
  applies it to the registry and renders the familiar Debian transcript.

Dependency expansion is one level deep on purpose: installing ``git-lfs``
pulls in ``git`` but not ``git``'s own ``libcurl4``/``libssl1.1``.

Names that are not in the catalog still install.  Their version, size
and description are invented from an injectable ``random.Random`` so
tests can seed it and get stable transcripts.
"""

import random
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from nexus_shell.logging import Logger, LogLevel
from nexus_shell.packages.catalog import (
    DEFAULT_CATALOG,
    INITIAL_INSTALLED,
    CatalogEntry,
    InstalledPackage,
)

ARCHIVE_URL = "http://archive.ubuntu.com/ubuntu focal/main amd64"
_DIGITS = re.compile(r"[^0-9]")

# How many lines ``apt list`` shows before pointing at ``apt search``.
LIST_LIMIT = 20
SEARCH_LIMIT = 10

_READING_LISTS = "Reading package lists... Done\nBuilding dependency tree... Done"


def size_in_kb(size_label: str) -> int:
    """Return the numeric part of a size label like ``"1,806 kB"``."""
    digits = _DIGITS.sub("", size_label)
    return int(digits) if digits else 0


class PackageRegistry:
    """The set of installed packages, in installation order."""

    def __init__(self, initial: tuple[InstalledPackage, ...] = INITIAL_INSTALLED) -> None:
        """Create a registry holding *initial*."""
        self._installed: dict[str, InstalledPackage] = {pkg.name: pkg for pkg in initial}

    def is_installed(self, name: str) -> bool:
        """Return True if *name* is installed."""
        return name in self._installed

    def get(self, name: str) -> InstalledPackage | None:
        """Return the installed record for *name*, or None."""
        return self._installed.get(name)

    def add(self, package: InstalledPackage) -> None:
        """Record *package* as installed (replaces an existing record)."""
        self._installed[package.name] = package

    def remove(self, name: str) -> None:
        """Forget *name*.

        Raises:
            KeyError: If *name* is not installed.

        """
        del self._installed[name]

    def names(self) -> list[str]:
        """Return installed names in installation order."""
        return list(self._installed)

    def __iter__(self) -> Iterator[InstalledPackage]:
        """Iterate over installed records in installation order."""
        return iter(list(self._installed.values()))

    def __len__(self) -> int:
        """Return the number of installed packages."""
        return len(self._installed)

    def __contains__(self, name: object) -> bool:
        """Return True if *name* is installed."""
        return name in self._installed


@dataclass
class InstallPlan:
    """The packages one ``apt install`` would add.

    Attributes:
        requested: Requested names that are not installed yet.
        already_installed: Requested names that are already installed.
        dependencies: Direct dependencies to pull in, in discovery order.
        resolved: Metadata for every package in the transaction.

    """

    requested: list[str] = field(default_factory=list)  # pyright: ignore[reportUnknownVariableType]
    already_installed: list[str] = field(default_factory=list)  # pyright: ignore[reportUnknownVariableType]
    dependencies: list[str] = field(default_factory=list)  # pyright: ignore[reportUnknownVariableType]
    resolved: dict[str, CatalogEntry] = field(default_factory=dict)  # pyright: ignore[reportUnknownVariableType]

    @property
    def packages(self) -> list[str]:
        """Return dependencies followed by requested names, without repeats."""
        return list(dict.fromkeys([*self.dependencies, *self.requested]))

    @property
    def total_kb(self) -> int:
        """Return the download size of the whole transaction."""
        return sum(size_in_kb(self.resolved[name].size_label) for name in self.packages)


class PackageManager:
    """Implements ``apt``, ``apt-get`` and ``dpkg`` over a registry."""

    def __init__(
        self,
        registry: PackageRegistry | None = None,
        *,
        catalog: Mapping[str, CatalogEntry] = DEFAULT_CATALOG,
        rng: random.Random | None = None,
        logger: Logger | None = None,
        user: str = "user",
    ) -> None:
        """Create a package manager.

        Args:
            registry: The installed registry to mutate.
            catalog: Known packages and their direct dependencies.
            rng: Source for invented metadata of unknown packages.
            logger: Audit log that receives one entry per transaction.
            user: Name recorded with each audit entry.

        """
        self._registry = registry if registry is not None else PackageRegistry()
        self._catalog = catalog
        self._rng = rng or random.Random()
        self._logger = logger
        self._user = user

    @property
    def registry(self) -> PackageRegistry:
        """Return the installed registry."""
        return self._registry

    @property
    def catalog(self) -> Mapping[str, CatalogEntry]:
        """Return the package catalog."""
        return self._catalog

    def _audit(self, message: str) -> None:
        if self._logger is not None:
            self._logger.log(LogLevel.INFO, message, source="apt", user=self._user)

    # -- metadata ----------------------------------------------------------

    def package_info(self, name: str) -> CatalogEntry:
        """Return catalog metadata for *name*, inventing it when unknown."""
        entry = self._catalog.get(name)
        if entry is not None:
            return entry
        size = self._rng.randint(100, 5099)
        major = self._rng.randint(1, 10)
        minor = self._rng.randint(0, 19)
        patch = self._rng.randint(0, 9)
        return CatalogEntry(
            name=name,
            version=f"{major}.{minor}.{patch}",
            description=f"{name} - Package from Ubuntu repositories",
            size_label=f"{size:,} kB",
        )

    # -- install -----------------------------------------------------------

    def plan_install(self, names: list[str]) -> InstallPlan:
        """Work out what installing *names* would do, without changing state."""
        plan = InstallPlan()
        for name in names:
            if self._registry.is_installed(name):
                plan.already_installed.append(name)
                continue
            if name in plan.requested:
                continue
            plan.requested.append(name)
            info = plan.resolved.setdefault(name, self.package_info(name))
            for dep in info.dependencies:
                if (
                    not self._registry.is_installed(dep)
                    and dep not in plan.requested
                    and dep not in plan.dependencies
                ):
                    plan.dependencies.append(dep)
        for dep in plan.dependencies:
            if dep not in plan.resolved:
                plan.resolved[dep] = self.package_info(dep)
        return plan

    def install(self, names: list[str]) -> str:
        """Install *names* and their direct dependencies.

        Returns:
            The apt transcript for the transaction.

        """
        if not names:
            return "E: Unable to locate package"

        plan = self.plan_install(names)
        if not plan.requested:
            first = plan.already_installed[0]
            record = self._registry.get(first)
            version = record.version if record is not None else ""
            return (
                f"{_READING_LISTS}\n"
                f"{first} is already the newest version ({version}).\n"
                "0 upgraded, 0 newly installed, 0 to remove and 0 not upgraded."
            )

        packages = plan.packages
        total = plan.total_kb
        lines = [_READING_LISTS, "Reading state information... Done"]
        if plan.dependencies:
            lines.append("The following additional packages will be installed:")
            lines.append("  " + " ".join(plan.dependencies))
        lines.append("The following NEW packages will be installed:")
        lines.append("  " + " ".join(packages))
        lines.append(f"0 upgraded, {len(packages)} newly installed, 0 to remove.")
        lines.append(f"Need to get {total:,} kB of archives.")
        lines.append(
            f"After this operation, {int(total * 3.5):,} kB of additional disk space will be used."
        )
        for index, name in enumerate(packages, start=1):
            info = plan.resolved[name]
            lines.append(
                f"Get:{index} {ARCHIVE_URL} {name} amd64 {info.version} [{info.size_label}]"
            )
        lines.append(f"Fetched {total:,} kB in 2s ({total // 2:,} kB/s)")
        lines.append("Selecting previously unselected package.")
        for name in packages:
            info = plan.resolved[name]
            lines.append("(Reading database ... 123456 files and directories currently installed.)")
            lines.append(f"Preparing to unpack .../{name}_{info.version}_amd64.deb ...")
            lines.append(f"Unpacking {name} ({info.version}) ...")
            lines.append(f"Setting up {name} ({info.version}) ...")
            self._registry.add(
                InstalledPackage(
                    name=name,
                    version=info.version,
                    description=info.description,
                    size_label=info.size_label,
                )
            )
        lines.append("Processing triggers for man-db (2.9.1-1) ...")
        self._audit(f"installed {' '.join(packages)}")
        return "\n".join(lines)

    # -- remove ------------------------------------------------------------

    def remove(self, names: list[str]) -> str:
        """Remove the installed subset of *names*; unknown names are skipped."""
        if not names:
            return "E: Unable to locate package"
        to_remove = [n for n in dict.fromkeys(names) if self._registry.is_installed(n)]
        if not to_remove:
            return f"Package '{names[0]}' is not installed, so not removed"
        for name in to_remove:
            self._registry.remove(name)
        self._audit(f"removed {' '.join(to_remove)}")
        return (
            f"{_READING_LISTS}\n"
            "The following packages will be REMOVED:\n"
            f"  {' '.join(to_remove)}\n"
            f"0 upgraded, 0 newly installed, {len(to_remove)} to remove.\n"
            "Do you want to continue? [Y/n] Y\n"
            "(Reading database ... 123456 files and directories currently installed.)\n"
            f"Removing {', '.join(to_remove)} ...\n"
            "Processing triggers for man-db (2.9.1-1) ..."
        )

    # -- queries -----------------------------------------------------------

    def list_packages(self, *, installed: bool = False) -> str:
        """Render ``apt list`` (catalog head) or ``apt list --installed``."""
        if installed:
            rows = [f"{pkg.name}/{pkg.version} [installed]" for pkg in self._registry]
            return "\n".join(["Listing... Done", *rows])
        rows = [
            f"{entry.name}/{entry.version} amd64"
            for entry in list(self._catalog.values())[:LIST_LIMIT]
        ]
        return "\n".join(
            [
                "Listing... Done",
                *rows,
                "...and more. Use 'apt search <term>' to find specific packages.",
            ]
        )

    def search(self, term: str) -> str:
        """Render ``apt search``: name or description, case-insensitive."""
        if not term:
            return "E: No search term specified"
        query = term.lower()
        matches = [
            entry
            for entry in self._catalog.values()
            if query in entry.name.lower() or query in entry.description.lower()
        ]
        header = "Sorting... Done\nFull Text Search... Done"
        if not matches:
            return header
        blocks = [
            f"\x1b[32m{entry.name}\x1b[0m/{entry.version} amd64\n  {entry.description}"
            for entry in matches[:SEARCH_LIMIT]
        ]
        return header + "\n" + "\n\n".join(blocks)

    def show(self, name: str) -> str:
        """Render ``apt show`` for a catalog or installed package."""
        if not name:
            return "E: No package specified"
        info: CatalogEntry | InstalledPackage | None = self._catalog.get(name)
        if info is None:
            info = self._registry.get(name)
        if info is None:
            return f"E: Unable to locate package {name}"
        lines = [
            f"Package: {name}",
            f"Version: {info.version}",
            "Priority: optional",
            "Section: misc",
            "Maintainer: NexusOS Package Manager",
            f"Installed-Size: {size_in_kb(info.size_label) * 3} kB",
            f"Download-Size: {info.size_label}",
            f"APT-Sources: {ARCHIVE_URL} Packages",
            f"Description: {info.description}",
        ]
        if self._registry.is_installed(name):
            lines.extend(["", "Status: Installed"])
        return "\n".join(lines)

    # -- command entry points ----------------------------------------------

    def apt(self, args: list[str]) -> str:
        """Dispatch an ``apt``/``apt-get`` sub-command."""
        if not args:
            return "apt: missing command"
        sub, rest = args[0], args[1:]
        operands = [a for a in rest if not a.startswith("-")]
        match sub:
            case "update":
                return (
                    "Hit:1 http://archive.ubuntu.com/ubuntu focal InRelease\n"
                    "Hit:2 http://archive.ubuntu.com/ubuntu focal-updates InRelease\n"
                    "Hit:3 http://security.ubuntu.com/ubuntu focal-security InRelease\n"
                    f"{_READING_LISTS}\n"
                    "All packages are up to date."
                )
            case "upgrade":
                return (
                    f"{_READING_LISTS}\n"
                    "Calculating upgrade... Done\n"
                    "0 upgraded, 0 newly installed, 0 to remove and 0 not upgraded."
                )
            case "install":
                return self.install(operands)
            case "remove" | "purge":
                return self.remove(operands)
            case "list":
                return self.list_packages(installed="--installed" in rest)
            case "search":
                return self.search(rest[0] if rest else "")
            case "show":
                return self.show(rest[0] if rest else "")
            case _:
                return (
                    f"apt: command '{sub}' not found. Try: apt install, apt remove, "
                    "apt update, apt upgrade, apt search, apt list, apt show"
                )

    def dpkg(self, args: list[str]) -> str:
        """Handle ``dpkg -l`` and ``dpkg -s <pkg>``."""
        if "-l" in args:
            header = (
                "Desired=Unknown/Install/Remove/Purge/Hold\n"
                "| Status=Not/Inst/Conf-files/Unpacked/halF-conf/Half-inst/trig-aWait/Trig-pend\n"
                "|/ Err?=(none)/Reinst-required (Status,Err: uppercase=bad)\n"
                "||/ Name           Version      Architecture Description\n"
                "+++-==============-============-============-=================================="
            )
            rows = [
                f"ii  {pkg.name:<14} {pkg.version:<12} amd64        {pkg.description}"
                for pkg in self._registry
            ]
            return "\n".join([header, *rows])
        if "-s" in args:
            operands = [a for a in args if not a.startswith("-")]
            if not operands:
                return "dpkg: --status requires a package name"
            name = operands[0]
            record = self._registry.get(name)
            if record is None:
                return f"dpkg: package '{name}' is not installed"
            return "\n".join(
                [
                    f"Package: {name}",
                    "Status: install ok installed",
                    "Priority: optional",
                    "Section: misc",
                    f"Installed-Size: {size_in_kb(record.size_label) * 3}",
                    "Maintainer: NexusOS",
                    f"Version: {record.version}",
                    f"Description: {record.description}",
                ]
            )
        return "dpkg: usage: dpkg [<option> ...] <command>"
