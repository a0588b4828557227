"""Package management: the catalog, the installed registry and ``apt``."""

from nexus_shell.packages.catalog import (
    DEFAULT_CATALOG,
    INITIAL_INSTALLED,
    CatalogEntry,
    InstalledPackage,
)
from nexus_shell.packages.programs import ProgramContext, run_program
from nexus_shell.packages.registry import (
    InstallPlan,
    PackageManager,
    PackageRegistry,
    size_in_kb,
)

__all__ = [
    "DEFAULT_CATALOG",
    "INITIAL_INSTALLED",
    "CatalogEntry",
    "InstallPlan",
    "InstalledPackage",
    "PackageManager",
    "PackageRegistry",
    "ProgramContext",
    "run_program",
    "size_in_kb",
]
