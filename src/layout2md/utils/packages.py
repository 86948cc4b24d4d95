#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/utils/packages.py
"""Inspection of optional page-source dependencies.

A dependency is described by its distribution name (what pip installs),
its import name and an optional version specifier. ``inspect_dependency``
imports the module and checks the installed distribution against the
specifier, reporting the result as a ``DependencyStatus``.

"""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from importlib import metadata
from typing import Optional

from packaging.specifiers import SpecifierSet
from packaging.version import Version

__all__ = ["DependencyStatus", "get_package_version", "inspect_dependency"]


def get_package_version(distribution: str) -> Optional[str]:
    """Return the installed version of a distribution, or None.

    Parameters
    ----------
    distribution : str
        Distribution name (e.g. "pymupdf", not "fitz")

    """
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return None


@dataclass(frozen=True)
class DependencyStatus:
    """Result of checking one optional dependency.

    Attributes
    ----------
    install_name : str
        Distribution name used in the pip hint
    version_spec : str
        Required version specifier, empty for any version
    installed_version : str or None
        Installed distribution version when known
    import_error : ImportError or None
        The error raised while importing the module, if any

    """

    install_name: str
    version_spec: str = ""
    installed_version: Optional[str] = None
    import_error: Optional[ImportError] = None

    @property
    def is_missing(self) -> bool:
        return self.import_error is not None

    @property
    def satisfies_spec(self) -> bool:
        if not self.version_spec:
            return True
        if self.installed_version is None:
            return False
        return Version(self.installed_version) in SpecifierSet(self.version_spec)


def inspect_dependency(install_name: str, import_name: str, version_spec: str = "") -> DependencyStatus:
    """Import a dependency and compare its version against ``version_spec``.

    Parameters
    ----------
    install_name : str
        Distribution name (e.g. "pymupdf")
    import_name : str
        Module to import (e.g. "fitz")
    version_spec : str, default ""
        Version requirement such as ">=1.26.4"

    Returns
    -------
    DependencyStatus
        Import outcome and installed version

    """
    try:
        importlib.import_module(import_name)
    except ImportError as exc:
        return DependencyStatus(install_name, version_spec, import_error=exc)
    return DependencyStatus(install_name, version_spec, installed_version=get_package_version(install_name))
