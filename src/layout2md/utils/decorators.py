#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/utils/decorators.py
"""Utility decorators for layout2md.

This module provides the dependency guard used by optional page sources
and a DEBUG-level timing helper for the conversion pipeline.

"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from layout2md.exceptions import DependencyError
from layout2md.utils.packages import inspect_dependency


def requires_dependencies(converter_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required dependencies and versions before function execution.

    Parameters
    ----------
    converter_name : str
        Name of the component (e.g., "pdf"). This appears in error messages.
    packages : list of tuple
        Required packages as (install_name, import_name, version_spec) tuples where:
        - install_name: Package name for pip install (e.g., "pymupdf")
        - import_name: Module name for import statement (e.g., "fitz")
        - version_spec: Version requirement (e.g., ">=1.26.4" or "" for any version)

    Returns
    -------
    Callable
        Decorated function that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package is missing or has an incompatible version.

    Examples
    --------
        >>> @requires_dependencies("pdf", [("pymupdf", "fitz", ">=1.26.4")])
        ... def iter_pages(document):
        ...     import fitz
        ...     # page extraction here

    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            statuses = [inspect_dependency(*package) for package in packages]
            missing = [(s.install_name, s.version_spec) for s in statuses if s.is_missing]
            version_mismatches = [
                (s.install_name, s.version_spec, s.installed_version or "unknown")
                for s in statuses
                if not s.is_missing and not s.satisfies_spec
            ]
            original_error = next((s.import_error for s in statuses if s.is_missing), None)

            if missing or version_mismatches:
                raise DependencyError(
                    converter_name=converter_name,
                    missing_packages=missing,
                    version_mismatches=version_mismatches,
                    original_import_error=original_error,
                ) from original_error

            return func(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "Conversion")

    Examples
    --------
        >>> with debug_timer(logger, "Conversion"):
        ...     markdown = to_markdown(pages)
        ... # Logs: "Conversion completed in 0.12s" at DEBUG level

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
