#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/layout2md/exceptions.py
"""Custom exceptions for the layout2md library.

This module defines the exception classes raised while reconstructing
Markdown from positioned glyphs. Every stage of the pipeline reports
failures through a single ``ConversionError`` so callers only need one
``except`` clause around a conversion.

Exception Hierarchy
-------------------
- Layout2MdError (base exception)

  - ConversionError (any failure inside the reconstruction pipeline)

  - ValidationError (parameter/option validation)

  - DependencyError (missing/incompatible optional packages)

"""

from __future__ import annotations

from typing import Any


class Layout2MdError(Exception):
    """Base exception class for all layout2md-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ConversionError(Layout2MdError):
    """Exception raised when any pipeline stage fails.

    Metrics estimation, grouping, table detection, classification,
    rendering and post-processing all report failures through this class.
    A failure aborts the whole document; no partial output is returned.

    Parameters
    ----------
    message : str
        Description of the failure
    page_number : int, optional
        1-based number of the page being processed, or None when the failure
        happened in the whole-document post-processing pass
    stage : str, optional
        Name of the pipeline stage that failed
    original_error : Exception, optional
        The underlying exception

    Attributes
    ----------
    page_number : int or None
        Page on which the failure occurred
    stage : str or None
        Failing stage name

    """

    def __init__(
        self,
        message: str,
        page_number: int | None = None,
        stage: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the conversion error with page and stage details."""
        super().__init__(message, original_error=original_error)
        self.page_number = page_number
        self.stage = stage


class ValidationError(Layout2MdError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class DependencyError(Layout2MdError):
    """Exception raised when an optional dependency is not available.

    Parameters
    ----------
    converter_name : str
        Name of the component requiring dependencies (e.g. "pdf")
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_import_error : ImportError, optional
        The import failure that triggered this error

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        if message is None:
            message_parts = []
            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{converter_name.upper()} support requires the following packages: {pkg_list}")
            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{converter_name.upper()} support has version mismatches: {mismatch_str}")
            message = "\n".join(message_parts)

            all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
            if all_packages:
                packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message, original_error=original_import_error)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.original_import_error = original_import_error
