"""Custom exceptions for ovn-daemonset.

This module defines the exception hierarchy used throughout the package
to provide meaningful error messages and proper error handling.
"""


class OvnDaemonSetError(Exception):
    """Base exception for all ovn-daemonset errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch all ovn-daemonset errors with a single
    except clause if desired.
    """

    pass


class InvalidStackConfigError(OvnDaemonSetError):
    """Raised when the networking stack configuration is invalid or inconsistent.

    This can occur when:
    - A required container image reference is missing
    - A field has the wrong type (e.g. a non-mapping node selector)
    - Label, annotation or selector values are not strings
    """

    pass


class ConfigParsingError(OvnDaemonSetError):
    """Raised when reading a stack configuration file fails.

    This can occur when:
    - The file does not exist
    - The file is not valid YAML
    - The YAML document is not a mapping
    """

    pass
