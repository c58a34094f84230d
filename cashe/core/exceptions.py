"""Exceptions raised by the outer layers of Cashé.

The aggregation engine itself never raises: unset ranges, zero totals and
missing amounts all have defined fallbacks. These errors come from loading
configuration and movement data, and from parsing CLI input.
"""


class CasheError(Exception):
    """Base class for all Cashé errors."""


class WorkspaceNotFoundError(CasheError):
    """No cashe.toml was found in the directory or any of its parents."""


class ConfigError(CasheError):
    """The workspace configuration file is unreadable or invalid."""


class MovementsLoadError(CasheError):
    """The movements file is missing, unreadable or has invalid records."""


class InvalidPeriodError(CasheError, ValueError):
    """A period or date argument could not be parsed."""
