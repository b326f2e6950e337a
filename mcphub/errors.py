# MCP Hub Errors
# Exception taxonomy shared by the sync engine and the CLI

from pathlib import Path


class HubError(Exception):
    """Base class for all hub errors."""


class ConfigError(HubError):
    """Hub or environment configuration is missing or invalid.

    Fatal to the whole run: raised before any partial result exists.
    """


class LinkError(HubError):
    """Filesystem denial or inconsistency while creating or validating a link.

    Scoped to a single item or target, never fatal to a run.
    """

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class ProfileError(HubError):
    """A persisted target profile could not be read or written."""

    def __init__(self, message: str, target: str | None = None):
        super().__init__(message)
        self.target = target


class ReportError(HubError):
    """Sync report artifacts could not be written."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path
