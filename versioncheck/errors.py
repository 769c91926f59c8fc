"""Exceptions raised by versioncheck."""

from typing import Optional


class VersionCheckError(Exception):
    """Base class for versioncheck errors."""
    pass


class NotFoundError(VersionCheckError):
    """
    The runtime environment has no usable record for a deployment.

    Raised when the metadata is missing or corrupted. This is an
    environmental condition, not a programming error.
    """

    def __init__(self, deployment_id: str, source: str, reason: Optional[str] = None):
        self.deployment_id = deployment_id
        self.source = source
        self.reason = reason
        message = f"No {source} record for deployment '{deployment_id}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
