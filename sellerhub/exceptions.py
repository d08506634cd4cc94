"""
Exception Hierarchy.

Every failure raised by the remote source or the local cache derives from
:class:`SellerHubError`.  The repository layer catches these at its
boundary, logs them, and converts them into ``Error`` results; callers of
the repository never see them.

::

    SellerHubError
    ├── RemoteSourceError
    │   ├── TransportError     (connectivity / IO, offline mode)
    │   └── UnexpectedError    (anything else the remote source raised)
    └── LocalCacheError        (SQLite failure in the on-device cache)
"""

from __future__ import annotations


class SellerHubError(Exception):
    """Base class for all data-access failures."""


class RemoteSourceError(SellerHubError):
    """A call to the remote seller API failed."""

    def __init__(self, message: str, *, operation: str = "") -> None:
        super().__init__(message)
        self.operation: str = operation


class TransportError(RemoteSourceError):
    """Connectivity failure: network unreachable, timeout, or offline mode."""


class UnexpectedError(RemoteSourceError):
    """The remote source failed for a reason other than connectivity."""


class LocalCacheError(SellerHubError):
    """The on-device SQLite cache rejected a read or write."""
