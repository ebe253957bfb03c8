"""Exceptions raised by fwmon."""

from __future__ import annotations


class FwmonError(Exception):
    """Base class for fatal fwmon errors."""


class EmptyReferenceError(FwmonError):
    """The reference table produced zero valid entries."""


class SourceUnavailableError(FwmonError):
    """Reference rows or device records could not be fetched."""


class NotificationError(FwmonError):
    """The outdated-device report could not be delivered."""


class MalformedVersionWarning(UserWarning):
    """A version string had no numeric content and was compared as zero."""
