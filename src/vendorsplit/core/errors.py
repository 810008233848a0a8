class VendorSplitError(Exception):
    """Base exception for vendorsplit."""


class ConfigError(VendorSplitError):
    """Raised when configuration is invalid."""


class SnapshotUnavailable(VendorSplitError):
    """Raised when the order snapshot or product ownership map cannot be obtained."""


class ReportTimeout(VendorSplitError):
    """Raised when a report request runs past its configured timeout."""


class InvalidRequest(VendorSplitError, ValueError):
    """Raised when a report request names an unknown granularity or an unusable window."""


class UnknownSource(VendorSplitError, LookupError):
    """Raised when no snapshot source is registered under the requested name."""
