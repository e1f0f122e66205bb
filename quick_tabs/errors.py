"""Exception hierarchy.

Discovery never lets these escape to callers; stores raise them
internally while parsing and convert them to "absent" results.
"""


class QuickTabsError(Exception):
    """Base class for application errors."""


class StoreError(QuickTabsError):
    """A persisted JSON file could not be read, parsed or written."""

    def __init__(self, path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
