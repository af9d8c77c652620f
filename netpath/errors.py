"""Exceptions raised by netpath operations.

Sub-probe failures during a speed test are not exceptions; they are
reported as zero-valued metrics.
"""


class NetpathError(Exception):
    """Base exception for netpath errors."""

    pass


class EnumerationError(NetpathError):
    """Listing the host's network interfaces failed."""

    pass


class InterfaceNotFoundError(EnumerationError):
    """Raised when a named interface is not present on the host."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Network interface not found: {name}")


class ClassificationError(NetpathError):
    """Filtering interfaces failed because enumeration failed."""

    pass


class TestError(NetpathError):
    """The speed test could not read the system clock."""

    __test__ = False
