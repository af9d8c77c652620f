"""Constants for netpath models and probes."""

import sys
from enum import auto

if sys.version_info >= (3, 11):  # noqa: UP036
    from enum import StrEnum
else:
    from backports.strenum import StrEnum  # noqa: UP035


class ProbeKind(StrEnum):
    """Kinds of active network probes."""

    REACHABILITY = auto()
    PING = auto()
    DOWNLOAD = auto()
    UPLOAD = auto()


class ProbeStatus(StrEnum):
    """Outcome of a single speed test sub-probe."""

    SUCCEEDED = auto()
    FAILED = auto()


# Reachability: two public DNS resolvers, TCP port 53
DEFAULT_REACHABILITY_TARGETS = (("8.8.8.8", 53), ("1.1.1.1", 53))
DEFAULT_REACHABILITY_TIMEOUT = 3.0

# Speed test endpoints
DEFAULT_PING_URL = "https://www.google.com/generate_204"
DEFAULT_DOWNLOAD_URL = "https://speed.cloudflare.com/__down?bytes=1048576"
DEFAULT_UPLOAD_URL = "https://httpbin.org/post"

DEFAULT_PING_TIMEOUT = 10.0
DEFAULT_DOWNLOAD_TIMEOUT = 30.0
DEFAULT_UPLOAD_TIMEOUT = 30.0

# 1 MiB zero-filled upload body
DEFAULT_UPLOAD_BYTES = 1024 * 1024

DOWNLOAD_CHUNK_BYTES = 64 * 1024

BITS_PER_BYTE = 8
BITS_PER_MEGABIT = 1_000_000

# Interface rate sampling window
DEFAULT_RATE_INTERVAL = 1.0

LOOPBACK_NAME_PREFIXES = ("lo", "lo0", "Loopback")
