"""Error types raised by the skew pipeline."""


class TopologyUnavailable(RuntimeError):
    """The topology accessor could not be reached or changed during a call."""


class InvalidTopology(ValueError):
    """The topology reports a worker count for which skew is undefined."""


class CountOverflow(OverflowError):
    """A merged per-worker count exceeded the supported counter range."""
