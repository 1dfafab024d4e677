"""dashctl: personal dashboard backed by a single durable JSON document."""

__version__ = "0.1.0"
