"""Storage adapters implementing core ports."""

from tracetail.adapters.storage.ring_buffer import EventBuffer

__all__ = ["EventBuffer"]
