"""Timeline Reconstruction Engine - curate, order and check dated evidence."""

__version__ = "0.1.0"
