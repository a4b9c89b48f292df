"""PotatoQC — potato batch intake and quality inspection records."""

__version__ = "0.1.0"
