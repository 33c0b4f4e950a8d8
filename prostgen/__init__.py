"""Building blocks for generating typed message code from Protocol Buffers descriptors."""

__version__ = "0.1.0"