"""kbdiag - kernel build log diagnostics."""

__version__ = "0.1.0"
