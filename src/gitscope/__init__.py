"""gitscope — git status, diff and staging engine."""

__version__ = "0.1.0"
