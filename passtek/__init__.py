"""Statistics and plain-text reports on cracked password lists and NTLM hash dumps."""

__version__ = "0.1.0"
__all__ = ["__version__"]