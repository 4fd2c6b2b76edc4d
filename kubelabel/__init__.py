"""
kubelabel: label updates for Kubernetes resources

Parses ``key=value`` / ``key-`` update expressions, checks them against the
current labels of each selected resource, and writes the merged label set back
through a pluggable resource accessor, reporting per-resource failures.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
