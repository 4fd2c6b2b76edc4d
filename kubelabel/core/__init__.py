"""
Core label-mutation components for kubelabel.

This package contains the schemas, expression parser, conflict validator,
mutation engine and batch orchestrator. Nothing here talks to a cluster
directly; I/O goes through the accessor and printer protocols.
"""

__all__ = []
