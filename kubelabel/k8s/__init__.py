"""Kubernetes adapters for kubelabel.

This module provides concrete implementations of kubelabel's I/O protocols:
- ManifestAccessor: YAML manifests on disk as a resource store
- ClusterAccessor: Live cluster access through the kubernetes client
- Printers: Name and YAML output for labeled resources
"""
