"""K8s constants shared by the adapter modules.

This module contains constants used by both the manifest accessor and the
resource argument parser to avoid circular import issues.
"""

# Short names accepted by kubectl for core and apps types, keyed by lowercase kind
SHORT_NAMES = {
    "pod": ("po",),
    "service": ("svc",),
    "replicationcontroller": ("rc",),
    "namespace": ("ns",),
    "node": ("no",),
    "configmap": ("cm",),
    "persistentvolumeclaim": ("pvc",),
    "persistentvolume": ("pv",),
    "serviceaccount": ("sa",),
    "endpoints": ("ep",),
    "event": ("ev",),
    "deployment": ("deploy",),
    "replicaset": ("rs",),
    "daemonset": ("ds",),
    "statefulset": ("sts",),
    "horizontalpodautoscaler": ("hpa",),
    "ingress": ("ing",),
    "cronjob": ("cj",),
    "poddisruptionbudget": ("pdb",),
}

# Namespace used when neither the command line nor config names one
DEFAULT_NAMESPACE = "default"

# Version written by the manifest accessor when a manifest has none or a non-numeric one
INITIAL_RESOURCE_VERSION = "1"
