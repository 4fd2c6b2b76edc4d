"""Object printers for labeled resources."""

import sys
from typing import Optional, TextIO

from kubelabel.core.schema.resource import Resource
from kubelabel.k8s.utils import dump_documents

OUTPUT_FORMATS = ("name", "yaml")


class NamePrinter:
    """Prints ``<kind>/<name> labeled`` per resource.

    Example:
        >>> NamePrinter()(pod)
        pod/foo labeled
    """

    def __init__(self, stream: Optional[TextIO] = None, dry_run: bool = False):
        self.stream = stream or sys.stdout
        self.dry_run = dry_run

    def __call__(self, resource: Resource) -> None:
        suffix = " (dry run)" if self.dry_run else ""
        self.stream.write(f"{resource.kind.lower()}/{resource.name} labeled{suffix}\n")


class YamlPrinter:
    """Prints each resource as a YAML document, separated by ``---``."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self._printed = 0

    def __call__(self, resource: Resource) -> None:
        if self._printed:
            self.stream.write("---\n")
        self.stream.write(dump_documents([resource.manifest]))
        self._printed += 1


def create_printer(output: str, stream: Optional[TextIO] = None, dry_run: bool = False):
    """Return the printer for an ``--output`` value.

    Raises:
        ValueError: If the format is unknown
    """
    if output == "name":
        return NamePrinter(stream, dry_run=dry_run)
    elif output == "yaml":
        return YamlPrinter(stream)
    else:
        raise ValueError(f"Unknown output format: {output}. Valid: {list(OUTPUT_FORMATS)}")
