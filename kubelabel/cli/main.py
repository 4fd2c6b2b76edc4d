"""kubelabel CLI - Command-line interface for updating resource labels.

This module provides the main CLI entrypoint for kubelabel, allowing users
to add, overwrite and remove labels on one or more resources.
"""

import argparse
import logging
import sys
from typing import List, Optional

from kubelabel.core.batch import label_resources
from kubelabel.core.config import DEFAULT_CONFIG_PATH, get_config_value, load_config
from kubelabel.core.errors import BatchError, LabelError, UsageError
from kubelabel.core.mutation import LabelOptions
from kubelabel.core.parser import parse_labels
from kubelabel.k8s.constants import DEFAULT_NAMESPACE
from kubelabel.k8s.printers import OUTPUT_FORMATS, create_printer
from kubelabel.k8s.selection import NO_RESOURCES_MESSAGE, resolve_refs, split_args

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the label command."""
    parser = argparse.ArgumentParser(
        prog="kubelabel",
        description="Update the labels on one or more resources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Update pod 'foo' with the label 'unhealthy' and the value 'true'
  kubelabel pods foo unhealthy=true

  # Update pod 'foo' with the label 'status' and the value 'unhealthy', overwriting any existing value
  kubelabel --overwrite pods foo status=unhealthy

  # Update all pods in the namespace
  kubelabel pods --all status=unhealthy

  # Update pod 'foo' only if the resource is unchanged from version 1
  kubelabel pods foo status=unhealthy --resource-version=1

  # Remove the label named 'bar' (the minus sign removes it)
  kubelabel pods foo bar-

  # Label manifests on disk instead of a live cluster
  kubelabel --manifests deploy/ deployment/payments-api team=payments

Note:
  Defaults for namespace, kubeconfig, context and output are read from
  config.json ({"kubelabel": {"namespace": "..."}}) or KUBELABEL_* variables.
"""
    )
    parser.add_argument(
        "args",
        nargs="*",
        metavar="TYPE[/NAME] [NAME ...] KEY=VAL|KEY-",
        help="Resources to label followed by label updates"
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Allow labels to be overwritten, otherwise reject label updates that overwrite existing labels"
    )
    parser.add_argument(
        "--resource-version",
        default="",
        help="Only update if the resource is unchanged from this version"
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Select all resources of the given type in the namespace"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the updated resources without persisting them"
    )
    parser.add_argument(
        "-n", "--namespace",
        default=None,
        help="Namespace of the resources (default: from config.json or 'default')"
    )
    parser.add_argument(
        "-o", "--output",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format (default: from config.json or 'name')"
    )
    parser.add_argument(
        "--manifests",
        metavar="DIR",
        help="Directory of YAML manifests to label instead of a live cluster"
    )
    parser.add_argument(
        "--kubeconfig",
        help="Path to the kubeconfig file (default: from config.json or ~/.kube/config)"
    )
    parser.add_argument(
        "--context",
        help="Kubeconfig context to use (default: from config.json or current context)"
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help="Path to config file (default: config.json)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entrypoint for kubelabel."""
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    # Setup logging
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
    else:
        logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(message)s')

    return cmd_label(args)


def cmd_label(args: argparse.Namespace) -> int:
    """Handle the label command."""
    config = load_config(args.config)

    namespace = args.namespace
    if namespace is None:
        namespace = get_config_value(["kubelabel", "namespace"], default=DEFAULT_NAMESPACE, config=config)

    output = args.output
    if output is None:
        output = get_config_value(["kubelabel", "output"], default="name", config=config)

    options = LabelOptions(
        overwrite=args.overwrite,
        resource_version=args.resource_version or None,
        dry_run=args.dry_run,
    )

    try:
        # Usage checks come first so nothing is fetched or printed on bad input
        resource_args, label_tokens = split_args(args.args)
        if not resource_args:
            raise UsageError(NO_RESOURCES_MESSAGE)
        if not label_tokens:
            raise UsageError("at least one label update is required")
        spec = parse_labels(label_tokens)
        printer = create_printer(output, dry_run=args.dry_run)

        accessor = _create_accessor(args, config)
        refs = resolve_refs(resource_args, namespace, select_all=args.all, accessor=accessor)
        result = label_resources(refs, spec, accessor, printer, options)
    except BatchError as e:
        for failure in e.results:
            print(f"error: {failure.ref}: {failure.error}", file=sys.stderr)
        return 1
    except (LabelError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        logger.debug("Label command failed", exc_info=True)
        return 1

    for failure in result.failures:
        print(f"error: {failure.ref}: {failure.error}", file=sys.stderr)
    return 1 if result.partial else 0


def _create_accessor(args: argparse.Namespace, config: dict):
    if args.manifests:
        from kubelabel.k8s.manifests import ManifestAccessor
        return ManifestAccessor(args.manifests)

    from kubelabel.k8s.cluster import ClusterAccessor
    kubeconfig = args.kubeconfig or get_config_value(["kubelabel", "kubeconfig"], config=config)
    context = args.context or get_config_value(["kubelabel", "context"], config=config)
    return ClusterAccessor.from_kubeconfig(kubeconfig=kubeconfig, context=context)


if __name__ == "__main__":
    sys.exit(main())
