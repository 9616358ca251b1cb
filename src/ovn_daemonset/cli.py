#!/usr/bin/env python
"""Command-line interface for ovn-daemonset.

This module provides the CLI entry point that loads a stack
configuration, builds the OVN controller DaemonSet and renders it as
YAML.
"""

import sys
from pathlib import Path

import click
from icecream import ic

from ovn_daemonset import __version__, console
from ovn_daemonset.common.hashing import file_hashes, hash_of_input_hashes
from ovn_daemonset.config import load_stack_config, parse_key_value_pairs
from ovn_daemonset.exceptions import OvnDaemonSetError
from ovn_daemonset.manifest import to_yaml, write_manifest
from ovn_daemonset.models import SERVICE_NAME_OVN_CONTROLLER
from ovn_daemonset.ovncontroller.daemonset import build_daemonset

DEFAULT_LABELS = {"service": SERVICE_NAME_OVN_CONTROLLER}

_ERR_OUTPUT_PATH = "Cannot write to output path '{path}': {reason}"


def resolve_config_hash(config_file: Path, config_hash: str | None, hash_inputs: tuple[Path, ...]) -> str:
    """Work out the content hash to embed in the workload.

    An explicit hash wins. Otherwise the given input files are hashed, or
    the stack configuration file itself when none are given.

    Args:
        config_file: The stack configuration file.
        config_hash: Hash passed on the command line, if any.
        hash_inputs: Files whose content should drive redeployment.

    Returns:
        The content hash string.

    """
    if config_hash is not None:
        return config_hash

    inputs = list(hash_inputs) or [config_file]
    hashes = file_hashes(inputs)
    ic(hashes)
    return hash_of_input_hashes(hashes)


def render(
    config_file: Path,
    *,
    config_hash: str | None = None,
    hash_inputs: tuple[Path, ...] = (),
    labels: tuple[str, ...] = (),
    annotations: tuple[str, ...] = (),
    output: Path | None = None,
) -> None:
    """Build the DaemonSet for a stack configuration and emit it.

    Args:
        config_file: The stack configuration file.
        config_hash: Explicit content hash.
        hash_inputs: Files to hash when no explicit hash is given.
        labels: ``KEY=VALUE`` labels; defaults to the service label.
        annotations: ``KEY=VALUE`` pod annotations.
        output: File to write. The manifest goes to stdout when None.

    Raises:
        click.ClickException: If the output file cannot be written.

    """
    console.action(f"Loading stack configuration from {console.highlight(str(config_file))}")
    instance = load_stack_config(config_file)

    label_set = parse_key_value_pairs(labels, "label") or dict(DEFAULT_LABELS)
    annotation_set = parse_key_value_pairs(annotations, "annotation")
    content_hash = resolve_config_hash(config_file, config_hash, hash_inputs)
    ic(label_set, annotation_set, content_hash)
    console.info(f"Using config hash {console.highlight(content_hash or '<empty>')}")

    if instance.spec.tls.ca_bundle_secret_name:
        console.step(f"Mounting CA bundle from secret {console.highlight(instance.spec.tls.ca_bundle_secret_name)}")
    if instance.spec.tls.enabled():
        console.step(f"Enabling OVN DB TLS with secret {console.highlight(instance.spec.tls.generic_service.secret_name)}")
    else:
        console.warning("Service TLS is disabled, ovn-controller will connect to the OVN databases without TLS")

    daemonset = build_daemonset(instance, content_hash, label_set, annotation_set)

    if output is None:
        click.echo(to_yaml(daemonset), nl=False)
        return

    try:
        write_manifest(daemonset, output)
    except OSError as err:
        raise click.ClickException(_ERR_OUTPUT_PATH.format(path=output, reason=err.strerror)) from err

    console.success(f"DaemonSet written to {console.highlight(str(output))}")
    console.daemonset_summary(instance, daemonset, content_hash)


@click.command(help="Render the OVN controller DaemonSet for a networking stack")
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
@click.option(
    "--config",
    "-c",
    "config_file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
    help="stack configuration YAML file",
)
@click.option("--config-hash", required=False, help="content hash to embed as CONFIG_HASH")
@click.option(
    "--hash-input",
    required=False,
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="file whose content drives the config hash (repeatable)",
)
@click.option("--label", "-l", required=False, multiple=True, help="pod label as KEY=VALUE (repeatable)")
@click.option("--annotation", "-a", required=False, multiple=True, help="pod annotation as KEY=VALUE (repeatable)")
@click.option(
    "--output",
    "-o",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
    help="write the manifest to a file instead of stdout",
)
def cli(
    version: bool,
    debug: bool,
    config_file: Path | None,
    config_hash: str | None,
    hash_input: tuple[Path, ...],
    label: tuple[str, ...],
    annotation: tuple[str, ...],
    output: Path | None,
) -> None:
    """Process CLI arguments and render the manifest.

    Args:
        version: Print version and exit.
        debug: Enable debug output.
        config_file: Stack configuration file.
        config_hash: Explicit content hash.
        hash_input: Files to hash when no explicit hash is given.
        label: Pod labels.
        annotation: Pod annotations.
        output: Output file.

    """
    if not debug:
        ic.disable()

    if version:
        click.echo(__version__)
        return

    if config_file is None:
        raise click.UsageError("Missing option '--config' / '-c'.")

    try:
        render(
            config_file,
            config_hash=config_hash,
            hash_inputs=hash_input,
            labels=label,
            annotations=annotation,
            output=output,
        )
    except OvnDaemonSetError as e:
        console.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    cli()
