"""Status output for the ovn-daemonset CLI.

Everything here writes to stderr so that a manifest rendered to stdout
can be piped straight into ``kubectl apply -f -``. Values that come from
the user (paths, hashes, secret names, error text) are escaped before
they reach Rich markup.
"""

from kubernetes import client
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from ovn_daemonset.models import OVNController

_THEME = Theme(
    {
        "note": "cyan",
        "done": "green",
        "caution": "yellow",
        "failure": "red bold",
        "value": "cyan bold",
        "detail": "dim",
        "tls.on": "green bold",
        "tls.off": "yellow",
    }
)

console = Console(theme=_THEME, stderr=True)


def _emit(style: str, marker: str, message: str) -> None:
    console.print(f"[{style}]{marker}[/{style}] {message}")


def highlight(text: str) -> str:
    """Return ``text`` escaped and wrapped in value markup.

    Args:
        text: A user-supplied value.

    Returns:
        Markup that renders ``text`` literally, brackets included.

    """
    return f"[value]{escape(text)}[/value]"


def info(message: str) -> None:
    """Print a note. ``message`` may contain markup from :func:`highlight`."""
    _emit("note", "ℹ", message)


def action(message: str) -> None:
    """Print the start of a step."""
    _emit("note", "→", message)


def step(message: str) -> None:
    """Print a detail of the current step."""
    _emit("detail", "•", message)


def success(message: str) -> None:
    """Print a completed step."""
    _emit("done", "✓", message)


def warning(message: str) -> None:
    """Print a warning."""
    _emit("caution", "⚠", message)


def error(message: str) -> None:
    """Print an error. ``message`` is plain text and is escaped."""
    _emit("failure", "✗", escape(message))


def daemonset_summary(instance: OVNController, daemonset: client.V1DaemonSet, content_hash: str) -> None:
    """Print what was rendered: placement, TLS state and the three containers.

    Args:
        instance: The stack instance the DaemonSet was built from.
        daemonset: The rendered DaemonSet.
        content_hash: The CONFIG_HASH value embedded in the containers.

    """
    tls = instance.spec.tls
    tls_state = (
        f"[tls.on]enabled[/tls.on] ({escape(tls.generic_service.secret_name or '')})"
        if tls.enabled()
        else "[tls.off]disabled[/tls.off]"
    )
    ca_bundle = escape(tls.ca_bundle_secret_name) if tls.ca_bundle_secret_name else "[detail]none[/detail]"

    pod_spec = daemonset.spec.template.spec
    containers = Table("container", "image", "mounts", "liveness", box=None, header_style="bold")
    for container in pod_spec.containers:
        containers.add_row(
            container.name,
            escape(container.image),
            str(len(container.volume_mounts)),
            "exec" if container.liveness_probe else "[detail]-[/detail]",
        )

    overview = Table.grid(padding=(0, 2))
    overview.add_column(style="bold")
    overview.add_column()
    overview.add_row("Namespace:", escape(daemonset.metadata.namespace))
    overview.add_row("Service account:", escape(pod_spec.service_account_name))
    overview.add_row("Config hash:", highlight(content_hash) if content_hash else "[detail]<empty>[/detail]")
    overview.add_row("Service TLS:", tls_state)
    overview.add_row("CA bundle:", ca_bundle)
    overview.add_row("Volumes:", str(len(pod_spec.volumes)))
    overview.add_row("Node selector:", escape(str(pod_spec.node_selector)) if pod_spec.node_selector else "any node")

    console.print(
        Panel(
            overview,
            title=f"[bold]{escape(daemonset.metadata.name)}[/bold]",
            border_style="green",
        )
    )
    console.print(containers)
