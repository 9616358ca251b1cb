"""TLS descriptor types and volume helpers.

This module describes where TLS material comes from (secret references)
and how it is mounted into containers: a CA bundle shared by every
container, and a service certificate/key/CA triple for a single service.
"""

from dataclasses import dataclass, field

from kubernetes import client

# CA bundle secret layout
CA_BUNDLE_VOLUME_NAME = "combined-ca-bundle"
CA_BUNDLE_KEY = "tls-ca-bundle.pem"
DOWNSTREAM_CA_BUNDLE_PATH = "/etc/pki/ca-trust/extracted/pem/tls-ca-bundle.pem"

# Keys of a kubernetes.io/tls secret
CERT_KEY = "tls.crt"
PRIVATE_KEY = "tls.key"
CA_CERT_KEY = "ca.crt"

_CA_BUNDLE_DEFAULT_MODE = 0o444
_SERVICE_CERT_DEFAULT_MODE = 0o440


@dataclass(frozen=True, slots=True)
class Ca:
    """CA bundle reference.

    Attributes:
        ca_bundle_secret_name: Name of the secret holding the combined CA
            bundle. Empty means no bundle is mounted.

    """

    ca_bundle_secret_name: str = ""

    def create_volume(self) -> client.V1Volume:
        """Create the secret volume carrying the CA bundle.

        Returns:
            A V1Volume named after the CA bundle volume.

        """
        return client.V1Volume(
            name=CA_BUNDLE_VOLUME_NAME,
            secret=client.V1SecretVolumeSource(
                secret_name=self.ca_bundle_secret_name,
                default_mode=_CA_BUNDLE_DEFAULT_MODE,
            ),
        )

    def create_volume_mounts(self, ca_bundle_mount: str | None = None) -> list[client.V1VolumeMount]:
        """Create the mounts exposing the CA bundle file.

        Args:
            ca_bundle_mount: Target file path. Defaults to the system trust
                store location.

        Returns:
            A single-element list with a read-only sub-path mount.

        """
        return [
            client.V1VolumeMount(
                name=CA_BUNDLE_VOLUME_NAME,
                mount_path=ca_bundle_mount or DOWNSTREAM_CA_BUNDLE_PATH,
                sub_path=CA_BUNDLE_KEY,
                read_only=True,
            )
        ]


@dataclass(frozen=True, slots=True)
class GenericService:
    """Service certificate reference.

    Attributes:
        secret_name: Name of a kubernetes.io/tls secret, or None.

    """

    secret_name: str | None = None


@dataclass(frozen=True, slots=True)
class TLSSection:
    """TLS settings of a networking stack instance.

    The CA bundle and the service certificate are independent: a CA bundle
    may be mounted while service TLS stays disabled.
    """

    generic_service: GenericService = field(default_factory=GenericService)
    ca: Ca = field(default_factory=Ca)

    def enabled(self) -> bool:
        """Return True if a service certificate secret is configured."""
        return bool(self.generic_service.secret_name)

    @property
    def ca_bundle_secret_name(self) -> str:
        """The CA bundle secret name, empty when unset."""
        return self.ca.ca_bundle_secret_name

    def create_volume(self) -> client.V1Volume:
        """Create the CA bundle volume."""
        return self.ca.create_volume()

    def create_volume_mounts(self, ca_bundle_mount: str | None = None) -> list[client.V1VolumeMount]:
        """Create the CA bundle mounts."""
        return self.ca.create_volume_mounts(ca_bundle_mount)


@dataclass(frozen=True, slots=True)
class Service:
    """Service certificate mounted at explicit paths.

    Attributes:
        secret_name: Name of the kubernetes.io/tls secret.
        cert_mount: Path for the certificate, skipped when None.
        key_mount: Path for the private key, skipped when None.
        ca_mount: Path for the CA certificate, skipped when None.

    """

    secret_name: str
    cert_mount: str | None = None
    key_mount: str | None = None
    ca_mount: str | None = None

    @staticmethod
    def volume_name(service_id: str) -> str:
        """Return the volume name used for ``service_id`` certificates."""
        return f"{service_id}-tls-certs"

    def create_volume(self, service_id: str) -> client.V1Volume:
        """Create the secret volume carrying the service certificate.

        Args:
            service_id: Identifier of the consuming service.

        Returns:
            A V1Volume named ``<service_id>-tls-certs``.

        """
        return client.V1Volume(
            name=self.volume_name(service_id),
            secret=client.V1SecretVolumeSource(
                secret_name=self.secret_name,
                default_mode=_SERVICE_CERT_DEFAULT_MODE,
            ),
        )

    def create_volume_mounts(self, service_id: str) -> list[client.V1VolumeMount]:
        """Create read-only mounts for the certificate, key and CA.

        Args:
            service_id: Identifier of the consuming service.

        Returns:
            Mounts in certificate, key, CA order. Paths left as None are
            not mounted.

        """
        name = self.volume_name(service_id)
        targets = (
            (self.cert_mount, CERT_KEY),
            (self.key_mount, PRIVATE_KEY),
            (self.ca_mount, CA_CERT_KEY),
        )
        return [
            client.V1VolumeMount(name=name, mount_path=path, sub_path=key, read_only=True)
            for path, key in targets
            if path is not None
        ]
