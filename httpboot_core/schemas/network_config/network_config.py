from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class NetworkConfig(BaseModel):
    """
    Network settings of the boot server, as read from the configuration.

    Values are kept exactly as supplied; a malformed address or port is
    reported by the validator, not rejected here.
    """

    model_config = ConfigDict(frozen=True)

    subnet_cidr: Optional[str] = Field(examples=["192.168.1.0/24"], default=None)
    host_ip: Optional[str] = Field(examples=["192.168.1.10"], default=None)
    gateway_ip: Optional[str] = Field(examples=["192.168.1.1"], default=None)
    dns_primary: Optional[str] = Field(examples=["8.8.8.8"], default=None)
    dns_secondary: Optional[str] = Field(examples=["8.8.4.4"], default=None)
    dhcp_range_start: Optional[str] = Field(examples=["192.168.1.100"], default=None)
    dhcp_range_end: Optional[str] = Field(examples=["192.168.1.200"], default=None)
    http_port: Optional[Union[int, str]] = Field(examples=[8080], default=None)
    tftp_port: Optional[Union[int, str]] = Field(examples=[69], default=None)


class DeploymentSettings(BaseModel):
    """Container and distribution settings deployed alongside the network."""

    model_config = ConfigDict(frozen=True)

    primary_distro: Optional[str] = Field(examples=["debian"], default=None)
    architecture: Optional[str] = Field(examples=["amd64"], default=None)
    boot_method: Optional[str] = Field(examples=["both"], default=None)
    container_name: Optional[str] = Field(examples=["httpboot-server"], default=None)
    data_directory: Optional[str] = Field(examples=["./data"], default=None)
    boot_timeout: Optional[str] = Field(examples=["300"], default=None)

    enable_secure_boot: Optional[str] = Field(examples=["false"], default=None)
    enable_http_auth: Optional[str] = Field(examples=["false"], default=None)
    enable_ssl: Optional[str] = Field(examples=["false"], default=None)
    enable_dhcp_relay: Optional[str] = Field(examples=["false"], default=None)
    enable_access_log: Optional[str] = Field(examples=["true"], default=None)
    enable_auto_backup: Optional[str] = Field(examples=["true"], default=None)
    enable_firewall_rules: Optional[str] = Field(examples=["false"], default=None)

    http_username: Optional[str] = Field(examples=["admin"], default=None)
    http_password: Optional[str] = Field(default=None)
    ssl_cert_path: Optional[str] = Field(
        examples=["/etc/httpboot/ssl/server.crt"], default=None
    )
    ssl_key_path: Optional[str] = Field(
        examples=["/etc/httpboot/ssl/server.key"], default=None
    )


class EnvFacts(BaseModel):
    """
    Snapshot of the host the server will be deployed on.

    A fact left at None was not gathered; rules that need it are skipped.
    """

    model_config = ConfigDict(frozen=True)

    is_root: bool = False
    # (port, protocol) pairs, protocol is "tcp" or "udp"
    bound_ports: frozenset[tuple[int, str]] = frozenset()
    existing_files: Optional[frozenset[str]] = None

    # directories that exist, and the subset of them this user can write to
    existing_dirs: Optional[frozenset[str]] = None
    writable_dirs: Optional[frozenset[str]] = None

    podman_installed: Optional[bool] = None
    podman_version: Optional[str] = Field(examples=["4.3.1"], default=None)
    selinux_enforcing: Optional[bool] = None
    apparmor_active: Optional[bool] = None

    def is_port_bound(self, port: int, protocol: str) -> bool:
        return (port, protocol.lower()) in self.bound_ports
