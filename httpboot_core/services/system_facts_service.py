import logging
import os
import re
from typing import Iterable, Optional

from httpboot_core import constants
from httpboot_core.core.config import settings
from httpboot_core.models.runcommand_error import RunCommandError
from httpboot_core.schemas.network_config.network_config import EnvFacts
from httpboot_core.schemas.validation.validation import ValidationReport
from httpboot_core.utils.general import command_exists, run_command

log = logging.getLogger(__name__)

PODMAN_VERSION_RE = re.compile(r"\d+\.\d+\.\d+")


def parse_socket_table(output: str, proto_col: int, local_col: int) -> frozenset:
    """Collect (port, protocol) pairs from `ss -tulpn` or `netstat -tulpn` output.

    Header and unrecognised lines are skipped. Protocol names such as tcp6 are
    folded into tcp/udp.
    """
    bound = set()
    for line in output.splitlines():
        columns = line.split()
        if len(columns) <= max(proto_col, local_col):
            continue

        protocol = columns[proto_col].lower().rstrip("6")
        if protocol not in (constants.HTTP_PROTOCOL, constants.TFTP_PROTOCOL):
            continue

        local_address = columns[local_col]
        if ":" not in local_address:
            continue
        port = local_address.rsplit(":", 1)[1]
        if port.isdigit():
            bound.add((int(port), protocol))
    return frozenset(bound)


class SystemFactsService:
    """Gathers the host facts the validators need."""

    def __init__(self, timeout: Optional[int] = None):
        self.timeout = settings.command_timeout if timeout is None else timeout

    def is_root(self) -> bool:
        return os.geteuid() == 0

    def get_bound_ports(self) -> Optional[frozenset]:
        """Listening (port, protocol) pairs, or None when no tool can list them"""
        if command_exists(constants.SS_FILE):
            cmd, proto_col, local_col = [constants.SS_FILE, "-tulpn"], 0, 4
        elif command_exists(constants.NETSTAT_FILE):
            cmd, proto_col, local_col = [constants.NETSTAT_FILE, "-tulpn"], 0, 3
        else:
            log.warning("Neither ss nor netstat found, cannot list bound ports")
            return None

        try:
            result = run_command(cmd, timeout=self.timeout)
        except RunCommandError as err:
            log.warning(
                f"Failed to list bound ports. Code:{err.return_code}, Error: {err.error_msg}"
            )
            return None

        bound = parse_socket_table(result.stdout, proto_col, local_col)
        log.debug("Found %d bound port(s) with %s", len(bound), cmd[0])
        return bound

    def get_podman_version(self) -> Optional[str]:
        """Version reported by `podman --version`, or None when it cannot be read"""
        try:
            result = run_command([constants.PODMAN_FILE, "--version"], timeout=self.timeout)
        except RunCommandError as err:
            log.warning(
                f"Failed to read podman version. Code:{err.return_code}, Error: {err.error_msg}"
            )
            return None
        match = PODMAN_VERSION_RE.search(result.stdout)
        return match.group(0) if match else None

    def is_selinux_enforcing(self) -> Optional[bool]:
        if not command_exists(constants.GETENFORCE_FILE):
            return None
        try:
            result = run_command([constants.GETENFORCE_FILE], timeout=self.timeout)
        except RunCommandError as err:
            log.debug("getenforce failed: %s", err)
            return None
        status = result.stdout.strip()
        log.debug("SELinux status: %s", status)
        return status == "Enforcing"

    def is_apparmor_active(self) -> Optional[bool]:
        if not command_exists(constants.AA_STATUS_FILE):
            return None
        # aa-status --enabled reports through its exit code only
        result = run_command(
            [constants.AA_STATUS_FILE, "--enabled"],
            raise_on_fail=False,
            timeout=self.timeout,
        )
        return result.success

    @staticmethod
    def existing_files(paths: Iterable[Optional[str]]) -> frozenset:
        return frozenset(path for path in paths if path and os.path.isfile(path))

    @staticmethod
    def existing_dirs(paths: Iterable[Optional[str]]) -> frozenset:
        return frozenset(path for path in paths if path and os.path.isdir(path))

    @staticmethod
    def writable_dirs(paths: Iterable[str]) -> frozenset:
        return frozenset(path for path in paths if os.access(path, os.W_OK))

    def gather(
        self,
        paths: Iterable[Optional[str]] = (),
        directories: Iterable[Optional[str]] = (),
    ) -> tuple[EnvFacts, ValidationReport]:
        """EnvFacts for this host, plus warnings about facts that could not be gathered

        Args:
            paths: files that must exist, such as SSL certificates
            directories: directories the deployment creates files in
        """
        report = ValidationReport()

        bound_ports = self.get_bound_ports()
        if bound_ports is None:
            report.add_warning(
                "bound_ports", "Cannot check port availability (ss/netstat not found or failed)"
            )
            bound_ports = frozenset()

        podman_installed = command_exists(constants.PODMAN_FILE)
        existing_dirs = self.existing_dirs(directories)

        facts = EnvFacts(
            is_root=self.is_root(),
            bound_ports=bound_ports,
            existing_files=self.existing_files(paths),
            existing_dirs=existing_dirs,
            writable_dirs=self.writable_dirs(existing_dirs),
            podman_installed=podman_installed,
            podman_version=self.get_podman_version() if podman_installed else None,
            selinux_enforcing=self.is_selinux_enforcing(),
            apparmor_active=self.is_apparmor_active(),
        )
        log.debug("Gathered host facts: %s", facts)
        return facts, report
