"""
Validation of the boot server network configuration.

The validator is a pure function of its inputs: it performs no I/O and keeps
no state between calls. Every problem found becomes one issue in the returned
report, and checking continues after a failure so that a single call surfaces
every problem at once.
"""

import logging
from typing import Callable, Optional

from httpboot_core import constants
from httpboot_core.core.config import settings
from httpboot_core.models.network_config_errors import ConstraintViolation, ParseError
from httpboot_core.schemas.network_config.network_config import EnvFacts, NetworkConfig
from httpboot_core.schemas.validation.validation import ValidationReport
from httpboot_core.utils.network import (
    Cidr,
    is_in_range,
    is_in_subnet,
    parse_cidr,
    parse_ip,
    parse_port,
)

log = logging.getLogger(__name__)

REQUIRED_ADDRESS_FIELDS = (
    "host_ip",
    "gateway_ip",
    "dns_primary",
    "dhcp_range_start",
    "dhcp_range_end",
)

# port field -> protocol its daemon listens on
PORT_FIELDS = {
    "http_port": constants.HTTP_PROTOCOL,
    "tftp_port": constants.TFTP_PROTOCOL,
}


class NetworkConfigValidator:
    """Checks a NetworkConfig against an EnvFacts snapshot."""

    def __init__(
        self,
        min_prefix_length: Optional[int] = None,
        max_prefix_length: Optional[int] = None,
    ):
        self.min_prefix_length = (
            settings.min_prefix_length if min_prefix_length is None else min_prefix_length
        )
        self.max_prefix_length = (
            settings.max_prefix_length if max_prefix_length is None else max_prefix_length
        )

    def validate(
        self, config: NetworkConfig, env_facts: Optional[EnvFacts] = None
    ) -> ValidationReport:
        env_facts = env_facts or EnvFacts()
        report = ValidationReport()

        # 1. presence and syntax
        subnet = self._parse_field(
            report, "subnet_cidr", config.subnet_cidr, self._parse_subnet
        )
        addresses = {
            field: self._parse_field(report, field, getattr(config, field), parse_ip)
            for field in REQUIRED_ADDRESS_FIELDS
        }
        if config.dns_secondary and config.dns_secondary.strip():
            self._parse_field(report, "dns_secondary", config.dns_secondary, parse_ip)

        host = addresses["host_ip"]
        start = addresses["dhcp_range_start"]
        end = addresses["dhcp_range_end"]

        # 2-4. relations between well-formed values
        constraints = []
        if subnet is not None:
            constraints += [
                lambda: self._require_in_subnet("host_ip", host, subnet),
                lambda: self._require_in_subnet("dhcp_range_start", start, subnet),
                lambda: self._require_in_subnet("dhcp_range_end", end, subnet),
            ]
        constraints.append(lambda: self._require_outside_dhcp_range(host, start, end))

        for check in constraints:
            try:
                check()
            except ConstraintViolation as violation:
                report.add_error(violation.field, violation.message)

        # 5-6. ports
        for field, protocol in PORT_FIELDS.items():
            self._check_port(report, field, getattr(config, field), protocol, env_facts)

        log.debug(
            "Network validation finished: %d error(s), %d warning(s)",
            len(report.errors),
            len(report.warnings),
        )
        return report

    def _parse_subnet(self, text: str) -> Cidr:
        return parse_cidr(
            text,
            min_prefix_length=self.min_prefix_length,
            max_prefix_length=self.max_prefix_length,
        )

    @staticmethod
    def _parse_field(
        report: ValidationReport, field: str, value, parser: Callable
    ):
        """Parsed value, or None after recording why it could not be parsed"""
        if value is None or (isinstance(value, str) and not value.strip()):
            report.add_error(field, f"{field} is not set")
            return None
        try:
            return parser(value)
        except ParseError as err:
            report.add_error(field, f"{field}: {err.message}")
            return None

    @staticmethod
    def _require_in_subnet(field: str, ip: Optional[str], subnet: Cidr) -> None:
        if ip is None:
            return
        if not is_in_subnet(ip, subnet):
            raise ConstraintViolation(
                field, f"{field} ({ip}) is not within subnet_cidr ({subnet})"
            )

    @staticmethod
    def _require_outside_dhcp_range(
        host: Optional[str], start: Optional[str], end: Optional[str]
    ) -> None:
        if host is None or start is None or end is None:
            return
        if is_in_range(host, start, end):
            raise ConstraintViolation(
                "host_ip",
                f"host_ip ({host}) conflicts with DHCP range ({start} - {end})",
            )

    @staticmethod
    def _check_port(
        report: ValidationReport,
        field: str,
        value,
        protocol: str,
        env_facts: EnvFacts,
    ) -> None:
        if value is None or (isinstance(value, str) and not value.strip()):
            report.add_error(field, f"{field} is not set")
            return
        try:
            port = parse_port(value)
        except ParseError as err:
            report.add_error(field, f"{field}: {err.message}")
            return

        if port < constants.PRIVILEGED_PORT_LIMIT and not env_facts.is_root:
            report.add_warning(field, f"{field} {port} requires root privileges")

        if env_facts.is_port_bound(port, protocol):
            report.add_warning(
                field, f"{field} {port}/{protocol} appears to be in use"
            )


def validate(
    config: NetworkConfig, env_facts: Optional[EnvFacts] = None
) -> ValidationReport:
    """Validate a network configuration with the configured prefix policy"""
    return NetworkConfigValidator().validate(config, env_facts)
