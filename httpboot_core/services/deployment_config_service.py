import logging
import os
import re
from typing import Optional

from httpboot_core import constants
from httpboot_core.schemas.network_config.network_config import (
    DeploymentSettings,
    EnvFacts,
    NetworkConfig,
)
from httpboot_core.schemas.validation.validation import ValidationReport
from httpboot_core.services.network_config_service import NetworkConfigValidator

log = logging.getLogger(__name__)

REQUIRED_SETTINGS = (
    "primary_distro",
    "architecture",
    "boot_method",
    "container_name",
    "data_directory",
)

CHOICE_SETTINGS = {
    "primary_distro": constants.VALID_DISTROS,
    "architecture": constants.VALID_ARCHITECTURES,
    "boot_method": constants.VALID_BOOT_METHODS,
}

VERSION_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)")


def _is_set(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def data_directory_parent(data_directory: Optional[str]) -> Optional[str]:
    """Directory the data directory is created in, "." for a bare name"""
    if not _is_set(data_directory):
        return None
    return os.path.dirname(data_directory.rstrip("/") or "/") or "."


def version_tuple(version: str) -> Optional[tuple]:
    match = VERSION_RE.search(version)
    if not match:
        return None
    return tuple(int(part) for part in match.groups())


class DeploymentSettingsValidator:
    """Checks the container and distribution settings. Pure, like the network validator.

    Host checks (podman, data directory, SSL files, SELinux/AppArmor) only run
    for the facts that were gathered.
    """

    def validate(
        self, deployment: DeploymentSettings, env_facts: Optional[EnvFacts] = None
    ) -> ValidationReport:
        env_facts = env_facts or EnvFacts()
        report = ValidationReport()

        for field in REQUIRED_SETTINGS:
            if not _is_set(getattr(deployment, field)):
                report.add_error(field, f"Required setting {field} is not set")

        for field, choices in CHOICE_SETTINGS.items():
            value = getattr(deployment, field)
            if _is_set(value) and value not in choices:
                report.add_error(
                    field,
                    f"Invalid {field}: {value}. Valid options: {' '.join(choices)}",
                )

        for field in constants.BOOLEAN_SETTINGS:
            value = getattr(deployment, field)
            if _is_set(value) and value not in ("true", "false"):
                report.add_error(field, f"{field} must be 'true' or 'false', got: {value}")

        timeout = deployment.boot_timeout
        if _is_set(timeout) and not (timeout.isascii() and timeout.isdigit()):
            report.add_error("boot_timeout", f"boot_timeout must be a number, got: {timeout}")

        if deployment.enable_http_auth == "true":
            self._check_http_auth(report, deployment)

        if deployment.enable_ssl == "true":
            for field in ("ssl_cert_path", "ssl_key_path"):
                self._check_ssl_file(report, field, getattr(deployment, field), env_facts)

        self._check_podman(report, env_facts)
        self._check_data_directory(report, deployment, env_facts)

        if env_facts.selinux_enforcing:
            report.add_warning(
                "selinux", "SELinux is enforcing - container may need additional permissions"
            )
        if env_facts.apparmor_active:
            report.add_warning(
                "apparmor", "AppArmor is active - container may need additional permissions"
            )

        log.debug(
            "Deployment validation finished: %d error(s), %d warning(s)",
            len(report.errors),
            len(report.warnings),
        )
        return report

    @staticmethod
    def _check_http_auth(report: ValidationReport, deployment: DeploymentSettings) -> None:
        if not _is_set(deployment.http_username):
            report.add_error(
                "http_username", "http_username is required when enable_http_auth=true"
            )
        password = deployment.http_password
        if not _is_set(password) or password == constants.DEFAULT_HTTP_PASSWORD:
            report.add_warning(
                "http_password", "Using default http_password - change for production use"
            )

    @staticmethod
    def _check_ssl_file(
        report: ValidationReport, field: str, path: Optional[str], env_facts: EnvFacts
    ) -> None:
        if not _is_set(path):
            report.add_error(field, f"{field} is required when enable_ssl=true")
        elif env_facts.existing_files is not None and path not in env_facts.existing_files:
            report.add_error(field, f"{field}: file not found: {path}")

    @staticmethod
    def _check_podman(report: ValidationReport, env_facts: EnvFacts) -> None:
        if env_facts.podman_installed is None:
            return
        if not env_facts.podman_installed:
            report.add_error("podman", "Podman is not installed or not in PATH")
            return

        version = env_facts.podman_version
        parsed = version_tuple(version) if version else None
        if parsed is None:
            log.debug("Podman version unknown: %s", version)
        elif parsed < constants.MIN_PODMAN_VERSION:
            minimum = ".".join(str(part) for part in constants.MIN_PODMAN_VERSION)
            report.add_warning(
                "podman",
                f"Podman version {version} may be too old (recommended: >= {minimum})",
            )

    @staticmethod
    def _check_data_directory(
        report: ValidationReport, deployment: DeploymentSettings, env_facts: EnvFacts
    ) -> None:
        parent = data_directory_parent(deployment.data_directory)
        if parent is None or env_facts.existing_dirs is None:
            return
        if parent not in env_facts.existing_dirs:
            report.add_error(
                "data_directory",
                f"Parent directory for data_directory does not exist: {parent}",
            )
        elif env_facts.writable_dirs is not None and parent not in env_facts.writable_dirs:
            report.add_error(
                "data_directory", f"No write permission for data_directory parent: {parent}"
            )


def validate_deployment(
    deployment: DeploymentSettings, env_facts: Optional[EnvFacts] = None
) -> ValidationReport:
    return DeploymentSettingsValidator().validate(deployment, env_facts)


def validate_all(
    config: NetworkConfig,
    deployment: DeploymentSettings,
    env_facts: Optional[EnvFacts] = None,
) -> ValidationReport:
    """Network issues followed by deployment issues, in one report"""
    network_report = NetworkConfigValidator().validate(config, env_facts)
    return network_report.extend(validate_deployment(deployment, env_facts))
