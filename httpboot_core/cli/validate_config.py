#!/usr/bin/env python3

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from httpboot_core import constants
from httpboot_core.__version__ import __version__
from httpboot_core.cli.cli_utils import (
    RULE,
    echo_error,
    echo_status,
    echo_success,
    echo_warning,
)
from httpboot_core.core.config import settings
from httpboot_core.core.logging import configure_logging
from httpboot_core.models.network_config_errors import EnvFileError
from httpboot_core.schemas.network_config.network_config import (
    DeploymentSettings,
    EnvFacts,
    NetworkConfig,
)
from httpboot_core.schemas.validation.validation import ValidationReport
from httpboot_core.services.deployment_config_service import (
    data_directory_parent,
    validate_all,
)
from httpboot_core.services.system_facts_service import SystemFactsService
from httpboot_core.utils.env_file import (
    deployment_settings_from_env,
    network_config_from_env,
    read_env_file,
)
from httpboot_core.utils.network import (
    address_count,
    broadcast_address,
    network_address,
    parse_cidr,
)

log = logging.getLogger(__name__)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_NO_CONFIG = 2


def setup_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=constants.PROJECT_DESCRIPTION
    )
    parser.add_argument(
        "--env-file",
        "-e",
        dest="env_file",
        type=Path,
        default=settings.env_file,
        help="Configuration file with KEY=VALUE lines (default: %(default)s)",
    )
    parser.add_argument(
        "--json",
        dest="json",
        action="store_true",
        default=False,
        help="Print the validation report as JSON",
    )
    parser.add_argument(
        "--skip-system-checks",
        dest="skip_system_checks",
        action="store_true",
        default=False,
        help="Do not inspect this host (privileges, ports, files, podman, SELinux)",
    )
    parser.add_argument(
        "--debug",
        "-d",
        dest="debug",
        action="store_true",
        default=False,
        help="Enable debug mode with verbose logging",
    )
    parser.add_argument(
        "--version", "-V", action="version", version=f"{__version__}"
    )
    return parser


def render_report(
    report: ValidationReport, config: NetworkConfig, deployment: DeploymentSettings
) -> None:
    """Print warnings, then errors, then a summary when the report is valid"""
    print(RULE)

    if report.warnings:
        echo_status("Validation Warnings:")
        for issue in report.warnings:
            echo_warning(issue.message)
        print()

    if report.errors:
        echo_status("Validation Errors:")
        for issue in report.errors:
            echo_error(issue.message)
        print()
        echo_error("Validation FAILED. Please fix the above errors before proceeding.")
        return

    echo_success("All validations passed successfully!")
    if report.warnings:
        echo_warning("There are warnings above that should be reviewed.")
    print()
    echo_status("Configuration Summary:")
    for label, value in summary_lines(config, deployment):
        print(f"   {label}: {value}")


def summary_lines(
    config: NetworkConfig, deployment: DeploymentSettings
) -> list[tuple]:
    """Label/value pairs for a configuration that passed validation"""
    subnet = parse_cidr(
        config.subnet_cidr, settings.min_prefix_length, settings.max_prefix_length
    )
    return [
        ("Network", str(subnet)),
        (
            "Addresses",
            f"{network_address(subnet)} - {broadcast_address(subnet)} "
            f"({address_count(subnet)} total)",
        ),
        ("Host IP", config.host_ip),
        ("DHCP Range", f"{config.dhcp_range_start} - {config.dhcp_range_end}"),
        ("HTTP Port", config.http_port),
        ("TFTP Port", config.tftp_port),
        ("Distribution", f"{deployment.primary_distro} ({deployment.architecture})"),
        ("Boot Method", deployment.boot_method),
        ("Container", deployment.container_name),
    ]


def gather_facts(
    deployment: DeploymentSettings, skip_system_checks: bool
) -> tuple[EnvFacts, ValidationReport]:
    if skip_system_checks:
        log.info("Skipping system checks")
        return EnvFacts(), ValidationReport()
    return SystemFactsService().gather(
        paths=(deployment.ssl_cert_path, deployment.ssl_key_path),
        directories=(data_directory_parent(deployment.data_directory),),
    )


def run(args: argparse.Namespace) -> int:
    try:
        env = read_env_file(args.env_file)
    except EnvFileError as err:
        if args.json:
            report = ValidationReport()
            report.add_error("env_file", err.message)
            print(report.model_dump_json(indent=4))
            return EXIT_NO_CONFIG
        echo_error(err.message)
        print("Run this command from the project root directory or pass --env-file")
        return EXIT_NO_CONFIG

    config = network_config_from_env(env)
    deployment = deployment_settings_from_env(env)

    if not args.json:
        echo_status("HTTP Boot Setup - Configuration Validation")
        echo_status(f"Configuration loaded from {args.env_file}")

    env_facts, fact_report = gather_facts(deployment, args.skip_system_checks)
    report = fact_report.extend(validate_all(config, deployment, env_facts))

    if args.json:
        print(report.model_dump_json(indent=4))
    else:
        render_report(report, config, deployment)

    return EXIT_VALID if report.is_valid else EXIT_INVALID


def main(argv: Optional[list[str]] = None) -> int:
    parser = setup_parser()
    args = parser.parse_args(argv)

    configure_logging(debug_mode=args.debug, log_dir=settings.log_dir)

    return run(args)


if __name__ == "__main__":
    sys.exit(main())
