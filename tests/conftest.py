import logging

import pytest

from httpboot_core.schemas.network_config.network_config import (
    DeploymentSettings,
    EnvFacts,
    NetworkConfig,
)


@pytest.fixture
def valid_config():
    """The reference boot network: host outside a /24 DHCP pool."""
    return NetworkConfig(
        subnet_cidr="192.168.1.0/24",
        host_ip="192.168.1.10",
        gateway_ip="192.168.1.1",
        dns_primary="8.8.8.8",
        dhcp_range_start="192.168.1.100",
        dhcp_range_end="192.168.1.200",
        http_port=8080,
        tftp_port=6969,
    )


@pytest.fixture
def valid_deployment():
    return DeploymentSettings(
        primary_distro="debian",
        architecture="amd64",
        boot_method="both",
        container_name="httpboot-server",
        data_directory="./data",
    )


@pytest.fixture
def user_facts():
    return EnvFacts(is_root=False)


@pytest.fixture
def root_facts():
    return EnvFacts(is_root=True)


@pytest.fixture
def restore_logging():
    """Undo configure_logging changes to the root logger."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    factory = logging.getLogRecordFactory()
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            handler.close()
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
    logging.setLogRecordFactory(factory)
