# Core config
PROJECT_DESCRIPTION: str = "Validates the HTTP/TFTP boot server configuration before deployment"

ENV_PREFIX: str = "HTTPBOOT_"
DEFAULT_ENV_FILE: str = ".env"

# CIDR prefix lengths accepted for boot networks
MIN_PREFIX_LENGTH: int = 8
MAX_PREFIX_LENGTH: int = 30

# Ports
MIN_PORT: int = 1
MAX_PORT: int = 65535
PRIVILEGED_PORT_LIMIT: int = 1024

HTTP_PROTOCOL: str = "tcp"
TFTP_PROTOCOL: str = "udp"

# Linux programs
SS_FILE: str = "ss"
NETSTAT_FILE: str = "netstat"
PODMAN_FILE: str = "podman"
GETENFORCE_FILE: str = "getenforce"
AA_STATUS_FILE: str = "aa-status"

# recommended minimum podman release
MIN_PODMAN_VERSION: tuple = (3, 0, 0)

# Deployment settings
VALID_DISTROS: tuple = ("debian", "ubuntu", "centos", "fedora")
VALID_ARCHITECTURES: tuple = ("amd64", "arm64", "i386")
VALID_BOOT_METHODS: tuple = ("bios", "uefi", "both")

BOOLEAN_SETTINGS: tuple = (
    "enable_secure_boot",
    "enable_http_auth",
    "enable_ssl",
    "enable_dhcp_relay",
    "enable_access_log",
    "enable_auto_backup",
    "enable_firewall_rules",
)

DEFAULT_HTTP_PASSWORD: str = "changeme"

# .env keys for the network configuration
NETWORK_ENV_KEYS: dict = {
    "subnet_cidr": "NETWORK_SUBNET",
    "host_ip": "HOST_IP",
    "gateway_ip": "GATEWAY_IP",
    "dns_primary": "DNS_PRIMARY",
    "dns_secondary": "DNS_SECONDARY",
    "dhcp_range_start": "DHCP_RANGE_START",
    "dhcp_range_end": "DHCP_RANGE_END",
    "http_port": "HTTP_PORT",
    "tftp_port": "TFTP_PORT",
}

# .env keys for the deployment settings
DEPLOYMENT_ENV_KEYS: dict = {
    "primary_distro": "PRIMARY_DISTRO",
    "architecture": "ARCHITECTURE",
    "boot_method": "BOOT_METHOD",
    "container_name": "CONTAINER_NAME",
    "data_directory": "DATA_DIRECTORY",
    "boot_timeout": "BOOT_TIMEOUT",
    "enable_secure_boot": "ENABLE_SECURE_BOOT",
    "enable_http_auth": "ENABLE_HTTP_AUTH",
    "enable_ssl": "ENABLE_SSL",
    "enable_dhcp_relay": "ENABLE_DHCP_RELAY",
    "enable_access_log": "ENABLE_ACCESS_LOG",
    "enable_auto_backup": "ENABLE_AUTO_BACKUP",
    "enable_firewall_rules": "ENABLE_FIREWALL_RULES",
    "http_username": "HTTP_USERNAME",
    "http_password": "HTTP_PASSWORD",
    "ssl_cert_path": "SSL_CERT_PATH",
    "ssl_key_path": "SSL_KEY_PATH",
}
