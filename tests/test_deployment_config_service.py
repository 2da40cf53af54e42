import pytest

from httpboot_core.schemas.network_config.network_config import (
    DeploymentSettings,
    EnvFacts,
)
from httpboot_core.services.deployment_config_service import (
    DeploymentSettingsValidator,
    data_directory_parent,
    validate_all,
    validate_deployment,
)


class TestDeploymentSettingsValidator:
    """Tests for the deployment settings checks."""

    def test_valid_settings(self, valid_deployment):
        report = validate_deployment(valid_deployment)

        assert report.is_valid
        assert report.issues == []

    def test_missing_required_settings(self):
        report = DeploymentSettingsValidator().validate(DeploymentSettings())

        assert [issue.field for issue in report.errors] == [
            "primary_distro",
            "architecture",
            "boot_method",
            "container_name",
            "data_directory",
        ]

    @pytest.mark.parametrize(
        "field, value, options",
        [
            ("primary_distro", "arch", "debian ubuntu centos fedora"),
            ("architecture", "riscv64", "amd64 arm64 i386"),
            ("boot_method", "netboot", "bios uefi both"),
        ],
    )
    def test_invalid_choice(self, valid_deployment, field, value, options):
        settings = valid_deployment.model_copy(update={field: value})

        report = validate_deployment(settings)

        assert [issue.field for issue in report.errors] == [field]
        assert report.errors[0].message.endswith(f"Valid options: {options}")

    def test_boolean_flags(self, valid_deployment):
        settings = valid_deployment.model_copy(
            update={"enable_ssl": "yes", "enable_access_log": "true", "enable_auto_backup": "False"}
        )

        report = validate_deployment(settings)

        assert [issue.field for issue in report.errors] == ["enable_ssl", "enable_auto_backup"]
        assert "must be 'true' or 'false', got: yes" in report.errors[0].message

    def test_boot_timeout(self, valid_deployment):
        assert validate_deployment(
            valid_deployment.model_copy(update={"boot_timeout": "300"})
        ).is_valid

        report = validate_deployment(valid_deployment.model_copy(update={"boot_timeout": "5m"}))
        assert [issue.field for issue in report.errors] == ["boot_timeout"]

    def test_http_auth_requires_username(self, valid_deployment):
        settings = valid_deployment.model_copy(update={"enable_http_auth": "true"})

        report = validate_deployment(settings)

        assert [issue.field for issue in report.errors] == ["http_username"]
        assert [issue.field for issue in report.warnings] == ["http_password"]

    def test_http_auth_default_password(self, valid_deployment):
        settings = valid_deployment.model_copy(
            update={
                "enable_http_auth": "true",
                "http_username": "admin",
                "http_password": "changeme",
            }
        )

        report = validate_deployment(settings)

        assert report.is_valid
        assert "default http_password" in report.warnings[0].message

    def test_http_auth_configured(self, valid_deployment):
        settings = valid_deployment.model_copy(
            update={
                "enable_http_auth": "true",
                "http_username": "admin",
                "http_password": "s3cret",
            }
        )

        assert validate_deployment(settings).issues == []

    def test_http_auth_disabled_ignores_credentials(self, valid_deployment):
        settings = valid_deployment.model_copy(update={"enable_http_auth": "false"})

        assert validate_deployment(settings).issues == []

    def test_ssl_requires_paths(self, valid_deployment):
        settings = valid_deployment.model_copy(update={"enable_ssl": "true"})

        report = validate_deployment(settings)

        assert [issue.field for issue in report.errors] == ["ssl_cert_path", "ssl_key_path"]
        assert "required when enable_ssl=true" in report.errors[0].message

    def test_ssl_files_must_exist(self, valid_deployment):
        settings = valid_deployment.model_copy(
            update={
                "enable_ssl": "true",
                "ssl_cert_path": "/etc/httpboot/ssl/server.crt",
                "ssl_key_path": "/etc/httpboot/ssl/server.key",
            }
        )
        facts = EnvFacts(existing_files=frozenset({"/etc/httpboot/ssl/server.crt"}))

        report = validate_deployment(settings, facts)

        assert [issue.field for issue in report.errors] == ["ssl_key_path"]
        assert "file not found: /etc/httpboot/ssl/server.key" in report.errors[0].message

        facts = EnvFacts(
            existing_files=frozenset(
                {"/etc/httpboot/ssl/server.crt", "/etc/httpboot/ssl/server.key"}
            )
        )
        assert validate_deployment(settings, facts).is_valid

    def test_ssl_files_unchecked_without_facts(self, valid_deployment):
        settings = valid_deployment.model_copy(
            update={
                "enable_ssl": "true",
                "ssl_cert_path": "/etc/httpboot/ssl/server.crt",
                "ssl_key_path": "/etc/httpboot/ssl/server.key",
            }
        )

        assert validate_deployment(settings, EnvFacts()).issues == []

    def test_podman_missing(self, valid_deployment):
        report = validate_deployment(valid_deployment, EnvFacts(podman_installed=False))

        assert [issue.field for issue in report.errors] == ["podman"]
        assert report.errors[0].message == "Podman is not installed or not in PATH"

    @pytest.mark.parametrize(
        "version, warned",
        [("2.2.1", True), ("3.0.0", False), ("4.9.3", False), (None, False)],
    )
    def test_podman_version(self, valid_deployment, version, warned):
        facts = EnvFacts(podman_installed=True, podman_version=version)

        report = validate_deployment(valid_deployment, facts)

        assert report.is_valid
        assert bool(report.warnings) is warned
        if warned:
            assert report.warnings[0].message == (
                "Podman version 2.2.1 may be too old (recommended: >= 3.0.0)"
            )

    def test_data_directory_parent_missing(self, valid_deployment):
        settings = valid_deployment.model_copy(update={"data_directory": "/srv/httpboot/data"})
        facts = EnvFacts(existing_dirs=frozenset(), writable_dirs=frozenset())

        report = validate_deployment(settings, facts)

        assert [issue.field for issue in report.errors] == ["data_directory"]
        assert report.errors[0].message.endswith("does not exist: /srv/httpboot")

    def test_data_directory_parent_read_only(self, valid_deployment):
        facts = EnvFacts(existing_dirs=frozenset({"."}), writable_dirs=frozenset())

        report = validate_deployment(valid_deployment, facts)

        assert [issue.field for issue in report.errors] == ["data_directory"]
        assert "No write permission" in report.errors[0].message

        facts = EnvFacts(existing_dirs=frozenset({"."}), writable_dirs=frozenset({"."}))
        assert validate_deployment(valid_deployment, facts).is_valid

    def test_security_modules_warn(self, valid_deployment):
        facts = EnvFacts(selinux_enforcing=True, apparmor_active=True)

        report = validate_deployment(valid_deployment, facts)

        assert report.is_valid
        assert [issue.field for issue in report.warnings] == ["selinux", "apparmor"]

        facts = EnvFacts(selinux_enforcing=False, apparmor_active=False)
        assert validate_deployment(valid_deployment, facts).issues == []


@pytest.mark.parametrize(
    "data_directory, parent",
    [
        ("./data", "."),
        ("data", "."),
        ("/srv/httpboot/data/", "/srv/httpboot"),
        ("", None),
        (None, None),
    ],
)
def test_data_directory_parent(data_directory, parent):
    assert data_directory_parent(data_directory) == parent


def test_validate_all_orders_network_first(valid_config, user_facts):
    config = valid_config.model_copy(update={"host_ip": "192.168.1.150"})
    settings = DeploymentSettings(primary_distro="debian")

    report = validate_all(config, settings, user_facts)

    assert not report.is_valid
    assert report.issues[0].field == "host_ip"
    assert [issue.field for issue in report.issues[1:]] == [
        "architecture",
        "boot_method",
        "container_name",
        "data_directory",
    ]


def test_validate_all_valid(valid_config, valid_deployment, user_facts):
    assert validate_all(valid_config, valid_deployment, user_facts).is_valid
