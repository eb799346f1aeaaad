# ABOUTME: Shared pytest fixtures for rosa-oidc-config tests
# ABOUTME: Provides fake AWS/OCM clients, a cached key pair and an isolated config dir

import pytest

from rosa_oidc_config.config import Config
from rosa_oidc_config.exceptions import AwsServiceError, OcmError
from rosa_oidc_config.ocm import OidcConfig
from rosa_oidc_config.oidc.keys import generate_key_pair

SECRET_ARN = "arn:aws:secretsmanager:us-east-1:123456789012:secret:rosa-private-key-foo-oidc-ab12-AbCdEf"
MANAGED_ISSUER_URL = "https://oidc.os1.devshift.org/2abc3def4ghi"


class FakeAwsClient:
    """Records every call; optionally fails on one operation."""

    def __init__(self, fail_on: str = None, existing_roles: set = None):
        self.calls = []
        self.fail_on = fail_on
        self.existing_roles = existing_roles or set()

    def _record(self, operation: str, *args):
        self.calls.append((operation, *args))
        if operation == self.fail_on:
            raise AwsServiceError(
                f"AccessDenied: {operation} not allowed",
                service="aws",
                operation=operation,
                error_code="AccessDenied",
            )

    @property
    def operations(self) -> list[str]:
        return [call[0] for call in self.calls]

    def create_s3_bucket(self, bucket_name, region):
        self._record("create_s3_bucket", bucket_name, region)

    def tag_s3_bucket(self, bucket_name, tags):
        self._record("tag_s3_bucket", bucket_name, tags)

    def put_public_read_object(self, bucket_name, key, body, tags=None):
        self._record("put_public_read_object", bucket_name, key, body, tags)

    def create_secret(self, name, secret_string, description, tags=None):
        self._record("create_secret", name, secret_string, description, tags)
        return SECRET_ARN

    def check_role_exists(self, role_name):
        self.calls.append(("check_role_exists", role_name))
        return role_name in self.existing_roles


class FakeOcmClient:
    """In-memory stand-in for the OCM OIDC config API."""

    def __init__(self, fail: bool = False):
        self.created = []
        self.deleted = []
        self.fail = fail
        self.records = {}

    @property
    def calls(self) -> list:
        return self.created + self.deleted

    def create_oidc_config(self, oidc_config: OidcConfig) -> OidcConfig:
        self.created.append(oidc_config)
        if self.fail:
            raise OcmError("OCM request failed (HTTP 500): internal error", status_code=500)
        record = OidcConfig(
            id="2abc3def4ghi",
            managed=oidc_config.managed,
            issuer_url=MANAGED_ISSUER_URL if oidc_config.managed else oidc_config.issuer_url,
            secret_arn=oidc_config.secret_arn,
            installer_role_arn=oidc_config.installer_role_arn,
        )
        self.records[record.id] = record
        return record

    def get_oidc_config(self, oidc_config_id: str) -> OidcConfig:
        if oidc_config_id not in self.records:
            raise OcmError(f"OIDC config '{oidc_config_id}' not found", status_code=404)
        return self.records[oidc_config_id]

    def list_oidc_configs(self) -> list[OidcConfig]:
        return list(self.records.values())

    def delete_oidc_config(self, oidc_config_id: str) -> None:
        self.deleted.append(oidc_config_id)
        self.records.pop(oidc_config_id, None)


@pytest.fixture(scope="session")
def key_pair():
    """One real 4096-bit key pair for the whole session."""
    return generate_key_pair()


@pytest.fixture
def fast_keys(monkeypatch, key_pair):
    """Reuse the session key pair instead of generating a new one per test."""
    monkeypatch.setattr("rosa_oidc_config.oidc.bundle.generate_key_pair", lambda: key_pair)
    return key_pair


@pytest.fixture
def aws_client():
    return FakeAwsClient(existing_roles={"ManagedOpenShift-Installer-Role"})


@pytest.fixture
def ocm_client():
    return FakeOcmClient()


@pytest.fixture
def isolated_config(monkeypatch, tmp_path):
    """Point the configuration file at a temporary directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(Config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(Config, "CONFIG_FILE", config_dir / "config.json")
    monkeypatch.delenv("OCM_TOKEN", raising=False)
    return config_dir


@pytest.fixture
def failing_aws_client():
    """Factory for an AWS fake that fails on the named operation."""
    return lambda operation: FakeAwsClient(fail_on=operation)


@pytest.fixture
def failing_ocm_client():
    return FakeOcmClient(fail=True)


@pytest.fixture
def secret_arn():
    return SECRET_ARN


@pytest.fixture
def managed_issuer_url():
    return MANAGED_ISSUER_URL
