# ABOUTME: Shared description of the steps that host an unmanaged OIDC configuration
# ABOUTME: Each step can run against AWS or render the equivalent AWS CLI command

"""Provisioning steps shared by the automatic and manual strategies.

Automatic mode calls ``apply`` on every step; manual mode writes each step's
local files and prints its ``commands``. Both come from the same objects, so a
user who runs the printed commands ends up with the same resources the
automatic mode would have created.
"""

from dataclasses import dataclass, field

from rosa_oidc_config.utils.aws import ACL_PUBLIC_READ, DEFAULT_REGION, JSON_CONTENT_TYPE, format_object_tagging
from rosa_oidc_config.utils.command_builder import S3API, SECRETS_MANAGER, AwsCommandBuilder

from .bundle import OidcConfigInput
from .discovery import DISCOVERY_DOCUMENT_KEY, JWKS_KEY

RED_HAT_MANAGED_TAG = "red-hat-managed"
MANAGED_TAGS = {RED_HAT_MANAGED_TAG: "true"}


def _render_tag_set(tags: dict[str, str]) -> str:
    rendered = ",".join(f"{{Key={key},Value={value}}}" for key, value in tags.items())
    return f"'TagSet=[{rendered}]'"


def _render_object_tagging(tags: dict[str, str]) -> str:
    return f"'{format_object_tagging(tags)}'"


@dataclass(frozen=True)
class CreateBucketStep:
    bucket_name: str
    region: str
    description: str = "creating S3 bucket"

    def local_files(self) -> dict[str, bytes]:
        return {}

    def apply(self, aws_client) -> dict[str, str]:
        aws_client.create_s3_bucket(self.bucket_name, self.region)
        return {"bucket_name": self.bucket_name}

    def commands(self) -> list[str]:
        location = f"LocationConstraint={self.region}" if self.region != DEFAULT_REGION else ""
        return [
            AwsCommandBuilder(S3API)
            .set_command("create-bucket")
            .add_param("bucket", self.bucket_name)
            .add_param("create-bucket-configuration", location)
            .add_param("region", self.region)
            .build()
        ]


@dataclass(frozen=True)
class TagBucketStep:
    bucket_name: str
    description: str = "tagging S3 bucket"

    def local_files(self) -> dict[str, bytes]:
        return {}

    def apply(self, aws_client) -> dict[str, str]:
        aws_client.tag_s3_bucket(self.bucket_name, MANAGED_TAGS)
        return {}

    def commands(self) -> list[str]:
        return [
            AwsCommandBuilder(S3API)
            .set_command("put-bucket-tagging")
            .add_param("bucket", self.bucket_name)
            .add_param("tagging", _render_tag_set(MANAGED_TAGS))
            .build()
        ]


@dataclass(frozen=True)
class PutObjectStep:
    bucket_name: str
    key: str
    filename: str
    body: bytes = field(repr=False)
    description: str = "uploading document to S3 bucket"

    def local_files(self) -> dict[str, bytes]:
        return {self.filename: self.body}

    def apply(self, aws_client) -> dict[str, str]:
        aws_client.put_public_read_object(self.bucket_name, self.key, self.body, MANAGED_TAGS)
        return {}

    def commands(self) -> list[str]:
        put_object = (
            AwsCommandBuilder(S3API)
            .set_command("put-object")
            .add_param("acl", ACL_PUBLIC_READ)
            .add_param("body", f"./{self.filename}")
            .add_param("bucket", self.bucket_name)
            .add_param("key", self.key)
            .add_param("content-type", JSON_CONTENT_TYPE)
            .add_param("tagging", _render_object_tagging(MANAGED_TAGS))
            .build()
        )
        return [put_object, f"rm {self.filename}"]


@dataclass(frozen=True)
class CreateSecretStep:
    secret_name: str
    bucket_name: str
    region: str
    filename: str
    secret_string: bytes = field(repr=False)
    description: str = "saving private key to secrets manager"

    @property
    def secret_description(self) -> str:
        return f"Secret for {self.bucket_name}"

    def local_files(self) -> dict[str, bytes]:
        return {self.filename: self.secret_string}

    def apply(self, aws_client) -> dict[str, str]:
        secret_arn = aws_client.create_secret(
            self.secret_name,
            self.secret_string.decode("utf-8"),
            self.secret_description,
            MANAGED_TAGS,
        )
        return {"secret_arn": secret_arn}

    def commands(self) -> list[str]:
        create_secret = (
            AwsCommandBuilder(SECRETS_MANAGER)
            .set_command("create-secret")
            .add_param("name", self.secret_name)
            .add_param("secret-string", f"file://{self.filename}")
            .add_param("description", f'"{self.secret_description}"')
            .add_param("region", self.region)
            .add_tags(MANAGED_TAGS)
            .build()
        )
        return [create_secret, f"rm {self.filename}"]


def build_provisioning_steps(oidc_config_input: OidcConfigInput, region: str) -> list:
    """List the steps, in execution order, that host an unmanaged configuration."""
    bucket_name = oidc_config_input.bucket_name
    return [
        CreateBucketStep(bucket_name=bucket_name, region=region),
        TagBucketStep(bucket_name=bucket_name),
        PutObjectStep(
            bucket_name=bucket_name,
            key=DISCOVERY_DOCUMENT_KEY,
            filename=oidc_config_input.discovery_document_filename,
            body=oidc_config_input.discovery_document.encode("utf-8"),
            description="populating discovery document to S3 bucket",
        ),
        PutObjectStep(
            bucket_name=bucket_name,
            key=JWKS_KEY,
            filename=oidc_config_input.jwks_filename,
            body=oidc_config_input.jwks,
            description="populating JWKS to S3 bucket",
        ),
        CreateSecretStep(
            secret_name=oidc_config_input.private_key_secret_name,
            bucket_name=bucket_name,
            region=region,
            filename=oidc_config_input.private_key_filename,
            secret_string=oidc_config_input.private_key,
        ),
    ]
