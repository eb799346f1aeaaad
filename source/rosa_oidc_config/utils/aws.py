# ABOUTME: AWS utility functions and client for rosa-oidc-config
# ABOUTME: Wraps S3, Secrets Manager and IAM calls used to host an OIDC configuration

"""AWS utilities for hosting OIDC configurations."""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from rosa_oidc_config.exceptions import AwsServiceError

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
ACL_PUBLIC_READ = "public-read"
JSON_CONTENT_TYPE = "application/json"


def get_current_region() -> str:
    """Get the current AWS region from configuration."""
    try:
        session = boto3.Session()
        return session.region_name or DEFAULT_REGION
    except BotoCoreError:
        return DEFAULT_REGION


def format_tag_set(tags: dict[str, str]) -> list[dict[str, str]]:
    """Convert a tag mapping to the boto3 ``[{"Key": ..., "Value": ...}]`` form."""
    return [{"Key": key, "Value": value} for key, value in tags.items()]


def format_object_tagging(tags: dict[str, str]) -> str:
    """Convert a tag mapping to the URL query form used by PutObject."""
    return "&".join(f"{key}={value}" for key, value in tags.items())


class AwsClient:
    """
    AWS operations needed to host an unmanaged OIDC configuration.
    Every boto3 failure is raised as AwsServiceError.
    """

    def __init__(self, region: str, profile: str = None):
        """
        Initialize AWS client.

        Args:
            region: AWS region
            profile: Optional AWS profile name
        """
        self.region = region
        try:
            self.session = (
                boto3.Session(region_name=region, profile_name=profile)
                if profile
                else boto3.Session(region_name=region)
            )
        except BotoCoreError as e:
            raise AwsServiceError(f"Failed to create AWS session: {e}", service="session", operation="Session") from e
        self._s3_client = None
        self._secrets_client = None
        self._iam_client = None

    @property
    def s3_client(self):
        """Lazy-loaded S3 client."""
        if not self._s3_client:
            self._s3_client = self.session.client("s3")
        return self._s3_client

    @property
    def secrets_client(self):
        """Lazy-loaded Secrets Manager client."""
        if not self._secrets_client:
            self._secrets_client = self.session.client("secretsmanager")
        return self._secrets_client

    @property
    def iam_client(self):
        """Lazy-loaded IAM client."""
        if not self._iam_client:
            self._iam_client = self.session.client("iam")
        return self._iam_client

    def create_s3_bucket(self, bucket_name: str, region: str) -> None:
        """Create a bucket; us-east-1 rejects an explicit location constraint."""
        params = {"Bucket": bucket_name}
        if region != DEFAULT_REGION:
            params["CreateBucketConfiguration"] = {"LocationConstraint": region}

        self._call("s3", "CreateBucket", self.s3_client.create_bucket, **params)
        logger.info("Created S3 bucket %s in %s", bucket_name, region)

    def tag_s3_bucket(self, bucket_name: str, tags: dict[str, str]) -> None:
        self._call(
            "s3",
            "PutBucketTagging",
            self.s3_client.put_bucket_tagging,
            Bucket=bucket_name,
            Tagging={"TagSet": format_tag_set(tags)},
        )

    def put_public_read_object(self, bucket_name: str, key: str, body: bytes, tags: dict[str, str] = None) -> None:
        """Upload a JSON document readable by anyone."""
        params = {
            "ACL": ACL_PUBLIC_READ,
            "Body": body,
            "Bucket": bucket_name,
            "Key": key,
            "ContentType": JSON_CONTENT_TYPE,
        }
        if tags:
            params["Tagging"] = format_object_tagging(tags)

        self._call("s3", "PutObject", self.s3_client.put_object, **params)
        logger.info("Uploaded s3://%s/%s", bucket_name, key)

    def create_secret(self, name: str, secret_string: str, description: str, tags: dict[str, str] = None) -> str:
        """Store a secret and return its ARN."""
        params = {"Name": name, "SecretString": secret_string, "Description": description}
        if tags:
            params["Tags"] = format_tag_set(tags)

        response = self._call("secretsmanager", "CreateSecret", self.secrets_client.create_secret, **params)
        secret_arn = response["ARN"]
        logger.info("Created secret %s", secret_arn)
        return secret_arn

    def check_role_exists(self, role_name: str) -> bool:
        """Check if an IAM role exists."""
        try:
            self.iam_client.get_role(RoleName=role_name)
            return True
        except ClientError as e:
            if e.response["Error"]["Code"] == "NoSuchEntity":
                return False
            raise self._to_service_error("iam", "GetRole", e) from e
        except BotoCoreError as e:
            raise AwsServiceError(f"iam GetRole failed: {e}", service="iam", operation="GetRole") from e

    def _call(self, service: str, operation: str, method, **params):
        try:
            return method(**params)
        except ClientError as e:
            raise self._to_service_error(service, operation, e) from e
        except BotoCoreError as e:
            raise AwsServiceError(f"{service} {operation} failed: {e}", service=service, operation=operation) from e

    @staticmethod
    def _to_service_error(service: str, operation: str, error: ClientError) -> AwsServiceError:
        error_code = error.response["Error"].get("Code")
        error_message = error.response["Error"].get("Message", str(error))
        logger.debug("%s %s failed with %s", service, operation, error_code)
        return AwsServiceError(
            f"{error_code}: {error_message}",
            service=service,
            operation=operation,
            error_code=error_code,
        )
