# ABOUTME: Assembles the inputs of an unmanaged OIDC configuration
# ABOUTME: Derives bucket, secret and issuer names and generates every document

"""Provisioning input assembly for unmanaged OIDC configurations."""

import logging
import re
import secrets
import string
from dataclasses import dataclass, field

from rosa_oidc_config.exceptions import InvalidBucketNameError

from .discovery import build_discovery_document
from .jwks import build_jwks
from .keys import generate_key_pair

logger = logging.getLogger(__name__)

DEFAULT_LENGTH_RANDOM_LABEL = 4
MAX_LENGTH_USER_PREFIX = 15
MAX_LENGTH_BUCKET_NAME = 63

PREFIX_FOR_PRIVATE_KEY_SECRET = "rosa-private-key"
DEFAULT_PREFIX_FOR_CONFIGURATION = "oidc"

RANDOM_LABEL_ALPHABET = string.ascii_lowercase + string.digits

# Buckets with '.' in them are not supported
BUCKET_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9\-]+[a-z0-9]$")


@dataclass(frozen=True)
class OidcConfigInput:
    """Everything an unmanaged OIDC configuration needs, built once per run."""

    bucket_name: str = ""
    issuer_url: str = ""
    private_key: bytes = field(default=b"", repr=False)
    public_key: bytes = field(default=b"", repr=False)
    private_key_filename: str = ""
    private_key_secret_name: str = ""
    discovery_document: str = field(default="", repr=False)
    jwks: bytes = field(default=b"", repr=False)

    @classmethod
    def empty(cls) -> "OidcConfigInput":
        """Input used for managed configurations, which need no local artifacts."""
        return cls()

    @property
    def discovery_document_filename(self) -> str:
        return f"discovery-document-{self.bucket_name}.json"

    @property
    def jwks_filename(self) -> str:
        return f"jwks-{self.bucket_name}.json"


def random_label(length: int = DEFAULT_LENGTH_RANDOM_LABEL) -> str:
    """Generate a short random lowercase label."""
    return "".join(secrets.choice(RANDOM_LABEL_ALPHABET) for _ in range(length))


def is_valid_bucket_name(bucket_name: str) -> bool:
    """Check a bucket name against S3 naming rules.

    Stricter than S3 itself: dots are never allowed.
    """
    if not bucket_name or len(bucket_name) > MAX_LENGTH_BUCKET_NAME:
        return False
    if bucket_name.startswith(".") or bucket_name.endswith("."):
        return False
    if bucket_name.startswith("xn--"):
        return False
    if bucket_name.endswith("-s3alias"):
        return False
    if ".." in bucket_name:
        return False
    return bool(BUCKET_NAME_PATTERN.match(bucket_name))


def validate_bucket_name(bucket_name: str) -> None:
    """Raise InvalidBucketNameError unless the bucket name is usable."""
    if not is_valid_bucket_name(bucket_name):
        raise InvalidBucketNameError(f"The bucket name '{bucket_name}' is not valid", bucket_name=bucket_name)


def get_bucket_name(user_prefix: str = "", label: str = None) -> str:
    bucket_name = f"{DEFAULT_PREFIX_FOR_CONFIGURATION}-{label or random_label()}"
    if user_prefix:
        bucket_name = f"{user_prefix}-{bucket_name}"
    return bucket_name


def get_issuer_url(bucket_name: str, region: str) -> str:
    """Regional virtual-hosted-style URL of the bucket."""
    return f"https://{bucket_name}.s3.{region}.amazonaws.com"


def get_private_key_secret_name(bucket_name: str) -> str:
    return f"{PREFIX_FOR_PRIVATE_KEY_SECRET}-{bucket_name}"


def build_oidc_config_input(user_prefix: str, region: str) -> OidcConfigInput:
    """Build the provisioning input for an unmanaged OIDC configuration.

    The bucket name is validated before any key material is generated, so an
    invalid prefix fails without side effects.

    Args:
        user_prefix: Optional prefix for the bucket and secret names
        region: AWS region the bucket will live in

    Returns:
        A frozen OidcConfigInput
    """
    bucket_name = get_bucket_name(user_prefix)
    validate_bucket_name(bucket_name)

    private_key_secret_name = get_private_key_secret_name(bucket_name)
    issuer_url = get_issuer_url(bucket_name, region)

    private_key, public_key = generate_key_pair()
    discovery_document = build_discovery_document(issuer_url)
    jwks = build_jwks(public_key)

    logger.info("Assembled OIDC config input for bucket %s (issuer %s)", bucket_name, issuer_url)

    return OidcConfigInput(
        bucket_name=bucket_name,
        issuer_url=issuer_url,
        private_key=private_key,
        public_key=public_key,
        private_key_filename=f"{private_key_secret_name}.key",
        private_key_secret_name=private_key_secret_name,
        discovery_document=discovery_document,
        jwks=jwks,
    )
