# ABOUTME: Custom exception classes for OIDC configuration provisioning
# ABOUTME: Provides structured errors for validation, key material and remote calls

"""Custom exceptions for OIDC configuration operations."""


class OidcConfigError(Exception):
    """Base exception for all OIDC configuration operations."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationError(OidcConfigError):
    """Raised when user input is rejected before any side effect."""

    def __init__(self, message: str, option_name: str = None):
        super().__init__(message)
        self.option_name = option_name


class InvalidBucketNameError(ValidationError):
    """Raised when a generated bucket name breaks S3 naming rules."""

    def __init__(self, message: str, bucket_name: str = None):
        super().__init__(message)
        self.bucket_name = bucket_name


class KeyGenerationError(OidcConfigError):
    """Raised when the RSA key pair cannot be generated or encoded."""

    pass


class MalformedKeyError(OidcConfigError):
    """Raised when a PEM document does not hold a valid public key."""

    pass


class UnsupportedKeyTypeError(OidcConfigError):
    """Raised when the public key is not an RSA key."""

    pass


class DocumentSaveError(OidcConfigError):
    """Raised when a generated document cannot be written locally."""

    def __init__(self, message: str, filename: str = None):
        super().__init__(message)
        self.filename = filename


class RemoteProvisioningError(OidcConfigError):
    """Raised when a storage, secret or registry call fails.

    Carries the identifiers of resources that were already created so the
    operator can inspect or finish the configuration by hand.
    """

    def __init__(self, message: str, created_resources: dict[str, str] = None):
        super().__init__(message)
        self.created_resources = dict(created_resources or {})

    def get_recovery_hint(self) -> str:
        """Get a human readable list of resources left behind."""
        labels = {
            "bucket_name": "Bucket",
            "issuer_url": "Issuer URL",
            "secret_arn": "Secret ARN",
        }
        parts = [f"{labels.get(key, key)}: {value}" for key, value in self.created_resources.items() if value]
        return "\t".join(parts)


class AwsServiceError(RemoteProvisioningError):
    """Raised when an AWS API call fails."""

    def __init__(self, message: str, service: str = None, operation: str = None, error_code: str = None):
        super().__init__(message)
        self.service = service
        self.operation = operation
        self.error_code = error_code


class OcmError(RemoteProvisioningError):
    """Raised when the OpenShift Cluster Manager API rejects a request."""

    def __init__(self, message: str, status_code: int = None, error_code: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
