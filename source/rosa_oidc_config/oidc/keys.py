# ABOUTME: RSA signing key generation for the OIDC issuer
# ABOUTME: Produces PKCS#1 private and SubjectPublicKeyInfo public PEM blocks

"""Signing key material for service account tokens."""

import logging

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from rosa_oidc_config.exceptions import KeyGenerationError

logger = logging.getLogger(__name__)

RSA_KEY_SIZE = 4096
RSA_PUBLIC_EXPONENT = 65537


def generate_key_pair() -> tuple[bytes, bytes]:
    """Generate a 4096-bit RSA key pair.

    Returns:
        Tuple of (private key PEM, public key PEM). The private key is encoded
        as PKCS#1 (``RSA PRIVATE KEY``), the public key as PKIX (``PUBLIC KEY``).
    """
    try:
        private_key = rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=RSA_KEY_SIZE)
    except Exception as e:
        raise KeyGenerationError(f"failed to generate private key: {e}") from e

    try:
        encoded_private_key = private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
        encoded_public_key = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    except Exception as e:
        raise KeyGenerationError(f"failed to generate public key from private: {e}") from e

    logger.debug("Generated %d-bit RSA key pair", RSA_KEY_SIZE)
    return encoded_private_key, encoded_public_key
