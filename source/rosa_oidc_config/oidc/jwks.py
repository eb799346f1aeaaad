# ABOUTME: JSON Web Key Set generation from the issuer public key
# ABOUTME: Derives the key ID the same way kube-apiserver does for service account tokens

"""JSON Web Key Set builder."""

import base64
import hashlib
import json

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

from rosa_oidc_config.exceptions import MalformedKeyError, UnsupportedKeyTypeError

SIGNING_ALGORITHM = "RS256"
KEY_USE = "sig"


def key_id_from_public_key(public_key) -> str:
    """Derive a key ID non-reversibly from a public key.

    SHA-256 over the PKIX DER encoding, base64url without padding. Token
    verifiers compute the same value independently, so nothing else may go
    into the hash.
    """
    der_bytes = public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    digest = hashlib.sha256(der_bytes).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def load_public_key(public_key_pem: bytes):
    """Parse a PEM encoded PKIX public key."""
    if isinstance(public_key_pem, str):
        public_key_pem = public_key_pem.encode("utf-8")

    if b"-----BEGIN" not in public_key_pem:
        raise MalformedKeyError("Failed to decode PEM file")

    # Only PKIX blocks; PKCS#1 "RSA PUBLIC KEY" is rejected
    if b"-----BEGIN PUBLIC KEY-----" not in public_key_pem:
        raise MalformedKeyError("Failed to parse key content: expected a PKIX 'PUBLIC KEY' block")

    try:
        return serialization.load_pem_public_key(public_key_pem)
    except (ValueError, TypeError) as e:
        raise MalformedKeyError(f"Failed to parse key content: {e}") from e


def build_jwks(public_key_pem: bytes) -> bytes:
    """Build a JSON Web Key Set holding the given public key.

    Args:
        public_key_pem: PEM encoded PKIX public key

    Returns:
        The key set serialized as JSON with 4-space indentation
    """
    public_key = load_public_key(public_key_pem)
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise UnsupportedKeyTypeError("Public key is not of type RSA")

    jwk = RSAAlgorithm.to_jwk(public_key, as_dict=True)
    key = {
        "use": KEY_USE,
        "kty": jwk["kty"],
        "kid": key_id_from_public_key(public_key),
        "alg": SIGNING_ALGORITHM,
        "n": jwk["n"],
        "e": jwk["e"],
    }

    return json.dumps({"keys": [key]}, indent=4).encode("utf-8")
