# ABOUTME: OpenShift Cluster Manager client for OIDC configuration records
# ABOUTME: Exchanges the offline token and performs CRUD on /oidc_configs

"""OpenShift Cluster Manager (OCM) API client."""

import logging
from dataclasses import dataclass
from typing import Any

import requests

from rosa_oidc_config.exceptions import OcmError

logger = logging.getLogger(__name__)

DEFAULT_OCM_URL = "https://api.openshift.com"
DEFAULT_TOKEN_URL = "https://sso.redhat.com/auth/realms/redhat-external/protocol/openid-connect/token"
DEFAULT_CLIENT_ID = "cloud-services"

OIDC_CONFIGS_PATH = "/api/clusters_mgmt/v1/oidc_configs"
REQUEST_TIMEOUT = 30


@dataclass
class OidcConfig:
    """OIDC configuration record as stored by OCM."""

    managed: bool = False
    id: str | None = None
    issuer_url: str | None = None
    secret_arn: str | None = None
    installer_role_arn: str | None = None
    href: str | None = None
    creation_timestamp: str | None = None

    def to_request_body(self) -> dict[str, Any]:
        """Body for a create request; unset fields are omitted."""
        body: dict[str, Any] = {"kind": "OidcConfig", "managed": self.managed}
        if self.secret_arn:
            body["secret_arn"] = self.secret_arn
        if self.issuer_url:
            body["issuer_url"] = self.issuer_url
        if self.installer_role_arn:
            body["installer_role_arn"] = self.installer_role_arn
        return body

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OidcConfig":
        return cls(
            managed=data.get("managed", False),
            id=data.get("id"),
            issuer_url=data.get("issuer_url"),
            secret_arn=data.get("secret_arn"),
            installer_role_arn=data.get("installer_role_arn"),
            href=data.get("href"),
            creation_timestamp=data.get("creation_timestamp"),
        )


class OcmClient:
    """Thin client over the OCM clusters management API."""

    def __init__(
        self,
        token: str,
        url: str = DEFAULT_OCM_URL,
        token_url: str = DEFAULT_TOKEN_URL,
        client_id: str = DEFAULT_CLIENT_ID,
        session: requests.Session = None,
    ):
        """
        Initialize OCM client.

        Args:
            token: OCM offline token (refresh token)
            url: OCM API base URL
            token_url: SSO token endpoint used to exchange the offline token
            client_id: SSO client ID
            session: Optional requests session
        """
        self.url = url.rstrip("/")
        self.token_url = token_url
        self.client_id = client_id
        self.session = session or requests.Session()
        self._offline_token = token
        self._access_token = None

    def create_oidc_config(self, oidc_config: OidcConfig) -> OidcConfig:
        response = self._request("POST", OIDC_CONFIGS_PATH, json=oidc_config.to_request_body())
        created = OidcConfig.from_dict(self._parse_json(response))
        logger.info("Registered OIDC config %s (managed=%s)", created.id, created.managed)
        return created

    def get_oidc_config(self, oidc_config_id: str) -> OidcConfig:
        response = self._request("GET", f"{OIDC_CONFIGS_PATH}/{oidc_config_id}")
        return OidcConfig.from_dict(self._parse_json(response))

    def list_oidc_configs(self) -> list[OidcConfig]:
        response = self._request("GET", OIDC_CONFIGS_PATH, params={"page": 1, "size": -1})
        return [OidcConfig.from_dict(item) for item in self._parse_json(response).get("items", [])]

    def delete_oidc_config(self, oidc_config_id: str) -> None:
        self._request("DELETE", f"{OIDC_CONFIGS_PATH}/{oidc_config_id}")
        logger.info("Deleted OIDC config %s", oidc_config_id)

    def _get_access_token(self) -> str:
        """Exchange the offline token for a short lived access token."""
        if self._access_token:
            return self._access_token

        try:
            response = self.session.post(
                self.token_url,
                data={
                    "grant_type": "refresh_token",
                    "client_id": self.client_id,
                    "refresh_token": self._offline_token,
                },
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise OcmError(f"Failed to reach token endpoint: {e}") from e

        if response.status_code != 200:
            raise OcmError(
                f"Failed to exchange OCM token (HTTP {response.status_code})",
                status_code=response.status_code,
            )

        try:
            self._access_token = self._parse_json(response)["access_token"]
        except (KeyError, TypeError) as e:
            raise OcmError("Token response did not include an access token") from e
        return self._access_token

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        headers = {"Authorization": f"Bearer {self._get_access_token()}"}
        try:
            response = self.session.request(
                method, f"{self.url}{path}", headers=headers, timeout=REQUEST_TIMEOUT, **kwargs
            )
        except requests.RequestException as e:
            raise OcmError(f"Failed to reach OCM at {self.url}: {e}") from e

        logger.debug("%s %s -> %s", method, path, response.status_code)
        if response.status_code >= 400:
            raise self._to_ocm_error(response)
        return response

    @staticmethod
    def _parse_json(response: requests.Response) -> dict[str, Any]:
        try:
            return response.json()
        except ValueError as e:
            raise OcmError(
                f"Unexpected non-JSON response from OCM (HTTP {response.status_code})",
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _to_ocm_error(response: requests.Response) -> OcmError:
        try:
            body = response.json()
        except ValueError:
            body = {}

        reason = body.get("reason") or response.text or response.reason
        return OcmError(
            f"OCM request failed (HTTP {response.status_code}): {reason}",
            status_code=response.status_code,
            error_code=body.get("code"),
        )
