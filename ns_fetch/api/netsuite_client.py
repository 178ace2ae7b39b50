"""NetSuite REST API client."""
import json
import logging
from typing import Any, Optional

import requests

from config import Credentials, NetSuiteApiConfig
from ns_fetch.auth.oauth_signer import OAuthSigner
from ns_fetch.errors import TransportError

logger = logging.getLogger(__name__)


class NetSuiteClient:
    """Client for the SuiteTalk REST record API."""

    def __init__(
        self,
        credentials: Credentials,
        api_config: Optional[NetSuiteApiConfig] = None,
        signer: Optional[OAuthSigner] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize client.

        Args:
            credentials: Account credentials used for signing
            api_config: Timeout and host settings
            signer: Request signer (built from credentials when omitted)
            session: HTTP session (a new one when omitted)
        """
        self.credentials = credentials
        self.config = api_config or NetSuiteApiConfig()
        self.signer = signer or OAuthSigner(credentials)
        self.session = session or requests.Session()

    def request(self, method: str, url: str, payload: Optional[Any] = None) -> Any:
        """
        Send one signed request.

        The Authorization header is computed right before sending, so every
        request carries its own nonce and timestamp.

        Args:
            method: HTTP method
            url: Full URL including query string
            payload: JSON body, or None for no body

        Returns:
            Parsed JSON body, the raw text for non-JSON bodies, or None when
            the response is empty

        Raises:
            TransportError: On network failure, a non-2xx response or a
                payload that cannot be encoded as JSON
        """
        method = method.upper()
        if payload is not None:
            try:
                json.dumps(payload)
            except (TypeError, ValueError) as e:
                raise TransportError(f"{method} {url} not sent, payload is not JSON: {e}") from e

        headers = {
            "Authorization": self.signer.sign(method, url),
            "Content-Type": "application/json",
        }

        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                json=payload,
                timeout=self.config.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        body = self._parse_body(response)

        if not response.ok:
            logger.debug(f"{method} {url} -> HTTP {response.status_code}")
            raise TransportError(
                f"HTTP {response.status_code} for {method} {url}",
                status_code=response.status_code,
                body=body,
            )

        logger.debug(f"{method} {url} -> HTTP {response.status_code}")
        return body

    @staticmethod
    def _parse_body(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text
