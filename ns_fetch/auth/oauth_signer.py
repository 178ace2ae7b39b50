"""
OAuth Signer - Builds OAuth 1.0a Authorization headers for NetSuite

Features:
- HMAC-SHA256 signatures over the standard OAuth 1.0a base string
- URL query parameters included in the signed parameter set
- Fresh nonce and timestamp per request (both injectable for tests)
- NetSuite realm appended after signing, never signed itself
"""

import base64
import hashlib
import hmac
import logging
import secrets
import string
import time
from typing import Callable, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

from config import Credentials
from ns_fetch.errors import SigningError

logger = logging.getLogger(__name__)

SIGNATURE_METHOD = "HMAC-SHA256"
OAUTH_VERSION = "1.0"
NONCE_LENGTH = 32
NONCE_ALPHABET = string.ascii_letters + string.digits

DEFAULT_PORTS = {"http": 80, "https": 443}


def percent_encode(value) -> str:
    """Percent-encode everything outside the RFC 3986 unreserved set."""
    return quote(str(value), safe="")


def generate_nonce() -> str:
    """Return a cryptographically random alphanumeric nonce."""
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(NONCE_LENGTH))


def normalize_base_url(url: str) -> str:
    """
    Normalize a URL for the signature base string

    Lowercases scheme and host, drops a default port and removes the query
    string and fragment.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()

    if parts.port and parts.port != DEFAULT_PORTS.get(scheme):
        host = f"{host}:{parts.port}"

    return urlunsplit((scheme, host, parts.path or "/", "", ""))


def normalize_parameters(params: List[Tuple[str, str]]) -> str:
    """Encode, sort and join request parameters as `k=v&k=v`."""
    encoded = sorted(
        (percent_encode(key), percent_encode(value)) for key, value in params
    )
    return "&".join(f"{key}={value}" for key, value in encoded)


def build_base_string(method: str, url: str, oauth_params: Dict[str, str]) -> str:
    """
    Build the OAuth 1.0a signature base string

    Args:
        method: HTTP method
        url: Full request URL, query parameters included
        oauth_params: OAuth protocol parameters (without oauth_signature)

    Returns:
        str: METHOD&enc(base_url)&enc(parameter_string)
    """
    query_params = parse_qsl(urlsplit(url).query, keep_blank_values=True)
    params = list(oauth_params.items()) + query_params

    return "&".join([
        method.upper(),
        percent_encode(normalize_base_url(url)),
        percent_encode(normalize_parameters(params)),
    ])


def build_signing_key(consumer_secret: str, token_secret: str) -> str:
    """Signing key is enc(consumer_secret)&enc(token_secret)."""
    return f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"


def hmac_sha256_signature(key: str, base_string: str) -> str:
    """Base64-encoded HMAC-SHA256 digest."""
    digest = hmac.new(
        key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha256
    ).digest()
    return base64.b64encode(digest).decode("ascii")


class OAuthSigner:
    """
    Produces per-request OAuth 1.0a Authorization headers

    Usage:
    ```python
    signer = OAuthSigner(credentials)
    header = signer.sign("GET", "https://123456.suitetalk.api.netsuite.com/...")
    # 'OAuth oauth_consumer_key="...", ..., oauth_version="1.0", realm="123456"'
    ```
    """

    def __init__(
        self,
        credentials: Credentials,
        nonce_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize OAuthSigner

        Args:
            credentials: Consumer and token credentials plus realm
            nonce_factory: Nonce source, defaults to a random 32-char nonce
            clock: Time source in Unix seconds, defaults to time.time

        Raises:
            SigningError: If any credential field is empty
        """
        missing = credentials.missing_fields()
        if missing:
            raise SigningError(
                f"Cannot sign requests, credentials missing: {', '.join(missing)}"
            )

        self.credentials = credentials
        self.nonce_factory = nonce_factory or generate_nonce
        self.clock = clock or time.time

    def oauth_parameters(self, nonce: str, timestamp: int) -> Dict[str, str]:
        """OAuth protocol parameters for one request, signature excluded."""
        return {
            "oauth_consumer_key": self.credentials.consumer_key,
            "oauth_nonce": nonce,
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": str(timestamp),
            "oauth_token": self.credentials.token,
            "oauth_version": OAUTH_VERSION,
        }

    def signature(self, method: str, url: str, oauth_params: Dict[str, str]) -> str:
        base_string = build_base_string(method, url, oauth_params)
        key = build_signing_key(
            self.credentials.consumer_secret, self.credentials.token_secret
        )
        return hmac_sha256_signature(key, base_string)

    def sign(
        self,
        method: str,
        url: str,
        nonce: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> str:
        """
        Build the Authorization header value for one request

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            url: Full request URL, query parameters included
            nonce: Fixed nonce (generated when omitted)
            timestamp: Fixed Unix timestamp (current time when omitted)

        Returns:
            str: Header value starting with "OAuth "
        """
        if nonce is None:
            nonce = self.nonce_factory()
        if timestamp is None:
            timestamp = int(self.clock())

        oauth_params = self.oauth_parameters(nonce, timestamp)
        oauth_params["oauth_signature"] = self.signature(method, url, oauth_params)

        header_params = ", ".join(
            f'{key}="{percent_encode(value)}"'
            for key, value in sorted(oauth_params.items())
        )

        logger.debug(f"Signed {method.upper()} {normalize_base_url(url)}")
        return f'OAuth {header_params}, realm="{self.credentials.realm}"'


def sign_request(
    method: str,
    url: str,
    credentials: Credentials,
    nonce: Optional[str] = None,
    timestamp: Optional[int] = None,
) -> str:
    """Sign a single request without keeping a signer around."""
    return OAuthSigner(credentials).sign(method, url, nonce=nonce, timestamp=timestamp)
