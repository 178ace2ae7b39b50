"""
OAuth 1.0a request signing for the NetSuite REST API.
"""

from .oauth_signer import OAuthSigner, sign_request, build_base_string, percent_encode

__all__ = [
    "OAuthSigner",
    "sign_request",
    "build_base_string",
    "percent_encode",
]
