"""Map record type names to SuiteTalk REST record endpoints."""
from typing import Dict, Optional
from urllib.parse import quote, urlencode

from config import NetSuiteApiConfig


class RecordTypeMapper:
    """Resolves record type aliases and builds record URLs."""

    # Short aliases accepted by --type
    MAPPING = {
        'so': 'salesOrder',
        'po': 'purchaseOrder',
        'inv': 'invoice',
        'customer': 'customer',
        'vendor': 'vendor',
    }

    def __init__(self, realm: str, api_config: Optional[NetSuiteApiConfig] = None):
        """
        Initialize mapper.

        Args:
            realm: NetSuite account ID (e.g. 1234567_SB1)
            api_config: API host settings
        """
        self.realm = realm
        self.api_config = api_config or NetSuiteApiConfig()

    @staticmethod
    def resolve_record_type(record_type: Optional[str]) -> Optional[str]:
        """
        Resolve a --type value to a record type.

        Aliases are expanded; any other non-empty value passes through as-is.

        Returns:
            str: Record type, or None if nothing was given
        """
        if not record_type:
            return None
        return RecordTypeMapper.MAPPING.get(record_type, record_type)

    @staticmethod
    def account_domain(realm: str) -> str:
        """
        Host label for an account.

        Only the first underscore is replaced: 1234567_SB1 -> 1234567-sb1
        """
        return realm.lower().replace('_', '-', 1)

    def base_url(self, record_type: str) -> str:
        """Collection URL for a record type."""
        domain = self.account_domain(self.realm)
        return (
            f"https://{domain}.{self.api_config.domain_suffix}"
            f"{self.api_config.record_path}/{record_type}"
        )

    def record_url(
        self,
        record_type: str,
        record_id: Optional[str] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> str:
        """
        URL for a collection or a single record.

        Args:
            record_type: Resolved record type
            record_id: Internal ID, or None for the collection
            params: Query parameters, appended in the given order

        Returns:
            str: Full URL
        """
        url = self.base_url(record_type)
        if record_id:
            url = f"{url}/{quote(str(record_id), safe='')}"
        if params:
            url = f"{url}?{urlencode(params)}"
        return url
