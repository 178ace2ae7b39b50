"""Send payloads to the record API, one request at a time."""
import logging
from typing import Any, Callable, List, Optional, Sequence

from ns_fetch.api.netsuite_client import NetSuiteClient
from ns_fetch.errors import BatchDispatchError, TransportError, ValidationError

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PATCH", "DELETE")

ProgressCallback = Callable[[int, int], None]


class Dispatcher:
    """Sequential request dispatch with abort-on-first-failure batches."""

    def __init__(self, client: NetSuiteClient, url: Optional[str] = None):
        """
        Initialize dispatcher.

        Args:
            client: NetSuiteClient instance
            url: Default collection URL for dispatch_many
        """
        self.client = client
        self.url = url

    def dispatch_one(self, method: str, url: str, payload: Optional[Any] = None) -> Any:
        """
        Send a single request.

        Returns:
            Response body

        Raises:
            ValidationError: If the method is not supported
            TransportError: If the request fails
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValidationError(
                f"Unsupported method {method}, expected one of {', '.join(SUPPORTED_METHODS)}"
            )
        return self.client.request(method, url, payload)

    def dispatch_many(
        self,
        records: Sequence[Any],
        method: str = "POST",
        url: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[Any]:
        """
        Send one request per record, strictly in order.

        Nothing is sent concurrently. The first failure stops the batch;
        records already sent are not rolled back.

        Args:
            records: Payloads to send
            method: HTTP method for every record
            url: Collection URL (defaults to the dispatcher's url)
            on_progress: Called with (records done, total) after each success

        Returns:
            List of response bodies, same order and length as records

        Raises:
            BatchDispatchError: With the failing index and the responses
                collected before it
        """
        url = url or self.url
        if not url:
            raise ValidationError("No URL given for batch dispatch")

        results: List[Any] = []
        total = len(records)

        for index, record in enumerate(records):
            try:
                results.append(self.dispatch_one(method, url, record))
            except TransportError as e:
                logger.info(f"Batch stopped at record {index} of {total}: {e}")
                raise BatchDispatchError(index, results, e) from e

            if on_progress:
                on_progress(index + 1, total)

        logger.info(f"Dispatched {total} records to {url}")
        return results
