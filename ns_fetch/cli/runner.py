"""Record operations behind the ns-fetch commands."""
import logging
from typing import Any, Dict, List, Optional, Sequence

import click
from colorama import Fore

from config import Credentials, NetSuiteApiConfig
from ns_fetch.api.dispatcher import Dispatcher
from ns_fetch.api.endpoint_mapper import RecordTypeMapper
from ns_fetch.api.netsuite_client import NetSuiteClient
from ns_fetch.builder.field_builder import OVERWRITE, RAISE
from ns_fetch.builder.payload_builder import PayloadConfig, RowTransformer
from ns_fetch.errors import ValidationError
from ns_fetch.mapper.mapping import ImportMaps
from ns_fetch.parser.csv_parser import CsvParser
from ns_fetch.parser.excel_parser import ExcelParser
from ns_fetch.parser.json_parser import load_bulk_records, parse_json_payload
from ns_fetch.parser.parser_factory import RowSourceFactory
from ns_fetch.validator.request_validator import RequestValidator

logger = logging.getLogger(__name__)


class CommandRunner:
    """
    Runs one ns-fetch operation.

    Every input is checked and parsed before the first request goes out, so
    local errors never leave a batch half-sent.
    """

    def __init__(
        self,
        credentials: Credentials,
        api_config: Optional[NetSuiteApiConfig] = None,
        client: Optional[NetSuiteClient] = None,
    ):
        """Initialize runner."""
        self.mapper = RecordTypeMapper(credentials.realm, api_config)
        self.client = client or NetSuiteClient(credentials, api_config)
        self.dispatcher = Dispatcher(self.client)

    def get(
        self,
        record_type: Optional[str],
        record_id: Optional[str] = None,
        fields: Sequence[str] = (),
        limit: str = "1000",
        offset: str = "0",
    ) -> Any:
        """
        Fetch one record, or list a collection.

        Args:
            record_type: Record type or alias
            record_id: Record to fetch; lists the collection when None
            fields: Field names to return for a single record
            limit: Page size for listing
            offset: Page offset for listing
        """
        record_type = RequestValidator.require_record_type(record_type)

        params: Dict[str, str] = {}
        if record_id:
            field_list = split_fields(fields)
            if field_list:
                params["fields"] = ",".join(field_list)
        else:
            params["limit"] = str(limit)
            params["offset"] = str(offset)

        url = self.mapper.record_url(record_type, record_id, params)
        return self.dispatcher.dispatch_one("GET", url)

    def create(self, record_type: Optional[str], data: Optional[str]) -> Any:
        record_type = RequestValidator.require_record_type(record_type)
        RequestValidator.require_payload(data, "create")
        payload = parse_json_payload(data)

        return self.dispatcher.dispatch_one("POST", self.mapper.record_url(record_type), payload)

    def update(
        self,
        record_type: Optional[str],
        record_id: Optional[str],
        data: Optional[str],
    ) -> Any:
        record_type = RequestValidator.require_record_type(record_type)
        RequestValidator.require_record_id(record_id, "update")
        RequestValidator.require_payload(data, "update")
        payload = parse_json_payload(data)

        url = self.mapper.record_url(record_type, record_id)
        return self.dispatcher.dispatch_one("PATCH", url, payload)

    def delete(self, record_type: Optional[str], record_id: Optional[str]) -> Dict[str, str]:
        record_type = RequestValidator.require_record_type(record_type)
        RequestValidator.require_record_id(record_id, "delete")

        self.dispatcher.dispatch_one("DELETE", self.mapper.record_url(record_type, record_id))
        return {"deleted": record_id}

    def bulk(self, record_type: Optional[str], bulk_file: Optional[str]) -> List[Any]:
        """Create every record in a bulk JSON file."""
        record_type = RequestValidator.require_record_type(record_type)
        if not bulk_file:
            raise ValidationError("--bulk-file <path> is required for bulk")
        records = load_bulk_records(bulk_file)

        return self._send_batch(record_type, records)

    def import_file(
        self,
        record_type: Optional[str],
        csv_file: Optional[str] = None,
        excel_file: Optional[str] = None,
        file: Optional[str] = None,
        map_file: Optional[str] = None,
        value_map_file: Optional[str] = None,
        delimiter: Optional[str] = None,
        strict_paths: bool = False,
        dry_run: bool = False,
    ) -> List[Any]:
        """
        Create one record per row of a CSV or Excel file.

        Args:
            record_type: Record type or alias
            csv_file: CSV file path
            excel_file: Excel file path
            file: Import file of either kind, chosen by extension
            map_file: JSON header -> field identifier map
            value_map_file: JSON header -> {raw -> replacement} map
            delimiter: CSV delimiter (detected when omitted)
            strict_paths: Fail on dotted-path collisions instead of overwriting
            dry_run: Return the payloads without sending them

        Returns:
            Response bodies in row order, or the payloads for a dry run
        """
        record_type = RequestValidator.require_record_type(record_type)
        source = RequestValidator.require_source(csv_file=csv_file, excel_file=excel_file, file=file)

        if source == "csv_file":
            rows = CsvParser(delimiter=delimiter).parse(csv_file)
        elif source == "excel_file":
            rows = ExcelParser().parse(excel_file)
        else:
            rows = RowSourceFactory.read_rows(file, delimiter)

        maps = ImportMaps.from_files(map_file, value_map_file)
        config = PayloadConfig.from_maps(maps, conflict_policy=RAISE if strict_paths else OVERWRITE)
        payloads = RowTransformer(config).transform_rows(rows)

        if dry_run:
            click.echo(f"{Fore.YELLOW}[DRY RUN] {len(payloads)} payloads built, nothing sent", err=True)
            return payloads

        return self._send_batch(record_type, payloads)

    def _send_batch(self, record_type: str, records: List[Any]) -> List[Any]:
        url = self.mapper.record_url(record_type)
        click.echo(f"{Fore.CYAN}Creating {len(records)} {record_type} records...", err=True)

        results = self.dispatcher.dispatch_many(
            records,
            method="POST",
            url=url,
            on_progress=echo_progress,
        )

        click.echo(f"{Fore.GREEN}✓ {len(results)} records created", err=True)
        return results


def echo_progress(done: int, total: int) -> None:
    logger.debug(f"Record {done}/{total} sent")
    if done == total or done % 50 == 0:
        click.echo(f"   {done}/{total}", err=True)


def split_fields(fields: Sequence[str]) -> List[str]:
    """Flatten repeated and comma-separated --fields values."""
    result = []
    for value in fields:
        result.extend(f.strip() for f in value.split(","))
    return [f for f in result if f]
