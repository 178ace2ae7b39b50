"""Input checks run before any request is sent."""
from typing import Any, Optional, Sequence

from ns_fetch.api.endpoint_mapper import RecordTypeMapper
from ns_fetch.errors import ValidationError


class RequestValidator:
    """Validates the inputs each operation needs."""

    @staticmethod
    def require_record_type(record_type: Optional[str]) -> str:
        """Resolve --type, failing if it is missing."""
        resolved = RecordTypeMapper.resolve_record_type(record_type)
        if not resolved:
            raise ValidationError("Missing or invalid --type")
        return resolved

    @staticmethod
    def require_payload(payload: Optional[Any], action: str) -> Any:
        if payload is None:
            raise ValidationError(f"--data JSON payload required for {action}")
        return payload

    @staticmethod
    def require_record_id(record_id: Optional[str], action: str) -> str:
        if not record_id:
            raise ValidationError(f"--id or numeric positional required for {action}")
        return record_id

    @staticmethod
    def resolve_record_id(option_id: Optional[str], positional: Sequence[str]) -> Optional[str]:
        """
        Pick the record ID from --id or positional arguments.

        --id wins. Otherwise the first all-digit positional argument is used;
        any other positional argument is rejected.
        """
        if option_id:
            return option_id

        record_id = None
        for arg in positional:
            if not arg.isdigit():
                raise ValidationError(f"Unexpected argument '{arg}', record IDs are numeric")
            if record_id is None:
                record_id = arg
        return record_id

    @staticmethod
    def require_source(**sources: Optional[str]) -> str:
        """Exactly one of the given file options must be set."""
        given = [name for name, value in sources.items() if value]
        options = ", ".join(f"--{name.replace('_', '-')}" for name in sources)
        if not given:
            raise ValidationError(f"One of {options} is required")
        if len(given) > 1:
            raise ValidationError(f"Only one of {options} may be given")
        return given[0]
