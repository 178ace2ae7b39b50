"""Derive NetSuite field identifiers from spreadsheet column headers."""
import re

# A run of separators followed by the character to uppercase
SEPARATOR_RUN = re.compile(r"[^a-z0-9]+([a-z0-9])")
INVALID_CHARS = re.compile(r"[^a-zA-Z0-9_]")

PATH_SEPARATOR = "."


def camel_case_segment(text: str) -> str:
    """
    Convert one header fragment into a camelCase identifier.

    Examples:
        "Customer Name" -> "customerName"
        "ship-to-city"  -> "shipToCity"
    """
    text = text.strip().lower()
    text = SEPARATOR_RUN.sub(lambda m: m.group(1).upper(), text)
    return INVALID_CHARS.sub("", text)


class FieldResolver:
    """Maps raw column headers to default field identifiers."""

    def __init__(self, preserve_dots: bool = True):
        """
        Initialize resolver.

        Args:
            preserve_dots: Keep "." as a nested-path separator. When False a
                dot is an ordinary separator, so "ship.city" -> "shipCity".
        """
        self.preserve_dots = preserve_dots

    def resolve(self, header: str) -> str:
        """
        Resolve a header to a field identifier.

        With dot preservation each dot-separated segment is resolved on its
        own and empty segments are dropped: "ship_to.city" -> "shipTo.city".

        Returns:
            str: Field identifier, empty if the header has no usable characters
        """
        if not self.preserve_dots:
            return camel_case_segment(header)

        segments = (camel_case_segment(part) for part in header.split(PATH_SEPARATOR))
        return PATH_SEPARATOR.join(s for s in segments if s)


def header_to_field_id(header: str, preserve_dots: bool = True) -> str:
    """Resolve a header without building a resolver."""
    return FieldResolver(preserve_dots).resolve(header)
