"""Tests for import map loading."""
import json

import pytest

from ns_fetch.errors import ParseError
from ns_fetch.mapper.mapping import ImportMaps


@pytest.fixture
def map_files(tmp_path):
    field_map = tmp_path / "map.json"
    field_map.write_text(json.dumps({"Customer Name": "companyName", "Sub": "subsidiary.id"}))
    value_map = tmp_path / "values.json"
    value_map.write_text(json.dumps({"Status": {"A": "Active", "I": "Inactive"}}))
    return str(field_map), str(value_map)


class TestImportMaps:
    """Test ImportMaps.from_files."""

    def test_load_both(self, map_files):
        maps = ImportMaps.from_files(*map_files)

        assert maps.field_map == {"Customer Name": "companyName", "Sub": "subsidiary.id"}
        assert maps.value_map == {"Status": {"A": "Active", "I": "Inactive"}}

    def test_no_files(self):
        maps = ImportMaps.from_files()
        assert maps.field_map == {}
        assert maps.value_map == {}

    def test_only_value_map(self, map_files):
        maps = ImportMaps.from_files(value_map_file=map_files[1])
        assert maps.field_map == {}
        assert "Status" in maps.value_map

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "map.json"
        path.write_text("{'single': 'quotes'}")
        with pytest.raises(ParseError, match="Invalid JSON"):
            ImportMaps.from_files(map_file=str(path))

    def test_map_must_be_object(self, tmp_path):
        path = tmp_path / "map.json"
        path.write_text(json.dumps(["companyName"]))
        with pytest.raises(ParseError):
            ImportMaps.from_files(map_file=str(path))

    def test_value_map_entries_must_be_objects(self, tmp_path):
        path = tmp_path / "values.json"
        path.write_text(json.dumps({"Status": "Active"}))
        with pytest.raises(ParseError, match="Status"):
            ImportMaps.from_files(value_map_file=str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParseError):
            ImportMaps.from_files(map_file=str(tmp_path / "missing.json"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
