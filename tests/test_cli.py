"""End-to-end tests for the click commands, with HTTP mocked out."""
import json
from datetime import datetime
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner
from openpyxl import Workbook

from config import AppConfig, Credentials, load_credentials, save_credentials
from main import cli


BASE = "https://123456-sb1.suitetalk.api.netsuite.com/services/rest/record/v1"


def make_response(status_code=200, body=None):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.content = json.dumps(body).encode() if body is not None else b""
    response.json.return_value = body
    return response


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "nsfetch.json"
    save_credentials(Credentials("ck", "cs", "tk", "ts", "123456_SB1"), path)
    return path


@pytest.fixture
def output_file(tmp_path):
    return tmp_path / "out.json"


@pytest.fixture
def invoke(config_path, output_file):
    """Run the CLI against the temporary credential file"""
    def _invoke(*args, input=None):
        runner = CliRunner()
        obj = {"app_config": AppConfig(config_path=config_path)}
        return runner.invoke(cli, ["--output", str(output_file), *args], obj=obj, input=input)
    return _invoke


@pytest.fixture
def http():
    with patch("requests.Session.request") as request:
        request.return_value = make_response(200, {"id": "42"})
        yield request


def read_output(output_file):
    return json.loads(output_file.read_text())


class TestCommands:
    """Test command wiring."""

    def test_get_by_positional_id(self, invoke, http, output_file):
        result = invoke("get", "42", "--type", "customer")

        assert result.exit_code == 0, result.output
        assert read_output(output_file) == {"id": "42"}
        args, kwargs = http.call_args
        assert args == ("GET", f"{BASE}/customer/42")
        assert kwargs["headers"]["Authorization"].startswith("OAuth oauth_consumer_key=\"ck\"")
        assert kwargs["headers"]["Authorization"].endswith('realm="123456_SB1"')

    def test_list(self, invoke, http):
        result = invoke("get", "-t", "so", "--limit", "5")

        assert result.exit_code == 0, result.output
        assert http.call_args.args[1] == f"{BASE}/salesOrder?limit=5&offset=0"

    def test_create(self, invoke, http, output_file):
        result = invoke("create", "--type", "customer", "--data", '{"companyName": "Acme"}')

        assert result.exit_code == 0, result.output
        assert http.call_args.kwargs["json"] == {"companyName": "Acme"}

    def test_create_with_bulk_file(self, invoke, http, output_file, tmp_path):
        bulk_file = tmp_path / "bulk.json"
        bulk_file.write_text(json.dumps([{"companyName": "A"}, {"companyName": "B"}]))

        result = invoke("create", "--type", "customer", "--bulkFile", str(bulk_file))

        assert result.exit_code == 0, result.output
        assert read_output(output_file) == [{"id": "42"}, {"id": "42"}]
        assert http.call_count == 2

    def test_update(self, invoke, http):
        result = invoke("update", "--type", "inv", "--id", "7", "--data", '{"memo": "x"}')

        assert result.exit_code == 0, result.output
        assert http.call_args.args == ("PATCH", f"{BASE}/invoice/7")

    def test_delete(self, invoke, http, output_file):
        http.return_value = make_response(204)

        result = invoke("delete", "9", "--type", "vendor")

        assert result.exit_code == 0, result.output
        assert read_output(output_file) == {"deleted": "9"}

    def test_import_csv(self, invoke, http, output_file, tmp_path):
        csv_file = tmp_path / "customers.csv"
        csv_file.write_text("Company Name,subsidiary.id\nAcme,1\nBeta,2\nGamma,1\n")
        http.side_effect = [make_response(200, {"id": str(i)}) for i in range(3)]

        result = invoke("import", "--type", "customer", "--csvFile", str(csv_file))

        assert result.exit_code == 0, result.output
        assert read_output(output_file) == [{"id": "0"}, {"id": "1"}, {"id": "2"}]
        assert http.call_args_list[0].kwargs["json"] == {"companyName": "Acme", "subsidiary": {"id": "1"}}

    def test_import_by_extension(self, invoke, http, output_file, tmp_path):
        tsv_file = tmp_path / "customers.tsv"
        tsv_file.write_text("Company Name\tsubsidiary.id\nAcme\t1\n")

        result = invoke("import", "-t", "customer", "-f", str(tsv_file))

        assert result.exit_code == 0, result.output
        assert http.call_args.kwargs["json"] == {"companyName": "Acme", "subsidiary": {"id": "1"}}

    def test_import_unsupported_extension(self, invoke, http, tmp_path):
        path = tmp_path / "customers.pdf"
        path.write_text("x")

        result = invoke("import", "-t", "customer", "--file", str(path))

        assert result.exit_code == 1
        http.assert_not_called()

    def test_import_excel_dates_sent_as_iso(self, invoke, http, output_file, tmp_path):
        excel_file = tmp_path / "customers.xlsx"
        wb = Workbook()
        ws = wb.active
        ws.append(["Company Name", "Start Date"])
        ws.append(["Acme", None])
        ws.append(["Beta", datetime(2024, 1, 5)])
        wb.save(excel_file)
        http.side_effect = [make_response(200, {"id": "1"}), make_response(200, {"id": "2"})]

        result = invoke("import", "--type", "customer", "--excel-file", str(excel_file))

        assert result.exit_code == 0, result.output
        assert [c.kwargs["json"] for c in http.call_args_list] == [
            {"companyName": "Acme"},
            {"companyName": "Beta", "startDate": "2024-01-05"},
        ]
        assert read_output(output_file) == [{"id": "1"}, {"id": "2"}]

    def test_import_dry_run(self, invoke, http, output_file, tmp_path):
        csv_file = tmp_path / "customers.csv"
        csv_file.write_text("Company Name\nAcme\n")

        result = invoke("import", "-t", "customer", "--csv-file", str(csv_file), "--dry-run")

        assert result.exit_code == 0, result.output
        assert read_output(output_file) == [{"companyName": "Acme"}]
        http.assert_not_called()


class TestErrors:
    """Test error reporting and exit status."""

    def test_missing_credentials(self, tmp_path, http):
        obj = {"app_config": AppConfig(config_path=tmp_path / "missing.json")}
        result = CliRunner().invoke(cli, ["get", "--type", "customer"], obj=obj)

        assert result.exit_code == 1
        assert "No credentials found" in result.output
        http.assert_not_called()

    def test_validation_error(self, invoke, http):
        result = invoke("create", "--type", "customer")

        assert result.exit_code == 1
        assert "Error: --data JSON payload required for create" in result.output
        http.assert_not_called()

    def test_missing_type(self, invoke, http):
        result = invoke("get", "42")

        assert result.exit_code == 1
        assert "--type" in result.output
        http.assert_not_called()

    def test_non_numeric_positional(self, invoke, http):
        result = invoke("delete", "abc", "--type", "customer")

        assert result.exit_code == 1
        http.assert_not_called()

    def test_http_error_shows_status_and_body(self, invoke, http):
        http.return_value = make_response(404, {"title": "Record not found"})

        result = invoke("get", "42", "--type", "customer")

        assert result.exit_code == 1
        assert "HTTP 404" in result.output
        assert "Record not found" in result.output

    def test_batch_failure_reports_index_and_partial_results(self, invoke, http, output_file, tmp_path):
        bulk_file = tmp_path / "bulk.json"
        bulk_file.write_text(json.dumps([{"n": 1}, {"n": 2}, {"n": 3}]))
        http.side_effect = [
            make_response(200, {"id": "1"}),
            make_response(400, {"title": "Invalid"}),
            make_response(200, {"id": "3"}),
        ]

        result = invoke("bulk", "--type", "customer", "--bulk-file", str(bulk_file))

        assert result.exit_code == 1
        assert "Record 1 failed" in result.output
        assert "HTTP 400" in result.output
        assert read_output(output_file) == [{"id": "1"}]
        assert http.call_count == 2

    def test_malformed_timeout_env(self, http):
        result = CliRunner().invoke(cli, ["get", "--type", "customer"], env={"NSFETCH_TIMEOUT": "30s"})

        assert result.exit_code == 1
        assert "NSFETCH_TIMEOUT must be an integer" in result.output
        assert not isinstance(result.exception, ValueError)
        http.assert_not_called()


class TestInit:
    """Test credential setup."""

    def test_init_saves_credentials(self, tmp_path):
        path = tmp_path / "new.json"
        obj = {"app_config": AppConfig(config_path=path)}

        result = CliRunner().invoke(cli, ["init"], obj=obj, input="ck\ncs\ntk\nts\n123456_SB1\n")

        assert result.exit_code == 0, result.output
        assert load_credentials(path) == Credentials("ck", "cs", "tk", "ts", "123456_SB1")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
