"""Tests for the command line interface."""

import io
import json

import pytest

from kz_tax_engine.cli import TaxCli


def run(*args):
    out = io.StringIO()
    code = TaxCli(stdout=out).run(list(args))
    return code, out.getvalue()


class TestObligationsCommand:
    """Test `kz-tax obligations`."""

    def test_scenario(self):
        code, output = run("obligations", "--income", "500000", "--rate", "3")
        assert code == 0
        data = json.loads(output)
        assert data["summary"]["netIncome"] == 401075
        assert data["monthly"]["totalMonthly"] == 83925
        assert data["tax"]["isSimplified"] is True
        assert "employeeObligations" not in data

    def test_flags(self):
        code, output = run(
            "obligations",
            "--income", "500000",
            "--rate", "3",
            "--disabled",
            "--born-before-1976",
            "--employee-salary", "500000",
        )
        assert code == 0
        data = json.loads(output)
        assert data["monthly"]["so"]["amount"] == 0
        assert data["monthly"]["opvr"]["amount"] == 0
        assert data["employeeObligations"]["totalEmployeeObligations"] == 167500

    def test_comma_decimal_income(self):
        code, output = run("obligations", "--income", "1000,50", "--rate", "4")
        assert code == 0
        assert json.loads(output)["tax"]["totalTax"] == pytest.approx(40.02)

    def test_unknown_year(self, capsys):
        code, output = run("obligations", "--income", "1", "--year", "1999")
        assert code == 1
        assert output == ""
        assert "Error:" in capsys.readouterr().err

    def test_bad_amount_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            run("obligations", "--income", "abc")
        assert exc_info.value.code == 2

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "sNaN"])
    def test_non_finite_amount_is_usage_error(self, value):
        with pytest.raises(SystemExit) as exc_info:
            run("obligations", "--income", "1", "--employee-salary", value)
        assert exc_info.value.code == 2


class TestStatsCommand:
    """Test `kz-tax stats`."""

    def test_stats_from_file(self, tmp_path):
        path = tmp_path / "transactions.json"
        path.write_text(
            json.dumps([
                {"amount": 100000, "type": "income", "date": "2026-02-01", "isTaxable": True},
                {"amount": 50000, "type": "income", "date": "2026-08-01", "isTaxable": True},
                {"amount": 70000, "type": "expense", "date": "2026-02-01"},
            ]),
            encoding="utf-8",
        )
        code, output = run("stats", str(path), "--year", "2026", "--today", "2026-03-10")
        assert code == 0
        data = json.loads(output)
        assert data["q1"]["income"] == 100000
        assert data["h2"]["income"] == 50000
        assert data["year"]["tax"] == 6000
        assert data["q1"]["status"] == "Текущий квартал"

    def test_wrapped_list(self, tmp_path):
        path = tmp_path / "export.json"
        path.write_text(
            json.dumps({"transactions": [
                {"amount": "1000", "type": "income", "date": "2026-01-05", "is_taxable": True},
            ]}),
            encoding="utf-8",
        )
        code, output = run("stats", str(path), "--rate", "3", "--today", "2026-03-10")
        assert code == 0
        assert json.loads(output)["year"]["tax"] == 30

    def test_missing_file(self, tmp_path, capsys):
        code, _ = run("stats", str(tmp_path / "nope.json"))
        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        code, _ = run("stats", str(path))
        assert code == 1

    def test_bad_record(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"amount": 1, "type": "transfer"}]), encoding="utf-8")
        code, _ = run("stats", str(path))
        assert code == 1


class TestDeadlinesCommand:
    """Test `kz-tax deadlines`."""

    def test_deadlines(self):
        code, output = run("deadlines", "--year", "2026", "--today", "2026-08-10")
        assert code == 0
        data = json.loads(output)
        assert data["h1"]["status"] == "critical"
        assert data["h1"]["ui"]["submission"]["daysLeft"] == 6
        assert data["h2"]["submission"] == "15.02.2027"
        assert data["h2"]["status"] == "normal"

    def test_bad_date_is_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            run("deadlines", "--today", "10.08.2026")
        assert exc_info.value.code == 2


class TestConstantsCommand:
    """Test `kz-tax constants`."""

    def test_constants(self):
        code, output = run("constants", "--year", "2026")
        assert code == 0
        data = json.loads(output)
        assert data["MZP"] == 85000
        assert data["OPVR_RATE"] == 0.035

    def test_no_command_prints_help(self, capsys):
        code, _ = run()
        assert code == 1
        assert "kz-tax" in capsys.readouterr().out
