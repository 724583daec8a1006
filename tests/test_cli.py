# tests/test_cli.py
import json

from click.testing import CliRunner

from cli import cli


def test_analyze_json_from_stdin(demo_text):
    runner = CliRunner()
    result = runner.invoke(cli, ["analyze", "-", "--json", "--seed", "4"], input=demo_text)

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["parsed"]["channel_name"] == "DemoChan"
    assert data["derived"]["avg_views_per_video"] == 133_333
    assert data["history"][-1]["subscribers"] == 1_200_000


def test_analyze_seed_is_reproducible(demo_text):
    runner = CliRunner()
    args = ["analyze", "-", "--json", "--seed", "9"]
    first = json.loads(runner.invoke(cli, args, input=demo_text).output)
    second = json.loads(runner.invoke(cli, args, input=demo_text).output)
    assert first["history"] == second["history"]


def test_analyze_text_output(demo_text):
    result = CliRunner().invoke(cli, ["analyze", "-", "--seed", "1"], input=demo_text)

    assert result.exit_code == 0, result.output
    assert "DemoChan" in result.output
    assert "$3,753" in result.output
    assert "History (synthetic)" in result.output


def test_analyze_with_location_option():
    result = CliRunner().invoke(
        cli,
        ["analyze", "-", "--json", "--location", "India"],
        input="Subscribers: 50K\nTotal Views: 2M\nTotal Videos: 100",
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["derived"]["cpm_rate"] == 0.2


def test_analyze_with_growth_csv(tmp_path, demo_text, growth_csv_text):
    csv_path = tmp_path / "growth.csv"
    csv_path.write_text(growth_csv_text)

    result = CliRunner().invoke(
        cli, ["analyze", "-", "--json", "--growth-csv", str(csv_path)], input=demo_text
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["history_source"] == "imported"
    assert [p["month"] for p in data["history"]] == ["Jan", "Feb"]


def test_analyze_rejects_bad_growth_csv(tmp_path, demo_text):
    csv_path = tmp_path / "growth.csv"
    csv_path.write_text("Month,Subs,Views\nJan,1,2\n")

    result = CliRunner().invoke(
        cli, ["analyze", "-", "--growth-csv", str(csv_path)], input=demo_text
    )
    assert result.exit_code == 1
    assert "Header must include" in result.output


def test_import_csv(tmp_path, growth_csv_text):
    csv_path = tmp_path / "growth.csv"
    csv_path.write_text(growth_csv_text)

    result = CliRunner().invoke(cli, ["import-csv", str(csv_path)])
    assert result.exit_code == 0, result.output
    assert "subscriber_change" in result.output
    assert "Feb" in result.output


def test_import_csv_bad_header():
    result = CliRunner().invoke(cli, ["import-csv", "-"], input="Month,Subs,Views\nJan,1,2\n")
    assert result.exit_code == 1
    assert "Header must include" in result.output


def test_import_csv_without_month_rows():
    result = CliRunner().invoke(
        cli, ["import-csv", "-"], input="Month,Subscribers,Views\n,100,200\n"
    )
    assert result.exit_code == 0
    assert "No rows with a month value found." in result.output
