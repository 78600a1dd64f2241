"""Tests for the command-line interface."""

import json

import click
import pytest
from click.testing import CliRunner

from grdocs.cli import main, parse_overrides
from grdocs.schema_loader import SAMPLE_WORKSPACE


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GRDOCS_POLICY", raising=False)
    return CliRunner()


def _generate(runner, *args):
    return runner.invoke(
        main,
        ["generate", "-w", str(SAMPLE_WORKSPACE), "--date", "2026-02-18", *args],
    )


class TestParseOverrides:
    def test_scalars(self):
        assert parse_overrides(("letterType=position", "includeCharts=false")) == {
            "letterType": "position",
            "includeCharts": False,
        }

    def test_nested_groups(self):
        assert parse_overrides(("kpiToggles.media=no", "kpiToggles.risks=true")) == {
            "kpiToggles": {"media": False, "risks": True},
        }

    def test_text_with_colon_kept(self):
        assert parse_overrides(("targetAct=Law: on data",)) == {"targetAct": "Law: on data"}

    def test_malformed(self):
        with pytest.raises(click.BadParameter):
            parse_overrides(("novalue",))


class TestListing:
    def test_list_templates(self, runner):
        result = runner.invoke(main, ["list-templates"])
        assert result.exit_code == 0
        assert "analytical_note" in result.output
        assert "gr_report" in result.output

    def test_list_by_entry_point(self, runner):
        result = runner.invoke(main, ["list-templates", "--entry-point", "report"])
        assert result.exit_code == 0
        assert "gr_report" in result.output
        assert "official_letter" not in result.output

    def test_show_template(self, runner):
        result = runner.invoke(main, ["show-template", "official_letter"])
        assert result.exit_code == 0
        assert "addressee_block" in result.output

    def test_show_unknown_template(self, runner):
        result = runner.invoke(main, ["show-template", "memo"])
        assert result.exit_code == 1
        assert "Unknown template" in result.output

    def test_filename(self, runner):
        result = runner.invoke(
            main, ["filename", "analytical_note", "North Telecom LLC", "2026-02-18", "pdf"]
        )
        assert result.exit_code == 0
        assert result.output.strip() == "AnalyticalNote_NorthTelecomLLC_18022026.pdf"

    def test_policy(self, runner):
        result = runner.invoke(main, ["policy"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestGenerate:
    def test_generates_markdown_and_audit(self, runner, tmp_path):
        result = _generate(runner, "-t", "analytical_note", "-i", "init-1", "-o", "out")
        assert result.exit_code == 0, result.output

        document = tmp_path / "out" / "AnalyticalNote_NorthTelecomLLC_18022026.md"
        assert document.exists()
        assert "## 4. Recommendations" in document.read_text(encoding="utf-8")

        records = list((tmp_path / "logs").glob("*.json"))
        assert len(records) == 1
        record = json.loads(records[0].read_text(encoding="utf-8"))
        assert record["template_id"] == "analytical_note"
        assert record["forced"] is False

    def test_blocked_without_initiative(self, runner, tmp_path):
        result = _generate(runner, "-t", "analytical_note", "-o", "out")
        assert result.exit_code == 1
        assert "GENERATION BLOCKED" in result.output
        assert not (tmp_path / "out").exists()

    def test_force_overrides_block(self, runner, tmp_path):
        result = _generate(runner, "-t", "analytical_note", "-o", "out", "--force")
        assert result.exit_code == 0, result.output
        text = (tmp_path / "out" / "AnalyticalNote_NorthTelecomLLC_18022026.md").read_text(
            encoding="utf-8"
        )
        assert "Information about the initiative is unavailable." in text

    def test_kpi_toggles_drop_sections(self, runner, tmp_path):
        result = _generate(
            runner, "-t", "gr_report", "-p", "2026-02", "-o", "out",
            "--set", "kpiToggles.media=false",
            "--set", "kpiToggles.financialImpact=false",
        )
        assert result.exit_code == 0, result.output
        text = (tmp_path / "out" / "GRReport_NorthTelecomLLC_18022026.md").read_text(
            encoding="utf-8"
        )
        assert "1.4. Media activity" not in text
        assert "3. Financial effect" not in text
        assert "1.3. Stakeholder engagement" in text

    def test_letter_to_stakeholder(self, runner, tmp_path):
        result = _generate(
            runner, "-t", "official_letter", "-i", "init-1", "-s", "sh-1",
            "--set", "letterType=proposal", "-o", "out",
        )
        assert result.exit_code == 0, result.output
        text = (tmp_path / "out" / "OfficialLetter_NorthTelecomLLC_18022026.md").read_text(
            encoding="utf-8"
        )
        assert "Ref. No. NTL-101/2026" in text
        assert "Dear Bakyt Osmonov," in text
        assert "Subject: Proposals of North Telecom LLC" in text

    def test_presentation_as_slides(self, runner, tmp_path):
        result = _generate(runner, "-t", "presentation", "-p", "Q1-2026", "-o", "out")
        assert result.exit_code == 0, result.output
        deck = (tmp_path / "out" / "Presentation_NorthTelecomLLC_18022026.md").read_text(
            encoding="utf-8"
        )
        assert deck.startswith("<!-- Presentation:")

    def test_unknown_template(self, runner):
        result = _generate(runner, "-t", "memo")
        assert result.exit_code == 1

    def test_unknown_initiative(self, runner):
        result = _generate(runner, "-t", "analytical_note", "-i", "init-99")
        assert result.exit_code == 1
        assert "Unknown initiative" in result.output

    def test_bad_workspace(self, runner, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("companies: []\n", encoding="utf-8")
        result = runner.invoke(main, ["generate", "-w", str(bad), "-t", "gr_report"])
        assert result.exit_code == 1
        assert "Workspace load failed" in result.output
