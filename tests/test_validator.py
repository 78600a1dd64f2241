"""Tests for the context validator and the generation policy."""

import pytest

from grdocs.policy_engine import POLICY_PATH, GenerationPolicy
from grdocs.registry import get_schema
from grdocs.validator import (
    ContextValidator,
    MissingRequiredContextError,
    Severity,
)


@pytest.fixture
def policy():
    return GenerationPolicy(POLICY_PATH)


@pytest.fixture
def validator(policy):
    return ContextValidator(policy)


@pytest.fixture
def lenient_policy(tmp_path):
    path = tmp_path / "policy.yaml"
    path.write_text(
        "policy_version: '2.0.0'\n"
        "context_controls:\n"
        "  missing_initiative_severity: warn\n"
        "  missing_period_severity: silent\n"
        "  empty_data_severity: bogus\n",
        encoding="utf-8",
    )
    return GenerationPolicy(path)


class TestPolicy:
    def test_packaged_policy(self, policy):
        assert policy.version == "1.0.0"
        assert policy.should_block("missing_initiative_severity")
        assert policy.should_warn("missing_addressee_severity")
        assert policy.is_silent("empty_data_severity")
        assert policy.should_audit()

    def test_custom_policy(self, lenient_policy):
        assert lenient_policy.version == "2.0.0"
        assert not lenient_policy.should_block("missing_initiative_severity")
        assert lenient_policy.is_silent("missing_period_severity")
        # Unrecognised values read as warn
        assert lenient_policy.severity("empty_data_severity") == "warn"

    def test_missing_file_uses_defaults(self, tmp_path):
        policy = GenerationPolicy(tmp_path / "absent.yaml")
        assert policy.severity("missing_initiative_severity") == "warn"
        assert policy.output_dir().name == "output"

    def test_env_override(self, tmp_path, monkeypatch, lenient_policy):
        monkeypatch.setenv("GRDOCS_POLICY", str(lenient_policy.path))
        assert GenerationPolicy().version == "2.0.0"

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            GenerationPolicy(path)

    def test_summary(self, policy):
        summary = policy.summary()
        assert "Policy Version: 1.0.0" in summary
        assert "[BLOCK]" in summary


class TestContextValidation:
    def test_complete_context_is_clean(self, validator, make_context):
        ctx = make_context("analytical_note", initiative_id="init-1")
        report = validator.validate(get_schema("analytical_note"), ctx)
        assert report.findings == []
        assert not report.is_blocked

    def test_missing_initiative_blocks(self, validator, make_context):
        ctx = make_context("analytical_note")
        report = validator.validate(get_schema("analytical_note"), ctx)
        assert report.is_blocked
        assert report.errors[0].code == "CTX-INIT-001"
        assert "GENERATION BLOCKED" in report.summary()

    def test_missing_initiative_warns_under_lenient_policy(self, lenient_policy, make_context):
        ctx = make_context("analytical_note")
        report = ContextValidator(lenient_policy).validate(get_schema("analytical_note"), ctx)
        assert not report.is_blocked
        assert [f.code for f in report.warnings] == ["CTX-INIT-001"]

    def test_missing_period_warns(self, validator, make_context):
        ctx = make_context("gr_report")
        report = validator.validate(get_schema("gr_report"), ctx)
        assert [f.field for f in report.warnings] == ["period"]

    def test_selected_stakeholder_counts_as_addressee(self, validator, make_context):
        ctx = make_context(
            "official_letter", initiative_id="init-1",
            config={"selectedStakeholderId": "sh-1"},
        )
        report = validator.validate(get_schema("official_letter"), ctx)
        assert not [f for f in report.findings if f.field == "addressee"]

    def test_missing_amendment_options(self, validator, make_context):
        ctx = make_context(
            "legislative_amendment", initiative_id="init-1", addressee_stakeholder_id="sh-1"
        )
        report = validator.validate(get_schema("legislative_amendment"), ctx)
        assert [f.field for f in report.warnings] == ["config.target_act", "config.change_goal"]

    def test_empty_data_is_info(self, validator, bare_context):
        report = validator.validate(get_schema("gr_report"), bare_context)
        codes = {f.code for f in report.infos}
        assert codes == {"CTX-DATA-001", "CTX-DATA-002"}
        assert all(f.severity == Severity.INFO for f in report.infos)

    def test_finding_serialisation(self, validator, make_context):
        report = validator.validate(get_schema("analytical_note"), make_context("analytical_note"))
        d = report.errors[0].to_dict()
        assert d["severity"] == "ERROR"
        assert d["field"] == "initiative"


class TestRequire:
    def test_require_passes(self, validator, make_context):
        ctx = make_context("presentation", period="2026-02")
        validator.require(get_schema("presentation"), ctx)

    def test_require_lists_missing(self, validator, bare_context):
        with pytest.raises(MissingRequiredContextError) as exc:
            validator.require(get_schema("legislative_amendment"), bare_context)
        assert exc.value.missing == ["initiative", "addressee"]
        assert exc.value.template_id == "legislative_amendment"

    def test_require_is_value_error(self, validator, bare_context):
        with pytest.raises(ValueError):
            validator.require(get_schema("gr_report"), bare_context)
