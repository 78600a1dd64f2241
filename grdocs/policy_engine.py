"""
Generation Policy
=================
Loads the organisation's generation policy and answers enforcement
questions for callers of the engine.

The engine never consults the policy. It is the caller (the CLI here,
the wizard in the dashboard) that decides whether a context that does
not satisfy a template's `requires_*` flags is blocked, warned about,
or only recorded:

  Analysis layer  -> ContextValidator detects gaps
  Policy layer    -> GenerationPolicy decides severity
  Enforcement     -> the caller blocks or warns
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

POLICY_PATH = Path(__file__).resolve().parent / "policy.yaml"
POLICY_ENV_VAR = "GRDOCS_POLICY"

SEVERITIES = ("block", "warn", "silent")

_DEFAULTS: dict[str, Any] = {
    "policy_version": "0.0.0",
    "context_controls": {},
    "output_controls": {"output_dir": "output"},
    "audit_controls": {"audit_every_run": True, "logs_dir": "logs"},
}


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------

class GenerationPolicy:
    """
    Read-only view over policy.yaml. A missing file yields the defaults:
    warn on every gap, audit every run.
    """

    def __init__(self, policy_path: Path | str | None = None) -> None:
        if policy_path is None:
            policy_path = os.environ.get(POLICY_ENV_VAR) or POLICY_PATH
        self._path = Path(policy_path)
        self._policy: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            with open(self._path, "r", encoding="utf-8") as f:
                self._policy = yaml.safe_load(f) or {}
        else:
            self._policy = dict(_DEFAULTS)

        if not isinstance(self._policy, dict):
            raise ValueError(f"Policy file {self._path} must contain a mapping.")

    # --- Core accessors ---

    @property
    def path(self) -> Path:
        return self._path

    @property
    def raw(self) -> dict[str, Any]:
        return self._policy

    @property
    def version(self) -> str:
        return str(self._policy.get("policy_version", "0.0.0"))

    def _section(self, key: str) -> dict[str, Any]:
        return self._policy.get(key) or {}

    @property
    def context(self) -> dict[str, Any]:
        return self._section("context_controls")

    @property
    def output(self) -> dict[str, Any]:
        return self._section("output_controls")

    @property
    def audit(self) -> dict[str, Any]:
        return self._section("audit_controls")

    # --- Enforcement decisions ---

    def severity(self, policy_key: str) -> str:
        """Configured severity for a context gap; unknown values read as 'warn'."""
        value = str(self.context.get(policy_key, "warn")).lower()
        return value if value in SEVERITIES else "warn"

    def should_block(self, policy_key: str) -> bool:
        return self.severity(policy_key) == "block"

    def should_warn(self, policy_key: str) -> bool:
        return self.severity(policy_key) in ("warn", "block")

    def is_silent(self, policy_key: str) -> bool:
        return self.severity(policy_key) == "silent"

    def should_audit(self) -> bool:
        return bool(self.audit.get("audit_every_run", True))

    def _resolve_dir(self, value: str) -> Path:
        path = Path(value)
        if path.is_absolute():
            return path
        return Path.cwd() / path

    def output_dir(self) -> Path:
        return self._resolve_dir(self.output.get("output_dir", "output"))

    def logs_dir(self) -> Path:
        return self._resolve_dir(self.audit.get("logs_dir", "logs"))

    # --- Summary ---

    def summary(self) -> str:
        """Human-readable policy summary."""
        lines = [
            f"Policy Version: {self.version}",
            f"Policy File:    {self._path}",
            f"Last Reviewed:  {self._policy.get('last_reviewed', 'N/A')}",
            f"Approved By:    {self._policy.get('approved_by', 'N/A')}",
            "",
            "Context Gaps:",
        ]

        keys = [
            ("missing_initiative_severity", "Missing Initiative"),
            ("missing_addressee_severity", "Missing Addressee"),
            ("missing_period_severity", "Missing Period"),
            ("missing_config_severity", "Missing Template Options"),
            ("empty_data_severity", "Empty Domain Data"),
        ]
        for key, label in keys:
            lines.append(f"  {label:.<30} [{self.severity(key).upper()}]")

        lines.append("")
        lines.append(f"Output Directory: {self.output_dir()}")
        lines.append(f"Audit Every Run:  {self.should_audit()}")
        lines.append(f"Audit Logs:       {self.logs_dir()}")
        return "\n".join(lines)
