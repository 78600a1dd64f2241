"""
Audit Logger
=============
Writes a traceable record for every document generation run.

Each run produces a timestamped JSON file in the logs directory containing:
  - Template id and the company / initiative it was generated for
  - A hash of the generation context
  - Section titles with a hash of each section text
  - Context validation findings
  - Policy applied
  - Git commit hash (if available)

A generated document can later be matched against its record: the same
context regenerates the same section hashes.
"""

from __future__ import annotations

import hashlib
import json
import subprocess
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from grdocs.models import GeneratedSection, GenerationContext
from grdocs.schema_loader import ROOT_DIR


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

LOGS_DIR = ROOT_DIR / "logs"
AUDIT_VERSION = "1.0"


# ---------------------------------------------------------------------------
# Audit Logger
# ---------------------------------------------------------------------------

class AuditLogger:
    """
    Writes structured audit records for generation runs.
    """

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._logs_dir = Path(logs_dir) if logs_dir else LOGS_DIR
        self._logs_dir.mkdir(parents=True, exist_ok=True)

    @property
    def logs_dir(self) -> Path:
        return self._logs_dir

    def log_generation(
        self,
        *,
        template_id: str,
        context: GenerationContext,
        sections: Sequence[GeneratedSection],
        findings: list[dict] | None = None,
        forced: bool = False,
        policy_snapshot: dict[str, Any] | None = None,
        output_file: str | None = None,
    ) -> Path:
        """
        Write a single audit record.

        Returns:
            Path to the written audit log file.
        """
        now = datetime.now(timezone.utc)
        timestamp = now.strftime("%Y-%m-%dT%H-%M-%S-%f")

        record: dict[str, Any] = {
            "audit_version": AUDIT_VERSION,
            "timestamp_utc": now.isoformat(),
            "operation": "generate",
            "git_commit": self._git_commit(),
            "template_id": template_id,
            "company": {
                "id": context.company.id,
                "name": context.company.name,
            },
            "initiative_id": context.initiative.id if context.initiative else None,
            "current_date": context.current_date,
            "context_hash": self.hash_context(context),
            "sections": [
                {"title": s.title, "text_hash": self._hash_text(s.text)}
                for s in sections
            ],
            "section_count": len(sections),
            "forced": forced,
        }

        if findings is not None:
            record["findings"] = findings
            record["finding_count"] = len(findings)

        if policy_snapshot is not None:
            record["policy_applied"] = policy_snapshot

        if output_file:
            record["output_file"] = output_file

        # Record hash for tamper detection
        record_json = json.dumps(record, sort_keys=True, default=str)
        record["record_hash"] = hashlib.sha256(record_json.encode()).hexdigest()

        filename = f"{timestamp}_generate_{template_id}.json"
        filepath = self._logs_dir / filename

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=2, default=str, ensure_ascii=False)

        return filepath

    # --- Helpers ---

    @staticmethod
    def hash_context(context: GenerationContext) -> str:
        """SHA256 of the context's canonical JSON form."""
        canonical = json.dumps(asdict(context), sort_keys=True, default=str)
        return hashlib.sha256(canonical.encode()).hexdigest()

    @staticmethod
    def _hash_text(text: str) -> str:
        return hashlib.sha256(text.encode("utf-8")).hexdigest()

    @staticmethod
    def _git_commit() -> str | None:
        """Get current git commit hash, or None if not in a repo."""
        try:
            result = subprocess.run(
                ["git", "rev-parse", "--short", "HEAD"],
                capture_output=True,
                text=True,
                timeout=5,
                cwd=str(ROOT_DIR),
            )
        except (OSError, subprocess.SubprocessError):
            return None
        if result.returncode == 0:
            return result.stdout.strip() or None
        return None

    @staticmethod
    def findings_to_dicts(findings: list) -> list[dict]:
        """Convert Finding objects to plain dicts."""
        return [f.to_dict() for f in findings]
