"""
Output Exporter
===============
Writes rendered documents to the output directory under the export
filename convention (`Label_Company_DDMMYYYY.ext`).

Only the Markdown source is produced here. PDF and PPTX layout belong to
the document viewer.
"""

from __future__ import annotations

from pathlib import Path

from grdocs.formatting import generate_export_filename
from grdocs.schema import TemplateType


def ensure_output_dir(output_dir: Path | str) -> Path:
    """Create the output directory if it does not exist."""
    path = Path(output_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def export_stem(template_id: TemplateType | str, company_name: str, date_value: str) -> str:
    """Export filename without its extension."""
    return generate_export_filename(template_id, company_name, date_value, "md")[: -len(".md")]


def export_markdown(content: str, filename: str, output_dir: Path | str) -> Path:
    """Write rendered Markdown to the output directory."""
    out_dir = ensure_output_dir(output_dir)
    path = out_dir / f"{filename}.md"
    path.write_text(content, encoding="utf-8")
    return path
