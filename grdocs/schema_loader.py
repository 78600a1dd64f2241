"""
Workspace Loader
================
Loads a YAML workspace export (companies, users, initiatives, stakeholders)
and assembles generation contexts from it the way the dashboard wizard does.

This module is the structured input gate for the CLI. The engine itself
never reads files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from grdocs.formatting import parse_date
from grdocs.models import (
    Addressee,
    Company,
    GenerationContext,
    Initiative,
    Stakeholder,
    User,
    config_from_dict,
)
from grdocs.schema import TemplateType, to_template_type


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

ROOT_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = ROOT_DIR / "data"
SAMPLE_WORKSPACE = DATA_DIR / "workspace.yaml"

REQUIRED_KEYS = ("companies", "users", "initiatives", "stakeholders")


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dictionary."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        raise ValueError(f"Empty YAML file: {path}")
    if not isinstance(data, dict):
        raise ValueError(f"YAML file {path.name} must contain a mapping at the top level.")
    return data


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Workspace:
    companies: tuple[Company, ...] = ()
    users: tuple[User, ...] = ()
    initiatives: tuple[Initiative, ...] = ()
    stakeholders: tuple[Stakeholder, ...] = ()
    source: Path | None = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: Path | None = None) -> Workspace:
        return cls(
            companies=tuple(Company.from_dict(c) for c in data.get("companies") or []),
            users=tuple(User.from_dict(u) for u in data.get("users") or []),
            initiatives=tuple(Initiative.from_dict(i) for i in data.get("initiatives") or []),
            stakeholders=tuple(Stakeholder.from_dict(s) for s in data.get("stakeholders") or []),
            source=source,
        )

    def company(self, company_id: str) -> Company:
        for c in self.companies:
            if c.id == company_id:
                return c
        raise ValueError(f"Unknown company: '{company_id}'")

    def user(self, user_id: str) -> User:
        for u in self.users:
            if u.id == user_id:
                return u
        raise ValueError(f"Unknown user: '{user_id}'")

    def initiative(self, initiative_id: str) -> Initiative:
        for i in self.initiatives:
            if i.id == initiative_id:
                return i
        raise ValueError(f"Unknown initiative: '{initiative_id}'")

    def stakeholder(self, stakeholder_id: str) -> Stakeholder:
        for s in self.stakeholders:
            if s.id == stakeholder_id:
                return s
        raise ValueError(f"Unknown stakeholder: '{stakeholder_id}'")

    def stakeholders_for(self, initiative: Initiative) -> tuple[Stakeholder, ...]:
        """Stakeholders linked to an initiative, in workspace order."""
        linked = set(initiative.stakeholder_ids)
        return tuple(s for s in self.stakeholders if s.id in linked)


def load_workspace(path: str | Path) -> Workspace:
    """
    Load and structurally validate a workspace YAML file.

    Raises FileNotFoundError if the file is missing and ValueError if it
    is empty or lacks any of the top-level lists.
    """
    path = Path(path)
    raw = _load_yaml(path)

    missing = [key for key in REQUIRED_KEYS if key not in raw]
    if missing:
        raise ValueError(
            f"Workspace {path.name} missing required keys: " + ", ".join(missing)
        )
    if not raw.get("companies"):
        raise ValueError(f"Workspace {path.name} must define at least one company.")
    if not raw.get("users"):
        raise ValueError(f"Workspace {path.name} must define at least one user.")

    return Workspace.from_dict(raw, source=path)


# ---------------------------------------------------------------------------
# Context Assembly
# ---------------------------------------------------------------------------

def build_context(
    workspace: Workspace,
    template_id: TemplateType | str,
    *,
    current_date: str,
    company_id: str | None = None,
    user_id: str | None = None,
    initiative_id: str | None = None,
    addressee_stakeholder_id: str | None = None,
    addressee: Addressee | None = None,
    period: str | None = None,
    config: Mapping[str, Any] | None = None,
) -> GenerationContext:
    """
    Assemble a fresh GenerationContext for one generation pass.

    - The user defaults to the first user; the company to that user's company.
    - With an initiative, only its linked stakeholders are passed on;
      without one, every stakeholder is.
    - All initiatives of the workspace are always included.
    - The addressee may be given directly or picked from the stakeholders.
    - The reference year for outgoing numbers is taken from `current_date`.
    """
    template = to_template_type(template_id)

    user = workspace.user(user_id) if user_id else workspace.users[0]
    company_id = company_id or user.company_id or workspace.companies[0].id
    company = workspace.company(company_id)

    initiative = workspace.initiative(initiative_id) if initiative_id else None
    stakeholders = (
        workspace.stakeholders_for(initiative) if initiative else workspace.stakeholders
    )

    if addressee is None and addressee_stakeholder_id:
        addressee = Addressee.from_stakeholder(workspace.stakeholder(addressee_stakeholder_id))

    parsed = parse_date(current_date)

    return GenerationContext(
        company=company,
        current_user=user,
        current_date=current_date,
        initiative=initiative,
        stakeholders=stakeholders,
        all_initiatives=workspace.initiatives,
        addressee=addressee,
        period=period,
        config=config_from_dict(template, config),
        reference_year=parsed.year if parsed else None,
    )
