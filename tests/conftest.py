"""Shared fixtures: the sample workspace and context builders over it."""

import pytest

from grdocs.models import Company, GenerationContext, User
from grdocs.schema_loader import SAMPLE_WORKSPACE, build_context, load_workspace


@pytest.fixture
def workspace():
    return load_workspace(SAMPLE_WORKSPACE)


@pytest.fixture
def make_context(workspace):
    """Build a context from the sample workspace; keyword args pass through."""

    def _make(template_id, **kwargs):
        kwargs.setdefault("current_date", "2026-02-18")
        return build_context(workspace, template_id, **kwargs)

    return _make


@pytest.fixture
def bare_context():
    """A context with nothing but a company, a user and a date."""
    return GenerationContext(
        company=Company(id="c-0", name="Empty Co"),
        current_user=User(id="u-0", name="Test User"),
        current_date="2026-02-18",
        reference_year=2026,
    )
