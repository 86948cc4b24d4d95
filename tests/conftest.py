"""Pytest configuration and shared fixtures for the layout2md test suite.

This module registers the custom markers, selects the Hypothesis profile
and provides page fixtures shared across unit and integration tests.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import make_glyphs, make_page, make_row_glyphs

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def heading_page():
    """A page with a bold 24pt title, a 16pt subtitle and two body lines."""
    return make_page(
        make_glyphs("Introduction", top=740, size=24, font_name="Helvetica-Bold"),
        make_glyphs("Background", top=705, size=16, font_name="Helvetica"),
        make_glyphs("Body text sits at the normal size.", top=680),
        make_glyphs("Another full sentence of body text.", top=660),
    )


@pytest.fixture
def table_page():
    """A page holding a three-row, three-column table and nothing else."""
    columns = (72, 250, 430)
    rows = [("Name", "Age", "City"), ("Alice", "30", "Paris"), ("Bob", "25", "Rome")]
    glyphs = []
    for index, cells in enumerate(rows):
        glyphs.extend(make_row_glyphs(list(zip(columns, cells)), top=700 - 15 * index))
    return make_page(glyphs)
