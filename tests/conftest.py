"""Shared test fixtures for the runtotal test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from runtotal.accumulator import Total
from runtotal.config import reset_defaults


@pytest.fixture(autouse=True)
def _restore_defaults():
    """Process-wide defaults are global; give every test the built-in ones."""
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture
def total() -> Total:
    """An empty Total with built-in defaults (number_format=2)."""
    return Total()


@pytest.fixture
def monthly_total() -> Total:
    """Total holding a few dotted sales figures across two months."""
    t = Total()
    t.set("march.first.am", 4)
    t.set("march.first.pm", 6)
    t.set("march.second.am", 10)
    t.set("april.first.am", 5)
    return t


@pytest.fixture
def total_yaml(tmp_path: Path) -> str:
    """Write a sample total config YAML file and return its path."""
    content = """
number_format: 1
prefix: "$"
suffix: " USD"
"""
    yaml_file = tmp_path / "total.yaml"
    yaml_file.write_text(content)
    return str(yaml_file)
