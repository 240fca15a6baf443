"""Shared test fixtures for forge-context."""

from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"

FORGE_TEMPLATE = """# Project Instructions

## Forge Workflow

Use the 9-stage TDD workflow.

## Core Principles

- TDD-First
- Research-First
- Security Built-In"""


@pytest.fixture
def load_fixture():
    def _load(name: str) -> str:
        return (FIXTURES / name).read_text(encoding="utf-8")
    return _load


@pytest.fixture
def forge_template():
    return FORGE_TEMPLATE
