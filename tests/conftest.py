"""
Pytest configuration and shared fixtures for Markfold tests.
"""

import pytest

from markfold import FoldingEngine, FoldingSettings


@pytest.fixture
def engine() -> FoldingEngine:
    """Engine with the default tree-sitter providers."""
    return FoldingEngine()


@pytest.fixture
def markup_engine() -> FoldingEngine:
    """Engine with no embedded providers: markup structure only."""
    return FoldingEngine(settings=FoldingSettings(), providers={})
