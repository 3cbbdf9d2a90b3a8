# tests/conftest.py
import pytest

from unitum.core import numeric


@pytest.fixture
def decimal_context(monkeypatch):
    """Swap the library decimal context for a test-local copy."""
    ctx = numeric.DECIMAL_CONTEXT.copy()
    monkeypatch.setattr(numeric, "DECIMAL_CONTEXT", ctx, raising=True)
    return ctx
