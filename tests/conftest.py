from __future__ import annotations

import pytest

from numkit.runtime import reset


@pytest.fixture(autouse=True)
def fresh_runtime():
    """Each test starts from a default Runtime (no profile, debug off)."""
    rt = reset()
    yield rt
    reset()


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Point NUMKIT_HOME at a throwaway directory."""
    monkeypatch.setenv("NUMKIT_HOME", str(tmp_path))
    return tmp_path
