import sys
from pathlib import Path

import pytest


# Ensure tests can import the top-level packages (engine, metadata, wiki, ...)
# without installing the project.
ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)


@pytest.fixture(autouse=True)
def _no_ambient_spotify_token(monkeypatch):
    # A token exported in the developer's shell must not reach the clients.
    monkeypatch.delenv("SPOTIFY_ACCESS_TOKEN", raising=False)
