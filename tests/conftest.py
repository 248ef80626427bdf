# tests/conftest.py
import os


def pytest_sessionstart(session):
    # Tests must not pick up a developer's PRELEX_* overrides.
    for key in [k for k in os.environ if k.startswith("PRELEX_")]:
        os.environ.pop(key, None)
