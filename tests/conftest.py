import os
import sys

import pytest


# Ensure the repository root is on sys.path for `from ringchess...` imports
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from ringchess.engine.state import GameState  # noqa: E402


@pytest.fixture
def empty_state() -> GameState:
    return GameState.empty()


@pytest.fixture
def standard_state() -> GameState:
    return GameState.initial("standard")


@pytest.fixture
def citadel_state() -> GameState:
    return GameState.initial("citadel")
