import random
import sys
from pathlib import Path

import pytest

# Ensure the repo root is importable when tests are run without installing the package.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.scheduler import VirtualScheduler  # noqa: E402
from services.speech import NullSpeech  # noqa: E402
from storage.db import Database  # noqa: E402
from fakes import EventLog  # noqa: E402


@pytest.fixture
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()


@pytest.fixture
def speech() -> NullSpeech:
    return NullSpeech()


@pytest.fixture
def events() -> EventLog:
    return EventLog()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def db():
    database = Database(":memory:")
    database.init_schema()
    yield database
    database.close()
