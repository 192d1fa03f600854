import sys
from pathlib import Path

import pytest

# Put 'src' on sys.path so tests import ghostmaze without installing it
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))


class InOrderRandom:
    """RandomSource stand-in whose shuffle keeps top, right, bottom, left order."""

    def shuffle(self, items):
        pass


@pytest.fixture
def in_order_rng():
    return InOrderRandom()
