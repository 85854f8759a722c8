import runpy
import sys
import unittest
from pathlib import Path

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


class TestExamples(unittest.TestCase):
    """Runs every example script as `__main__`; each one asserts its own flow."""

    def setUp(self):
        sys.path.insert(0, str(EXAMPLES_DIR))
        self.addCleanup(sys.path.remove, str(EXAMPLES_DIR))

    def run_example(self, name: str):
        runpy.run_path(str(EXAMPLES_DIR / name), run_name="__main__")

    def test_media_player(self):
        self.run_example("media_player.py")

    def test_media_player_regex(self):
        with self.assertLogs("statevector", level="DEBUG") as logs:
            self.run_example("media_player_regex.py")
        self.assertTrue(any("player-regex" in r.getMessage() for r in logs.records))


if __name__ == "__main__":
    unittest.main()
