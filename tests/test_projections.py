import logging
import sys
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

# Ensure src/ is on sys.path so we can import the package without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from atlas.resources.projections import Projections  # noqa: E402
from atlas.resources.projects import Projects  # noqa: E402


logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stdout,
    force=True,
)


class DummyClient:
    def __init__(self) -> None:
        self._logger = logging.getLogger("atlas.tests")
        self.base_url = "https://api.example.com"

    def request(self, method, path, params=None, json=None, data=None, timeout=None):
        return {}


INDICES = [
    {"id": "i1", "projections": [{"id": "pr1"}]},
    {"id": "i2", "projections": [{"id": "pr2"}, {"id": "pr3"}]},
]


class ProjectionsTests(unittest.TestCase):
    def setUp(self) -> None:
        client = DummyClient()
        self.projects = MagicMock(spec=Projects)
        self.projections = Projections(client, projects=self.projects)  # type: ignore[arg-type]

    def test_info_path(self):
        with patch.object(self.projections, "_get", return_value={"id": "pr1"}) as mocked_get:
            self.assertEqual(self.projections.info("p1", "pr1"), {"id": "pr1"})
        self.assertEqual(mocked_get.call_args.args[0], "/project/p1/index/projection/pr1")

    def test_info_invalid_ids_warn(self):
        with patch.object(self.projections, "_get") as mocked_get:
            self.assertIsNone(self.projections.info("p1", ""))
        mocked_get.assert_not_called()

    def test_info_invalid_ids_strict(self):
        with self.assertRaises(ValueError):
            self.projections.info("", "pr1", validation="strict")

    def test_info_response_not_dict(self):
        with patch.object(self.projections, "_get", return_value=None):
            self.assertIsNone(self.projections.info("p1", "pr1"))

    def test_quadtree_root(self):
        self.assertEqual(
            self.projections.quadtree_root("p1", "pr1"),
            "https://api.example.com/v1/project/p1/index/projection/pr1/quadtree",
        )

    def test_find_index(self):
        self.projects.indices.return_value = INDICES
        self.assertEqual(self.projections.find_index("p1", "pr3"), INDICES[1])

    def test_find_index_not_found(self):
        self.projects.indices.return_value = INDICES
        self.assertIsNone(self.projections.find_index("p1", "missing"))

    def test_find_index_lookup_failure(self):
        self.projects.indices.return_value = None
        self.assertIsNone(self.projections.find_index("p1", "pr1"))


if __name__ == "__main__":
    unittest.main()
