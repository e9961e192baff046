import logging
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

# Ensure src/ is on sys.path so we can import the package without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from atlas.resources.users import Users  # noqa: E402


logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stdout,
    force=True,
)


class DummyClient:
    def __init__(self) -> None:
        self._logger = logging.getLogger("atlas.tests")

    def request(self, method, path, params=None, json=None, data=None, timeout=None):
        return {}


class UsersTests(unittest.TestCase):
    def setUp(self) -> None:
        self.users = Users(DummyClient())  # type: ignore[arg-type]

    def test_info(self):
        with patch.object(self.users, "_get", return_value={"sub": "u1"}) as mocked_get:
            self.assertEqual(self.users.info(), {"sub": "u1"})
        self.assertEqual(mocked_get.call_args.args[0], "/user/")

    def test_info_failure(self):
        with patch.object(self.users, "_get", return_value=None):
            self.assertIsNone(self.users.info())

    def test_default_organization_explicit(self):
        info = {"default_organization": "o2", "organizations": [{"organization_id": "o1"}]}
        with patch.object(self.users, "_get", return_value=info):
            self.assertEqual(self.users.default_organization(), "o2")

    def test_default_organization_falls_back_to_first(self):
        info = {"organizations": [{"organization_id": "o1"}, {"organization_id": "o3"}]}
        with patch.object(self.users, "_get", return_value=info):
            self.assertEqual(self.users.default_organization(), "o1")

    def test_default_organization_none(self):
        with patch.object(self.users, "_get", return_value={"organizations": []}):
            self.assertIsNone(self.users.default_organization())


if __name__ == "__main__":
    unittest.main()
