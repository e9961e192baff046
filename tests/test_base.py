import logging
import sys
import unittest
from pathlib import Path

# Ensure src/ is on sys.path so we can import the package without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from atlas.resources.base import Resource  # noqa: E402


class DummyClient:
    def __init__(self) -> None:
        self._logger = logging.getLogger("atlas.tests")
        self.calls: list[tuple[str, str, object, object, object, object]] = []

    def request(self, method, path, params=None, json=None, data=None, timeout=None):
        self.calls.append((method, path, params, json, data, timeout))
        return {"ok": True}


class BaseResourceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = DummyClient()
        self.resource = Resource(self.client)  # type: ignore[arg-type]

    def test_logger_property(self):
        self.assertIs(self.resource._logger, self.client._logger)

    def test_request_passthrough(self):
        result = self.resource._request("GET", "/x", params={"a": 1}, json={"b": 2}, timeout=5)
        self.assertEqual(result, {"ok": True})
        self.assertEqual(self.client.calls[-1], ("GET", "/x", {"a": 1}, {"b": 2}, None, 5))

    def test_get(self):
        self.resource._get("/g", params={"q": 1}, timeout=2)
        self.assertEqual(self.client.calls[-1], ("GET", "/g", {"q": 1}, None, None, 2))

    def test_post_json(self):
        self.resource._post("/p", json={"x": 1}, timeout=3)
        self.assertEqual(self.client.calls[-1], ("POST", "/p", None, {"x": 1}, None, 3))

    def test_post_bytes(self):
        self.resource._post("/p", data=b"raw")
        self.assertEqual(self.client.calls[-1], ("POST", "/p", None, None, b"raw", None))
