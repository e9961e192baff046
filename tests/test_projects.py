import logging
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

import pyarrow as pa

# Ensure src/ is on sys.path so we can import the package without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from atlas.codec import decode_mask  # noqa: E402
from atlas.errors import CodecError  # noqa: E402
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

    def request(self, method, path, params=None, json=None, data=None, timeout=None):
        return {}


PROJECT = {
    "id": "p1",
    "project_name": "demo",
    "insert_update_delete_lock": True,
    "atlas_indices": [{"id": "i1", "projections": [{"id": "pr1"}]}],
}


class ProjectsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.projects = Projects(DummyClient())  # type: ignore[arg-type]

    def test_info_invalid_id_warn(self):
        with patch.object(self.projects, "_get") as mocked_get:
            self.assertIsNone(self.projects.info(""))
        mocked_get.assert_not_called()

    def test_info_invalid_id_strict(self):
        with self.assertRaises(ValueError):
            self.projects.info(None, validation="strict")  # type: ignore[arg-type]

    def test_info_success(self):
        with patch.object(self.projects, "_get", return_value=PROJECT) as mocked_get:
            self.assertEqual(self.projects.info(" p1 "), PROJECT)
        self.assertEqual(mocked_get.call_args.args[0], "/project/p1")

    def test_info_response_not_dict(self):
        with patch.object(self.projects, "_get", return_value=[]):
            self.assertIsNone(self.projects.info("p1"))

    def test_delete(self):
        with patch.object(self.projects, "_post", return_value={}) as mocked_post:
            self.assertTrue(self.projects.delete("p1"))
        self.assertEqual(mocked_post.call_args.args[0], "/project/remove")
        self.assertEqual(mocked_post.call_args.kwargs["json"], {"project_id": "p1"})

    def test_delete_failure(self):
        with patch.object(self.projects, "_post", return_value=None):
            self.assertFalse(self.projects.delete("p1"))

    def test_indices(self):
        with patch.object(self.projects, "_get", return_value=PROJECT):
            self.assertEqual(self.projects.indices("p1"), PROJECT["atlas_indices"])

    def test_indices_missing(self):
        with patch.object(self.projects, "_get", return_value={"id": "p1"}):
            self.assertIsNone(self.projects.indices("p1"))

    def test_is_locked(self):
        with patch.object(self.projects, "_get", return_value=PROJECT):
            self.assertTrue(self.projects.is_locked("p1"))
        with patch.object(self.projects, "_get", return_value={"id": "p1"}):
            self.assertFalse(self.projects.is_locked("p1"))
        with patch.object(self.projects, "_get", return_value=None):
            self.assertIsNone(self.projects.is_locked("p1"))

    def test_upload_arrow_stamps_project(self):
        table = pa.table({"id": ["a", "b"], "text": ["hello", "world"]})
        with patch.object(self.projects, "_post", return_value={}) as mocked_post:
            self.assertTrue(self.projects.upload_arrow("p1", table))
        self.assertEqual(mocked_post.call_args.args[0], "/project/data/add/arrow")
        decoded, metadata = decode_mask(mocked_post.call_args.kwargs["data"])
        self.assertEqual(metadata["project_id"], "p1")
        self.assertEqual(decoded.column("text").to_pylist(), ["hello", "world"])

    def test_upload_arrow_empty_table(self):
        table = pa.table({"id": pa.array([], type=pa.string())})
        with patch.object(self.projects, "_post") as mocked_post:
            self.assertFalse(self.projects.upload_arrow("p1", table))
        mocked_post.assert_not_called()

    def test_upload_arrow_bad_bytes(self):
        with self.assertRaises(CodecError):
            self.projects.upload_arrow("p1", b"not arrow")

    def test_create_index_payload(self):
        with patch.object(self.projects, "_post", return_value={"job_id": "j1"}) as mocked_post:
            result = self.projects.create_index("p1", "test index", indexed_field="text")
        self.assertEqual(result, {"job_id": "j1"})
        self.assertEqual(
            mocked_post.call_args.kwargs["json"],
            {"project_id": "p1", "index_name": "test index", "colorable_fields": [], "indexed_field": "text"},
        )

    def test_create_index_invalid_name_strict(self):
        with self.assertRaises(ValueError):
            self.projects.create_index("p1", "", validation="strict")

    def test_create_index_response_not_dict(self):
        with patch.object(self.projects, "_post", return_value=None):
            self.assertIsNone(self.projects.create_index("p1", "idx"))


if __name__ == "__main__":
    unittest.main()
