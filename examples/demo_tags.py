"""CLI demo that creates a rule-defined tag and uploads its mask.

Run with the virtual environment activated::

    python examples/demo_tags.py <project_id> <projection_id>

Set ``ATLAS_API_KEY`` (and optionally ``ATLAS_ENVIRONMENT`` /
``ATLAS_API_DOMAIN``) before running.
"""

import logging
import os
import sys
from pprint import pprint

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from atlas import Atlas, build_mask_table, compute_definition_id

logging.basicConfig(level=logging.INFO)

RULE = ["OR", {"field": "topic", "op": "eq", "value": "cats"}, {"field": "topic", "op": "eq", "value": "dogs"}]


def main() -> None:
    if len(sys.argv) != 3:
        print(__doc__)
        return
    project_id, projection_id = sys.argv[1:]
    atlas = Atlas(raise_on_error=True)

    index = atlas.projections.find_index(project_id, projection_id)
    print(f"Projection {projection_id} belongs to index {index.get('id') if index else '?'}")

    tag = atlas.projections.tags.create(project_id, projection_id, "pets", dsl_rule=RULE)
    if not tag:
        return
    print(f"Created tag {tag['tag_id']} with definition {compute_definition_id(RULE)}")

    mask = build_mask_table(["0/0/0", "0/0/1"], [[True, True], [False, False]])
    atlas.projections.tags.update_mask(project_id, tag["tag_id"], mask, dsl_rule=RULE)

    pprint(atlas.projections.tags.list(project_id, projection_id))
    atlas.projections.tags.delete(project_id, tag["tag_id"])


if __name__ == "__main__":
    main()
