"""Load SDL files from disk into a SchemaComposer."""

import logging
import os

from .schema_composer import SchemaComposer

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls")


def collect_schema_files(schema_path: str) -> list[str]:
    """Collect all .graphql/.graphqls files from a file or directory path."""
    files = []
    if os.path.isfile(schema_path):
        if schema_path.endswith(SCHEMA_EXTENSIONS):
            files.append(schema_path)
    else:
        for root, _, filenames in os.walk(schema_path):
            for filename in filenames:
                if filename.endswith(SCHEMA_EXTENSIONS):
                    files.append(os.path.join(root, filename))
    return sorted(files)


def load_schema_composer(schema_path: str, sc: SchemaComposer | None = None) -> SchemaComposer:
    """Add the type definitions of every schema file under ``schema_path``."""
    if sc is None:
        sc = SchemaComposer()
    for file_path in collect_schema_files(schema_path):
        logger.debug("Loading type definitions from %s", file_path)
        with open(file_path) as f:
            sc.add_type_defs(f.read())
    return sc
