"""
Entity registry output and loading.

The registry is written once, right after the preamble, as tab-indented
JSON:

    {
    	"dial": {
    		"bra": "Brazilian",
    		...
    	},
    	...
    }

Code generators downstream read it to build their enum tables.
"""

import json
import logging
from pathlib import Path

from entrypack.fileio import atomic_output
from entrypack.preamble import EntityRegistry

logger = logging.getLogger(__name__)


def registry_to_json(registry: EntityRegistry) -> str:
    """Render the set -> key -> expansion mapping as tab-indented JSON."""
    return json.dumps(registry.sets, indent="\t", sort_keys=True, ensure_ascii=False)


def write_registry(registry: EntityRegistry, path: Path) -> None:
    """Write the registry to `path`, replacing any previous content atomically."""
    with atomic_output(path) as f:
        f.write(registry_to_json(registry).encode("utf-8"))

    logger.info(f"Entity registry written: {path} ({len(registry.sets)} sets)")


def load_registry(path: Path) -> dict[str, dict[str, str]]:
    """Read a registry file written by write_registry()."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def decoder_table_from_registry(sets: dict[str, dict[str, str]]) -> dict[str, str]:
    """Re-derive the decoder entity table (every key mapped to itself)."""
    return {key: key for entities in sets.values() for key in entities}
