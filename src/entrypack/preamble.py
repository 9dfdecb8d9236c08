"""
Entity set extraction from the DTD preamble.

Everything before the root element's opening tag is DTD. JMdict groups its
custom entities into sets, each introduced by a header comment:

    <!-- <dial> (dialect) entities -->
    <!ENTITY bra "Brazilian">
    <!ENTITY hob "Hokkaido-ben">
    ...

The scanner collects these into an EntityRegistry holding two views:

    sets:              set name -> entity key -> expansion text
    decoder_entities:  entity key -> entity key

The second view is what the XML decoder gets. It makes "&arch;" decode to
"arch" rather than "archaism", so the entrypack keeps the short codes.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from entrypack.config import DEFAULT_ROOT_TAG
from entrypack.errors import FormatError
from entrypack.line_reader import LineReader

logger = logging.getLogger(__name__)


ENTITY_HEADER_PATTERN = re.compile(r"^<!-- <(\S+)> .*entities -->$")
ENTITY_DEF_PATTERN = re.compile(r'^<!ENTITY (\S+) "(.+)">$')
ENTITY_DECL_PREFIX = "<!ENTITY"


@dataclass
class EntityRegistry:
    """Entity definitions collected from the preamble."""

    sets: dict[str, dict[str, str]] = field(default_factory=dict)
    decoder_entities: dict[str, str] = field(default_factory=dict)

    @property
    def entity_count(self) -> int:
        return sum(len(entities) for entities in self.sets.values())


def scan_preamble(reader: LineReader, root_tag: str = DEFAULT_ROOT_TAG) -> EntityRegistry:
    """
    Consume lines up to and including the root opening tag.

    Args:
        reader: Line source positioned at the start of the document
        root_tag: Name of the document's root element

    Returns:
        The collected EntityRegistry

    Raises:
        FormatError: Entity definition before any set header, or an entity
            declaration that is not a plain `<!ENTITY key "text">` line
        InputError: End of input before the root opening tag
    """
    opener = f"<{root_tag}>"
    registry = EntityRegistry()
    current_set: Optional[dict[str, str]] = None

    while True:
        line = reader.next_line()
        if line == opener:
            break

        match = ENTITY_HEADER_PATTERN.match(line)
        if match:
            name = match.group(1)
            if name in registry.sets:
                logger.debug(f"  Entity set <{name}> reopened at line {reader.line_number}")
            else:
                logger.debug(f"  Entity set <{name}> at line {reader.line_number}")
            current_set = registry.sets.setdefault(name, {})
            continue

        if not line.startswith(ENTITY_DECL_PREFIX):
            continue

        match = ENTITY_DEF_PATTERN.match(line)
        if not match:
            raise FormatError(f"unrecognized entity declaration: {line}", reader.line_number)
        if current_set is None:
            raise FormatError(f"entity definition outside of set: {line}", reader.line_number)

        key, value = match.group(1), match.group(2)
        current_set[key] = value
        registry.decoder_entities[key] = key

    logger.info(
        f"Preamble: {len(registry.sets)} entity sets, "
        f"{registry.entity_count:,} entities ({reader.line_number:,} lines)"
    )
    return registry
