"""Room template loading.

Templates are text files laid out as::

    <root>/type0/*.txt   arbitrary rooms
    <root>/type1/*.txt   left/right
    <root>/type2/*.txt   left/right/down
    <root>/type3/*.txt   left/right/up
    <root>/type4/*.txt   all four exits
    <root>/solid.txt     the perimeter block

Each library instance owns its cache; nothing is shared between generators.
"""

import logging
import os
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from config import CHUNK_SIZE
from fell.level.errors import ConfigurationError, TemplateFormatError
from fell.level.room_types import RoomType
from fell.tiles.tile_parser import TileParser, tile_parser

logger = logging.getLogger(__name__)

DEFAULT_ROOM_DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data", "rooms")
SOLID_TEMPLATE_NAME = "solid.txt"
TEMPLATE_EXTENSION = ".txt"


class RoomTemplateLibrary:
    """Loads and caches room templates per room type."""

    def __init__(
        self,
        root_dir: Optional[str] = None,
        chunk_size: int = CHUNK_SIZE,
        parser: Optional[TileParser] = None,
    ):
        """
        Args:
            root_dir: Directory with type<N>/ folders and solid.txt
                (defaults to the templates packaged with fell)
            chunk_size: Expected template width and height in tiles
            parser: Parser used to validate template text
        """
        self.root_dir = root_dir or DEFAULT_ROOM_DATA_DIR
        self.chunk_size = chunk_size
        self.parser = parser or tile_parser
        self._templates: Dict[RoomType, List[str]] = {}
        self._solid: Optional[str] = None

    @classmethod
    def from_mapping(
        cls,
        templates: Mapping[RoomType, Sequence[str]],
        solid: str,
        chunk_size: int = CHUNK_SIZE,
        parser: Optional[TileParser] = None,
    ) -> "RoomTemplateLibrary":
        """Build a library from in-memory template text."""
        library = cls(root_dir=None, chunk_size=chunk_size, parser=parser)
        library.root_dir = None
        for room_type, texts in templates.items():
            library._templates[RoomType(room_type)] = [library._checked(text, f"type{int(room_type)}[{i}]")
                                                       for i, text in enumerate(texts)]
        library._solid = library._checked(solid, "solid")
        return library

    def _checked(self, text: str, source: str) -> str:
        issues = self.parser.validate_rows(self.parser.split_rows(text), self.chunk_size)
        if issues:
            raise TemplateFormatError(f"Room template {source} is invalid: " + "; ".join(issues[:5]))
        return text

    def _category_dir(self, room_type: RoomType) -> str:
        return os.path.join(self.root_dir, f"type{int(room_type)}")

    def _read(self, path: str) -> str:
        with open(path, 'r', encoding='utf-8') as f:
            return self._checked(f.read(), path)

    def templates_for(self, room_type: RoomType) -> List[str]:
        """
        Return every template for a room type, loading the category on first use.

        Files are read in name order so a seed always sees the same list.
        """
        room_type = RoomType(room_type)
        if room_type in self._templates:
            templates = self._templates[room_type]
            if not templates:
                raise ConfigurationError(f"No templates registered for room type {room_type.name}")
            return templates

        if self.root_dir is None:
            raise ConfigurationError(f"No templates registered for room type {room_type.name}")

        category_dir = self._category_dir(room_type)
        if not os.path.isdir(category_dir):
            raise ConfigurationError(f"Missing template category directory: {category_dir}")

        names = sorted(name for name in os.listdir(category_dir) if name.endswith(TEMPLATE_EXTENSION))
        templates = [self._read(os.path.join(category_dir, name)) for name in names]
        if not templates:
            raise ConfigurationError(f"Template category {category_dir} is empty")

        logger.debug("Loaded %d template(s) for %s from %s", len(templates), room_type.name, category_dir)
        self._templates[room_type] = templates
        return templates

    def solid_template(self) -> str:
        """Return the fully solid block used to seal the level perimeter."""
        if self._solid is None:
            if self.root_dir is None:
                raise ConfigurationError("No solid template registered")
            path = os.path.join(self.root_dir, SOLID_TEMPLATE_NAME)
            if not os.path.isfile(path):
                raise ConfigurationError(f"Missing solid template: {path}")
            self._solid = self._read(path)
        return self._solid

    def validate(self, room_types: Iterable[RoomType] = tuple(RoomType)) -> None:
        """Load every category up front so missing content fails before generation writes anything."""
        for room_type in room_types:
            self.templates_for(room_type)
        self.solid_template()
