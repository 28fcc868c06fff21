# ABOUTME: Read-only, ordered career catalog with id lookup and a thin JSON loader.
# ABOUTME: Accepts a JSON array of careers or an object with a "careers" array (camelCase keys allowed).

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from traveller_chargen.engine.exceptions import CareerNotFound, CatalogLoadError
from traveller_chargen.models.career import Career

BUNDLED_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "careers.json"

_CAREER_LIST = TypeAdapter(list[Career])


class CareerCatalog:
    """
    Ordered, immutable collection of Career definitions.

    Loaded once per session. Lookups by id never mutate the catalog; the
    order is the configuration order and is what the qualification menu
    shows.
    """

    def __init__(self, careers: Iterable[Career]):
        self._careers: tuple[Career, ...] = tuple(careers)
        self._by_id: dict[str, Career] = {}
        for career in self._careers:
            if career.id in self._by_id:
                raise CatalogLoadError(f"Duplicate career id in catalog: '{career.id}'")
            self._by_id[career.id] = career

    def __iter__(self) -> Iterator[Career]:
        return iter(self._careers)

    def __len__(self) -> int:
        return len(self._careers)

    def __contains__(self, career_id: object) -> bool:
        return career_id in self._by_id

    @property
    def ids(self) -> list[str]:
        return [career.id for career in self._careers]

    def find(self, career_id: str) -> Career | None:
        """Career by id, or None when the catalog doesn't define it"""
        return self._by_id.get(career_id)

    def get(self, career_id: str) -> Career:
        """
        Career by id.

        Raises:
            CareerNotFound: If the id isn't in the catalog
        """
        career = self._by_id.get(career_id)
        if career is None:
            raise CareerNotFound(
                f"Career '{career_id}' not found. Available careers: {self.ids}"
            )
        return career

    @classmethod
    def from_data(cls, data: Any) -> "CareerCatalog":
        """
        Validate an already-parsed JSON document into a catalog.

        Raises:
            CatalogLoadError: If the document doesn't describe a list of careers
        """
        if isinstance(data, dict):
            data = data.get("careers")

        if not isinstance(data, list):
            raise CatalogLoadError(
                "Career catalog must be a list of careers or an object with a 'careers' list"
            )

        try:
            careers = _CAREER_LIST.validate_python(data)
        except ValidationError as e:
            raise CatalogLoadError(f"Invalid career catalog: {e}") from e

        return cls(careers)

    @classmethod
    def from_json(cls, path: str | Path) -> "CareerCatalog":
        """
        Load and validate a catalog from a JSON file.

        Raises:
            CatalogLoadError: If the file is missing, malformed or invalid
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise CatalogLoadError(f"Career catalog not found: {path}") from e
        except json.JSONDecodeError as e:
            raise CatalogLoadError(f"Invalid JSON in {path}: {e}") from e

        catalog = cls.from_data(data)
        logger.info(f"Loaded {len(catalog)} careers from {path}: {catalog.ids}")
        return catalog


def load_catalog(path: str | Path | None = None) -> CareerCatalog:
    """Load the catalog at path, or the bundled sample catalog when path is None"""
    return CareerCatalog.from_json(path or BUNDLED_CATALOG_PATH)
