"""JSON-file source for the service catalog."""

import json
import logging
from pathlib import Path
from typing import Any

from screening_api.core.exceptions import CatalogLoadError

logger = logging.getLogger(__name__)


class JsonCatalogSource:
    """Reads ``{"services": [...]}`` from a JSON document on each call."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> list[dict[str, Any]]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CatalogLoadError(f"Cannot read catalog file '{self._path}': {exc}") from exc
        except json.JSONDecodeError as exc:
            raise CatalogLoadError(f"Catalog file '{self._path}' is not valid JSON: {exc}") from exc

        if not isinstance(data, dict) or not isinstance(data.get("services"), list):
            raise CatalogLoadError(f"Catalog file '{self._path}' has no 'services' list")
        logger.debug("Read %d catalog records from %s", len(data["services"]), self._path)
        return data["services"]
