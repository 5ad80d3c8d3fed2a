"""Reference data source for raw per-state tax records."""

import json
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from regime_analyzer.core.rules.state_records import ESTADOS
from regime_analyzer.shared.exceptions import ReferenceDataError
from regime_analyzer.shared.logging import get_logger
from regime_analyzer.shared.validators import normalize_uf

logger = get_logger(__name__)


class ReferenceDataSource:
    """Read-only provider of raw state records keyed by UF."""

    def __init__(self, records: Mapping[str, Mapping[str, Any]]):
        self._records = {normalize_uf(uf): record for uf, record in records.items()}

    def get(self, uf: str) -> Optional[Mapping[str, Any]]:
        """Raw record of a state, or None when the source has no data for it."""
        return self._records.get(normalize_uf(uf))

    def ufs(self) -> list[str]:
        return sorted(self._records)

    def __contains__(self, uf: object) -> bool:
        return isinstance(uf, str) and normalize_uf(uf) in self._records

    def __len__(self) -> int:
        return len(self._records)

    @classmethod
    def bundled(cls) -> "ReferenceDataSource":
        """Records shipped with the package."""
        return cls(ESTADOS)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "ReferenceDataSource":
        """Load records from a JSON object keyed by UF.

        Raises:
            ReferenceDataError: If the file cannot be read or is not an object
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ReferenceDataError(f"Não foi possível ler {path}: {e}") from e

        if not isinstance(data, dict):
            raise ReferenceDataError(f"{path}: esperado um objeto JSON indexado por UF")

        invalid = [uf for uf, record in data.items() if not isinstance(record, dict)]
        if invalid:
            raise ReferenceDataError(f"{path}: registros inválidos para {', '.join(invalid)}")

        logger.info("reference_data_loaded", extra={"path": str(path), "ufs": len(data)})
        return cls(data)


def load_reference_data(path: Optional[Union[str, Path]] = None) -> ReferenceDataSource:
    """Bundled records, or the JSON file at ``path`` when given."""
    if path is None:
        return ReferenceDataSource.bundled()
    return ReferenceDataSource.from_json(path)


__all__ = [
    "ESTADOS",
    "ReferenceDataSource",
    "load_reference_data",
]
