"""Base decoder interface for tabular sources."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from dispute_delta.models.records import RawRow


@dataclass
class DecodedTable:
    """Rows decoded from one file, keyed by the raw header text."""

    name: str
    rows: list[RawRow] = field(default_factory=list)

    @property
    def headers(self) -> list[str]:
        return list(self.rows[0].keys()) if self.rows else []


class TabularDecoder(ABC):
    """Abstract base class for file decoders."""

    suffixes: tuple[str, ...] = ()

    @abstractmethod
    def decode(self, file_path: Path) -> DecodedTable:
        """Decode a file into an ordered list of header -> value rows."""
        ...
