"""Base classes for symbol introspector plugins."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable

from ..models import ClassRecord


class Introspector(ABC):
    """Contract for plugins that turn a source file into class records."""

    @abstractmethod
    def supports(self, path: Path) -> bool:
        """Return True when this introspector can read the file."""

    @abstractmethod
    def inspect(self, path: Path) -> Iterable[ClassRecord]:
        """Yield the symbols declared in the file, members limited to direct declarations."""
