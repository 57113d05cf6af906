"""Format Registry Port - supplies the acceptable output formats."""
from abc import ABC, abstractmethod
from typing import List


class FormatRegistryPort(ABC):
    """Port for the registry of known output formats."""

    @abstractmethod
    def symbols(self) -> List[str]:
        """Get the ordered list of registered format symbols."""
        pass
