"""Handler Registry Port - supplies the recognized template extensions."""
from abc import ABC, abstractmethod
from typing import List


class HandlerRegistryPort(ABC):
    """Port for the registry mapping file extensions to template handlers."""

    @abstractmethod
    def extensions(self) -> List[str]:
        """Get the ordered list of registered handler extensions."""
        pass
