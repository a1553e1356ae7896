"""Interface for presenting API results to an operator.

Defines the contract for displaying tables, single resources, errors and
informational messages, allowing different UI implementations.
"""

import abc
from typing import Any, Dict, List, Sequence


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_table(self, title: str, columns: Sequence[str], rows: List[Sequence[Any]], **kwargs: Any) -> None:
        """Displays a collection as a table.

        Args:
            title: Caption of the table.
            columns: Column headers.
            rows: One sequence of cell values per row.
            **kwargs: Additional arguments (e.g. `footer` text).
        """
        pass

    @abc.abstractmethod
    def display_resource(self, title: str, data: Dict[str, Any], **kwargs: Any) -> None:
        """Displays a single resource as pretty-printed JSON."""
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        pass
