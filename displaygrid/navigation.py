"""Pagination collaborators used by the banners."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from displaygrid.utils.href import Href


class PaginatedList(BaseModel):
    """Marks a table whose sorting and paging happen outside displaygrid.

    Sorting links then use the external pagination parameter names from
    TableProperties instead of the encoded table parameters.
    """

    search_id: str | None = Field(default=None, description="Id of the external search")


class PageNavigator(ABC):
    """Abstract base class for page navigation providers.

    Implementations know the full list size and the current page, and
    render the "N items found" summary and the page links.
    """

    @abstractmethod
    def search_results_summary(self) -> str:
        """Return the search results summary markup.

        Returns:
            HTML such as ``<span class="pagebanner">25 items found</span>``
        """
        ...

    @abstractmethod
    def page_navigation_bar(self, href: Href, page_parameter: str) -> str:
        """Return the page links markup.

        Args:
            href: Base link target, every page link adds ``page_parameter``
            page_parameter: Name of the page number parameter

        Returns:
            HTML with one link per reachable page
        """
        ...
