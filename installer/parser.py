"""
HTML parsing utilities
Turns admin pages into queryable documents and runs ordered selector lookups.
"""

from typing import Iterable, Optional, Union
from bs4 import BeautifulSoup
from bs4.element import Tag
import logging

logger = logging.getLogger(__name__)


def as_dom(html_content: Union[str, bytes]) -> BeautifulSoup:
    """Parse an HTML page into a document."""
    return BeautifulSoup(html_content, 'html.parser')


def select_first(page: Union[BeautifulSoup, Tag], selectors: Iterable[str]) -> Optional[Tag]:
    """
    Return the first element matched by an ordered list of CSS selectors.

    Selectors are tried in order and the first one that matches anything
    wins, regardless of where its element sits in the document.

    Args:
        page: Document or element to search
        selectors: Candidate selectors, most specific first

    Returns:
        Matching element or None
    """
    for selector in selectors:
        element = page.select_one(selector)
        if element is not None:
            logger.debug(f"Selector matched: {selector}")
            return element
        logger.debug(f"Selector did not match: {selector}")
    return None


def element_text(element: Optional[Tag]) -> str:
    """Text content of an element, '' when there is no element."""
    if element is None:
        return ''
    return element.get_text()
