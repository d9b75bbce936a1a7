"""
Host document model for Focus Firewall.

Wraps a parsed HTML page (BeautifulSoup + lxml) together with its current
address, and reports structural changes to listeners the way a browser
mutation observer would: records produced during one event-loop step are
delivered as a single batch on the next iteration.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from bs4 import BeautifulSoup, Tag


logger = logging.getLogger(__name__)

PARSER = "lxml"


@dataclass
class MutationRecord:
    """One structural change of the document."""
    target: Tag
    added_nodes: List[Tag] = field(default_factory=list)
    removed_nodes: List[Tag] = field(default_factory=list)


MutationListener = Callable[[List[MutationRecord]], None]


class HostDocument:
    """
    A mutable HTML document with an address.

    Features:
    - CSS selection across an ordered list of selectors
    - Fragment insertion and element removal with mutation records
    - Single-page navigation (address change without reload)
    """

    def __init__(self, html: str = "", url: str = "about:blank"):
        """
        Initialize the document.

        Args:
            html: Page markup
            url: Current address of the page
        """
        self.soup = BeautifulSoup(html or "<html><head></head><body></body></html>", PARSER)
        self.url = url

        self._listeners: List[MutationListener] = []
        self._pending: List[MutationRecord] = []
        self._delivery_scheduled = False

        # lxml always produces <html>, but a fragment may lack head/body
        if self.soup.html is None:
            self.soup.append(self.soup.new_tag("html"))
        if self.soup.head is None:
            self.soup.html.insert(0, self.soup.new_tag("head"))
        if self.soup.body is None:
            self.soup.html.append(self.soup.new_tag("body"))

    @classmethod
    def from_file(cls, path: str, url: Optional[str] = None) -> "HostDocument":
        """
        Load a document from an HTML file.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        page_path = Path(path)

        if not page_path.exists():
            raise FileNotFoundError(f"Page not found: {path}")

        html = page_path.read_text(encoding="utf-8")
        return cls(html, url or page_path.resolve().as_uri())

    @property
    def body(self) -> Tag:
        return self.soup.body

    @property
    def head(self) -> Tag:
        return self.soup.head

    def select(self, selectors: Union[str, Iterable[str]]) -> List[Tag]:
        """
        Select elements matching any of the selectors, in document order.

        Args:
            selectors: A CSS selector or an ordered list of them

        Returns:
            List of matching elements without duplicates
        """
        if isinstance(selectors, str):
            selectors = [selectors]

        selector = ", ".join(s for s in selectors if s)
        if not selector:
            return []

        return self.soup.select(selector)

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def is_attached(self, element: Optional[Tag]) -> bool:
        """Return True if the element is still part of this document."""
        if element is None:
            return False

        if element is self.soup:
            return True

        for parent in element.parents:
            if parent is self.soup:
                return True

        return False

    def create_element(self, name: str, **attrs) -> Tag:
        return self.soup.new_tag(name, attrs=attrs)

    def parse_fragment(self, html: str) -> List[Tag]:
        """Parse an HTML fragment into top-level elements owned by this document."""
        fragment = BeautifulSoup(html, PARSER)
        container = fragment.body or fragment
        return [node for node in list(container.contents) if isinstance(node, Tag)]

    def insert(self, parent: Tag, html: str) -> List[Tag]:
        """
        Append an HTML fragment to an element.

        Args:
            parent: Element receiving the new nodes
            html: Markup of the nodes to add

        Returns:
            The inserted top-level elements
        """
        added = []
        for node in self.parse_fragment(html):
            parent.append(node.extract())
            added.append(node)

        if added:
            self._notify(MutationRecord(target=parent, added_nodes=added))

        return added

    def remove(self, element: Tag) -> None:
        """Detach an element from the document."""
        parent = element.parent
        if parent is None:
            return

        element.extract()
        self._notify(MutationRecord(target=parent, removed_nodes=[element]))

    def navigate(self, url: str, html: Optional[str] = None) -> None:
        """
        Change the address without a reload, optionally swapping the body content.

        Address changes are not reported to mutation listeners; only the
        body swap is.
        """
        self.url = url

        if html is None:
            return

        removed = [node for node in list(self.body.contents) if isinstance(node, Tag)]
        self.body.clear()
        if removed:
            self._notify(MutationRecord(target=self.body, removed_nodes=removed))

        self.insert(self.body, html)

    def ensure_stylesheet(self, css: str, style_id: str) -> Tag:
        """Inject a <style> element into <head> once."""
        existing = self.head.find("style", id=style_id)
        if existing is not None:
            return existing

        style = self.create_element("style", id=style_id)
        style.string = css
        self.head.append(style)
        return style

    def to_html(self) -> str:
        return str(self.soup)

    # Mutation listeners

    def add_mutation_listener(self, listener: MutationListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_mutation_listener(self, listener: MutationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, record: MutationRecord) -> None:
        if not self._listeners:
            return

        self._pending.append(record)

        if self._delivery_scheduled:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._deliver()
            return

        self._delivery_scheduled = True
        loop.call_soon(self._deliver)

    def _deliver(self) -> None:
        self._delivery_scheduled = False
        records, self._pending = self._pending, []

        if not records:
            return

        for listener in list(self._listeners):
            try:
                listener(records)
            except Exception as e:
                logger.warning("Mutation listener failed: %s", e)
