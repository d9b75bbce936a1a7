"""
Scan orchestrator for Focus Firewall.

Enumerates the content items currently rendered on the page, classifies
each title against the goal keywords and drives the annotation controller.
"""

import logging
from typing import Any, Dict, FrozenSet, Iterable, Optional

from bs4 import Tag

from ..annotate.marker import AnnotationController, BLURRED_CLASS
from ..page.config import EngineConfig
from ..page.document import HostDocument
from .rules import classify


logger = logging.getLogger(__name__)


def _empty_results() -> Dict[str, int]:
    return {
        "examined": 0,
        "relevant": 0,
        "irrelevant": 0,
        "skipped": 0,
        "cleared": 0,
        "errors": 0,
    }


class ScanCoordinator:
    """
    Orchestrates one classification pass over the page.

    Features:
    - Full clear when disabled or without usable keywords
    - Per-item isolation (one malformed item never aborts the pass)
    - Items without an extractable title keep their current mark
    """

    def __init__(
        self,
        document: HostDocument,
        config: Optional[EngineConfig] = None,
        annotator: Optional[AnnotationController] = None,
    ):
        """
        Initialize coordinator.

        Args:
            document: Page to scan
            config: Selector configuration (defaults to YouTube selectors)
            annotator: Annotation controller (built from config if omitted)
        """
        self.document = document
        self.config = config or EngineConfig()
        self.annotator = annotator or AnnotationController(
            document, self.config.thumbnail_selectors
        )
        self.results = _empty_results()

    def scan(self, keywords: Iterable[str], enabled: bool) -> Dict[str, int]:
        """
        Classify and annotate every current content item.

        The keyword set and flag are snapshotted at entry; the whole pass
        uses that snapshot.

        Args:
            keywords: Goal keywords from extract_keywords()
            enabled: Whether filtering is switched on

        Returns:
            Dict with pass counters
        """
        keywords: FrozenSet[str] = frozenset(keywords or ())
        enabled = bool(enabled)

        if not enabled or not keywords:
            return self.clear_all()

        self.results = _empty_results()

        for item in self.document.select(self.config.item_selectors):
            try:
                title = self.extract_title(item)
                if not title:
                    self.results["skipped"] += 1
                    continue

                self.results["examined"] += 1
                result = classify(keywords, title)

                if result.is_relevant:
                    self.annotator.mark_relevant(item)
                    self.results["relevant"] += 1
                else:
                    self.annotator.mark_irrelevant(item)
                    self.results["irrelevant"] += 1

            except Exception as e:
                logger.warning("Error processing item <%s>: %s", getattr(item, "name", "?"), e)
                self.results["errors"] += 1

        logger.debug("Scan finished: %s", self.results)
        return self.results

    def clear_all(self) -> Dict[str, int]:
        """
        Remove every mark from the page without classifying anything.

        Returns:
            Dict with pass counters (only "cleared" and "errors" are used)
        """
        self.results = _empty_results()

        for element in self.document.select(f".{BLURRED_CLASS}"):
            try:
                if self.annotator.mark_relevant(element):
                    self.results["cleared"] += 1
            except Exception as e:
                logger.warning("Error clearing item <%s>: %s", getattr(element, "name", "?"), e)
                self.results["errors"] += 1

        # Overlays whose item lost its class (e.g. re-rendered by the host)
        self.annotator.clear_orphans()

        logger.debug("Clear finished: %s", self.results)
        return self.results

    def extract_title(self, item: Tag) -> Optional[str]:
        """
        Extract the display title of a content item.

        Title selectors are tried in order; the first element yielding
        non-empty text wins, with its title attribute as fallback.

        Args:
            item: Content item element

        Returns:
            Title text, or None when no title can be found
        """
        for selector in self.config.title_selectors:
            element = item.select_one(selector)
            if element is None:
                continue

            text = element.get_text().strip()
            if not text:
                text = (element.get("title") or "").strip()

            if text:
                return text

        return None

    def get_statistics(self) -> Dict[str, Any]:
        """Summarize how many items are on the page and how many are marked."""
        items = self.document.select(self.config.item_selectors)
        marked = {id(m) for m in self.document.select(f".{BLURRED_CLASS}")}
        marked_items = sum(1 for item in items if id(item) in marked)

        return {
            "total_items": len(items),
            "marked_count": marked_items,
            "unmarked_count": len(items) - marked_items,
        }
