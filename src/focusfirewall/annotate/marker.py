"""
Annotation of irrelevant content items.

An irrelevant item is de-emphasized with a CSS class and gets a single
overlay badge near its thumbnail. Marked/unmarked status lives entirely in
the item's markup, so any controller instance can clear marks applied by
another one.
"""

from typing import Iterable, Optional

from bs4 import Tag

from ..page.config import DEFAULT_THUMBNAIL_SELECTORS
from ..page.document import HostDocument

# CSS class prefix to avoid collisions with the host page
PREFIX = "ff-yt"

BLURRED_CLASS = f"{PREFIX}-blurred"
OVERLAY_CLASS = f"{PREFIX}-overlay"
BADGE_CLASS = f"{PREFIX}-badge"
STYLESHEET_ID = f"{PREFIX}-styles"

BADGE_TEXT = "\U0001F6E1 Irrelevant to current goal"

# Marks an element whose inline position style was set by us
POSITIONED_ATTR = "data-ff-positioned"
POSITION_STYLE = "position: relative"

STYLESHEET = f"""
.{BLURRED_CLASS} ytd-thumbnail,
.{BLURRED_CLASS} .ytd-thumbnail,
.{BLURRED_CLASS} #thumbnail {{
  filter: blur(12px) saturate(0.3) !important;
  transition: filter 0.4s ease !important;
}}

.{BLURRED_CLASS} {{
  opacity: 0.55 !important;
  position: relative !important;
}}

.{OVERLAY_CLASS} {{
  position: absolute;
  top: 0;
  left: 0;
  right: 0;
  bottom: 0;
  display: flex;
  align-items: center;
  justify-content: center;
  z-index: 100;
  pointer-events: none;
}}

.{BADGE_CLASS} {{
  background: linear-gradient(135deg, rgba(13, 71, 161, 0.92), rgba(21, 101, 192, 0.92));
  color: #fff;
  font-size: 11px;
  font-weight: 600;
  padding: 6px 14px;
  border-radius: 8px;
  box-shadow: 0 4px 15px rgba(0, 0, 0, 0.5);
  pointer-events: none;
}}
"""


def is_marked(item: Tag) -> bool:
    """Return True if the item currently carries the irrelevant mark."""
    return BLURRED_CLASS in item.get_attribute_list("class", [])


class AnnotationController:
    """
    Applies and removes the "irrelevant" mark on single content items.

    Both operations are idempotent, safe on items never seen before and
    no-ops on items that are no longer attached to the document.
    """

    def __init__(
        self,
        document: HostDocument,
        thumbnail_selectors: Optional[Iterable[str]] = None,
    ):
        """
        Initialize the controller.

        Args:
            document: Document owning the items
            thumbnail_selectors: Selectors locating an item's thumbnail region
        """
        self.document = document
        self.thumbnail_selectors = list(thumbnail_selectors or DEFAULT_THUMBNAIL_SELECTORS)

    def install_styles(self) -> None:
        """Inject the annotation stylesheet into the document once."""
        self.document.ensure_stylesheet(STYLESHEET, STYLESHEET_ID)

    def mark_irrelevant(self, item: Tag) -> bool:
        """
        De-emphasize an item and attach the overlay badge.

        Args:
            item: Content item element

        Returns:
            True if the item changed, False if it was already marked or stale
        """
        if not self.document.is_attached(item):
            return False

        if is_marked(item):
            return False

        item["class"] = item.get_attribute_list("class", []) + [BLURRED_CLASS]

        # Never more than one badge per item
        for stray in item.select(f".{OVERLAY_CLASS}"):
            stray.decompose()

        overlay = self.document.create_element("div", **{"class": OVERLAY_CLASS})
        badge = self.document.create_element("div", **{"class": BADGE_CLASS})
        badge.string = BADGE_TEXT
        overlay.append(badge)

        host = self._overlay_host(item)
        self._set_positioned(host)
        host.append(overlay)

        return True

    def mark_relevant(self, item: Tag) -> bool:
        """
        Remove the de-emphasis and every overlay badge from an item.

        Args:
            item: Content item element

        Returns:
            True if anything was removed, False otherwise
        """
        if not self.document.is_attached(item):
            return False

        changed = False

        classes = item.get_attribute_list("class", [])
        if BLURRED_CLASS in classes:
            remaining = [c for c in classes if c != BLURRED_CLASS]
            if remaining:
                item["class"] = remaining
            else:
                del item["class"]
            changed = True

        for overlay in item.select(f".{OVERLAY_CLASS}"):
            overlay.decompose()
            changed = True

        for positioned in [item] + item.select(f"[{POSITIONED_ATTR}]"):
            if positioned.has_attr(POSITIONED_ATTR):
                self._unset_positioned(positioned)
                changed = True

        return changed

    def clear_orphans(self) -> int:
        """
        Remove overlays whose item no longer carries the mark.

        Returns:
            Number of overlays removed
        """
        removed = 0

        for overlay in self.document.select(f".{OVERLAY_CLASS}"):
            host = overlay.parent
            overlay.decompose()
            removed += 1

            if host is not None and host.has_attr(POSITIONED_ATTR):
                self._unset_positioned(host)

        return removed

    def _overlay_host(self, item: Tag) -> Tag:
        # First thumbnail in document order; the item itself when there is none
        thumb = item.select_one(", ".join(self.thumbnail_selectors))
        if thumb is not None and thumb.parent is not None:
            return thumb.parent
        return item

    def _set_positioned(self, element: Tag) -> None:
        if element.has_attr(POSITIONED_ATTR):
            return

        original = element.get("style")
        element[POSITIONED_ATTR] = "" if original is None else original
        element["style"] = f"{original.rstrip().rstrip(';')}; {POSITION_STYLE}" if original else POSITION_STYLE

    def _unset_positioned(self, element: Tag) -> None:
        original = element[POSITIONED_ATTR]
        del element[POSITIONED_ATTR]

        if original:
            element["style"] = original
        elif element.has_attr("style"):
            del element["style"]
