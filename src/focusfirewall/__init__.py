"""
Focus Firewall.

Marks content items on a page that are irrelevant to the user's current
focus goal, and keeps the marks correct while the page changes.
"""

__version__ = "0.1.0"
