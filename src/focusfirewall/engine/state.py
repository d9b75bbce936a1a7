"""
Focus state shared between the settings store and the engine.
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

from ..classify.rules import extract_keywords


@dataclass(frozen=True)
class FocusState:
    """Goal text and enabled flag, passed by value into every scan."""
    goal: str = ""
    enabled: bool = True

    @property
    def keywords(self) -> FrozenSet[str]:
        return extract_keywords(self.goal)

    @property
    def is_active(self) -> bool:
        """True when a scan would classify instead of clearing."""
        return self.enabled and bool(self.keywords)

    @classmethod
    def from_response(cls, response: Optional[Dict[str, Any]]) -> Optional["FocusState"]:
        """
        Build a state from a GET_STATE response.

        Returns:
            FocusState, or None if the response is absent or malformed
        """
        if not isinstance(response, dict):
            return None

        goal = response.get("focusGoal") or ""
        if not isinstance(goal, str):
            return None

        return cls(goal=goal, enabled=response.get("isEnabled") is not False)

    def to_response(self) -> Dict[str, Any]:
        return {"focusGoal": self.goal, "isEnabled": self.enabled}
