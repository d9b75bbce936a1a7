"""
Host page module for Focus Firewall.

Handles the page the engine filters:
- Document model and mutation records
- Selector and timing configuration
"""

from .config import EngineConfig, load_config, save_config, config_from_dict
from .document import HostDocument, MutationRecord

__all__ = [
    "EngineConfig",
    "load_config",
    "save_config",
    "config_from_dict",
    "HostDocument",
    "MutationRecord",
]
