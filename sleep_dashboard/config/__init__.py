"""
Config package for sleep_dashboard.

Responsible for:
- the config model (GlobalConfig)
- config I/O (load_global_config)
"""

from .model import GlobalConfig
from .loader import load_global_config

__all__ = ["GlobalConfig", "load_global_config"]
