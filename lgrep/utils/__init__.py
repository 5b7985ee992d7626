"""Utils module -- config and logging."""

from lgrep.utils.config import settings
from lgrep.utils.logger import get_logger, set_level

__all__ = ["settings", "get_logger", "set_level"]
