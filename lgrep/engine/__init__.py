"""Engine module -- HTTP transport and query validation."""

from lgrep.engine.client import EngineClient, parse_endpoint
from lgrep.engine.validator import Validator

__all__ = ["EngineClient", "Validator", "parse_endpoint"]
