"""Security helpers for BlazeExplain."""

from .dsns import DSNConfig, parse_dsn
from .redaction import REDACTED_VALUE, redact_bind, redact_value

__all__ = ["DSNConfig", "parse_dsn", "REDACTED_VALUE", "redact_bind", "redact_value"]
