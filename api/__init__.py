from __future__ import annotations

from .client import (
    RecordsClient,
    configure_client,
    get_client,
    describe_current_client,
)

__all__ = ["RecordsClient", "configure_client", "get_client", "describe_current_client"]
