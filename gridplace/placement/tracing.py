"""
Placement Tracing

Structured diagnostics for the compaction and move passes. A tracer is
passed into the engine explicitly; without a sink it only forwards events
to the module logger at DEBUG level.
"""

import logging
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

TraceSink = Callable[[str, Dict[str, Any]], None]


class LayoutTracer:
    """Forwards engine events to an optional sink and the debug log."""

    def __init__(self, sink: Optional[TraceSink] = None):
        self.sink = sink

    @property
    def enabled(self) -> bool:
        return self.sink is not None or logger.isEnabledFor(logging.DEBUG)

    def emit(self, event: str, **fields: Any):
        """Record one event. fields must be plain values."""
        if self.sink is not None:
            self.sink(event, fields)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s %s", event, " ".join(f"{k}={v}" for k, v in fields.items()))


NULL_TRACER = LayoutTracer()
