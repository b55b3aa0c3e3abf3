# shapegen/output/diagnostics.py
"""
Diagnostics channel for recoverable generation anomalies
Records substitutions that never interrupt a build
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional

# Event types
MALFORMED_GLOB = "MALFORMED_GLOB"
MISSING_LINK_TARGET = "MISSING_LINK_TARGET"
UNRESOLVED_LINK = "UNRESOLVED_LINK"
UNKNOWN_TYPE = "UNKNOWN_TYPE"
MAX_DEPTH_EXCEEDED = "MAX_DEPTH_EXCEEDED"


class GenerationDiagnostics:
    """In-memory record of anomalies observed while generating"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.events: List[Dict[str, Any]] = []

    def record(self, event_type: str, path: str, message: str,
               metadata: Optional[Dict[str, Any]] = None):
        """Record an anomaly event"""
        event = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'event_type': event_type,
            'path': path,
            'message': message,
            'metadata': metadata or {}
        }
        self.events.append(event)
        self.logger.warning(f"{event_type} at '{path}': {message}")

    def events_of(self, event_type: str) -> List[Dict[str, Any]]:
        """Get all recorded events of one type"""
        return [event for event in self.events if event['event_type'] == event_type]

    def clear(self):
        self.events = []

    def get_summary(self, recent: int = 10) -> Dict[str, Any]:
        """Get event counts by type and the most recent events"""
        event_types = {}
        paths = set()

        for event in self.events:
            event_type = event.get('event_type', 'UNKNOWN')
            event_types[event_type] = event_types.get(event_type, 0) + 1
            if event.get('path'):
                paths.add(event['path'])

        return {
            'total_events': len(self.events),
            'event_types': event_types,
            'affected_paths': len(paths),
            'recent_events': self.events[-recent:] if recent else []
        }

    def __len__(self):
        return len(self.events)
