# datajoin/core/signal.py
"""
SignalBridge - Observer hub with explicit registration handles.

Every connect() returns a Connection; unsubscribing goes through the handle,
never through callback identity (closures are not comparable).
"""

from __future__ import annotations
from typing import Callable, Dict, Hashable, Iterable, List, Optional
from dataclasses import dataclass, field
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# Signal Types
# =============================================================================

SIGNAL_FRAME = 'frame'
SIGNAL_NODE_ADDED = 'node_added'
SIGNAL_NODE_REMOVED = 'node_removed'


# =============================================================================
# Connection Handle
# =============================================================================

@dataclass
class Connection:
    """Handle to a signal connection."""
    signal: Hashable
    callback_id: int
    bridge: Optional[SignalBridge] = None

    @property
    def connected(self) -> bool:
        return self.bridge is not None

    def disconnect(self):
        if self.bridge:
            self.bridge._remove_connection(self.signal, self.callback_id)
            self.bridge = None


@dataclass
class ConnectionGroup:
    """Several connections released together (e.g. one per selected node)."""
    connections: List[Connection] = field(default_factory=list)

    def add(self, connection: Connection):
        self.connections.append(connection)

    def extend(self, connections: Iterable[Connection]):
        self.connections.extend(connections)

    def disconnect(self):
        for conn in self.connections:
            conn.disconnect()
        self.connections.clear()

    def __len__(self) -> int:
        return len(self.connections)

    def __iter__(self):
        return iter(self.connections)


# =============================================================================
# Signal Bridge
# =============================================================================

class SignalBridge:
    """Central hub for signal routing."""

    def __init__(self):
        self._connections: Dict[Hashable, Dict[int, Callable]] = {}
        self._next_id: int = 0
        self._blocked: set = set()
        self._emit_depth: int = 0
        self._pending_removes: List[tuple] = []

    def connect(self, signal: Hashable, handler: Callable) -> Connection:
        if signal not in self._connections:
            self._connections[signal] = {}

        callback_id = self._next_id
        self._next_id += 1

        self._connections[signal][callback_id] = handler

        return Connection(signal=signal, callback_id=callback_id, bridge=self)

    def disconnect_all(self, signal: Hashable = None):
        if signal is not None:
            self._connections.pop(signal, None)
        else:
            self._connections.clear()

    def emit(self, signal: Hashable, *args, **kwargs):
        if signal in self._blocked:
            return

        handlers = self._connections.get(signal, {})
        if not handlers:
            return

        self._emit_depth += 1

        try:
            for callback_id, handler in list(handlers.items()):
                if callback_id not in handlers:
                    continue
                if (signal, callback_id) in self._pending_removes:
                    continue
                try:
                    handler(*args, **kwargs)
                except Exception as e:
                    logger.error(f"Signal handler error [{signal}]: {e}")
        finally:
            self._emit_depth -= 1

            if self._emit_depth == 0 and self._pending_removes:
                for sig, cid in self._pending_removes:
                    self._do_remove(sig, cid)
                self._pending_removes.clear()

    def block(self, signal: Hashable):
        self._blocked.add(signal)

    def unblock(self, signal: Hashable):
        self._blocked.discard(signal)

    def is_connected(self, signal: Hashable) -> bool:
        return bool(self._connections.get(signal))

    def handler_count(self, signal: Hashable) -> int:
        return len(self._connections.get(signal, {}))

    def _remove_connection(self, signal: Hashable, callback_id: int):
        if self._emit_depth > 0:
            self._pending_removes.append((signal, callback_id))
        else:
            self._do_remove(signal, callback_id)

    def _do_remove(self, signal: Hashable, callback_id: int):
        if signal in self._connections:
            self._connections[signal].pop(callback_id, None)
            if not self._connections[signal]:
                del self._connections[signal]
