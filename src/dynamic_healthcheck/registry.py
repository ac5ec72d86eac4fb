"""Registry of health-check kinds and their context shapes.

Each health-check kind declares once which dataclass its configuration
context binds into. Registration is first-writer-wins: later registrations
for the same kind are ignored, even when they name a different shape.
"""

import logging
import threading
from typing import Dict, List, Optional

from dynamic_healthcheck.exceptions import ConfigurationMismatchError

logger = logging.getLogger(__name__)


class ContextTypeRegistry:
    """Thread-safe mapping from health-check kind to context shape.

    Writes are serialized with a lock; reads go straight to the mapping
    and may interleave with a registration.

    Example:
        >>> registry = ContextTypeRegistry()
        >>> registry.register(DatabasePing, DatabasePingContext)
        True
        >>> registry.lookup(DatabasePing)
        <class 'DatabasePingContext'>
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._shapes: Dict[type, type] = {}
        self._lock = threading.Lock()

    def register(self, kind: type, shape: type) -> bool:
        """Register the context shape expected by a health-check kind.

        Args:
            kind: Health-check implementation class.
            shape: Dataclass its context binds into.

        Returns:
            True if the kind was registered by this call, False if it
            was already registered.
        """
        with self._lock:
            existing = self._shapes.get(kind)
            if existing is not None:
                if existing is not shape:
                    logger.debug(
                        f"Ignoring context {shape.__name__} for {kind.__name__}: "
                        f"already registered with {existing.__name__}"
                    )
                return False

            self._shapes[kind] = shape
            logger.debug(f"Registered health check context: {kind.__name__} -> {shape.__name__}")
            return True

    def lookup(self, kind: type) -> Optional[type]:
        """Get the context shape registered for a kind, or None."""
        return self._shapes.get(kind)

    def is_registered(self, kind: type) -> bool:
        """Check if a kind has a registered context shape."""
        return kind in self._shapes

    def ensure(self, kind: type, shape: type) -> None:
        """Verify that ``kind`` is registered with exactly ``shape``.

        Raises:
            ConfigurationMismatchError: If the kind is unregistered or
                registered with another shape.
        """
        registered = self.lookup(kind)
        if registered is None or registered is not shape:
            raise ConfigurationMismatchError(
                kind.__name__,
                {
                    "expected": registered.__name__ if registered else None,
                    "requested": shape.__name__,
                },
            )

    @property
    def registered_kinds(self) -> List[type]:
        """Get registered kinds in registration order."""
        with self._lock:
            return list(self._shapes.keys())

    def __contains__(self, kind: object) -> bool:
        return kind in self._shapes

    def __len__(self) -> int:
        return len(self._shapes)
