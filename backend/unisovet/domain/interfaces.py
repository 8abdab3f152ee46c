"""
Abstract interfaces following Interface Segregation Principle.

These interfaces define contracts without implementation details,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class IKeyValueStore(ABC):
    """Persistent key/value slots holding JSON-serializable values."""

    @abstractmethod
    def load(self, key: str, default: Any) -> Any:
        """Return the stored value for key, or default. Must not raise."""
        pass

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """Persist value under key. Failures are logged, never raised."""
        pass


class ITextCompletionService(ABC):
    """Remote text-completion (chat) service used by the virtual assistant."""

    @abstractmethod
    def generate(
        self, contents: List[Dict[str, Any]], system_instruction: str
    ) -> str:
        """Send the chat turns plus a system instruction and return the reply.

        Raises:
            AssistantServiceError: on any failure to obtain a reply
        """
        pass
