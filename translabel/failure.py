"""
Failure policy: what a caller emits when a code has no label.

The policy is applied by the caller of the resolution service, never inside a
cache. Handlers are stateless and must not perform I/O or caching of their
own; one instance per handler class is shared process-wide.
"""

import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Dict, Optional, Type, Union

from .errors import ConfigurationError
from .logging import get_logger
from .models import Resolution

logger = get_logger("translabel.failure")


class FailureStrategy(Enum):
    """Built-in fallbacks for an unresolved code."""
    NULL = "null"
    EMPTY_STRING = "empty_string"
    ORIGINAL_VALUE = "original_value"
    CUSTOM = "custom"


class FailureHandler(ABC):
    """Produces the fallback value for an unresolved code."""

    @abstractmethod
    def handle(self, key: str, original: Optional[str]) -> Optional[str]:
        """Return the fallback for ``original`` under ``key``, or None."""


class NullFailureHandler(FailureHandler):
    def handle(self, key: str, original: Optional[str]) -> Optional[str]:
        return None


class EmptyStringFailureHandler(FailureHandler):
    def handle(self, key: str, original: Optional[str]) -> Optional[str]:
        return ""


class OriginalValueFailureHandler(FailureHandler):
    def handle(self, key: str, original: Optional[str]) -> Optional[str]:
        return original


_BUILTIN_HANDLERS: Dict[FailureStrategy, Type[FailureHandler]] = {
    FailureStrategy.NULL: NullFailureHandler,
    FailureStrategy.EMPTY_STRING: EmptyStringFailureHandler,
    FailureStrategy.ORIGINAL_VALUE: OriginalValueFailureHandler,
}

HandlerFunc = Callable[[str, Optional[str]], Optional[str]]
FailurePolicy = Union[FailureStrategy, Type[FailureHandler], FailureHandler, HandlerFunc]


class FailureHandlerRegistry:
    """Interns handler instances by class."""

    def __init__(self):
        self._handlers: Dict[Type[FailureHandler], FailureHandler] = {}
        self._lock = threading.Lock()

    def get_handler(self, handler_class: Type[FailureHandler]) -> FailureHandler:
        """Get or create the shared instance of ``handler_class``."""
        with self._lock:
            handler = self._handlers.get(handler_class)
            if handler is None:
                try:
                    handler = handler_class()
                except Exception as e:
                    raise ConfigurationError(
                        f"Failed to instantiate failure handler: {handler_class.__name__}: {e}",
                        "on_failure"
                    ) from e
                self._handlers[handler_class] = handler
                logger.debug("Registered failure handler", handler=handler_class.__name__)
            return handler

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)


# Process-wide registry
failure_handler_registry = FailureHandlerRegistry()


def get_handler(handler_class: Type[FailureHandler]) -> FailureHandler:
    """Get a handler instance from the process-wide registry."""
    return failure_handler_registry.get_handler(handler_class)


def resolve_handler(policy: FailurePolicy) -> HandlerFunc:
    """Turn any accepted policy form into a ``(key, original)`` callable."""
    if isinstance(policy, FailureStrategy):
        if policy is FailureStrategy.CUSTOM:
            raise ConfigurationError(
                "FailureStrategy.CUSTOM requires a handler class, instance or callable",
                "on_failure"
            )
        return get_handler(_BUILTIN_HANDLERS[policy]).handle

    if isinstance(policy, type):
        if not issubclass(policy, FailureHandler):
            raise ConfigurationError(
                f"{policy.__name__} is not a FailureHandler subclass", "on_failure"
            )
        return get_handler(policy).handle

    if isinstance(policy, FailureHandler):
        return policy.handle

    if callable(policy):
        return policy

    raise ConfigurationError(f"Unsupported failure policy: {policy!r}", "on_failure")


def apply_failure_policy(key: str,
                         original: Optional[str],
                         resolution: Resolution,
                         policy: FailurePolicy = FailureStrategy.NULL) -> Optional[str]:
    """Return the resolved label, or the policy's fallback when not found."""
    if resolution.found:
        return resolution.label

    return resolve_handler(policy)(key, original)
