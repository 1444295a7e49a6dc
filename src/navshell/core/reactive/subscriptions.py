from __future__ import annotations

"""
Subscription Lifecycle Management.

A Subscription is the handle returned when a listener attaches to a
provider stream. A SubscriptionSet collects every handle acquired by a
controller so that disposing the controller releases all of them exactly
once. Once a handle is closed, emissions already queued on the event loop
are dropped instead of reaching the listener.
"""

import logging
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)


class Subscription:
    """
    Handle binding one listener to one provider stream.

    Args:
        callback: Listener invoked for each delivered emission.
        teardown: Detaches the listener from its provider. Called once.
    """

    def __init__(
            self,
            callback: Optional[Callable[..., None]] = None,
            teardown: Optional[Callable[[], None]] = None
    ):
        self._callback = callback
        self._teardown = teardown
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def deliver(self, *args: Any) -> None:
        """Forward an emission to the listener unless the handle is closed."""
        if self._closed or self._callback is None:
            return
        self._callback(*args)

    def unsubscribe(self) -> None:
        """Close the handle and detach it from its provider. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._callback = None
        teardown, self._teardown = self._teardown, None
        if teardown is not None:
            teardown()


class SubscriptionSet:
    """
    Collection of the active subscriptions owned by one component.

    ``dispose()`` marks the set as disposed before releasing anything, so
    subscriptions added afterwards (e.g. from a handler that was already
    running) are released immediately instead of leaking.
    """

    def __init__(self) -> None:
        self._subscriptions: List[Subscription] = []
        self._disposed = False

    def __len__(self) -> int:
        return len(self._subscriptions)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def add(self, subscription: Subscription) -> Subscription:
        """
        Register a subscription for release on disposal.

        Args:
            subscription: Handle to track.

        Returns:
            Subscription: The same handle, for chaining at the call site.
        """
        if self._disposed:
            subscription.unsubscribe()
            return subscription
        self._subscriptions.append(subscription)
        return subscription

    def discard(self, subscription: Subscription) -> None:
        """Release a single subscription early and stop tracking it."""
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
        subscription.unsubscribe()

    def dispose(self) -> None:
        """Release every tracked subscription. Safe to call more than once."""
        if self._disposed:
            return
        self._disposed = True

        subscriptions, self._subscriptions = self._subscriptions, []
        for sub in subscriptions:
            try:
                sub.unsubscribe()
            except Exception as e:
                logger.error(f"Subscription teardown failed: {e}", exc_info=True)

        logger.debug(f"SubscriptionSet disposed ({len(subscriptions)} released).")
