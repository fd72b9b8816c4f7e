"""Language-change broadcast.

ChangeNotifier delivers a payload-less signal on the
DID_CHANGE_LANGUAGE channel to every subscriber. Subscriptions are
explicit handles owned by the subscriber; nothing is held weakly.

Delivery happens on a dispatcher, never in the poster's call stack. The
default dispatcher is a single-worker thread pool, so listeners run in
posting order on one thread and may call back into the provider.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from types import TracebackType
from typing import TypeAlias

from l10nprovider.constants import DID_CHANGE_LANGUAGE

__all__ = [
    "ChangeListener",
    "ChangeNotifier",
    "Dispatcher",
    "Subscription",
    "immediate_dispatcher",
]

logger = logging.getLogger(__name__)

ChangeListener: TypeAlias = Callable[[], None]
Dispatcher: TypeAlias = Callable[[Callable[[], None]], None]


def immediate_dispatcher(delivery: Callable[[], None]) -> None:
    """Run delivery in the calling thread.

    Useful in tests and single-threaded hosts. The provider still posts
    after releasing its lock, so listeners may call back into it.
    """
    delivery()


class Subscription:
    """Handle returned by ChangeNotifier.subscribe().

    Keep it for as long as notifications are wanted; call cancel() (or
    leave the ``with`` block) to stop them. cancel() is idempotent.
    """

    __slots__ = ("_listener", "_notifier")

    def __init__(self, notifier: ChangeNotifier, listener: ChangeListener) -> None:
        self._notifier: ChangeNotifier | None = notifier
        self._listener = listener

    @property
    def active(self) -> bool:
        """True until cancel() is called."""
        return self._notifier is not None

    @property
    def listener(self) -> ChangeListener:
        return self._listener

    def cancel(self) -> None:
        """Stop delivering notifications to this subscription's listener."""
        notifier = self._notifier
        if notifier is not None:
            self._notifier = None
            notifier._unsubscribe(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.cancel()


class ChangeNotifier:
    """Fire-and-forget broadcast on one channel.

    Example:
        >>> notifier = ChangeNotifier(dispatcher=immediate_dispatcher)
        >>> calls = []
        >>> sub = notifier.subscribe(lambda: calls.append("changed"))
        >>> notifier.post()
        >>> calls
        ['changed']
        >>> sub.cancel()
        >>> notifier.post()
        >>> calls
        ['changed']

    Attributes:
        name: Channel identifier
    """

    __slots__ = ("_dispatcher", "_executor", "_lock", "_subscriptions", "name")

    def __init__(
        self,
        dispatcher: Dispatcher | None = None,
        name: str = DID_CHANGE_LANGUAGE,
    ) -> None:
        """Initialize notifier.

        Args:
            dispatcher: Callable that runs a delivery function on some
                execution context. None uses a private single-worker
                ThreadPoolExecutor created on first post.
            name: Channel identifier
        """
        self.name = name
        self._dispatcher = dispatcher
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()
        self._subscriptions: list[Subscription] = []

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"ChangeNotifier(name={self.name!r}, subscribers={self.subscriber_count})"

    @property
    def subscriber_count(self) -> int:
        """Number of active subscriptions."""
        with self._lock:
            return len(self._subscriptions)

    def subscribe(self, listener: ChangeListener) -> Subscription:
        """Register listener; returns the handle that owns the registration."""
        subscription = Subscription(self, listener)
        with self._lock:
            self._subscriptions.append(subscription)
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    def post(self) -> None:
        """Broadcast the signal to current subscribers asynchronously.

        Subscribers are snapshotted at post time; a subscription cancelled
        before delivery is skipped.
        """
        with self._lock:
            targets = tuple(self._subscriptions)
        if not targets:
            return
        self._dispatch(lambda: self._deliver(targets))

    def _dispatch(self, delivery: Callable[[], None]) -> None:
        if self._dispatcher is not None:
            self._dispatcher(delivery)
            return
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="l10n-notify"
                )
            executor = self._executor
        executor.submit(delivery)

    def _deliver(self, targets: tuple[Subscription, ...]) -> None:
        for subscription in targets:
            if not subscription.active:
                continue
            try:
                subscription.listener()
            except Exception:
                # Listener errors must not stop delivery to the others
                logger.exception("Listener for '%s' failed", self.name)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the default executor after pending deliveries.

        Args:
            wait: Block until queued deliveries have run
        """
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)
