import inspect
from typing import Any, Callable


class EventHook:
    """
    Ordered set of subscribers for a single event.

    Subscribers may be plain callables or coroutine functions. ``emit`` calls
    them in subscription order and awaits coroutine results, so an exception
    raised by a subscriber propagates to whoever emitted the event.

    Parameters
    ----------
    name : str
        Event name, used in ``repr`` only
    """

    def __init__(self, name: str):
        self.name = name
        self._subscribers: list[Callable[..., Any]] = []

    def subscribe(self, handler: Callable[..., Any]) -> None:
        if handler not in self._subscribers:
            self._subscribers.append(handler)

    def unsubscribe(self, handler: Callable[..., Any]) -> None:
        if handler in self._subscribers:
            self._subscribers.remove(handler)

    def __iadd__(self, handler: Callable[..., Any]) -> "EventHook":
        self.subscribe(handler)
        return self

    def __isub__(self, handler: Callable[..., Any]) -> "EventHook":
        self.unsubscribe(handler)
        return self

    def __len__(self) -> int:
        return len(self._subscribers)

    def __repr__(self) -> str:
        return f"EventHook({self.name!r}, subscribers={len(self._subscribers)})"

    async def emit(self, *args: Any) -> None:
        # copy: handlers may unsubscribe while running
        for handler in list(self._subscribers):
            result = handler(*args)
            if inspect.isawaitable(result):
                await result
