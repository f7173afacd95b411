"""
Live, read-only filtered views over a store.

A view holds a source (the store's ``all``) and the current predicate.
Every read re-applies the predicate, so a view never shows stale data;
listeners subscribed to the view are pushed the new contents whenever
the owner calls ``refresh``.
"""

from typing import Callable, Generic, Iterator, List, Tuple, TypeVar, Union


T = TypeVar("T")

Predicate = Callable[[T], bool]
Listener = Callable[[Tuple[T, ...]], None]


def show_all(_item) -> bool:
    """Predicate that keeps every item."""
    return True


class FilteredView(Generic[T]):
    """
    Ordered subsequence of a source collection selected by a predicate.

    Args:
        source: Callable returning the full collection in display order
        predicate: Initial predicate (defaults to showing everything)

    Examples:
        >>> view = FilteredView(store.all)
        >>> unsubscribe = view.subscribe(lambda items: print(len(items)))
        >>> view.set_predicate(lambda student: student.payment_status.has_paid)
        2
        >>> unsubscribe()
    """

    def __init__(self, source: Callable[[], Tuple[T, ...]], predicate: Predicate = show_all):
        self._source = source
        self._predicate = predicate
        self._listeners: List[Listener] = []

    @property
    def predicate(self) -> Predicate:
        return self._predicate

    def set_predicate(self, predicate: Predicate) -> None:
        """Replace the predicate and notify listeners immediately."""
        self._predicate = predicate
        self.refresh()

    def items(self) -> Tuple[T, ...]:
        """Current contents of the view."""
        return tuple(item for item in self._source() if self._predicate(item))

    def __iter__(self) -> Iterator[T]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self.items())

    def __getitem__(self, index: Union[int, slice]):
        return self.items()[index]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the view's contents on every refresh.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def refresh(self) -> None:
        """Push the current contents to every listener."""
        snapshot = self.items()
        for listener in list(self._listeners):
            listener(snapshot)
