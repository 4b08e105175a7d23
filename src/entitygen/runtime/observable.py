"""
Observable data holders.

A composable data holder derives from ``ObservableData`` and declares each
attribute with ``observable()``. Reading and writing look exactly like plain
attributes; every write is reported to the subscribed observers.

Example:
    class UserData(ObservableData, IUser):
        name: str | None = observable()

    data = UserData()
    data.subscribe(lambda holder, name, old, new: print(name, old, new))
    data.name = "ada"  # prints: name None ada
"""

from collections.abc import Callable
from typing import Any, Generic, TypeVar, overload

T = TypeVar("T")

Observer = Callable[[Any, str, Any, Any], None]
"""Called with (holder, attribute name, old value, new value)."""


class ObservableData:
    """Mixin keeping a list of observers per instance."""

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register an observer for every attribute write.

        Returns:
            A callable removing the observer again
        """
        observers = self._observers()
        observers.append(observer)

        def unsubscribe() -> None:
            if observer in observers:
                observers.remove(observer)

        return unsubscribe

    def notify(self, name: str, old: Any, new: Any) -> None:
        for observer in list(self._observers()):
            observer(self, name, old, new)

    def _observers(self) -> list[Observer]:
        try:
            return self.__dict__["_entitygen_observers"]
        except KeyError:
            observers: list[Observer] = []
            self.__dict__["_entitygen_observers"] = observers
            return observers


class observable(Generic[T]):
    """Data descriptor storing a value per instance and reporting writes."""

    def __init__(self, default: T | None = None) -> None:
        self.default = default
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @overload
    def __get__(self, instance: None, owner: type) -> "observable[T]": ...

    @overload
    def __get__(self, instance: object, owner: type) -> T | None: ...

    def __get__(self, instance: object | None, owner: type) -> "observable[T] | T | None":
        if instance is None:
            return self
        return instance.__dict__.get(self.name, self.default)

    def __set__(self, instance: object, value: T | None) -> None:
        old = instance.__dict__.get(self.name, self.default)
        instance.__dict__[self.name] = value
        if isinstance(instance, ObservableData):
            instance.notify(self.name, old, value)
