# Early termination, modeled on clojure's reduced.
# See https://clojure.org/reference/transducers#_early_termination

from typing import Generic, TypeVar

A = TypeVar("A")


class Reduced(Generic[A]):
    """
    Wraps an accumulator to say "stop feeding me input".
    Contexts stop stepping as soon as they see one, then unwrap it and
    call complete on the value.
    """
    __slots__ = ("value",)

    def __init__(self, value: A):
        self.value = value

    def __repr__(self):
        return "Reduced(%r)" % (self.value,)


def reduced(value):
    return Reduced(value)


def is_reduced(x) -> bool:
    return isinstance(x, Reduced)


def ensure_reduced(x):
    return x if is_reduced(x) else Reduced(x)


def unreduced(x):
    return x.value if is_reduced(x) else x


class Slot(Generic[A]):
    """
    Holds zero or one values. Used by stateful transducers for "previous input"
    style state, so no input value can be mistaken for "nothing seen yet".
    """
    __slots__ = ("_value", "has_value")

    def __init__(self):
        self._value = None
        self.has_value = False

    @property
    def value(self) -> A:
        assert self.has_value, "Slot is empty"
        return self._value

    def set(self, value: A):
        self._value = value
        self.has_value = True

    def clear(self):
        self._value = None
        self.has_value = False

    def holds(self, value) -> bool:
        return self.has_value and self._value == value
