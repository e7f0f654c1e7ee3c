from functools import reduce
from typing import TypeVar, Callable, Generic
from transducible.util import identity

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")
B = TypeVar("B")


class ReducingFunction(Generic[T, U]):
    """
    An accumulation step, as three named operations.
    init is () -> T
    step is (T, U) -> T | Reduced[T]
    complete is T -> T, called once after the last step.
    """

    def init(self) -> T:
        raise NotImplementedError("%s has no neutral element" % type(self).__name__)

    def step(self, result: T, input: U):
        raise NotImplementedError()

    def complete(self, result: T) -> T:
        return result


class Appending(ReducingFunction[list, U]):
    """
    List builder which appends in place rather than reallocating on every step.
    """

    def init(self):
        return []

    def step(self, result, input):
        result.append(input)
        return result


class Adding(ReducingFunction[set, U]):

    def init(self):
        return set()

    def step(self, result, input):
        result.add(input)
        return result


class Summing(ReducingFunction):

    def init(self):
        return 0

    def step(self, result, input):
        return result + input


class Counting(ReducingFunction[int, U]):

    def init(self):
        return 0

    def step(self, result, input):
        return result + 1


class Joining(ReducingFunction[list, U]):
    """
    Collects rendered inputs as a list of parts, joined with separator on
    complete. The first input never gets a separator, even if it renders empty.
    """

    def __init__(self, separator: str):
        self.separator = separator

    def init(self):
        return []

    def step(self, result, input):
        result.append("%s" % (input,))
        return result

    def complete(self, result):
        return self.separator.join(result)


class Completing(ReducingFunction[T, U]):

    def __init__(self, fn: Callable[[T, U], T], init: Callable[[], T], complete: Callable[[T], T]):
        self.fn = fn
        self._init = init
        self._complete = complete

    def init(self):
        if self._init is None:
            raise NotImplementedError("%s has no neutral element" % self.fn.__name__)
        return self._init()

    def step(self, result, input):
        return self.fn(result, input)

    def complete(self, result):
        return self._complete(result)


def completing(fn: Callable[[T, U], T], init: Callable[[], T] = None, complete: Callable[[T], T] = identity):
    """
    Lift a plain binary reducer, like operator.add, into a ReducingFunction.
    init is a zero argument factory for the neutral element.
    """
    return Completing(fn, init, complete)


class Transducer(ReducingFunction[T, U]):
    """
    A reducing function which wraps another one, rf.
    Unless overridden, every operation is passed straight through to rf.
    """

    def __init__(self, rf: ReducingFunction):
        self.rf = rf

    def init(self):
        return self.rf.init()

    def step(self, result: T, input: U):
        return self.rf.step(result, input)

    def complete(self, result: T):
        return self.rf.complete(result)


XForm = Callable[[ReducingFunction], ReducingFunction]


class Mapping(Transducer[T, A], Generic[T, A, B]):

    def __init__(self, f: Callable[[A], B], rf: ReducingFunction[T, B]):
        super().__init__(rf)
        self.f = f

    def step(self, result: T, input: A):
        return self.rf.step(result, self.f(input))


def mapping(f: Callable[[A], B]) -> XForm:
    def mapped(rf: ReducingFunction[T, B]):
        return Mapping(f, rf)
    return mapped


class Filtering(Transducer[T, U]):

    def __init__(self, pred: Callable[[U], bool], rf: ReducingFunction[T, U]):
        super().__init__(rf)
        self.pred = pred

    def step(self, result, input):
        if self.pred(input):
            return self.rf.step(result, input)
        return result


def filtering(pred: Callable[[U], bool]) -> XForm:
    def filtered(rf: ReducingFunction[T, U]):
        return Filtering(pred, rf)
    return filtered


def _composition_of(acc: XForm, xform: XForm) -> XForm:
    return lambda rf: acc(xform(rf))


def compose(*xforms: XForm) -> XForm:
    """
    compose(a, b, c)(rf) is a(b(c(rf))).
    Data flows in the order the transducers are listed: a sees raw input first,
    c hands its output to rf. compose() is identity.
    """
    return reduce(_composition_of, xforms, identity)


def make_transducer(kind: str, *params) -> XForm:
    # Imported here, stateful depends on this module.
    from transducible.stateful import deduplicating, partitioning_by, taking
    kinds = {
        'identity': lambda: identity,
        'mapping': mapping,
        'filtering': filtering,
        'deduplicating': deduplicating,
        'dedupe': deduplicating,
        'partitioning_by': partitioning_by,
        'grouping': partitioning_by,
        'taking': taking,
    }
    try:
        factory = kinds[kind]
    except KeyError:
        raise ValueError("Unknown transducer kind: %s" % kind)
    return factory(*params)
