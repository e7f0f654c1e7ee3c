from typing import Callable, TypeVar
from transducible.errors import ContractViolation
from transducible.reduced import Slot, ensure_reduced, is_reduced, unreduced
from transducible.transducer import ReducingFunction, Transducer, XForm

T = TypeVar("T")
U = TypeVar("U")
K = TypeVar("K")


class StatefulTransducer(Transducer[T, U]):
    """
    Base for transducers which carry state between steps.

    Each application of the transducer to a reducing function builds a new
    instance, so each pipeline build gets its own state. An instance is not
    thread safe: sharing one across concurrent runs needs an external lock,
    as Channel does around its transform-and-enqueue step.

    Subclasses override step (calling _check_open first) and flush.
    complete flushes, then completes rf, exactly once.
    """

    def __init__(self, rf: ReducingFunction):
        super().__init__(rf)
        self._completed = False

    def _check_open(self):
        if self._completed:
            raise ContractViolation("%s used after complete" % type(self).__name__)

    def flush(self, result: T) -> T:
        return result

    def complete(self, result: T):
        self._check_open()
        self._completed = True
        return self.rf.complete(self.flush(result))


class Deduplicating(StatefulTransducer[T, U]):

    def __init__(self, rf):
        super().__init__(rf)
        self.prev = Slot()

    def step(self, result, input):
        self._check_open()
        if self.prev.holds(input):
            return result
        self.prev.set(input)
        return self.rf.step(result, input)


def deduplicating() -> XForm:
    """Drops inputs equal to the one right before them."""
    def deduped(rf: ReducingFunction[T, U]):
        return Deduplicating(rf)
    return deduped


class PartitioningBy(StatefulTransducer[T, U]):

    def __init__(self, f: Callable[[U], K], rf: ReducingFunction[T, list]):
        super().__init__(rf)
        self.f = f
        self.buffer = []
        self.key = Slot()

    def _drain(self):
        # Clear first, so a reentrant or failing rf never sees a stale buffer.
        group = list(self.buffer)
        self.buffer.clear()
        self.key.clear()
        return group

    def step(self, result, input):
        self._check_open()
        key = self.f(input)
        if not self.buffer or self.key.holds(key):
            self.buffer.append(input)
            self.key.set(key)
            return result
        ret = self.rf.step(result, self._drain())
        if is_reduced(ret):
            return ret
        self.buffer.append(input)
        self.key.set(key)
        return ret

    def flush(self, result):
        if not self.buffer:
            return result
        return unreduced(self.rf.step(result, self._drain()))


def partitioning_by(f: Callable[[U], K]) -> XForm:
    """
    Groups runs of consecutive inputs for which f returns equal keys.
    Each group is handed downstream as a list.
    """
    def partitioned(rf: ReducingFunction[T, list]):
        return PartitioningBy(f, rf)
    return partitioned


class Taking(StatefulTransducer[T, U]):

    def __init__(self, n: int, rf: ReducingFunction[T, U]):
        super().__init__(rf)
        self.remaining = n

    def step(self, result, input):
        self._check_open()
        if self.remaining <= 0:
            return ensure_reduced(result)
        self.remaining -= 1
        ret = self.rf.step(result, input)
        if self.remaining == 0:
            return ensure_reduced(ret)
        return ret


def taking(n: int) -> XForm:
    """
    Passes on the first n inputs. Signals termination along with the nth, so
    the context never has to produce input n + 1.
    """
    if n < 0:
        raise ValueError("taking requires a non-negative count, got %s" % n)
    def taker(rf: ReducingFunction[T, U]):
        return Taking(n, rf)
    return taker
