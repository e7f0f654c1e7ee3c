import pytest
from transducible.errors import ContractViolation
from transducible.reduced import is_reduced, reduced, unreduced
from transducible.transducer import Appending, ReducingFunction, Transducer, compose, mapping
from transducible.stateful import deduplicating, partitioning_by, taking
from transducible.contexts import into, sequence, transduce
from transducible.channel import chan

def odd(x):
    return x % 2 == 1

def test_dedupe():
    assert into(deduplicating(), [1, 1, 1, 2, 2, 3, 1, 1]) == [1, 2, 3, 1]
    assert into(deduplicating(), []) == []
    # None is a value like any other.
    assert into(deduplicating(), [None, None, 1, None]) == [None, 1, None]

def test_partition_by():
    assert into(partitioning_by(odd), [1, 1, 2, 2, 1]) == [[1, 1], [2, 2], [1]]
    assert into(partitioning_by(lambda x: x), "ABBA") == [['A'], ['B', 'B'], ['A']]
    assert into(partitioning_by(odd), [1, 1, 1, 2, 2, 2, 3, 3, 5, 3, 3]) == [[1, 1, 1], [2, 2, 2], [3, 3, 5, 3, 3]]
    assert into(partitioning_by(odd), []) == []

def test_partition_by_none_key():
    key = lambda x: None if x < 3 else x
    assert into(partitioning_by(key), [1, 2, 3, 3, 4]) == [[1, 2], [3, 3], [4]]

def test_taking():
    assert into(taking(3), range(10)) == [0, 1, 2]
    assert into(taking(3), range(2)) == [0, 1]
    assert into(taking(0), range(10)) == []
    with pytest.raises(ValueError):
        taking(-1)

def test_state_is_per_run():
    xf = deduplicating()
    assert into(xf, [1, 1, 2]) == [1, 2]
    # A previous run's last value must not leak into the next.
    assert into(xf, [2, 2, 3]) == [2, 3]
    xf = partitioning_by(odd)
    assert into(xf, [1, 2]) == [[1], [2]]
    assert into(xf, [2, 1]) == [[2], [1]]
    xf = taking(1)
    assert into(xf, [1, 2]) == [1]
    assert into(xf, [3, 4]) == [3]

def test_flush_once_on_exhaustion(recording):
    for xf in [deduplicating(), partitioning_by(odd), taking(5)]:
        recording.completions = 0
        transduce(xf, recording, [1, 1, 2])
        assert recording.completions == 1

def test_flush_once_on_early_termination(recording):
    xf = compose(partitioning_by(odd), taking(2))
    assert transduce(xf, recording, [1, 1, 2, 3, 4, 5]) == [[1, 1], [2]]
    assert recording.completions == 1
    recording.completions = 0
    xf = compose(deduplicating(), taking(2))
    assert transduce(xf, recording, [1, 1, 2, 3]) == [1, 2]
    assert recording.completions == 1

class Spying(Transducer):
    """Passes everything through, counting complete calls in log."""

    def __init__(self, log, rf):
        super().__init__(rf)
        self.log = log

    def complete(self, result):
        self.log.append(result)
        return self.rf.complete(result)

def spying(log):
    def spied(rf):
        return Spying(log, rf)
    return spied

def test_flush_once_in_sequence(source):
    log = []
    assert list(sequence(compose(spying(log), partitioning_by(odd)), [1, 3, 2])) == [[1, 3], [2]]
    assert len(log) == 1
    log = []
    xf = compose(spying(log), partitioning_by(odd), taking(2))
    assert list(sequence(xf, source)) == [[0], [1]]
    assert len(log) == 1

def test_flush_once_in_into(source):
    log = []
    assert into(compose(spying(log), partitioning_by(odd)), [1, 3, 2]) == [[1, 3], [2]]
    assert len(log) == 1
    log = []
    assert into(compose(spying(log), partitioning_by(odd), taking(1)), source) == [[0]]
    assert len(log) == 1

def test_flush_once_in_transduce():
    log = []
    assert transduce(compose(spying(log), partitioning_by(odd)), Appending(), [2, 4, 1]) == [[2, 4], [1]]
    assert len(log) == 1

def test_flush_once_on_channel_close():
    log = []
    c = chan(5, compose(spying(log), partitioning_by(odd)))
    c.put(1)
    c.put(2)
    c.close()
    c.close()
    assert len(log) == 1
    assert list(c) == [[1], [2]]

def test_flush_once_on_channel_reduced():
    log = []
    c = chan(5, compose(spying(log), partitioning_by(odd), taking(1)))
    c.put(1)
    c.put(2)
    assert c.closed
    assert len(log) == 1
    c.close()
    assert len(log) == 1
    assert list(c) == [[1]]

class Stopping(ReducingFunction):
    """Appends, then asks to stop once it holds n items."""

    def __init__(self, n):
        self.n = n

    def init(self):
        return []

    def step(self, result, input):
        result.append(input)
        if len(result) >= self.n:
            return reduced(result)
        return result

def test_partition_by_stops_without_new_buffer():
    xrf = partitioning_by(odd)(Stopping(1))
    acc = xrf.step([], 1)
    acc = xrf.step(acc, 2)
    assert is_reduced(acc)
    assert unreduced(acc) == [[1]]
    # The triggering 2 was not buffered, so completion flushes nothing.
    assert xrf.buffer == []
    assert xrf.complete(unreduced(acc)) == [[1]]

def test_partition_by_flushes_reduced_on_complete():
    xrf = partitioning_by(odd)(Stopping(1))
    acc = xrf.step([], 1)
    assert xrf.complete(acc) == [[1]]

def test_nested_reduced_propagates():
    xf = compose(mapping(lambda x: x * 10), deduplicating(), taking(2))
    xrf = xf(Appending())
    acc = xrf.step([], 1)
    assert not is_reduced(acc)
    acc = xrf.step(acc, 1)
    assert not is_reduced(acc)
    acc = xrf.step(acc, 2)
    assert is_reduced(acc)
    assert unreduced(acc) == [10, 20]

def test_buffer_cleared_before_flush():
    seen = []
    class Peeking(ReducingFunction):
        def step(self, result, input):
            seen.append(list(xrf.buffer))
            raise RuntimeError("downstream failed")
    xrf = partitioning_by(odd)(Peeking())
    acc = xrf.step(None, 1)
    with pytest.raises(RuntimeError):
        xrf.step(acc, 2)
    assert seen == [[]]
    assert xrf.buffer == []

def test_contract_violations():
    for xf in [deduplicating(), partitioning_by(odd), taking(2)]:
        xrf = xf(Appending())
        acc = xrf.complete(xrf.step([], 1))
        with pytest.raises(ContractViolation):
            xrf.step(acc, 2)
        with pytest.raises(ContractViolation):
            xrf.complete(acc)
