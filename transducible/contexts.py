"""
Transducible contexts which run over ordinary python iterables.

    into        eager, builds a container.
    sequence    lazy, a generator pulled by the consumer.
    transduce   strict fold with any reducing function.

All three build a fresh pipeline per call, so stateful transducers never
leak state from one run into the next.
"""
from collections import deque
from transducible.reduced import is_reduced, unreduced
from transducible.transducer import ReducingFunction, Appending, Adding, XForm


class _NoInit:
    def __repr__(self):
        return "<no init>"


_NO_INIT = _NoInit()


def reduce(rf: ReducingFunction, init, coll):
    """
    Steps rf over coll, left to right, stopping at the first Reduced.
    Returns the unwrapped accumulator. Does not complete rf.
    """
    result = init
    for input in coll:
        result = rf.step(result, input)
        if is_reduced(result):
            return unreduced(result)
    return result


def transduce(xform: XForm, rf: ReducingFunction, coll, init=_NO_INIT):
    """
    xform is a transducer
    rf is the final ReducingFunction
    coll is [a]
    init defaults to rf.init()
    """
    xrf = xform(rf)
    if init is _NO_INIT:
        init = xrf.init()
    return xrf.complete(reduce(xrf, init, coll))


def into(xform: XForm, coll, to=None):
    """
    Eagerly pours coll through xform into the container to.
    to defaults to a new list; sets (anything with add) work too.
    """
    if to is None:
        to = []
    rf = Appending() if hasattr(to, 'append') else Adding()
    return transduce(xform, rf, coll, to)


def sequence(xform: XForm, coll):
    """
    Lazily runs xform over coll. Each pull advances coll only as far as needed
    to produce the next output, or to find that there are none left.
    """
    xrf = xform(Appending())
    buffer = deque()
    for input in coll:
        buffer = xrf.step(buffer, input)
        terminated = is_reduced(buffer)
        buffer = unreduced(buffer)
        while buffer:
            yield buffer.popleft()
        if terminated:
            break
    buffer = xrf.complete(buffer)
    while buffer:
        yield buffer.popleft()
