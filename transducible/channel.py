"""
A bounded, thread safe channel in the style of clojure core.async.

Values put on a channel are run through the channel's transducer on the
putting thread, under the channel's lock, and the outputs are buffered in
FIFO order. put blocks while the buffer is full, take blocks while it is
empty. select waits on several channels at once.

A capacity of 0 is a synchronous hand-off: put waits until some taker is
waiting and the hand-off slot is free, then until the taker has the value.
"""
from collections import deque
from random import shuffle
from threading import Condition, Event, Thread, Timer
from time import monotonic
from func_prototypes import typed, returned
from transducible.errors import ClosedChannelError
from transducible.reduced import is_reduced
from transducible.transducer import Appending, XForm
from transducible.util import identity


class _Marker:
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return self.name


CLOSED = _Marker("CLOSED")
CLOSED.__doc__ = "Returned by take once a channel is closed and drained."

TIMEOUT = _Marker("TIMEOUT")
TIMEOUT.__doc__ = "Returned by select when no channel became ready in time."


class Channel:

    def __init__(self, capacity: int, xform: XForm = None):
        if capacity < 0:
            raise ValueError("Channel capacity must be >= 0, got %s" % capacity)
        self.capacity = capacity
        self._buffer = deque()
        # Built once per channel, so stateful transducers get state per channel.
        self._xrf = (xform or identity)(Appending())
        self._cond = Condition()
        self._closed = False
        self._takers = 0
        self._popped = 0
        self._watchers = set()

    def __repr__(self):
        return "<Channel capacity=%s buffered=%s%s>" % (
            self.capacity, len(self._buffer), " closed" if self._closed else "")

    @property
    def closed(self):
        return self._closed

    def _notify(self):
        self._cond.notify_all()
        for event in self._watchers:
            event.set()

    def _full(self):
        if self.capacity == 0:
            return bool(self._buffer) or self._takers == 0
        return len(self._buffer) >= self.capacity

    def _close(self):
        self._closed = True
        # Completion may flush buffered state, e.g. a partial group.
        self._buffer = self._xrf.complete(self._buffer)
        self._notify()

    def put(self, value):
        """
        Blocks while the channel is full. Raises ClosedChannelError if the
        channel is closed, or becomes closed while we wait.
        On a capacity 0 channel put returns only once a taker has popped
        everything this put enqueued.
        """
        with self._cond:
            while not self._closed and self._full():
                self._cond.wait()
            if self._closed:
                raise ClosedChannelError("put on closed channel: %r" % (value,))
            result = self._xrf.step(self._buffer, value)
            if is_reduced(result):
                self._close()
                return
            self._notify()
            if self.capacity == 0:
                delivered = self._popped + len(self._buffer)
                while not self._closed and self._popped < delivered:
                    self._cond.wait()
                if self._popped < delivered:
                    raise ClosedChannelError("channel closed before hand-off: %r" % (value,))

    def take(self):
        """Blocks while the channel is empty. Returns CLOSED once closed and drained."""
        with self._cond:
            self._takers += 1
            self._notify()
            try:
                while not self._buffer and not self._closed:
                    self._cond.wait()
            finally:
                self._takers -= 1
            return self._pop()

    def _pop(self):
        if self._buffer:
            value = self._buffer.popleft()
            self._popped += 1
            self._notify()
            return value
        assert self._closed
        return CLOSED

    def poll(self):
        """
        Non-blocking take. Returns (True, value) when a value or CLOSED is
        available, (False, None) otherwise.
        """
        with self._cond:
            if self._buffer or self._closed:
                return True, self._pop()
            return False, None

    def close(self):
        """
        Closes the channel. Idempotent. Buffered values remain takeable.
        Blocked putters raise ClosedChannelError, blocked takers get CLOSED.
        """
        with self._cond:
            if not self._closed:
                self._close()

    def _watch(self, event):
        with self._cond:
            self._watchers.add(event)
            self._takers += 1
            self._notify()

    def _unwatch(self, event):
        with self._cond:
            self._watchers.discard(event)
            self._takers -= 1

    def __iter__(self):
        while True:
            value = self.take()
            if value is CLOSED:
                return
            yield value


def chan(capacity, xform=None):
    return Channel(capacity, xform)


def select(channels, timeout=None):
    """
    Waits up to timeout seconds (None: forever) until one of channels can be taken from.
    Returns (value, channel), where value may be CLOSED, or TIMEOUT if the
    timeout passes first. Use timeout_chan for a millisecond timer channel.
    When several channels are ready, which one wins is random, as in alts!.
    """
    channels = list(channels)
    deadline = None if timeout is None else monotonic() + timeout
    event = Event()
    for ch in channels:
        ch._watch(event)
    try:
        while True:
            event.clear()
            order = list(channels)
            shuffle(order)
            for ch in order:
                ready, value = ch.poll()
                if ready:
                    return value, ch
            if deadline is None:
                event.wait()
            else:
                remaining = deadline - monotonic()
                if remaining <= 0:
                    return TIMEOUT
                event.wait(remaining)
    finally:
        for ch in channels:
            ch._unwatch(event)


@returned(Channel)
@typed(int)
def timeout_chan(msecs):
    """A channel which closes itself after msecs milliseconds."""
    ch = Channel(0)
    timer = Timer(msecs / 1000.0, ch.close)
    timer.daemon = True
    timer.start()
    return ch


def go(fn, *args, **kwargs):
    """
    Runs fn on a daemon thread. Returns a channel which receives fn's result,
    then closes. If fn raises, the channel closes without a value.
    """
    out = Channel(1)
    def run():
        try:
            result = fn(*args, **kwargs)
            if result is not None:
                out.put(result)
        finally:
            out.close()
    Thread(target=run, daemon=True).start()
    return out
