from transducible.errors import TransducibleError, ContractViolation, ClosedChannelError
from transducible.reduced import Reduced, reduced, is_reduced, unreduced, ensure_reduced
from transducible.transducer import \
    ReducingFunction, \
    Transducer,       \
    Appending,        \
    Adding,           \
    Summing,          \
    Counting,         \
    Joining,          \
    completing,       \
    compose,          \
    mapping,          \
    filtering,        \
    make_transducer
from transducible.stateful import deduplicating, partitioning_by, taking
from transducible.contexts import into, sequence, transduce
from transducible.channel import Channel, chan, select, timeout_chan, go, CLOSED, TIMEOUT
from transducible.util import identity
