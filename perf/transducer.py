import timeit
from tabulate import tabulate
from transducible.util import partial, consume
from transducible.transducer import Summing, compose, mapping, filtering
from transducible.stateful import deduplicating
from transducible.contexts import into, sequence, transduce
from transducible.channel import chan, go

def isEven(n):
    return n % 2 == 0

def inc(x):
    return x + 1

def square(x):
    return x * x

# args example: partial(inc_square_comprehension, hundredK)
# kwargs example number=1000
def performance_compare(*cases, case_args=[], timeit_kwargs={}):
    results = {}
    for case in cases:
        name = case.__name__
        case = partial(case, *case_args)
        time = timeit.timeit(case, **timeit_kwargs)
        results[name] = time
    lowest = min([time for time in results.values()])
    table = [(name, time, "%.2f" % (time / lowest)) for (name, time) in results.items()]
    print(tabulate(table, headers=['case', 'time', 'scale']))

def inc_square_comprehension(nums):
    return [(num + 1) * (num + 1) for num in nums]

def inc_square_loop(nums):
    out = []
    for n in nums:
        out.append((n + 1) * (n + 1))
    return out

def inc_square_into(nums):
    return into(compose(mapping(inc), mapping(square)), nums)

def inc_square_sequence(nums):
    consume(sequence(compose(mapping(inc), mapping(square)), nums))

def sum_even_loop(ns):
    total = 0
    for n in ns:
        if isEven(n):
            total += n
    return total

def sum_even_filter(ns):
    return sum(filter(isEven, ns))

def sum_even_transduce(ns):
    return transduce(filtering(isEven), Summing(), ns)

def dedupe_loop(ns):
    out = []
    for n in ns:
        if not out or out[-1] != n:
            out.append(n)
    return out

def dedupe_into(ns):
    return into(deduplicating(), ns)

def channel_pipe(ns):
    c = chan(64, mapping(inc))
    def produce():
        for n in ns:
            c.put(n)
        c.close()
    go(produce)
    consume(c)


hundredK = range(100000)

def test_maps():
    performance_compare(inc_square_comprehension,
                        inc_square_loop,
                        inc_square_into,
                        inc_square_sequence,
                        case_args=[hundredK],
                        timeit_kwargs={'number': 10})

def test_folds():
    performance_compare(sum_even_loop,
                        sum_even_filter,
                        sum_even_transduce,
                        case_args=[hundredK],
                        timeit_kwargs={'number': 10})

def test_dedupe():
    performance_compare(dedupe_loop,
                        dedupe_into,
                        case_args=[[n // 3 for n in hundredK]],
                        timeit_kwargs={'number': 10})

def test_channel():
    performance_compare(channel_pipe,
                        inc_square_loop,
                        case_args=[range(10000)],
                        timeit_kwargs={'number': 3})
