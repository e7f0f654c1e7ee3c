from functools import partial as functools_partial
import tqdm


def identity(x):
    return x


def partial(fn, *args, **kwargs):
    out = functools_partial(fn, *args, **kwargs)
    out.__name__ = "partial_" + fn.__name__
    return out


def take(count):
    def taker(collection):
        remaining = count
        i = iter(collection)
        while remaining > 0:
            try:
                yield next(i)
            except StopIteration:
                return
            remaining = remaining - 1
    return taker


def consume(collection):
    for _ in collection:
        pass


def irange(start, increment):
    while True:
        yield start
        start += increment


def pbar(label='', quiet=False):
    """Wraps an iterable in a progress bar on stderr. quiet turns it off."""
    def _pbar(xs):
        with tqdm.tqdm(xs, desc=label, disable=quiet, leave=False, unit='item') as bar:
            for x in bar:
                yield x
    return _pbar
