from docopt import docopt
from delnone import delnone
from json import JSONEncoder
import re
import sys
from transducible.channel import chan, go
from transducible.errors import ClosedChannelError
from transducible.contexts import into, sequence, transduce
from transducible.transducer import Counting, compose, make_transducer
from transducible.util import pbar

json_encoder = JSONEncoder(ensure_ascii=False)
json_encode = lambda data: json_encoder.encode(data)

UI_USAGE = """
Transducible

Runs text lines through a pipeline of transducers, in the context of your choice.

Usage:
  transducible collect [options] [<file>...]
  transducible stream [options] [<file>...]
  transducible count [options] [<file>...]
  transducible chan [options] [<file>...]

Options:
  --grep=<pattern>    Keep lines matching the regular expression.
  --upper             Upper case each line.
  --dedupe            Drop lines equal to the line before.
  --group-by=<key>    Group runs of lines with equal key: line, length or first.
  --take=<n>          Stop after n outputs.
  --capacity=<n>      Channel buffer size [default: 1].
  --progress          Show a progress bar over the input lines.
"""

GROUP_KEYS = {
    'line': lambda line: line,
    'length': len,
    'first': lambda line: line[:1],
}

def read_lines(paths, stdin):
    if not paths:
        for line in stdin:
            yield line.rstrip("\n")
    for path in paths:
        with open(path, "r") as fd:
            for line in fd:
                yield line.rstrip("\n")

def build_pipeline(opts):
    steps = []
    if 'grep' in opts:
        pattern = re.compile(opts['grep'])
        steps.append(make_transducer('filtering', lambda line: pattern.search(line) is not None))
    if 'upper' in opts:
        steps.append(make_transducer('mapping', str.upper))
    if 'dedupe' in opts:
        steps.append(make_transducer('deduplicating'))
    if 'group' in opts:
        key = GROUP_KEYS.get(opts['group'])
        if key is None:
            raise ValueError("Unknown group key %s, expected one of %s" % (opts['group'], ", ".join(sorted(GROUP_KEYS))))
        steps.append(make_transducer('grouping', key))
    if 'take' in opts:
        steps.append(make_transducer('taking', int(opts['take'])))
    return compose(*steps)

def render(output):
    if isinstance(output, str):
        return output
    return json_encode(output)

def produce(ch, lines):
    try:
        for line in lines:
            ch.put(line)
    except ClosedChannelError:
        # A Reduced step, e.g. from --take, closed the channel during a put.
        pass
    finally:
        ch.close()
    return True

def transducible_ui(argv, stdin):
    exitcode = 0
    args = docopt(UI_USAGE, argv)
    opts = delnone({
        'grep': args['--grep'],
        'upper': args['--upper'] or None,
        'dedupe': args['--dedupe'] or None,
        'group': args['--group-by'],
        'take': args['--take'],
    })
    xform = build_pipeline(opts)
    lines = pbar("lines", quiet=not args['--progress'])(read_lines(args['<file>'], stdin))
    if args['collect']:
        print(json_encode(into(xform, lines)))
    elif args['stream']:
        for output in sequence(xform, lines):
            print(render(output))
    elif args['count']:
        print(transduce(xform, Counting(), lines))
    elif args['chan']:
        ch = chan(int(args['--capacity']), xform)
        done = go(produce, ch, lines)
        for output in ch:
            print(render(output))
        if done.take() is not True:
            print("Producer failed", file=sys.stderr)
            exitcode = exitcode | 1
    return exitcode

def main():
    result = transducible_ui(sys.argv[1:], sys.stdin)
    exit(result)
