import pytest
from transducible.transducer import ReducingFunction


class Recording(ReducingFunction):
    """
    List building reducing function which records how it was driven,
    so tests can check the call discipline.
    """

    def __init__(self):
        self.steps = 0
        self.completions = 0

    def init(self):
        return []

    def step(self, result, input):
        assert self.completions == 0, "step after complete"
        self.steps += 1
        result.append(input)
        return result

    def complete(self, result):
        self.completions += 1
        return result


class Source:
    """Infinite counting input which remembers how many values were pulled."""

    def __init__(self, start=0):
        self.pulled = 0
        self.start = start

    def __iter__(self):
        n = self.start
        while True:
            self.pulled += 1
            yield n
            n += 1


@pytest.fixture
def recording():
    return Recording()


@pytest.fixture
def source():
    return Source()


@pytest.fixture
def lines_file(tmp_path):
    def build(*lines):
        p = tmp_path.joinpath("lines.txt")
        p.write_text("".join(line + "\n" for line in lines))
        return str(p)
    return build
