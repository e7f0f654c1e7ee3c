from transducible.util import consume, identity, irange, partial, pbar, take

def add(x, y):
    return x + y

def test_identity():
    assert identity(3) == 3

def test_partial():
    add3 = partial(add, 3)
    assert add3(4) == 7
    assert add3.__name__ == "partial_add"

def test_take():
    assert list(take(3)(irange(0, 1))) == [0, 1, 2]
    assert list(take(3)([1])) == [1]
    assert list(take(0)([1])) == []

def test_irange():
    assert list(take(3)(irange(10, -5))) == [10, 5, 0]

def test_consume():
    seen = []
    consume(seen.append(x) for x in range(3))
    assert seen == [0, 1, 2]

def test_pbar():
    assert list(pbar("quiet", quiet=True)([1, 2, 3])) == [1, 2, 3]
    assert list(pbar("loud")(iter([1, 2]))) == [1, 2]
