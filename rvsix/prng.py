"""Park-Miller minimal standard pseudo-random number generator."""

_MODULUS = 0x7FFFFFFF


def do_rand(ctx):
    """Advance the generator state ctx and return the new state.

    The result lies in [0, 0x7ffffffd] and is also the next state.
    """
    x = (ctx % 0x7FFFFFFE) + 1
    hi, lo = divmod(x, 127773)
    x = 16807 * lo - 2836 * hi
    if x < 0:
        x += _MODULUS
    return x - 1


class ParkMiller:
    """A stateful generator producing do_rand values."""

    def __init__(self, seed=1):
        self.state = seed

    def next(self):
        self.state = do_rand(self.state)
        return self.state

    def __iter__(self):
        while True:
            yield self.next()