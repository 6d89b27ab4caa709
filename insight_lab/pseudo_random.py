class PseudoRandom:
    """Seeded linear congruential generator.

    Only used to build the fixed weight matrices, so the same seed always
    gives the same stream of floats in [0, 1), on any platform.
    """

    MULTIPLIER = 9301
    INCREMENT = 49297
    MODULUS = 233280

    def __init__(self, seed):
        self.seed = seed

    def next(self):
        self.seed = (self.seed * self.MULTIPLIER + self.INCREMENT) % self.MODULUS
        return self.seed / self.MODULUS

    def take(self, count):
        return [ self.next() for _ in range(count) ]
