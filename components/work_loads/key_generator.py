import math
import random
import string
from dataclasses import dataclass
from typing import List, Optional

from faker import Faker

## === Config Class === ##

@dataclass
class KeyConfig:
    """
    Configuration for KeyGenerator
        alphabet: str, characters synthetic keys are drawn from
        min_len: int, shortest synthetic key
        max_len: int, longest synthetic key
        prefix_freq: float, 0 -> 1, how strongly keys cluster on shared prefixes
        seed: int, seed for random number generator (and Faker)
    """
    alphabet: str = string.ascii_uppercase
    min_len: int = 3
    max_len: int = 10
    prefix_freq: float = 0.0
    seed: Optional[int] = None

    def __post_init__(self):
        if not self.alphabet:
            raise ValueError("alphabet must not be empty")
        # sorted + dedup so the same alphabet always yields the same stream
        self.alphabet = "".join(sorted(set(self.alphabet)))
        if self.min_len < 1:
            raise ValueError("min_len must be >= 1")
        if self.max_len < self.min_len:
            raise ValueError("max_len must be >= min_len")
        if self.prefix_freq < 0 or self.prefix_freq > 1:
            raise ValueError("prefix_freq must be between 0 and 1")


def _p_eff_log(x, max_mean=100) -> float:
    # Logarithmic mapping of prefix frequency to effective prefix frequency
    x = max(0.0, min(0.999999, x))
    k = math.log(max_mean)
    p = 1.0 - math.exp(-k * x)
    return min(p, 0.999999)


class KeyGenerator:
    """Deterministic key streams for building ternary trees.

    Synthetic keys are random strings over `config.alphabet`; natural keys
    come from Faker's word list, upper-cased. Both are reproducible for a
    given seed.
    """

    VOCAB_DRAWS = 2_000

    def __init__(self, config: KeyConfig):
        self.config = config
        self.rng = random.Random(self.config.seed)

        self.fake = Faker()
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)
        self._vocab = None

    def _suffix(self, length):
        return "".join(self.rng.choice(self.config.alphabet) for _ in range(length))

    def _capacity(self):
        """Number of distinct synthetic keys the config can produce."""
        a = len(self.config.alphabet)
        return sum(a ** n for n in range(self.config.min_len, self.config.max_len + 1))

    @property
    def vocab(self) -> List[str]:
        if self._vocab is None:
            drawn = self.fake.words(nb=self.VOCAB_DRAWS)
            self._vocab = sorted({w.upper() for w in drawn if w})
        return self._vocab

    def single(self) -> str:
        n = self.rng.randint(self.config.min_len, self.config.max_len)
        return self._suffix(n)

    def batch(self, n, unique=False) -> List[str]:
        if n <= 0:
            raise ValueError("n must be positive")
        if not unique:
            return [self.single() for _ in range(n)]
        if n > self._capacity():
            raise ValueError(f"n must be <= {self._capacity()} for unique keys")
        seen = set()
        out = []
        while len(out) < n:
            key = self.single()
            if key in seen:
                continue
            seen.add(key)
            out.append(key)
        return out

    def words(self, n, unique=False) -> List[str]:
        """
        Return n natural-language keys.
        - unique=False: sample with replacement
        - unique=True: sample without replacement (requires n <= len(vocab))
        """
        vocab = self.vocab
        if n < 1 or (unique is True and n > len(vocab)):
            raise ValueError(f"n must be between 1 and {len(vocab)}")
        if unique:
            return self.rng.sample(vocab, n)
        return self.rng.choices(vocab, k=n)

    def with_prefix_freq(self, n, unique=False) -> List[str]:
        """Generate keys that share prefixes with a tunable frequency.

        A base key is drawn, then while a trigger fires (probability derived
        from `config.prefix_freq` on a log scale) a relative of the base is
        emitted: either a strict prefix of it, or the base cut at a random
        point and extended with a fresh suffix. Strict prefixes produce the
        "SPACE" inside "SPACES" shape that exercises prefix-safe removal.
        """
        if n <= 0:
            raise ValueError("n must be positive")
        if unique and n > self._capacity():
            raise ValueError(f"n must be <= {self._capacity()} for unique keys")
        p = _p_eff_log(self.config.prefix_freq)
        lo, hi = self.config.min_len, self.config.max_len

        out = []
        seen = set()

        def push(key):
            if unique:
                if key in seen:
                    return
                seen.add(key)
            out.append(key)

        while len(out) < n:
            base = self.single()
            push(base)
            trigger = self.rng.random()
            while trigger < p and len(out) < n:
                if len(base) > lo and self.rng.random() < 0.3:
                    relative = base[:self.rng.randint(lo, len(base) - 1)]
                else:
                    cut = self.rng.randint(1, len(base))
                    length = self.rng.randint(max(lo, cut), hi)
                    relative = base[:cut] + self._suffix(length - cut)
                push(relative)
                trigger = self.rng.random()
        return out
