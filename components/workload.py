#!/usr/bin/env python3
from components.work_loads.key_generator import KeyConfig, KeyGenerator


class WorkLoad:
    def __init__(self, seed=None, min_len=3, max_len=10):
        self.seed = seed
        self.min_len = min_len
        self.max_len = max_len

    def _generator(self, p_freq=0.0):
        return KeyGenerator(KeyConfig(min_len=self.min_len,
                                      max_len=self.max_len,
                                      prefix_freq=p_freq,
                                      seed=self.seed))

    def keys(self, num_keys, p_freq=0, unique=False):
        if p_freq > 0:
            return self._generator(p_freq).with_prefix_freq(num_keys, unique)
        else:
            return self._generator().batch(num_keys, unique)

    def words(self, num_words, unique=False):
        return self._generator().words(num_words, unique)

    def pairs(self, keys):
        return [(k, i) for i, k in enumerate(keys)]
