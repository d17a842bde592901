#!/usr/bin/env python3
from components.work_loads.ip_generator import IPConfig, IPGenerator
from components.work_loads.word_generator import generate_random_words, gen_words_with_prefix_freq


class WorkLoad:
    """Seeded key sources for loading and probing a RadixTree."""

    def __init__(self, seed=None):
        self.seed = seed

    def words(self, num_words, p_freq=0, unique=False):
        if p_freq > 0:
            return gen_words_with_prefix_freq(num_words, p_freq, self.seed, unique)
        else:
            return generate_random_words(num_words, self.seed, unique)

    def ips(self, num_ips, public_share=0.9):
        return IPGenerator(IPConfig(public_share=public_share, seed=self.seed)).batch(num_ips)

    @staticmethod
    def pairs(keys):
        """Pair each key with its position, ready for RadixTree.batch_set."""
        return [(k, i) for i, k in enumerate(keys)]
