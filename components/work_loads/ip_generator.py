import random
import logging
from typing import Dict, Optional, List
from dataclasses import dataclass
from faker import Faker

log = logging.getLogger("components.work_loads")

PRIVATE_CLASSES = ('a', 'b', 'c')

## === Config Class === ##

@dataclass
class IPConfig:
    """
    Configuration for IPGenerator
        public_share: float, proportion of public IPs in [0, 1]
        private_weights: dict, weights for private IP classes {a: x, b: x, c: x}
        seed: int, seed for random number generator and Faker
    """
    public_share: float = 0.9
    private_weights: Optional[Dict[str, float]] = None
    seed: Optional[int] = None

    def __post_init__(self):
        if not 0.0 <= self.public_share <= 1.0:
            raise ValueError(f"public_share must be in [0, 1], got {self.public_share}")
        if self.private_weights is None:
            self.private_weights = {'a': 0.35, 'b': 0.10, 'c': 0.55}
            return
        missing = [k for k in PRIVATE_CLASSES if k not in self.private_weights]
        if missing:
            raise ValueError(f"private_weights missing keys: {missing}")
        if any(self.private_weights[k] < 0 for k in PRIVATE_CLASSES):
            raise ValueError("private_weights must be non-negative")
        if sum(self.private_weights[k] for k in PRIVATE_CLASSES) == 0:
            raise ValueError("Sum of private_weights must be > 0")
        self.private_weights = {k: self.private_weights[k] for k in PRIVATE_CLASSES}


class IPGenerator:
    """Dotted-quad IPv4 keys; addresses in one network share long prefixes."""

    def __init__(self, config: IPConfig):
        self.config = config
        self.rng = random.Random(self.config.seed)

        self.fake = Faker()
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)
        self.priv_classes, self.weights = zip(*self.config.private_weights.items())

    def _priv_class(self):
        return self.rng.choices(self.priv_classes, weights=self.weights, k=1)[0]

    def single(self) -> str:
        if self.rng.random() >= self.config.public_share:
            return self.fake.ipv4_private(address_class=self._priv_class())
        return self.fake.ipv4_public()

    def batch(self, n: int) -> List[str]:
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.single() for _ in range(n)]

    def mapping(self, n: int) -> Dict[str, int]:
        """Map each distinct address of a batch of n to its first position."""
        out: Dict[str, int] = {}
        for i, ip in enumerate(self.batch(n)):
            out.setdefault(ip, i)
        if len(out) < n:
            log.debug("ip mapping: %d duplicates dropped out of %d", n - len(out), n)
        return out
