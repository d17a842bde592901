import random
import math
import string
from itertools import product

## Syllable table: every consonant-vowel pair plus the bare vowels.
## Words are built by concatenating syllables, so unrelated words still
## share short prefixes the way natural-language vocabularies do.
VOWELS = "aeiou"
CONSONANTS = "".join(c for c in string.ascii_lowercase if c not in VOWELS)
SYLLABLES = [c + v for c, v in product(CONSONANTS, VOWELS)] + list(VOWELS)

## Suffixes appended to a shared stem when clustering words by prefix
SUFFIXES = ["", "s", "ed", "er", "ing", "ion", "ions", "ly", "ness", "ment", "able"]

MAX_UNIQUE = 1_000_000


def _word(rng, min_syl=1, max_syl=4):
  return "".join(rng.choices(SYLLABLES, k=rng.randint(min_syl, max_syl)))


def _check_count(num_words):
  if num_words < 1 or num_words > MAX_UNIQUE:
    raise ValueError(f"num_words must be between 1 and {MAX_UNIQUE}")


def generate_random_words(num_words, seed=None, unique=False):
  """
  Return n random synthetic words.
  - unique=False: duplicates allowed
  - unique=True: every word appears once
  """
  _check_count(num_words)
  rng = random.Random(seed)
  if not unique:
    return [_word(rng) for _ in range(num_words)]

  seen = set()
  words = []
  while len(words) < num_words:
    w = _word(rng)
    if w not in seen:
      seen.add(w)
      words.append(w)
  return words


def _p_eff_log(x, max_mean=100) -> float:
  # Logarithmic mapping of prefix frequency to effective prefix frequency
  if x < 0 or x > 1:
    raise ValueError("Prefix frequency must be between 0 and 1")
  x = max(0.0, min(0.999999, x))
  k = math.log(max_mean)
  p = 1.0 - math.exp(-k * x)
  return min(p, 0.999999)


def gen_words_with_prefix_freq(num_words, prefix_freq=0.0, seed=None, unique=False):
  """Generates a list of words with a given prefix frequency.
  Each cluster starts from a random stem; while a coin flip stays below the
  effective frequency, further words sharing that stem are emitted.
  A higher prefix_freq means longer clusters of words with a common prefix.
  prefix_freq: 0 -> 1 (mapped logarithmically)
  """
  p = _p_eff_log(prefix_freq)
  _check_count(num_words)
  rng = random.Random(seed)

  words = []
  seen = set()

  def emit(w):
    if unique:
      if w in seen:
        return False
      seen.add(w)
    words.append(w)
    return True

  while len(words) < num_words:
    stem = _word(rng, 2, 4)
    emit(stem + rng.choice(SUFFIXES))
    while len(words) < num_words and rng.random() < p:
      tail = rng.choice(SUFFIXES)
      if rng.random() < 0.5:
        tail = rng.choice(SYLLABLES) + tail
      emit(stem + tail)
  return words
