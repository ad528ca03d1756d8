"""FastAPI dependencies."""
import random


def get_rng() -> random.Random:
    """Random source for group selection, pins and validation codes."""
    return random.SystemRandom()
