"""
Validation code generation.

A course's ``validationSchema`` is a template for the code a participant gets
once their results are locked. Supported tokens:

    [0-9]   a random digit
    [A-Z]   a random uppercase letter
    [a-z]   a random lowercase letter
    %N      a random digit divisible by N (N is a single digit, 1-9)
    ( )     grouping markers, removed from the code

Anything else is copied to the code unchanged, so ``AB-[0-9]`` yields
e.g. ``AB-7``.
"""
from __future__ import annotations

import random
import re
import string

_CLASS_TOKENS = {
    "[0-9]": string.digits,
    "[A-Z]": string.ascii_uppercase,
    "[a-z]": string.ascii_lowercase,
}
_CLASS_TOKEN_RE = re.compile("|".join(re.escape(token) for token in _CLASS_TOKENS))
_MODULO_TOKEN_RE = re.compile(r"%([1-9])")
_GROUP_MARKERS = "()"


def _divisible_digit(divisor: int, rng: random.Random) -> str:
    # re-roll until the constraint holds; 0 always qualifies so this ends
    while True:
        digit = rng.randrange(10)
        if digit % divisor == 0:
            return str(digit)


def generate_validation_code(template: str, rng: random.Random | None = None) -> str:
    """Generate a validation code from a template."""
    rng = rng or random.SystemRandom()
    code = _CLASS_TOKEN_RE.sub(lambda match: rng.choice(_CLASS_TOKENS[match.group(0)]), template)
    code = _MODULO_TOKEN_RE.sub(
        lambda match: _divisible_digit(int(match.group(1)), rng), code
    )
    for marker in _GROUP_MARKERS:
        code = code.replace(marker, "")
    return code
