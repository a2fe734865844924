"""Short numeric share codes."""

import random
from typing import List, Optional

from common.constants import CODE_MAX, CODE_MIN
from codeshare.exceptions import ValidationError


class CodeGenerator:
    """
    Produces codes uniformly distributed over CODE_MIN..CODE_MAX.

    Uniqueness against stored data is not checked here; the store rejects a
    code already in use and callers retry with a fresh one.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.SystemRandom()

    def generate(self) -> str:
        return str(self.rng.randint(CODE_MIN, CODE_MAX))

    def generate_batch(self, count: int) -> List[str]:
        """
        Generate `count` pairwise-distinct codes.

        Args:
            count: Number of codes needed

        Returns:
            List of distinct code strings

        Raises:
            ValidationError: If count exceeds the size of the code space
        """
        if count > CODE_MAX - CODE_MIN + 1:
            raise ValidationError(f"Cannot mint {count} distinct codes")

        codes: List[str] = []
        seen = set()
        while len(codes) < count:
            code = self.generate()
            if code not in seen:
                seen.add(code)
                codes.append(code)
        return codes


def is_valid_code(code: str) -> bool:
    return code.isascii() and code.isdigit() and CODE_MIN <= int(code) <= CODE_MAX
