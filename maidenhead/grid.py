"""Maidenhead locator normalization and validation.

A six-character locator has the canonical form ``AA99aa``:

- positions 0-1: field letters A-R (uppercase)
- positions 2-3: square digits 0-9
- positions 4-5: subsquare letters a-x (lowercase)
"""

from enum import Enum


GRID_LENGTH = 6


class ValidationKind(Enum):
    """Which grammar rule a locator broke."""

    LENGTH = "must be 6 characters"
    FIRST_CHAR = "first character must be A-R"
    SECOND_CHAR = "second character must be A-R"
    THIRD_CHAR = "third character must be a digit"
    FOURTH_CHAR = "fourth character must be a digit"
    FIFTH_CHAR = "fifth character must be a-x"
    SIXTH_CHAR = "sixth character must be a-x"


class Side(Enum):
    """Which locator of a pair failed."""

    LOCAL = "local"
    REMOTE = "remote"


class ValidationError(ValueError):
    """Malformed grid square.

    Attributes:
        grid: The offending (normalized) locator string
        kind: The first grammar rule it violated
        side: Local or remote, when raised from a two-locator operation
        contexts: (verb, step) layers naming the sub-computations that
            failed, outermost first
    """

    def __init__(self, grid: str, kind: ValidationKind,
                 side: Side | None = None,
                 contexts: tuple[tuple[str, str], ...] = ()):
        self.grid = grid
        self.kind = kind
        self.side = side
        self.contexts = tuple(contexts)
        super().__init__(self._format())

    @property
    def context(self) -> str | None:
        """Outermost sub-computation that failed, if any."""
        return self.contexts[0][1] if self.contexts else None

    def _format(self) -> str:
        msg = f"invalid gridsquare format: {self.grid} ({self.kind.value})"
        if self.side is not None:
            msg = f"invalid {self.side.value} grid square: {msg}"
        for verb, step in reversed(self.contexts):
            msg = f"{verb} {step}: {msg}"
        return msg

    def with_side(self, side: Side) -> "ValidationError":
        """Copy of this error tagged with the failing side."""
        return ValidationError(self.grid, self.kind, side, self.contexts)

    def with_context(self, step: str, verb: str = "failed to calculate") -> "ValidationError":
        """Copy of this error with an outer layer naming the failing step."""
        return ValidationError(self.grid, self.kind, self.side, ((verb, step),) + self.contexts)


def _is_upper_ar(c: str) -> bool:
    return 'A' <= c <= 'R'


def _is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def _is_lower_ax(c: str) -> bool:
    return 'a' <= c <= 'x'


# Checked in order; the first failure wins
_RULES = (
    (0, _is_upper_ar, ValidationKind.FIRST_CHAR),
    (1, _is_upper_ar, ValidationKind.SECOND_CHAR),
    (2, _is_digit, ValidationKind.THIRD_CHAR),
    (3, _is_digit, ValidationKind.FOURTH_CHAR),
    (4, _is_lower_ax, ValidationKind.FIFTH_CHAR),
    (5, _is_lower_ax, ValidationKind.SIXTH_CHAR),
)


def normalize_grid(grid: str) -> str:
    """Fold a 6-character locator to the canonical AA99aa case pattern.

    Any other length is returned unchanged. No validation is done, so a
    malformed 6-character string is still case-folded.

    Args:
        grid: Maidenhead grid square

    Returns:
        Normalized grid square
    """
    if len(grid) != GRID_LENGTH:
        return grid
    # ASCII-only folding keeps the length fixed (e.g. 'ß'.upper() == 'SS')
    head = ''.join(c.upper() if c.isascii() else c for c in grid[:2])
    tail = ''.join(c.lower() if c.isascii() else c for c in grid[4:])
    return head + grid[2:4] + tail


def validate_grid(grid: str) -> None:
    """Check an already-normalized locator against the AA99aa grammar.

    Args:
        grid: Normalized grid square

    Raises:
        ValidationError: For the first rule the locator violates
    """
    if len(grid) != GRID_LENGTH:
        raise ValidationError(grid, ValidationKind.LENGTH)

    for position, check, kind in _RULES:
        if not check(grid[position]):
            raise ValidationError(grid, kind)


def is_valid_grid(grid: str) -> bool:
    """Check if a locator (any case) is a valid 6-character grid square."""
    try:
        validate_grid(normalize_grid(grid))
    except ValidationError:
        return False
    return True
