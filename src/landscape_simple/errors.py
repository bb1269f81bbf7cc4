"""Error kinds raised by landscape-simple.

Both classes derive from the built-in exception they refine so callers that
already catch ``ValueError`` or ``TypeError`` keep working.
"""


class DomainError(ValueError):
    """A caller-supplied argument violates a precondition.

    Raised for invalid exponents, non-power-of-two sample counts, invalid
    mixture proportions and malformed scale or space declarations.
    """


class ScaleTypeError(TypeError):
    """A value cannot be represented in a scale's declared output type."""
