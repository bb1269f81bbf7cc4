"""landscape-simple: deterministic hyperparameter landscapes.

This package generates well-spread sets of hyperparameter configurations by
mapping scrambled Sobol' points through typed, composable scales.
"""

# Export the public API
from .api import *  # noqa: F403, F401
from .api import __all__, __version__  # noqa: F401
