"""Base class for configuration sampling strategies."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Union

from ..assemble import as_space
from ..scales import Scale
from ..space import Configuration, HyperparameterSpace
from ..errors import DomainError


class SamplingStrategy(ABC):
    """Base class for configuration sampling strategies.

    All sampling strategies should inherit from this class and implement
    the sample method to generate configurations according to their
    specific algorithm.
    """

    def __init__(self, space: Union[HyperparameterSpace, Mapping[str, Scale]]):
        """Initialize sampling strategy.

        Args:
            space: The hyperparameter space to sample from
        """
        self.space = as_space(space)
        self._validate_space()

    def _validate_space(self) -> None:
        """Validate that the space is suitable for sampling."""
        if not len(self.space):
            raise DomainError("Hyperparameter space must contain at least one parameter")

    @abstractmethod
    def sample(self, m: int) -> List[Configuration]:
        """Generate 2^m configurations.

        Args:
            m: Exponent of the number of configurations

        Returns:
            List of configurations
        """
        pass

    def sample_records(self, m: int) -> List[Dict[str, Any]]:
        """Generate configurations as plain dictionaries."""
        return [config.to_dict() for config in self.sample(m)]

    @abstractmethod
    def method_name(self) -> str:
        """Return the name of this sampling method."""
        pass
