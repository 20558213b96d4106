from typing import Dict, Type, Union, Any
from .base import ClusteringAlgorithm, ClusteringConfig
from .algorithms.kmeans import KMeansClustering, KMeansConfig


class ClusteringFactory:
    """Factory for creating clustering algorithms by method name"""

    _algorithms: Dict[str, Type[ClusteringAlgorithm]] = {
        "kmeans": KMeansClustering,
        "k-means": KMeansClustering,  # Alternative name
    }

    _configs: Dict[str, Type[ClusteringConfig]] = {
        "kmeans": KMeansConfig,
        "k-means": KMeansConfig,
    }

    @classmethod
    def _lookup(cls, registry: Dict[str, Any], algorithm_name: str) -> Any:
        name = algorithm_name.lower()
        if name not in registry:
            available = list(registry.keys())
            raise ValueError(f"Unknown algorithm: {name}. Available: {available}")
        return registry[name]

    @classmethod
    def create(cls, algorithm_name: str, config: Union[Dict[str, Any], ClusteringConfig]) -> ClusteringAlgorithm:
        """
        Create clustering algorithm instance

        Args:
            algorithm_name: Name of the clustering algorithm
            config: Configuration dictionary or config object

        Returns:
            Configured clustering algorithm instance

        Raises:
            ValueError: If algorithm name is unknown or config has the wrong type
        """
        algorithm_class = cls._lookup(cls._algorithms, algorithm_name)
        config_class = cls._lookup(cls._configs, algorithm_name)

        if isinstance(config, dict):
            config = config_class(**config)
        elif not isinstance(config, ClusteringConfig):
            raise ValueError(f"Config must be dict or ClusteringConfig, got {type(config)}")

        return algorithm_class(config)

    @classmethod
    def create_with_defaults(cls, algorithm_name: str, **kwargs) -> ClusteringAlgorithm:
        """Create algorithm with default config, overriding the given parameters"""
        config_class = cls.get_algorithm_config_class(algorithm_name)
        return cls.create(algorithm_name, config_class(**kwargs))

    @classmethod
    def get_available_algorithms(cls) -> Dict[str, Type[ClusteringAlgorithm]]:
        """Get dictionary of available algorithms"""
        return cls._algorithms.copy()

    @classmethod
    def get_algorithm_config_class(cls, algorithm_name: str) -> Type[ClusteringConfig]:
        """Get configuration class for a specific algorithm"""
        return cls._lookup(cls._configs, algorithm_name)

    @classmethod
    def register_algorithm(
        cls, name: str, algorithm_class: Type[ClusteringAlgorithm], config_class: Type[ClusteringConfig]
    ) -> None:
        """
        Register a new clustering algorithm

        Args:
            name: Name for the algorithm
            algorithm_class: Algorithm implementation class
            config_class: Configuration class for the algorithm
        """
        name = name.lower()
        cls._algorithms[name] = algorithm_class
        cls._configs[name] = config_class
