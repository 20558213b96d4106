import os
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic.dataclasses import dataclass

from kmtidy.shared.data.synthetic import DEFAULT_CENTERS, DEFAULT_NUM_POINTS

DEFAULT_KS: Tuple[int, ...] = tuple(range(1, 10))


@dataclass(frozen=True)
class SyntheticDataConfig:
    """Gaussian blobs to cluster when no dataset file is given"""

    centers: Optional[List[List[float]]] = None
    num_points: Optional[List[int]] = None
    sd: float = 1.0

    def __post_init__(self):
        if self.centers is None:
            object.__setattr__(self, "centers", [list(center) for center in DEFAULT_CENTERS])
        if self.num_points is None:
            object.__setattr__(self, "num_points", list(DEFAULT_NUM_POINTS))


@dataclass(frozen=True)
class KMeansHyperparameters:
    """Fixed K-Means settings shared by every k in the sweep"""

    init: str = "k-means++"
    n_init: int = 10
    max_iter: int = 300
    tol: float = 1e-4

    def as_dict(self) -> Dict[str, Any]:
        return {"init": self.init, "n_init": self.n_init, "max_iter": self.max_iter, "tol": self.tol}


@dataclass(frozen=True)
class KMeansSweepConfig:
    """Configuration for sweeping K-Means over several values of k"""

    # Output configuration
    output_dir: str

    # Data source: either a CSV file or synthetic blobs
    dataset_path: Optional[str] = None
    feature_columns: Optional[List[str]] = None
    synthetic: Optional[SyntheticDataConfig] = None

    # Sweep configuration
    ks: Optional[List[int]] = None
    kmeans: Optional[KMeansHyperparameters] = None

    # Execution settings
    random_state: int = 42
    n_jobs: int = 1

    def __post_init__(self):
        if self.ks is None:
            object.__setattr__(self, "ks", list(DEFAULT_KS))
        if self.kmeans is None:
            object.__setattr__(self, "kmeans", KMeansHyperparameters())

    @classmethod
    def from_yaml(cls, config_file: str) -> "KMeansSweepConfig":
        """Load configuration from YAML file"""
        if not os.path.exists(config_file):
            raise ValueError(f"Config file does not exist: {config_file}")

        with open(config_file, "r") as f:
            config_dict = yaml.safe_load(f) or {}

        if "output_dir" not in config_dict:
            raise ValueError("Missing required field 'output_dir' in config file")

        synthetic = None
        if config_dict.get("synthetic") is not None:
            synthetic = SyntheticDataConfig(**config_dict["synthetic"])

        kmeans = KMeansHyperparameters(**(config_dict.get("kmeans") or {}))

        # Convert relative paths to absolute
        output_dir = config_dict["output_dir"]
        if not os.path.isabs(output_dir):
            output_dir = os.path.abspath(output_dir)

        dataset_path = config_dict.get("dataset_path")
        if dataset_path is not None and not os.path.isabs(dataset_path):
            dataset_path = os.path.abspath(dataset_path)

        ks = config_dict.get("ks")
        if isinstance(ks, dict):
            # range form: {start: 1, stop: 9}, stop inclusive
            ks = list(range(int(ks["start"]), int(ks["stop"]) + 1))

        return cls(
            output_dir=output_dir,
            dataset_path=dataset_path,
            feature_columns=config_dict.get("feature_columns"),
            synthetic=synthetic,
            ks=ks,
            kmeans=kmeans,
            random_state=config_dict.get("random_state", 42),
            n_jobs=config_dict.get("n_jobs", 1),
        )

    @property
    def uses_synthetic_data(self) -> bool:
        return self.dataset_path is None

    def validate(self) -> None:
        """Validate configuration"""
        if self.dataset_path is not None and self.synthetic is not None:
            raise ValueError("Configure either dataset_path or synthetic, not both")

        if self.dataset_path is not None and not os.path.exists(self.dataset_path):
            raise ValueError(f"Dataset file does not exist: {self.dataset_path}")

        if self.feature_columns is not None and self.dataset_path is None:
            raise ValueError("feature_columns requires dataset_path")

        if not self.ks:
            raise ValueError("ks cannot be empty")

        if any(k <= 0 for k in self.ks):
            raise ValueError(f"All values of k must be positive, got {self.ks}")

        if len(set(self.ks)) != len(self.ks):
            raise ValueError(f"Values of k must be unique, got {self.ks}")

        if self.n_jobs < 1:
            raise ValueError("n_jobs must be a positive integer")

        # Output directory itself is created on demand, its parent must exist
        parent_dir = os.path.dirname(os.path.abspath(self.output_dir))
        if parent_dir and not os.path.exists(parent_dir):
            raise ValueError(f"Parent of output directory does not exist: {parent_dir}")
