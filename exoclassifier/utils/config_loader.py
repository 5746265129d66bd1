"""
Configuration management for the exoplanet classifier.
Loads YAML configs with pydantic validation and environment variable support.
"""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field


class ClassifierConfig(BaseModel):
    """Configuration for the classification engine."""

    backend: str = Field("heuristic", pattern="^(heuristic)$", description="Scoring backend")
    top_k: int = Field(3, ge=1, description="Number of top features returned per prediction")
    random_seed: Optional[int] = Field(
        None, ge=0, description="Seed for the attribution random source (None = OS entropy)"
    )

    class Config:
        """Pydantic config."""
        validate_assignment = True


class APIConfig(BaseModel):
    """Configuration for API server."""

    host: str = Field("0.0.0.0", description="API host")
    port: int = Field(3001, ge=1024, le=65535, description="API port")
    reload: bool = Field(False, description="Auto-reload on code changes")

    # CORS
    enable_cors: bool = Field(True, description="Enable CORS")
    cors_origins: List[str] = Field(["*"], description="Allowed CORS origins")

    # Logging
    log_level: str = Field(
        "INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$", description="Minimum log level"
    )
    enable_json_logs: bool = Field(True, description="Write per-component JSONL logs")

    class Config:
        """Pydantic config."""
        validate_assignment = True


class Config:
    """Main configuration manager."""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Directory containing configuration files. Defaults to
                ``$EXOCLASSIFIER_CONFIG_DIR`` or ``./config``.
        """
        if config_dir is None:
            config_dir = Path(os.environ.get("EXOCLASSIFIER_CONFIG_DIR", "config"))
        self.config_dir = Path(config_dir)
        self.classifier: Optional[ClassifierConfig] = None
        self.api: Optional[APIConfig] = None

    def load_all(self) -> "Config":
        """Load all configuration files."""
        self.classifier = self.load_config("classifier.yaml", ClassifierConfig)
        self.api = self.load_config("api.yaml", APIConfig)
        return self

    def load_config(self, filename: str, config_class: type[BaseModel]) -> BaseModel:
        """
        Load and validate a configuration file.

        Args:
            filename: Config file name
            config_class: Pydantic model class for validation

        Returns:
            Validated configuration object

        Example:
            >>> config = Config()
            >>> clf_config = config.load_config("classifier.yaml", ClassifierConfig)
            >>> print(f"Returning top {clf_config.top_k} features")
        """
        filepath = self.config_dir / filename

        if not filepath.exists():
            return config_class()

        with open(filepath, 'r') as f:
            config_dict = yaml.safe_load(f)

        if config_dict is None:
            return config_class()

        return config_class(**config_dict)

    def save_config(self, config: BaseModel, filename: str):
        """
        Save configuration to YAML file.

        Args:
            config: Configuration object to save
            filename: Output filename
        """
        filepath = self.config_dir / filename
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w') as f:
            yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)

    def create_default_configs(self):
        """Create default configuration files if they don't exist."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        configs = [
            ("classifier.yaml", ClassifierConfig()),
            ("api.yaml", APIConfig()),
        ]

        for filename, config in configs:
            filepath = self.config_dir / filename
            if not filepath.exists():
                self.save_config(config, filename)


if __name__ == "__main__":
    config_manager = Config()
    config_manager.create_default_configs()
    config_manager.load_all()

    print(f"Classifier: {config_manager.classifier.backend} backend, top {config_manager.classifier.top_k}")
    print(f"API: {config_manager.api.host}:{config_manager.api.port}")
