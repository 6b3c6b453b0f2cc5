"""Configuration management for the header compiler CLI."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ...exceptions import ConfigError


def _optional_path(value: str | None) -> Path | None:
    return Path(value) if value else None


@dataclass
class Config:
    """Configuration for the header compiler."""

    contracts_dir: Path | None
    contract_def_path: Path | None
    qpi_path: Path | None
    output_dir: Path
    verbose: bool = False
    log_dir: Path = Path("logs")
    source_repo: str | None = None
    source_revision: str | None = None

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "Config":
        """
        Load configuration from environment variables or .env file.

        Args:
            env_path: Optional path to .env file (defaults to .env in current directory)

        Returns:
            Config object
        """
        if env_path is None:
            env_path = Path.cwd() / ".env"

        if env_path.exists():
            load_dotenv(env_path)

        verbose_str = os.getenv("QBI_VERBOSE", "false").lower()

        return cls(
            contracts_dir=_optional_path(os.getenv("QBI_CONTRACTS_DIR")),
            contract_def_path=_optional_path(os.getenv("QBI_CONTRACT_DEF")),
            qpi_path=_optional_path(os.getenv("QBI_QPI_PATH")),
            output_dir=Path(os.getenv("QBI_OUTPUT_DIR", "registry")),
            verbose=verbose_str in ("true", "1", "yes"),
            log_dir=Path(os.getenv("QBI_LOG_DIR", "logs")),
            source_repo=os.getenv("QBI_SOURCE_REPO") or None,
            source_revision=os.getenv("QBI_SOURCE_REVISION") or None,
        )

    @classmethod
    def from_args(
        cls,
        contracts_dir: Optional[Path] = None,
        contract_def_path: Optional[Path] = None,
        qpi_path: Optional[Path] = None,
        output_dir: Optional[Path] = None,
        verbose: Optional[bool] = None,
        source_repo: Optional[str] = None,
        source_revision: Optional[str] = None,
    ) -> "Config":
        """
        Create configuration from explicit arguments, falling back to environment.

        Returns:
            Config object
        """
        config = cls.from_env()

        if contracts_dir is not None:
            config.contracts_dir = contracts_dir
        if contract_def_path is not None:
            config.contract_def_path = contract_def_path
        if qpi_path is not None:
            config.qpi_path = qpi_path
        if output_dir is not None:
            config.output_dir = output_dir
        if verbose is not None:
            config.verbose = verbose
        if source_repo is not None:
            config.source_repo = source_repo
        if source_revision is not None:
            config.source_revision = source_revision

        return config

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            ConfigError: If a configured input path does not exist
        """
        if self.contracts_dir is not None and not self.contracts_dir.is_dir():
            raise ConfigError(f"Contracts directory not found: {self.contracts_dir}")

        for label, path in (
            ("contract_def.h", self.contract_def_path),
            ("qpi.h", self.qpi_path),
        ):
            if path is None:
                continue
            if not path.exists():
                raise ConfigError(f"{label} not found: {path}")
            if not path.is_file():
                raise ConfigError(f"Not a file: {path}")
