"""
A module for managing signer configuration.

The configuration is read from a YAML file and validated with Pydantic. It
names the networks a transaction may target, so that callers look chain ids
up by name instead of hard-coding them.

Classes:
- NetworkConfig: A named network and its chain id.
- SignerConfig: The overall configuration.

Functions:
- load_config: Reads a `SignerConfig` from a YAML file.
- get_stream_logger: Returns a logger writing to stdout.
- configure_logging: Applies `SignerConfig.log_level` to the package logger.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

DEFAULT_LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


class NetworkConfig(BaseModel):
    """
    Represents a network transactions can be signed for.

    Attributes:
    - name (str): The name used to refer to the network.
    - chain_id (int): The EIP-155 chain id of the network.
    """

    name: str
    chain_id: int = Field(gt=0)


class SignerConfig(BaseModel):
    """
    Represents the overall signer configuration.

    Attributes:
    - default_network (str): Network used when none is named.
    - networks (List[NetworkConfig]): Known networks.
    - log_level (str): Level of the package logger, see `configure_logging`.
    """

    default_network: str = "mainnet"
    networks: List[NetworkConfig] = [
        NetworkConfig(name="mainnet", chain_id=1),
        NetworkConfig(name="sepolia", chain_id=11155111),
        NetworkConfig(name="holesky", chain_id=17000),
    ]
    log_level: str = "WARNING"

    def chain_id_for(self, name: Optional[str] = None) -> int:
        """Return the chain id of the named network, or of the default."""
        if name is None:
            name = self.default_network
        for network in self.networks:
            if network.name == name:
                return network.chain_id
        raise KeyError(f"unknown network '{name}'")


def load_config(path: Path) -> SignerConfig:
    """
    Load and validate a `SignerConfig` from the YAML file at `path`.
    """
    if not path.exists():
        raise FileNotFoundError(
            f"The configuration file '{path}' does not exist."
        )

    with path.open("r") as file:
        config_data = yaml.safe_load(file) or {}
    try:
        return SignerConfig(**config_data)
    except (TypeError, ValidationError) as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def get_stream_logger(name: str, level: str = "WARNING") -> logging.Logger:
    """
    Get a logger that writes to stdout.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level=level)
        stream_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(DEFAULT_LOG_FORMAT)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    return logger


def configure_logging(config: SignerConfig) -> logging.Logger:
    """
    Attach a stdout handler to the package logger at `config.log_level`.
    Every module logger in the package propagates to it.
    """
    logger = get_stream_logger(__package__, config.log_level)
    logger.setLevel(config.log_level)
    return logger
