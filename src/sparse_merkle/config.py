"""
Global configuration for the sparse Merkle tree package.

This module contains environment-specific settings that apply across all modules.
"""

import os

_SUPPORTED_SMT_ENVS: list[str] = ["prod", "test"]

SMT_ENV = os.environ.get("SMT_ENV", "prod").lower()
"""The environment flag ('prod' or 'test'). Defaults to 'prod'."""

if SMT_ENV not in _SUPPORTED_SMT_ENVS:
    raise ValueError(
        f"Invalid SMT_ENV environment variable: '{SMT_ENV}'. "
        f"Supported values: {_SUPPORTED_SMT_ENVS}"
    )
