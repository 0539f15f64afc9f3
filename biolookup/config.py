# biolookup/config.py

"""
Central configuration for biolookup.

REST endpoints, timeouts and the batch throttle are read from environment
variables, with a .env file in the working directory loaded first.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from e


# ---------------------------------------------------------
#  🌐 REST endpoints
# ---------------------------------------------------------

ENSEMBL_REST_URL = os.getenv("ENSEMBL_REST_URL", "https://rest.ensembl.org").rstrip("/")
UNIPROT_REST_URL = os.getenv("UNIPROT_REST_URL", "https://rest.uniprot.org").rstrip("/")

# Latin species name used by symbol lookups when none is given
DEFAULT_SPECIES = os.getenv("BIOLOOKUP_DEFAULT_SPECIES", "homo_sapiens")

# ---------------------------------------------------------
#  ⏱ Timeouts and throttling
# ---------------------------------------------------------

REQUEST_TIMEOUT = _env_float("BIOLOOKUP_REQUEST_TIMEOUT", "30")

# Fixed wait after every lookup in a batch (seconds)
BATCH_INTER_REQUEST_DELAY = _env_float("BIOLOOKUP_BATCH_DELAY", "1.0")
if BATCH_INTER_REQUEST_DELAY < 0:
    raise RuntimeError(
        "BIOLOOKUP_BATCH_DELAY must not be negative. "
        "Use 0 to disable throttling between batch lookups."
    )

# ---------------------------------------------------------
#  📦 CONFIG STRUCTURES
# ---------------------------------------------------------


@dataclass(frozen=True)
class EnsemblConfig:
    server: str = ENSEMBL_REST_URL
    timeout: float = REQUEST_TIMEOUT
    default_species: str = DEFAULT_SPECIES


@dataclass(frozen=True)
class UniProtConfig:
    server: str = UNIPROT_REST_URL
    timeout: float = REQUEST_TIMEOUT


@dataclass(frozen=True)
class BatchConfig:
    inter_request_delay: float = BATCH_INTER_REQUEST_DELAY


@dataclass(frozen=True)
class AppConfig:
    ensembl: EnsemblConfig
    uniprot: UniProtConfig
    batch: BatchConfig


# ---------------------------------------------------------
#  🔧 SINGLETON ACCESSOR
# ---------------------------------------------------------

_config_singleton: AppConfig | None = None


def get_config() -> AppConfig:
    global _config_singleton
    if _config_singleton is None:
        _config_singleton = AppConfig(
            ensembl=EnsemblConfig(),
            uniprot=UniProtConfig(),
            batch=BatchConfig(),
        )
    return _config_singleton
