"""
Batch identifier resolution against Ensembl and UniProt.

Each function resolves a list of identifiers one at a time with a fixed
pause after every request, returning a BatchResult with one outcome per
identifier. Invalid or unknown identifiers become failures in place rather
than aborting the batch.
"""

import threading
from typing import Iterable, Optional

from biolookup.integrations.ensembl import EnsemblClient, EnsemblIdLookup, EnsemblSymbolLookup
from biolookup.integrations.uniprot import UniProtClient, UniProtEntryLookup
from biolookup.logging_utils import get_logger
from biolookup.models.outcomes import BatchResult
from biolookup.services.batch_fetcher import BatchFetcher, normalize_keys

logger = get_logger(__name__)


def resolve_ensembl_ids(
    ids: Iterable[str],
    client: Optional[EnsemblClient] = None,
    delay: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
) -> BatchResult:
    """
    Look up species, database and location for each Ensembl stable ID.

    Args:
        ids: Ensembl identifiers (ENSG..., ENST..., ENSP..., ...)
        client: Ensembl client to use (default: configured server)
        delay: Seconds to pause after each request (default: configured batch delay)
        cancel_event: Stops issuing requests once set

    Returns:
        BatchResult aligned with ``ids``
    """
    ids = normalize_keys(ids)
    logger.info("[ID-RESOLUTION] Resolving %d Ensembl IDs", len(ids))
    fetcher = BatchFetcher(EnsemblIdLookup(client), delay=delay)
    return fetcher.fetch_all(ids, cancel_event=cancel_event)


def resolve_gene_symbols(
    symbols: Iterable[str],
    species: Optional[str] = None,
    client: Optional[EnsemblClient] = None,
    delay: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
) -> BatchResult:
    """Look up Ensembl gene records for each symbol in one species."""
    symbols = normalize_keys(symbols)
    lookup = EnsemblSymbolLookup(client, species=species)
    logger.info(
        "[ID-RESOLUTION] Resolving %d gene symbols in %s", len(symbols), lookup.species
    )
    fetcher = BatchFetcher(lookup, delay=delay)
    return fetcher.fetch_all(symbols, cancel_event=cancel_event)


def fetch_uniprot_entries(
    accessions: Iterable[str],
    fmt: str = "xml",
    client: Optional[UniProtClient] = None,
    delay: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
) -> BatchResult:
    """Retrieve the full UniProtKB entry (XML text or JSON dict) for each accession."""
    accessions = normalize_keys(accessions)
    logger.info("[ID-RESOLUTION] Fetching %d UniProt entries (%s)", len(accessions), fmt)
    fetcher = BatchFetcher(UniProtEntryLookup(client, fmt=fmt), delay=delay)
    return fetcher.fetch_all(accessions, cancel_event=cancel_event)


__all__ = ["resolve_ensembl_ids", "resolve_gene_symbols", "fetch_uniprot_entries"]
