"""
Ensembl REST API client.

Every call goes through ``get_json``, which takes the path-and-query part of
the URL ("extension") fully formed by the calling method. See
https://rest.ensembl.org/documentation for the endpoints used here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
import requests

from biolookup.config import get_config
from biolookup.logging_utils import get_logger
from biolookup.utils.errors import (
    InvalidIdentifierError,
    RecordLookupError,
    UnknownFeatureError,
)

logger = get_logger(__name__)

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}
ENSEMBL_ID_PREFIX = "ENS"

# Feature names accepted by /overlap/region
# https://rest.ensembl.org/documentation/info/overlap_region
OVERLAP_FEATURES = (
    "band",
    "gene",
    "transcript",
    "cds",
    "exon",
    "repeat",
    "simple",
    "misc",
    "variation",
    "somatic_variation",
    "structural_variation",
    "somatic_structural_variation",
    "constrained",
    "regulatory",
    "motif",
    "chipseq",
    "array_probe",
)


@dataclass(frozen=True)
class VariantRow:
    """One variant overlapping a gene, as returned by ``variants_for_gene_symbol``."""
    ensembl_gene_id: str
    gene_symbol: str
    variant_id: Optional[str]
    consequence_type: Optional[str]
    details: Dict[str, Any]


def validate_ensembl_id(identifier: str) -> str:
    """Strip ``identifier`` and check it carries the Ensembl stable-ID prefix."""
    identifier = (identifier or "").strip()
    if not identifier.startswith(ENSEMBL_ID_PREFIX):
        raise InvalidIdentifierError(
            f'The given identifier "{identifier}" is invalid!', key=identifier
        )
    return identifier


def validate_feature(feature: str) -> str:
    if feature not in OVERLAP_FEATURES:
        raise UnknownFeatureError(
            f'Feature "{feature}" is not a recognized feature name. '
            f"Recognized feature names: {', '.join(OVERLAP_FEATURES)}."
        )
    return feature


def _error_detail(response: Any) -> str:
    """Pull Ensembl's ``{"error": ...}`` message out of a failed response, if any."""
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict) and body.get("error"):
        return f": {body['error']}"
    return ""


def _lookup_id_ext(identifier: str, expand: bool) -> str:
    ext = f"/lookup/id/{quote(identifier)}"
    return ext + "?expand=1" if expand else ext


class EnsemblClient:
    """Blocking Ensembl REST client built on ``requests``."""

    def __init__(self, server: Optional[str] = None, timeout: Optional[float] = None):
        cfg = get_config().ensembl
        self.server = (server or cfg.server).rstrip("/")
        self.timeout = cfg.timeout if timeout is None else timeout
        self.default_species = cfg.default_species

    def get_json(self, ext: str) -> Any:
        """
        GET ``server + ext`` and return the decoded JSON body.

        Raises:
            RecordLookupError: network failure, non-success status, or a body
                that is not JSON
        """
        url = self.server + ext
        logger.debug("[ENSEMBL] GET %s", url)
        try:
            response = requests.get(url, headers=JSON_HEADERS, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise RecordLookupError(f"Ensembl request failed for {ext}: {e!r}", url=url) from e

        if not response.ok:
            raise RecordLookupError(
                f"Ensembl returned HTTP {response.status_code} for {ext}{_error_detail(response)}",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise RecordLookupError(f"Ensembl returned a non-JSON body for {ext}", url=url) from e

    def lookup_id(self, identifier: str, expand: bool = True) -> Dict[str, Any]:
        """
        Species, database and coordinates for an Ensembl stable ID
        (gene, transcript, protein, ...).

        Only identifiers starting with "ENS" are accepted.
        """
        identifier = validate_ensembl_id(identifier)
        return self.get_json(_lookup_id_ext(identifier, expand))

    def lookup_symbol(
        self, symbol: str, species: Optional[str] = None, expand: bool = True
    ) -> Dict[str, Any]:
        """Details for a symbol (gene name, for example) in a species such as "mus_musculus"."""
        symbol = (symbol or "").strip()
        if not symbol:
            raise InvalidIdentifierError("Symbol must not be empty", key=symbol)
        species = species or self.default_species
        ext = f"/lookup/symbol/{quote(species)}/{quote(symbol)}"
        if expand:
            ext += "?expand=1"
        return self.get_json(ext)

    def overlap_region(
        self,
        species: str,
        chromosome: str,
        feature: str,
        start: int,
        end: int,
    ) -> List[Dict[str, Any]]:
        """
        All features of one type overlapping a genomic region.

        The returned list can be very large for long regions.
        """
        validate_feature(feature)
        start, end = int(start), int(end)
        if start > end:
            raise ValueError(f"Region start {start} is after end {end}")
        ext = (
            f"/overlap/region/{quote(species)}/{quote(str(chromosome))}:{start}-{end}"
            f"?feature={feature}"
        )
        return self.get_json(ext)

    def variants_for_gene_symbol(
        self, symbol: str, species: Optional[str] = None
    ) -> List[VariantRow]:
        """
        Variants (structural variants excluded) overlapping the gene named ``symbol``.

        The gene's chromosome and coordinates come from a symbol lookup; the
        variants from an overlap query on that region.
        """
        species = species or self.default_species
        gene = self.lookup_symbol(symbol, species)
        try:
            gene_id = gene["id"]
            chromosome = gene["seq_region_name"]
            start = int(gene["start"])
            end = int(gene["end"])
        except (KeyError, TypeError, ValueError) as e:
            raise RecordLookupError(
                f"Gene record for {symbol} has no usable location", key=symbol
            ) from e

        variations = self.overlap_region(species, chromosome, "variation", start, end)
        logger.info(
            "[ENSEMBL] %d variants overlap %s (%s %s:%d-%d)",
            len(variations),
            symbol,
            gene_id,
            chromosome,
            start,
            end,
        )
        return [
            VariantRow(
                ensembl_gene_id=gene_id,
                gene_symbol=symbol,
                variant_id=variation.get("id"),
                consequence_type=variation.get("consequence_type"),
                details=variation,
            )
            for variation in variations
        ]


class AsyncEnsemblClient:
    """
    Ensembl client built on ``httpx.AsyncClient``.

    Pass ``http_client`` to reuse a client (or a mock transport); otherwise a
    short-lived client is opened per request. The configured timeout
    applies to every request either way.
    """

    def __init__(
        self,
        server: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        cfg = get_config().ensembl
        self.server = (server or cfg.server).rstrip("/")
        self.timeout = cfg.timeout if timeout is None else timeout
        self._http_client = http_client

    async def _get(self, url: str) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.get(url, headers=JSON_HEADERS, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(url, headers=JSON_HEADERS)

    async def get_json(self, ext: str) -> Any:
        url = self.server + ext
        logger.debug("[ENSEMBL] GET %s", url)
        try:
            response = await self._get(url)
        except httpx.HTTPError as e:
            raise RecordLookupError(f"Ensembl request failed for {ext}: {e!r}", url=url) from e

        if not response.is_success:
            raise RecordLookupError(
                f"Ensembl returned HTTP {response.status_code} for {ext}{_error_detail(response)}",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise RecordLookupError(f"Ensembl returned a non-JSON body for {ext}", url=url) from e

    async def lookup_id(self, identifier: str, expand: bool = True) -> Dict[str, Any]:
        identifier = validate_ensembl_id(identifier)
        return await self.get_json(_lookup_id_ext(identifier, expand))


class EnsemblIdLookup:
    """Lookup service resolving Ensembl stable IDs."""

    def __init__(self, client: Optional[EnsemblClient] = None, expand: bool = True):
        self.client = client or EnsemblClient()
        self.expand = expand

    def fetch(self, key: str) -> Dict[str, Any]:
        return self.client.lookup_id(key, expand=self.expand)


class EnsemblSymbolLookup:
    """Lookup service resolving gene symbols within one species."""

    def __init__(
        self,
        client: Optional[EnsemblClient] = None,
        species: Optional[str] = None,
        expand: bool = True,
    ):
        self.client = client or EnsemblClient()
        self.species = species or self.client.default_species
        self.expand = expand

    def fetch(self, key: str) -> Dict[str, Any]:
        return self.client.lookup_symbol(key, self.species, expand=self.expand)


class AsyncEnsemblIdLookup:
    def __init__(self, client: Optional[AsyncEnsemblClient] = None, expand: bool = True):
        self.client = client or AsyncEnsemblClient()
        self.expand = expand

    async def fetch(self, key: str) -> Dict[str, Any]:
        return await self.client.lookup_id(key, expand=self.expand)


__all__ = [
    "OVERLAP_FEATURES",
    "VariantRow",
    "EnsemblClient",
    "AsyncEnsemblClient",
    "EnsemblIdLookup",
    "EnsemblSymbolLookup",
    "AsyncEnsemblIdLookup",
    "validate_ensembl_id",
    "validate_feature",
]
