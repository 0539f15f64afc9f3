"""UniProt REST API client."""
from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

import requests

from biolookup.config import get_config
from biolookup.logging_utils import get_logger
from biolookup.utils.errors import InvalidIdentifierError, RecordLookupError

logger = get_logger(__name__)

ENTRY_FORMATS = {
    "xml": "application/xml",
    "json": "application/json",
}


class UniProtClient:
    def __init__(self, server: Optional[str] = None, timeout: Optional[float] = None):
        cfg = get_config().uniprot
        self.server = (server or cfg.server).rstrip("/")
        self.timeout = cfg.timeout if timeout is None else timeout

    def entry_url(self, accession: str, fmt: str = "xml") -> str:
        return f"{self.server}/uniprotkb/{quote(accession)}.{fmt}"

    def get_entry(self, accession: str, fmt: str = "xml") -> Any:
        """
        Full UniProtKB entry for an accession such as "P01589".

        Returns the XML document as text for ``fmt="xml"`` (callers parse it
        themselves) or the decoded dict for ``fmt="json"``.
        """
        if fmt not in ENTRY_FORMATS:
            raise ValueError(f"Unsupported UniProt format {fmt!r}; use one of {sorted(ENTRY_FORMATS)}")
        accession = (accession or "").strip()
        if not accession:
            raise InvalidIdentifierError("UniProt accession must not be empty", key=accession)

        url = self.entry_url(accession, fmt)
        logger.debug("[UNIPROT] GET %s", url)
        try:
            response = requests.get(url, headers={"Accept": ENTRY_FORMATS[fmt]}, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise RecordLookupError(
                f"UniProt request failed for {accession}: {e!r}", key=accession, url=url
            ) from e

        if not response.ok:
            raise RecordLookupError(
                f"UniProt returned HTTP {response.status_code} for {accession}",
                key=accession,
                url=url,
                status_code=response.status_code,
            )

        if fmt == "xml":
            return response.text
        try:
            return response.json()
        except ValueError as e:
            raise RecordLookupError(
                f"UniProt returned a non-JSON body for {accession}", key=accession, url=url
            ) from e


class UniProtEntryLookup:
    """Lookup service returning full UniProtKB entries."""

    def __init__(self, client: Optional[UniProtClient] = None, fmt: str = "xml"):
        if fmt not in ENTRY_FORMATS:
            raise ValueError(f"Unsupported UniProt format {fmt!r}; use one of {sorted(ENTRY_FORMATS)}")
        self.client = client or UniProtClient()
        self.fmt = fmt

    def fetch(self, key: str) -> Any:
        return self.client.get_entry(key, self.fmt)


__all__ = ["UniProtClient", "UniProtEntryLookup", "ENTRY_FORMATS"]
