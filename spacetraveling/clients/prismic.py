import json
import logging
from typing import Any, Dict, Iterable, Optional
from urllib.parse import urlparse

import httpx

from spacetraveling.settings import Settings

logger = logging.getLogger(__name__)


class PrismicError(Exception):
    """Base error for content API failures that are not plain HTTP errors."""


class DocumentNotFoundError(PrismicError):
    pass


class InvalidCursorError(PrismicError):
    pass


class Predicates:
    """Query predicate builders for the Prismic search endpoint."""

    @staticmethod
    def at(path: str, value: str) -> str:
        return f"[at({path}, {json.dumps(value)})]"


class PrismicClient:
    def __init__(
        self,
        endpoint: str,
        access_token: Optional[str] = None,
        *,
        http: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.access_token = access_token or None
        self._http = http or httpx.AsyncClient(timeout=timeout)

    @property
    def host(self) -> str:
        return urlparse(self.endpoint).netloc

    async def master_ref(self) -> str:
        api = await self._get_json(self.endpoint, self._auth_params())
        for ref in api.get("refs", []):
            if ref.get("isMasterRef"):
                return ref["ref"]
        raise PrismicError(f"No master ref published by {self.endpoint}")

    async def query(
        self,
        predicates: Iterable[str],
        *,
        page_size: Optional[int] = None,
        page: Optional[int] = None,
        after: Optional[str] = None,
        orderings: Optional[str] = None,
        ref: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Search documents matching every predicate.

        Queries run against the master ref unless ``ref`` pins another
        release, such as a preview session.
        """
        params: Dict[str, Any] = {
            "ref": ref or await self.master_ref(),
            "q": f"[{''.join(predicates)}]",
        }
        if page_size is not None:
            params["pageSize"] = page_size
        if page is not None:
            params["page"] = page
        if after:
            params["after"] = after
        if orderings:
            params["orderings"] = orderings
        params.update(self._auth_params())

        logger.debug(f"Querying {params['q']} (ref={params['ref']})")
        return await self._get_json(f"{self.endpoint}/documents/search", params)

    async def get_by_uid(
        self, document_type: str, uid: str, *, ref: Optional[str] = None
    ) -> Dict[str, Any]:
        response = await self.query(
            [Predicates.at(f"my.{document_type}.uid", uid)], page_size=1, ref=ref
        )
        return self._first(response, f"{document_type}:{uid}")

    async def get_by_id(
        self, document_id: str, *, ref: Optional[str] = None
    ) -> Dict[str, Any]:
        response = await self.query(
            [Predicates.at("document.id", document_id)], page_size=1, ref=ref
        )
        return self._first(response, document_id)

    async def fetch_page(self, url: str) -> Dict[str, Any]:
        """Follow an opaque ``next_page`` URL returned by a previous search."""
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or parsed.netloc != self.host:
            raise InvalidCursorError(f"Cursor does not point at {self.host}: {url}")
        return await self._get_json(url, None)

    async def aclose(self) -> None:
        await self._http.aclose()

    def _auth_params(self) -> Dict[str, str]:
        if not self.access_token:
            return {}
        return {"access_token": self.access_token}

    async def _get_json(self, url: str, params: Optional[dict]) -> Dict[str, Any]:
        response = await self._http.get(url, params=params)
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _first(response: Dict[str, Any], key: str) -> Dict[str, Any]:
        results = response.get("results") or []
        if not results:
            raise DocumentNotFoundError(key)
        return results[0]


def create_prismic_client(settings: Settings) -> PrismicClient:
    """
    Build the content client for one application lifetime.
    The caller owns it and must ``aclose()`` it.
    """
    return PrismicClient(
        settings.PRISMIC_API_ENDPOINT,
        settings.PRISMIC_ACCESS_TOKEN,
        timeout=settings.PRISMIC_TIMEOUT,
    )
