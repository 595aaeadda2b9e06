import asyncio
import logging
from typing import List, Optional, Tuple

from spacetraveling.clients.prismic import PrismicClient, Predicates

logger = logging.getLogger(__name__)

POST_TYPE = "post"
PREVIOUS_ORDERING = "[document.first_publication_date desc]"
NEXT_ORDERING = "[document.first_publication_date]"


class PrismicPostsRepo:
    def __init__(
        self, client: PrismicClient, page_size: int = 1, paths_page_size: int = 100
    ):
        self.client = client
        self.page_size = page_size
        self.paths_page_size = paths_page_size

    @staticmethod
    def _is_post() -> List[str]:
        return [Predicates.at("document.type", POST_TYPE)]

    async def first_page(self, *, ref: Optional[str] = None) -> dict:
        return await self.client.query(
            self._is_post(), page_size=self.page_size, ref=ref
        )

    async def list_all_posts(self) -> List[dict]:
        docs: List[dict] = []
        page = 1
        while True:
            response = await self.client.query(
                self._is_post(), page_size=self.paths_page_size, page=page
            )
            docs.extend(response.get("results", []))
            if page >= response.get("total_pages", 1) or not response.get(
                "next_page"
            ):
                return docs
            page += 1

    async def get_post(self, uid: str, *, ref: Optional[str] = None) -> dict:
        return await self.client.get_by_uid(POST_TYPE, uid, ref=ref)

    async def get_neighbors(
        self, document_id: str, *, ref: Optional[str] = None
    ) -> Tuple[List[dict], List[dict]]:
        """Posts published immediately before and after ``document_id``."""
        previous, following = await asyncio.gather(
            self._adjacent(document_id, PREVIOUS_ORDERING, ref),
            self._adjacent(document_id, NEXT_ORDERING, ref),
        )
        return previous.get("results", []), following.get("results", [])

    async def fetch_page(self, cursor: str) -> dict:
        return await self.client.fetch_page(cursor)

    async def _adjacent(
        self, document_id: str, orderings: str, ref: Optional[str]
    ) -> dict:
        return await self.client.query(
            self._is_post(),
            page_size=1,
            after=document_id,
            orderings=orderings,
            ref=ref,
        )
