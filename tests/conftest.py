from spacetraveling.clients.prismic import DocumentNotFoundError


def make_post_doc(
    uid,
    *,
    doc_id=None,
    title=None,
    subtitle="A subtitle",
    author="Joseph Oliveira",
    first_publication_date="2021-03-15T19:25:28+0000",
    last_publication_date="2021-03-25T19:27:35+0000",
    content=None,
):
    """Prismic search result shaped like a `post` document."""
    return {
        "id": doc_id or f"id-{uid}",
        "uid": uid,
        "type": "post",
        "first_publication_date": first_publication_date,
        "last_publication_date": last_publication_date,
        "data": {
            "title": title or uid.replace("-", " ").title(),
            "subtitle": subtitle,
            "author": author,
            "banner": {"url": f"https://images.prismic.io/{uid}.png", "alt": None},
            "content": content
            if content is not None
            else [
                {
                    "heading": "Proin et varius",
                    "body": [
                        {"type": "paragraph", "text": "Lorem ipsum dolor", "spans": []}
                    ],
                }
            ],
        },
    }


def make_search_response(results, next_page=None, page=1, total_pages=1):
    return {
        "page": page,
        "results_per_page": len(results),
        "total_pages": total_pages,
        "next_page": next_page,
        "prev_page": None,
        "results": list(results),
    }


class FakePrismicClient:
    """
    Minimal content client stand-in.
    Responses are served in order from `responses`; every call is recorded.
    """

    def __init__(self, responses=None, docs_by_id=None):
        self.responses = list(responses or [])
        self.docs_by_id = docs_by_id or {}
        self.calls = []
        self.closed = False

    async def query(self, predicates, **kwargs):
        self.calls.append(("query", list(predicates), kwargs))
        return self.responses.pop(0)

    async def get_by_uid(self, document_type, uid, *, ref=None):
        self.calls.append(("get_by_uid", document_type, uid, ref))
        for doc in self.docs_by_id.values():
            if doc.get("uid") == uid:
                return doc
        raise DocumentNotFoundError(uid)

    async def get_by_id(self, document_id, *, ref=None):
        self.calls.append(("get_by_id", document_id, ref))
        if document_id not in self.docs_by_id:
            raise DocumentNotFoundError(document_id)
        return self.docs_by_id[document_id]

    async def fetch_page(self, url):
        self.calls.append(("fetch_page", url))
        return self.responses.pop(0)

    async def aclose(self):
        self.closed = True


class FakePostsRepo:
    """
    Minimal repo stand-in used in service and site tests.
    """

    def __init__(self, docs=None, first_page=None, neighbors=None, pages=None):
        self.docs = list(docs or [])
        self._first_page = first_page
        self.neighbors = neighbors or {}
        self.pages = pages or {}
        self.calls = []

    async def first_page(self, *, ref=None):
        self.calls.append(("first_page", ref))
        return self._first_page or make_search_response(self.docs)

    async def list_all_posts(self):
        self.calls.append(("list_all_posts",))
        return list(self.docs)

    async def get_post(self, uid, *, ref=None):
        self.calls.append(("get_post", uid, ref))
        for doc in self.docs:
            if doc["uid"] == uid:
                return doc
        raise DocumentNotFoundError(uid)

    async def get_neighbors(self, document_id, *, ref=None):
        self.calls.append(("get_neighbors", document_id, ref))
        return self.neighbors.get(document_id, ([], []))

    async def fetch_page(self, cursor):
        self.calls.append(("fetch_page", cursor))
        return self.pages[cursor]
