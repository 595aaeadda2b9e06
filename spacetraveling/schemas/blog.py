from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class PostData(BaseModel):
    title: str = ""
    subtitle: Optional[str] = None
    author: str = ""


class PostSummary(BaseModel):
    uid: Optional[str] = None
    first_publication_date: Optional[str] = None
    data: PostData


class PostPagination(BaseModel):
    next_page: Optional[str] = None
    results: List[PostSummary] = Field(default_factory=list)


class HomeProps(BaseModel):
    posts_pagination: PostPagination
    preview: bool = False


class Banner(BaseModel):
    url: Optional[str] = None
    alt: Optional[str] = None


class RichTextSpan(BaseModel):
    start: int
    end: int
    type: str
    data: Optional[Dict[str, Any]] = None


class RichTextBlock(BaseModel):
    # image and embed blocks carry url/alt/oembed alongside type
    model_config = ConfigDict(extra="allow")

    type: str
    text: str = ""
    spans: List[RichTextSpan] = Field(default_factory=list)


class ContentSection(BaseModel):
    heading: str = ""
    body: List[RichTextBlock] = Field(default_factory=list)


class PostDetailData(PostData):
    banner: Banner = Field(default_factory=Banner)
    content: List[ContentSection] = Field(default_factory=list)


class PostDetail(BaseModel):
    id: Optional[str] = None
    uid: Optional[str] = None
    first_publication_date: Optional[str] = None
    last_publication_date: Optional[str] = None
    data: PostDetailData


class NavigationPostData(BaseModel):
    title: str = ""


class NavigationPost(BaseModel):
    uid: str
    data: NavigationPostData


class Navigation(BaseModel):
    prev_post: List[NavigationPost] = Field(default_factory=list)
    next_post: List[NavigationPost] = Field(default_factory=list)


class PostProps(BaseModel):
    post: PostDetail
    navigation: Navigation = Field(default_factory=Navigation)
    preview: bool = False


class StaticPaths(BaseModel):
    paths: List[str] = Field(default_factory=list)
    fallback: bool = True


class ListingStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    EXHAUSTED = "exhausted"
    ERROR = "error"


class ListingState(BaseModel):
    model_config = ConfigDict(frozen=True)

    posts: Tuple[PostSummary, ...] = ()
    next_page: Optional[str] = None
    current_page: int = 1
    status: ListingStatus = ListingStatus.IDLE

    @property
    def can_load_more(self) -> bool:
        return bool(self.next_page) and self.status != ListingStatus.LOADING
