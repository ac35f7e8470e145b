from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

LIST_ITEM = "list-item"


class PostSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    uid: str
    first_publication_date: Optional[str] = None  # display string, already formatted
    title: str
    subtitle: Optional[str] = None
    author: str


class PostsPagination(BaseModel):
    next_page: Optional[str] = None
    results: List[PostSummary] = Field(default_factory=list)


class Block(BaseModel):
    type: str
    text: str = ""
    spans: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def is_list_item(self) -> bool:
        return self.type == LIST_ITEM


class Section(BaseModel):
    heading: Optional[str] = None
    body: List[Block] = Field(default_factory=list)


class Banner(BaseModel):
    url: str


class PostDetail(BaseModel):
    uid: str
    first_publication_date: Optional[str] = None
    last_publication_date: Optional[str] = None
    title: str
    subtitle: Optional[str] = None
    banner: Banner
    author: str
    content: List[Section] = Field(default_factory=list)


class AdjacentPost(BaseModel):
    uid: str
    title: str


class PostPageProps(BaseModel):
    post: PostDetail
    published_on: Optional[str] = None
    edited_on: Optional[str] = None
    reading_time: int
    previous_post: Optional[AdjacentPost] = None
    next_post: Optional[AdjacentPost] = None
