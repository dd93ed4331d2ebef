from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PostSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    uid: str
    first_publication_date: Optional[str] = None
    title: str
    subtitle: str = ""
    author: str = ""


class Banner(BaseModel):
    url: str
    alt: Optional[str] = None


class ContentSection(BaseModel):
    heading: str = ""
    body: List[dict] = Field(default_factory=list)


class PostDetail(PostSummary):
    id: str
    last_publication_date: Optional[str] = None
    banner: Optional[Banner] = None
    content: List[ContentSection] = Field(default_factory=list)


class PostPage(BaseModel):
    results: List[PostSummary] = Field(default_factory=list)
    next_page: Optional[str] = None
    page: int = 1


class NavigationLink(BaseModel):
    uid: str
    title: str

    @property
    def href(self) -> str:
        return f"/post/{self.uid}"


class NavigationPair(BaseModel):
    previous: Optional[NavigationLink] = None
    next: Optional[NavigationLink] = None


class PostCard(BaseModel):
    uid: str
    title: str
    subtitle: str = ""
    author: str = ""
    first_publication_date: Optional[str] = None
    href: str


class SectionView(BaseModel):
    heading: str
    html: str


class PostView(BaseModel):
    uid: str
    title: str
    author: str = ""
    banner: Optional[Banner] = None
    first_publication_date: Optional[str] = None
    edited_at: Optional[str] = None
    reading_time: int = 0
    sections: List[SectionView] = Field(default_factory=list)
    navigation: NavigationPair = Field(default_factory=NavigationPair)
    preview: bool = False


class MorePostsResponse(BaseModel):
    results: List[PostCard] = Field(default_factory=list)
    next_page: Optional[str] = None
