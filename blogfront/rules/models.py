from typing import Literal

from pydantic import BaseModel, Field

from blogfront.components.document import RenderConfig


class ProjectRules(BaseModel):
    name: str
    rules_version: str


class SiteRules(BaseModel):
    title: str
    tagline: str = ""
    base_url: str = "http://localhost:8000"


class ContentSourceRules(BaseModel):
    # "hygraph" talks GraphQL over HTTP; "memory" is the in-process dev store
    kind: Literal["hygraph", "memory"] = "hygraph"
    endpoint_env: str = "HYGRAPH_ENDPOINT"
    token_env: str = "HYGRAPH_TOKEN"
    timeout_seconds: float = 10.0
    publish_stages: list[str] = Field(default_factory=lambda: ["PUBLISHED"])


class FeedRules(BaseModel):
    posts_per_page: int = Field(default=5, ge=1)
    max_per_page: int = Field(default=50, ge=1)


class LinkRules(BaseModel):
    target: str = "_blank"
    noopener: bool = True
    noreferrer: bool = True


class ImageRules(BaseModel):
    width: int = 700
    height: int = 475
    loading: str = "lazy"
    alt_fallback: str = "Image"


class VideoRules(BaseModel):
    mime_type: str = "video/mp4"
    fallback_text: str = "Your browser does not support the video tag."


class RenderRules(BaseModel):
    links: LinkRules = Field(default_factory=LinkRules)
    images: ImageRules = Field(default_factory=ImageRules)
    videos: VideoRules = Field(default_factory=VideoRules)
    forbidden_protocols: list[str] = Field(
        default_factory=lambda: ["javascript:", "data:", "vbscript:"]
    )
    heading_ids: bool = True

    def get_render_config(self) -> RenderConfig:
        return RenderConfig(
            link_target=self.links.target,
            add_noopener=self.links.noopener,
            add_noreferrer=self.links.noreferrer,
            image_width=self.images.width,
            image_height=self.images.height,
            image_loading=self.images.loading,
            image_alt_fallback=self.images.alt_fallback,
            video_mime_type=self.videos.mime_type,
            video_fallback_text=self.videos.fallback_text,
            forbid_protocols=frozenset(p.lower() for p in self.forbidden_protocols),
            add_heading_ids=self.heading_ids,
        )


class Rules(BaseModel):
    project: ProjectRules
    site: SiteRules
    content_source: ContentSourceRules = Field(default_factory=ContentSourceRules)
    feed: FeedRules = Field(default_factory=FeedRules)
    render: RenderRules = Field(default_factory=RenderRules)

    # Rules satisfies both component RulesPorts directly

    def get_render_config(self) -> RenderConfig:
        return self.render.get_render_config()

    def get_posts_per_page(self) -> int:
        return self.feed.posts_per_page

    def get_max_per_page(self) -> int:
        return self.feed.max_per_page

    def get_publish_stages(self) -> list[str]:
        return list(self.content_source.publish_stages)
