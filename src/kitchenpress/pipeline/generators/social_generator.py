"""Social post drafting, one post per platform."""

from typing import Dict, List

from kitchenpress.core.content import (
    GeneratedContent,
    SocialDraft,
    SocialPost,
    SocialPostDraft,
    SocialPostsResponse,
    SocialRequest,
)
from kitchenpress.core.enums import PLATFORM_CHARACTER_LIMITS, ContentType, SocialPlatform
from kitchenpress.pipeline.generators.base import BaseGenerator
from kitchenpress.utils.logging import get_logger
from kitchenpress.utils.text_utils import normalize_hashtag

logger = get_logger(__name__)

GUIDELINE_SCOPE = "social_posts"
MAX_HASHTAGS = 5


def render_post(content: str, hashtags: List[str]) -> str:
    """Text as it would be published: content, then hashtags not already in it."""
    extra = [tag for tag in hashtags if tag.lower() not in content.lower()]
    if not extra:
        return content
    return f"{content}\n\n{' '.join(extra)}"


class SocialGenerator(BaseGenerator):
    """Drafts social posts about a piece of content for several platforms."""

    prompt_name = "social_posts"
    module = "social"

    default_system_prompt = """You write social posts for a restaurant-industry brand.

Voice: {{ style.voice }}
Audience: {{ style.audience }}

{% for g in guidelines %}
- {{ g.guideline_name }}: {{ g.guideline_description }}
{% endfor %}

Never use these phrases: {{ style.banned_phrases | join(", ") }}."""

    default_user_prompt_template = """Write one post per platform about this:

{{ source_text }}
{% if source_url %}
Link: {{ source_url }}
{% endif %}

Platforms and maximum lengths (including hashtags):
{% for p in platforms %}
- {{ p.name }}: {{ p.limit }} characters
{% endfor %}

Respond with JSON: {"posts": [{"platform": str, "content": str, "hashtags": [str]}]}"""

    async def generate(self, request: SocialRequest) -> SocialDraft:
        """Draft, check and store social posts.

        Args:
            request: Source text and target platforms.

        Returns:
            Stored posts with limit checks and style warnings.

        Raises:
            ContentGenerationError: If drafting fails.
            DatabaseError: If the knowledge base or content store fails.
        """
        style_guide = self.style_guides.get_style_guide()
        guard = self.build_guard(style_guide)

        logger.info(
            "generating_social_posts",
            topic=request.topic,
            platforms=[p.value for p in request.platforms],
        )

        messages = self.render_messages(
            source_text=request.source_text,
            source_url=request.source_url,
            platforms=[
                {"name": p.value, "limit": PLATFORM_CHARACTER_LIMITS[p]}
                for p in request.platforms
            ],
            style=style_guide,
            guidelines=style_guide.rules_for(GUIDELINE_SCOPE),
        )

        response = await self.complete(messages, "social_posts", SocialPostsResponse)
        drafted: Dict[str, SocialPostDraft] = {}
        for post in response["content"].posts:
            drafted.setdefault(post.platform.strip().lower(), post)

        posts: List[SocialPost] = []
        warnings: List[str] = []
        for platform in request.platforms:
            raw = drafted.get(platform.value)
            if raw is None:
                warnings.append(f"No post drafted for {platform.value}")
                continue
            posts.append(self._finish_post(platform, raw, warnings, guard))

        draft = SocialDraft(posts=posts, style_warnings=list(dict.fromkeys(warnings)))

        draft.id = self.persist(
            GeneratedContent(
                content_type=ContentType.SOCIAL,
                topic=request.topic,
                title=None,
                body="\n\n---\n\n".join(
                    f"[{p.platform.value}]\n{render_post(p.content, p.hashtags)}"
                    for p in posts
                ),
                payload=draft.model_dump(mode="json", exclude={"id"}),
                source_urls=[request.source_url] if request.source_url else [],
                provider=response.get("provider"),
                model=response.get("model"),
            )
        )

        logger.info(
            "social_posts_generated",
            content_id=draft.id,
            posts=len(draft.posts),
            over_limit=sum(1 for p in draft.posts if not p.within_limit),
        )
        return draft

    def _finish_post(
        self,
        platform: SocialPlatform,
        raw: SocialPostDraft,
        warnings: List[str],
        guard,
    ) -> SocialPost:
        content, post_warnings = guard.apply(raw.content.strip(), GUIDELINE_SCOPE)
        warnings.extend(post_warnings)

        hashtags: List[str] = []
        for tag in raw.hashtags:
            normalized = normalize_hashtag(tag)
            if normalized and normalized not in hashtags:
                hashtags.append(normalized)
        hashtags, tag_warnings = guard.filter_hashtags(hashtags)
        warnings.extend(tag_warnings)
        hashtags = hashtags[:MAX_HASHTAGS]

        limit = PLATFORM_CHARACTER_LIMITS[platform]
        character_count = len(render_post(content, hashtags))
        if character_count > limit:
            warnings.append(
                f"{platform.value} post is {character_count} characters (limit {limit})"
            )

        return SocialPost(
            platform=platform,
            content=content,
            hashtags=hashtags,
            character_count=character_count,
            within_limit=character_count <= limit,
        )
