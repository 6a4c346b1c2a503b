"""Blog post drafting from recent restaurant-industry news."""

from kitchenpress.core.content import (
    BlogDraft,
    BlogDraftResponse,
    BlogRequest,
    GeneratedContent,
)
from kitchenpress.core.enums import ContentType, RestrictionLevel
from kitchenpress.pipeline.generators.base import BaseGenerator
from kitchenpress.utils.logging import get_logger
from kitchenpress.utils.text_utils import clean_whitespace, count_words, truncate_text

logger = get_logger(__name__)

GUIDELINE_SCOPE = "blog_content"


class BlogGenerator(BaseGenerator):
    """Drafts a blog post in the house voice from a handful of news articles."""

    prompt_name = "blog_post"
    module = "blog"

    default_system_prompt = """You write blog posts for restaurant owners and operators.

Voice: {{ style.voice }}
Audience: {{ style.audience }}

Formatting rules:
{% for rule in style.formatting_rules %}
- {{ rule }}
{% endfor %}

Brand guidelines:
{% for g in guidelines %}
- {{ g.guideline_name }}: {{ g.guideline_description }}
  Do: {{ g.do_examples | join(" | ") }}
  Don't: {{ g.dont_examples | join(" | ") }}
{% endfor %}

Never use these phrases: {{ style.banned_phrases | join(", ") }}.
{% if avoid_competitors %}
Never mention these companies: {{ avoid_competitors | join(", ") }}.
{% endif %}"""

    default_user_prompt_template = """Write a blog post of about {{ target_word_count }} words on "{{ topic }}".

Base it on these articles:
{% for a in articles %}
- {{ a.title }} ({{ a.url }}){% if a.summary %}: {{ a.summary }}{% endif %}

{% endfor %}
{% if trends %}
Industry context:
{% for t in trends %}
- {{ t.trend_description }} (significance {{ t.significance_level }}/10)
{% endfor %}
{% endif %}
{% if entities %}
Relevant players:
{% for e in entities %}
- {{ e.name }}: {{ e.description }}. {{ e.key_facts | join("; ") }}
{% endfor %}
{% endif %}
{% if keywords %}
Work in these keywords naturally: {{ keywords | join(", ") }}.
{% endif %}

Respond with JSON: {"title": str, "content": markdown str, "meta_description": str, "tags": [str]}"""

    async def generate(self, request: BlogRequest) -> BlogDraft:
        """Draft, check and store a blog post.

        Args:
            request: Topic, source articles and options.

        Returns:
            Stored draft with style warnings.

        Raises:
            ContentGenerationError: If drafting fails.
            DatabaseError: If the knowledge base or content store fails.
        """
        style_guide = self.style_guides.get_style_guide()
        context = self.knowledge.get_industry_context(request.topic)
        guard = self.build_guard(style_guide)

        logger.info(
            "generating_blog_post",
            topic=request.topic,
            articles=len(request.articles),
            target_word_count=request.target_word_count,
        )

        messages = self.render_messages(
            topic=request.topic,
            articles=request.articles,
            keywords=request.keywords,
            target_word_count=request.target_word_count,
            style=style_guide,
            guidelines=style_guide.rules_for(GUIDELINE_SCOPE),
            trends=context.trends,
            entities=context.entities,
            avoid_competitors=[
                r.company_name
                for r in guard.restrictions
                if r.restriction_level == RestrictionLevel.FULL_BLACKLIST
            ],
        )

        response = await self.complete(messages, "blog_draft", BlogDraftResponse)
        raw: BlogDraftResponse = response["content"]

        title, title_warnings = guard.apply(clean_whitespace(raw.title), GUIDELINE_SCOPE)
        content, content_warnings = guard.apply(raw.content.strip(), GUIDELINE_SCOPE)
        meta, meta_warnings = guard.apply(
            truncate_text(clean_whitespace(raw.meta_description), 160), GUIDELINE_SCOPE
        )
        warnings = list(dict.fromkeys(title_warnings + content_warnings + meta_warnings))

        draft = BlogDraft(
            title=title,
            content=content,
            meta_description=meta,
            tags=[clean_whitespace(t) for t in raw.tags if t.strip()],
            word_count=count_words(content),
            style_warnings=warnings,
        )

        draft.id = self.persist(
            GeneratedContent(
                content_type=ContentType.BLOG,
                topic=request.topic,
                title=draft.title,
                body=draft.content,
                payload=draft.model_dump(mode="json", exclude={"id"}),
                source_urls=[a.url for a in request.articles],
                provider=response.get("provider"),
                model=response.get("model"),
            )
        )

        logger.info(
            "blog_post_generated",
            content_id=draft.id,
            word_count=draft.word_count,
            warnings=len(draft.style_warnings),
        )
        return draft
