"""Post-generation checks: competitor blacklist and phrases to avoid."""

import re
from typing import List, Tuple

from kitchenpress.core.content import CompetitorRestriction, StyleGuide
from kitchenpress.core.enums import RestrictionLevel
from kitchenpress.utils.text_utils import find_phrases

DEFAULT_COMPETITOR_REFERENCE = "other providers"


class ContentGuard:
    """Rewrites blacklisted competitor names and flags off-brand phrasing."""

    def __init__(self, style_guide: StyleGuide, restrictions: List[CompetitorRestriction]):
        self.style_guide = style_guide
        self.restrictions = [r for r in restrictions if r.is_active]

    def apply(self, text: str, content_type: str) -> Tuple[str, List[str]]:
        """Check and clean a piece of generated text.

        Fully blacklisted competitors are replaced by their first alternative
        reference; competitors to mention only if necessary are left in place
        and flagged. Phrases the style guide says to avoid are flagged.

        Args:
            text: Generated text.
            content_type: Guideline scope ("blog_content" or "social_posts").

        Returns:
            Tuple of (cleaned text, warnings).
        """
        warnings: List[str] = []

        for restriction in self.restrictions:
            pattern = re.compile(
                r"\b" + re.escape(restriction.company_name) + r"\b", re.IGNORECASE
            )
            if not pattern.search(text):
                continue

            if restriction.restriction_level == RestrictionLevel.FULL_BLACKLIST:
                replacement = (
                    restriction.alternative_references[0]
                    if restriction.alternative_references
                    else DEFAULT_COMPETITOR_REFERENCE
                )
                text = pattern.sub(replacement, text)
                warnings.append(
                    f"Replaced blacklisted competitor '{restriction.company_name}' "
                    f"with '{replacement}'"
                )
            else:
                warnings.append(
                    f"Mentions restricted competitor '{restriction.company_name}'"
                )

        for phrase in find_phrases(text, self.style_guide.phrases_to_avoid(content_type)):
            warnings.append(f"Avoid phrase: '{phrase}'")

        return text, warnings

    def filter_hashtags(self, hashtags: List[str]) -> Tuple[List[str], List[str]]:
        """Drop hashtags naming a fully blacklisted competitor.

        Hashtags run words together ("#CompetitorRestaurantTechCo"), so names
        are compared on their lowercased letters and digits.
        """
        blacklisted = {
            _squash(r.company_name): r.company_name
            for r in self.restrictions
            if r.restriction_level == RestrictionLevel.FULL_BLACKLIST
        }
        kept: List[str] = []
        warnings: List[str] = []
        for tag in hashtags:
            squashed = _squash(tag)
            match = next(
                (name for key, name in blacklisted.items() if key and key in squashed), None
            )
            if match is None:
                kept.append(tag)
            else:
                warnings.append(f"Dropped hashtag '{tag}' naming blacklisted competitor '{match}'")
        return kept, warnings


def _squash(value: str) -> str:
    return "".join(re.findall(r"[a-z0-9]+", value.lower()))
