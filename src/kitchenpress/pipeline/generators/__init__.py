"""Blog and social content generators."""

from kitchenpress.pipeline.generators.blog_generator import BlogGenerator
from kitchenpress.pipeline.generators.social_generator import SocialGenerator

__all__ = ["BlogGenerator", "SocialGenerator"]
