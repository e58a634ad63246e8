"""Built-in sample resources shown when no snapshot has been saved yet."""

from mindvault.models import Resource
from mindvault.models.resource import now_ms


def seed_resources() -> list[Resource]:
    """Return the two sample resources, stamped relative to now."""
    now = now_ms()
    return [
        Resource(
            id="1",
            title="Understanding React Server Components",
            url="https://react.dev",
            type="ARTICLE",
            platform="Official Docs",
            summary=(
                "An in-depth look at how RSC changes data fetching in modern web "
                "development, focusing on the benefits of rendering on the server."
            ),
            user_notes="Key point: rendering on the server shrinks the bundle size.",
            tags=["React", "Frontend", "Performance"],
            created_at=now,
            content_raw=(
                "React Server Components allow developers to write components "
                "that run exclusively on the server."
            ),
        ),
        Resource(
            id="2",
            title="The Future of AI Agents",
            url="https://twitter.com",
            type="TWEET",
            platform="X",
            summary=(
                "Discusses how autonomous agents will replace traditional SaaS "
                "workflows and become a new kind of application."
            ),
            user_notes="",
            tags=["AI", "Future Tech", "Agent"],
            created_at=now - 100000,
            content_raw="Agents are the new apps.",
        ),
    ]
