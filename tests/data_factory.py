"""
Test data factory
Generates realistic blog posts for seeding and request bodies
"""

from datetime import timezone
from typing import Dict, Any, List

from faker import Faker

# Posts seeded before each test case
SEED_POST_COUNT = 11


class PostDataFactory:
    """Faker-backed blog post generator"""

    def __init__(self, seed: int = None):
        self.fake = Faker()
        if seed is not None:
            self.fake.seed_instance(seed)

    def generate_author(self) -> Dict[str, str]:
        return {
            "firstName": self.fake.first_name(),
            "lastName": self.fake.last_name()
        }

    def generate_post(self, **overrides) -> Dict[str, Any]:
        """Generate a post document with a creation date in the past"""
        data = {
            "author": self.generate_author(),
            "content": self.fake.paragraph(),
            "title": self.fake.sentence(nb_words=5).rstrip("."),
            "created": self.fake.date_time_between(start_date="-1y", end_date="-1d", tzinfo=timezone.utc)
        }
        data.update(overrides)
        return data

    def generate_posts(self, count: int) -> List[Dict[str, Any]]:
        return [self.generate_post() for _ in range(count)]

    def generate_create_body(self, **overrides) -> Dict[str, Any]:
        """Generate a JSON-ready POST /posts body"""
        post = self.generate_post(**overrides)
        if post.get("created") is not None:
            post["created"] = post["created"].isoformat()
        return post
