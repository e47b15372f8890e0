from typing import Tuple

import frontmatter


class PostParseError(ValueError):
    """Raised when a post file cannot be read or its front matter is malformed."""


class ContentParser:
    def parse(self, text: str) -> Tuple[dict, str]:
        """Split a post file into its front matter metadata and markdown body."""
        try:
            parsed = frontmatter.loads(text)
        except Exception as e:
            raise PostParseError(f"Invalid front matter: {e}") from e

        return dict(parsed.metadata or {}), parsed.content
