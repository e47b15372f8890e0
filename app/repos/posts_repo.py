import logging
from pathlib import Path
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)


class FilesystemPostsRepo:
    """
    Read-only access to a tree of post files under a content root.
    A post is addressed by its slug: the path relative to the root with the
    extension stripped, split into segments.
    """

    def __init__(self, root: Path, extension: str = ".md"):
        self.root = Path(root)
        self.extension = extension if extension.startswith(".") else f".{extension}"

    def list_slugs(self) -> List[List[str]]:
        if not self.root.is_dir():
            logger.debug(f"Content root {self.root} does not exist, no posts")
            return []

        rel_paths = [
            path.relative_to(self.root)
            for path in self.root.rglob(f"*{self.extension}")
            if path.is_file()
        ]
        rel_paths = [
            rel for rel in rel_paths if not any(p.startswith(".") for p in rel.parts)
        ]
        rel_paths.sort(key=lambda rel: rel.as_posix())

        slugs = []
        for rel in rel_paths:
            slug = self._slug_for(rel)
            if self.path_for(slug) is None:
                logger.warning(
                    f"Skipping {rel.as_posix()}: not addressable as a post under {self.root}"
                )
                continue
            slugs.append(slug)
        return slugs

    def path_for(self, slug: Sequence[str]) -> Optional[Path]:
        if not slug or not all(self._is_valid_segment(s) for s in slug):
            return None

        *parents, name = slug
        candidate = self.root.joinpath(*parents, f"{name}{self.extension}")
        root_resolved = self.root.resolve()
        if root_resolved not in candidate.resolve().parents:
            return None
        return candidate

    def read_post(self, slug: Sequence[str]) -> Optional[str]:
        path = self.path_for(slug)
        if path is None or not path.is_file():
            return None
        return path.read_text(encoding="utf-8-sig")

    def _slug_for(self, rel_path: Path) -> List[str]:
        *parents, name = rel_path.parts
        return [*parents, name[: -len(self.extension)]]

    @staticmethod
    def _is_valid_segment(segment: str) -> bool:
        return (
            bool(segment)
            and segment not in (".", "..")
            and "/" not in segment
            and "\\" not in segment
        )
