"""Context loading from ``contexts/<category>/*.md`` trees."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

from faber.core.utils.io import list_files, read_text
from faber.core.utils.text import parse_frontmatter

from .models import Context, ContextCategory

logger = logging.getLogger(__name__)


class ContextLoader:
    """Load context documents from disk.

    Every listing is sorted by filename so that loads are reproducible.
    Missing directories are treated as empty.
    """

    def load_context(self, file_path: Path, category: ContextCategory) -> Context:
        """Load a single context file."""
        path = Path(file_path)
        doc = parse_frontmatter(read_text(path))
        return Context(
            category=category,
            name=path.stem,
            content=doc.content,
            metadata=doc.frontmatter,
            path=path,
        )

    def load_category(self, category_dir: Path, category: ContextCategory) -> List[Context]:
        """Load all ``*.md`` contexts of one category directory."""
        return [self.load_context(p, category) for p in list_files(category_dir, ".md")]

    def load_list(self, contexts_dir: Path) -> List[Context]:
        """Load every category under ``contexts_dir`` in category order."""
        contexts: List[Context] = []
        for category in ContextCategory:
            contexts.extend(self.load_category(Path(contexts_dir) / category.value, category))
        logger.debug("Loaded %d contexts from %s", len(contexts), contexts_dir)
        return contexts

    def load_tree(self, contexts_dir: Path) -> Dict[str, Context]:
        """Load every category under ``contexts_dir`` keyed by ``category/name``."""
        return {ctx.key: ctx for ctx in self.load_list(contexts_dir)}


__all__ = ["ContextLoader"]
