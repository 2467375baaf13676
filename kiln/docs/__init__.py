"""Java API documentation lookups."""

from .index import DocClass, DocsIndex, JavaDocs, load_docs_index, suggest_methods

__all__ = ["DocClass", "DocsIndex", "JavaDocs", "load_docs_index", "suggest_methods"]
