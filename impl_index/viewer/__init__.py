from impl_index.viewer.index import ImplementorIndex
from impl_index.viewer.page import InMemoryPageStore, Page, PageStore

__all__ = ["ImplementorIndex", "InMemoryPageStore", "Page", "PageStore"]
