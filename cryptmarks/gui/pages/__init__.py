from cryptmarks.gui.pages.bookmarks import BookmarksPage

__all__ = ["BookmarksPage"]
