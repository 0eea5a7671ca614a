from .document import Document, utc_now

__all__ = ["Document", "utc_now"]
