# Database models; importing this package registers every table on Base.metadata
from threadnote.backend.models.base import Base
from threadnote.backend.models.mention import Mention
from threadnote.backend.models.note import Note

__all__ = ["Base", "Mention", "Note"]
