from pydantic import BaseModel, Field

class Article(BaseModel):
    """Title and main text of a page, as returned by an extractor."""
    title: str = ""
    content: str = ""

class SummaryItem(BaseModel):
    """Cached AI summary for one link. Serialized with the snapshot's Title/Content keys."""
    title: str = Field("", alias="Title")
    content: str = Field("", alias="Content")

    model_config = {"populate_by_name": True}

    def is_empty(self) -> bool:
        return self.title == "" or self.content == ""
