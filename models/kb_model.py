from pydantic import BaseModel

class KBArticle(BaseModel):
    id: str
    title: str
    content: str
