from enum import Enum
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"

class User(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    full_name: str = ""
    email: str = ""
    phone: str = ""
    username: str
    password: str  # werkzeug hash

    def public(self) -> dict:
        return self.model_dump(by_alias=True, exclude={"password"})

    def __repr__(self):
        return f"<User {self.username}>"
