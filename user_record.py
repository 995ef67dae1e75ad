from typing import List

from pydantic import BaseModel, Field, model_validator

DEFAULT_PIC_URL = "https://i.pinimg.com/236x/1c/8b/b2/1c8bb212c3fac9c3393b663c0ed9f6cb.jpg"


class UserRecord(BaseModel):
    id: int = 0
    name: str = ""
    location: str = ""
    pic_url: str = ""
    follows: List[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def set_default_pic_url(self):
        # runs for parsed and directly constructed records alike
        if not self.pic_url:
            self.pic_url = DEFAULT_PIC_URL
        return self

    def is_valid(self) -> bool:
        return self.id > 0 and bool(self.name)

    def sort_key(self) -> int:
        return self.id

    def __str__(self):
        lines = [f"id: {self.id}", f"name: {self.name}"]
        if self.location:
            lines.append(f"location: {self.location}")
        lines.append(f"pic url: {self.pic_url}")
        follows = "".join(f"{user_id} " for user_id in self.follows)
        lines.append(f"Follows: [ {follows}]")
        return "\n".join(lines) + "\n"
