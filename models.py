from typing import Any, Dict, List
from uuid import uuid4
from pydantic import BaseModel, Field, field_validator

def is_record(item: Any) -> bool:
    """A stored person/category: a JSON object whose id is a string."""
    return isinstance(item, dict) and isinstance(item.get("id"), str)

class Person(BaseModel):
    id: str = Field(default_factory=lambda: f"person_{uuid4()}")
    name: str
    archived: bool = False

class Category(BaseModel):
    id: str = Field(default_factory=lambda: f"cat_{uuid4()}")
    name: str
    archived: bool = False

class FavoritePick(BaseModel):
    category_id: str
    category_name: str
    person_id: str
    person_name: str
    value: str

class Snapshot(BaseModel):
    """
    Backup document. Records must be JSON objects with a string id; any
    other fields pass through untouched.
    """
    people: List[Dict[str, Any]]
    categories: List[Dict[str, Any]]
    favorites: Dict[str, Any]

    @field_validator("people", "categories")
    @classmethod
    def _records_have_ids(cls, items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        bad = [i for i, r in enumerate(items) if not is_record(r)]
        if bad:
            raise ValueError(f"records without a string id at positions {bad}")
        return items
