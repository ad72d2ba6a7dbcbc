from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """
    Builder for a one-level sub-object, handed to Store.insert_tree.

    Values are plain strings; nesting only happens by inserting the whole
    Document into a Store under one key.
    """

    model_config = ConfigDict(validate_assignment=True)

    children: dict[str, str] = Field(default_factory=dict)

    def insert(self, key: str, value: str) -> None:
        # Reassign so validate_assignment rejects non-string values.
        self.children = {**self.children, key: value}

    def __len__(self) -> int:
        return len(self.children)

    def __contains__(self, key: object) -> bool:
        return key in self.children
