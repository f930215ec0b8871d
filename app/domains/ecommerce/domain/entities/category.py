"""
Category Entity

Catalog taxonomy. A category with a parent is a subcategory; the tree is
kept one reference deep, each node only knows its parent.
"""

from dataclasses import dataclass

from app.core.domain import AggregateRoot, ValidationException


@dataclass
class Category(AggregateRoot[str]):
    name: str = ""
    description: str = ""
    parent_category_id: str | None = None
    image_url: str | None = None
    is_active: bool = True

    def is_subcategory(self) -> bool:
        return self.parent_category_id is not None

    def check_invariants(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationException("Category name is required", field="name")
        if self.id is not None and self.parent_category_id == self.id:
            raise ValidationException("A category cannot be its own parent", field="parent_category_id")
