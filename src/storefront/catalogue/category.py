"""Category aggregate root for grouping products."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, String, Text

from storefront.catalogue.events import CategoryCreated
from storefront.domain import storefront


@storefront.aggregate
class Category:
    name = String(required=True, max_length=100, sanitize=False)
    description = Text()
    image = String(max_length=500)
    is_active = Boolean(default=True)
    created_at = DateTime()

    @classmethod
    def create(cls, name, description=None, image=None):
        category = cls(
            name=name,
            description=description,
            image=image,
            created_at=datetime.now(UTC),
        )
        category.raise_(CategoryCreated(category_id=str(category.id), name=name))
        return category

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "image": self.image,
            "is_active": self.is_active,
        }
