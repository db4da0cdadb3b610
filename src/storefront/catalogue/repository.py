"""Repositories for the catalogue aggregates."""

import structlog

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.utils.locks import stock_locks

logger = structlog.get_logger(__name__)

SORT_ORDERS = {
    "newest": "-created_at",
    "price_asc": "price",
    "price_desc": "-price",
    "rating": "-rating",
}


@storefront.repository(part_of=Product)
class ProductRepository:
    def adjust_stock(self, product_id, delta: int) -> int:
        """Guarded stock update: move stock by ``delta`` unless it would go negative.

        The read, the check and the write happen under the product's lock, so
        two callers racing for the last units cannot both pass the check. Must
        be called outside a unit of work so the write lands before the lock is
        released.
        """
        with stock_locks.hold(product_id):
            product = self.get(str(product_id))
            new_stock = product.adjust_stock(delta)
            self.add(product)

        logger.debug("Stock adjusted", product_id=str(product_id), delta=delta, stock=new_stock)
        return new_stock

    def search(
        self,
        category=None,
        search=None,
        min_price=None,
        max_price=None,
        sort="newest",
        offset=0,
        limit=10,
    ):
        """Active products matching the filters, as a Protean ResultSet."""
        query = self._dao.query.filter(is_active=True)
        if category:
            query = query.filter(category=category)
        if search:
            query = query.filter(name__icontains=search)
        if min_price is not None:
            query = query.filter(price__gte=float(min_price))
        if max_price is not None:
            query = query.filter(price__lte=float(max_price))

        return query.order_by(SORT_ORDERS.get(sort, SORT_ORDERS["newest"])).offset(offset).limit(limit).all()

    def find_by_name(self, name: str) -> Product | None:
        return self._dao.query.filter(name=name).all().first

    def featured(self, limit=8) -> list[Product]:
        return self._dao.query.filter(is_active=True, featured=True).order_by("-rating").limit(limit).all().items


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_active(self) -> list[Category]:
        return self._dao.query.filter(is_active=True).order_by("name").all().items

    def find_by_name(self, name: str) -> Category | None:
        return self._dao.query.filter(name=name).all().first
