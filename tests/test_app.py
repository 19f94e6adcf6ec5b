from decimal import Decimal

from core.seed import seed_database
from models.order import Order
from models.product import Product
from models.user import User


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_openapi_lists_order_routes(client):
    paths = client.get("/openapi.json").json()["paths"]
    for path in (
        "/api/orders",
        "/api/orders/{order_id}",
        "/api/orders/user/{user_id}",
        "/api/orders/filter",
        "/api/orders/{order_id}/status",
        "/api/orders/customer/{customer_id}/revenue",
    ):
        assert path in paths


class TestSeedData:

    def test_seed_empty_database(self, db):
        assert seed_database(db) is True

        assert db.query(User).count() == 2
        assert db.query(Product).count() == 3
        order = db.query(Order).one()
        assert order.total_amount == Decimal("1029.98")
        assert len(order.product_ids) == 2

    def test_seed_is_skipped_when_users_exist(self, db, test_user):
        assert seed_database(db) is False
        assert db.query(User).count() == 1
        assert db.query(Order).count() == 0
