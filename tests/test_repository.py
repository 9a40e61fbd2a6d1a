from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from app.models.order import OrderStatus
from app.repositories.order import OrderRepository, coerce_user_id
from app.services.seed import SAMPLE_ORDERS, seed_sample_orders


ITEMS = [{"product_id": "P1", "product_name": "Widget", "quantity": 2, "price": 10.0}]
ADDRESS = {"street": "1 Elm St", "city": "Springfield", "state": "IL", "zip_code": "62701", "country": "USA"}


def create(repository: OrderRepository, user_id: int = 1, **kwargs):
    return repository.create(user_id=user_id, items=ITEMS, total_amount=20.0, **kwargs)


def test_list_all_empty():
    assert OrderRepository().list_all() == []


def test_list_all_newest_first(repository):
    first = create(repository)
    second = create(repository, user_id=2)
    third = create(repository, user_id=3)

    assert [order.id for order in repository.list_all()] == [third.id, second.id, first.id]


def test_list_all_keeps_ties():
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    repository = OrderRepository(clock=lambda: stamp)

    created = {create(repository).id for _ in range(5)}
    listed = [order.id for order in repository.list_all()]

    assert len(listed) == 5
    assert set(listed) == created


def test_list_all_excludes_deleted(repository):
    kept = create(repository)
    removed = create(repository)

    assert repository.delete(removed.id) is True
    assert repository.list_all() == [kept]


def test_create_defaults(repository):
    order = create(repository)

    assert order.id
    assert order.status == "pending"
    assert order.shipping_address is None
    assert order.created_at == order.updated_at


def test_create_then_find_returns_equal_order(repository):
    order = create(repository, status="confirmed", shipping_address=ADDRESS)

    assert repository.find_by_id(order.id) == order


def test_create_accepts_status_enum(repository):
    order = create(repository, status=OrderStatus.SHIPPED)

    assert order.status == "shipped"


def test_create_assigns_unique_ids(repository):
    ids = {create(repository).id for _ in range(50)}

    assert len(ids) == 50


def test_create_copies_input(repository):
    items = [dict(ITEMS[0])]
    address = dict(ADDRESS)
    order = repository.create(user_id=1, items=items, total_amount=20.0, shipping_address=address)

    items[0]["quantity"] = 99
    address["city"] = "Elsewhere"

    stored = repository.find_by_id(order.id)
    assert stored.items[0]["quantity"] == 2
    assert stored.shipping_address["city"] == "Springfield"


def test_find_by_id_unknown(repository):
    assert repository.find_by_id("missing") is None


def test_update_preserves_other_fields(repository):
    order = create(repository, shipping_address=ADDRESS)

    updated = repository.update(order.id, {"total_amount": 35.5})

    assert updated.total_amount == 35.5
    assert updated.items == order.items
    assert updated.status == order.status
    assert updated.shipping_address == order.shipping_address
    assert updated.user_id == order.user_id
    assert updated.created_at == order.created_at
    assert updated.updated_at > order.updated_at


def test_update_replaces_address_wholesale(repository):
    order = create(repository, shipping_address=ADDRESS)

    updated = repository.update(order.id, {"shipping_address": {"street": "2 Oak Ave", "city": "Shelbyville"}})

    assert updated.shipping_address == {"street": "2 Oak Ave", "city": "Shelbyville"}


def test_update_can_clear_address(repository):
    order = create(repository, shipping_address=ADDRESS)

    assert repository.update(order.id, {"shipping_address": None}).shipping_address is None


def test_update_ignores_fixed_fields(repository):
    order = create(repository)

    updated = repository.update(order.id, {
        "id": "hijacked",
        "user_id": 42,
        "created_at": datetime(1999, 1, 1, tzinfo=timezone.utc),
        "status": "confirmed",
    })

    assert updated.id == order.id
    assert updated.user_id == order.user_id
    assert updated.created_at == order.created_at
    assert updated.status == "confirmed"
    assert repository.find_by_id("hijacked") is None


def test_update_unknown_id(repository):
    create(repository)

    assert repository.update("missing", {"total_amount": 1.0}) is None
    assert repository.count() == 1


def test_updated_at_never_moves_backwards():
    times = iter([
        datetime(2024, 1, 1, 12, tzinfo=timezone.utc),
        datetime(2024, 1, 1, 11, tzinfo=timezone.utc),
    ])
    repository = OrderRepository(clock=lambda: next(times))
    order = create(repository)

    updated = repository.update_status(order.id, "shipped")

    assert updated.updated_at == order.updated_at
    assert updated.updated_at >= updated.created_at


def test_delete(repository):
    order = create(repository)

    assert repository.delete(order.id) is True
    assert repository.find_by_id(order.id) is None
    assert repository.delete(order.id) is False


def test_delete_unknown_keeps_size(repository):
    create(repository)
    create(repository)

    assert repository.delete("missing") is False
    assert len(repository) == 2


def test_update_status_is_unrestricted(repository):
    order = create(repository)

    delivered = repository.update_status(order.id, "delivered")
    pending = repository.update_status(order.id, "pending")

    assert delivered.status == "delivered"
    assert pending.status == "pending"
    assert pending.updated_at > delivered.updated_at > order.updated_at


def test_update_status_accepts_any_value(repository):
    order = create(repository)

    assert repository.update_status(order.id, "lost-in-transit").status == "lost-in-transit"


def test_update_status_unknown_id(repository):
    assert repository.update_status("missing", "shipped") is None


def test_list_by_user_string_and_int_match(repository):
    mine_old = create(repository, user_id=1)
    create(repository, user_id=2)
    mine_new = create(repository, user_id=1)

    by_int = repository.list_by_user(1)
    by_str = repository.list_by_user("1")

    assert by_int == by_str
    assert [order.id for order in by_int] == [mine_new.id, mine_old.id]


def test_list_by_user_not_a_number(repository):
    create(repository)

    assert repository.list_by_user("not-a-number") == []


@pytest.mark.parametrize("value, expected", [
    (7, 7),
    ("7", 7),
    (" 7 ", 7),
    ("-3", -3),
    ("+4", 4),
    ("12abc", None),
    ("1.5", None),
    ("", None),
    (None, None),
    (True, None),
    (2.0, None),
])
def test_coerce_user_id(value, expected):
    assert coerce_user_id(value) == expected


def test_seed_only_when_empty(repository):
    assert seed_sample_orders(repository) == len(SAMPLE_ORDERS)
    assert seed_sample_orders(repository) == 0
    assert len(repository) == len(SAMPLE_ORDERS)


def test_seed_skipped_when_orders_exist(repository):
    create(repository, user_id=5)

    assert seed_sample_orders(repository) == 0
    assert repository.list_by_user(1) == []


def test_seeded_orders(repository):
    seed_sample_orders(repository)

    statuses = sorted(order.status for order in repository.list_by_user(1))
    assert statuses == ["delivered", "processing"]
    assert all(order.shipping_address["city"] == "San Francisco" for order in repository.list_all())


def test_clock_is_injectable():
    stamp = datetime(2030, 5, 5, tzinfo=timezone.utc)
    repository = OrderRepository(clock=lambda: stamp)

    order = create(repository)

    assert order.created_at == stamp
    assert order.updated_at == stamp


def test_concurrent_create_and_delete_stay_consistent():
    repository = OrderRepository()
    doomed = [create(repository, user_id=9) for _ in range(100)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(lambda n: create(repository, user_id=n).id, range(200)))
        deleted = list(pool.map(lambda order: repository.delete(order.id), doomed))

    listed = [order.id for order in repository.list_all()]

    assert all(deleted)
    assert repository.count() == 200
    assert len(listed) == len(set(listed)) == 200
    assert set(listed) == set(created)
    assert repository.list_by_user(9) == []


def test_concurrent_mixed_operations():
    repository = OrderRepository()

    def worker(n: int) -> None:
        order = create(repository, user_id=n)
        repository.update_status(order.id, "shipped")
        repository.update(order.id, {"total_amount": float(n)})
        if n % 2:
            repository.delete(order.id)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(worker, range(300)))

    orders = repository.list_all()
    assert repository.count() == len(orders) == 150
    assert {order.user_id for order in orders} == set(range(0, 300, 2))
    assert all(order.status == "shipped" and order.total_amount == order.user_id for order in orders)
