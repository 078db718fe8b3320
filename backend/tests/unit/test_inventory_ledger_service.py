import pytest
from pydantic import ValidationError

from partsledger.core.exceptions import EntityNotFoundException, ValidationException
from partsledger.models.inventory_log import InventoryLog, CHANGE_ADJUST, CHANGE_RECEIVE, CHANGE_SHIP
from partsledger.schemas.inventory import InventorySettingsUpdate
from partsledger.services.inventory_ledger_service import InventoryLedgerService
from partsledger.utils.events import InventoryChangedEvent
from tests.factories import make_part


def _log_count(db, part_id):
    return db.query(InventoryLog).filter(InventoryLog.part_id == part_id).count()


def test_adjust_writes_balanced_log(db, part):
    entry = InventoryLedgerService(db).adjust(part.id, -30, "damaged in storage", performed_by="alice")

    assert entry.inventory.quantity_on_hand == 70
    assert entry.log.change_type == CHANGE_ADJUST
    assert entry.log.previous_qty == 100
    assert entry.log.quantity_change == -30
    assert entry.log.new_qty == 70
    assert entry.log.reason == "damaged in storage"
    assert entry.log.performed_by == "alice"
    assert _log_count(db, part.id) == 1


def test_adjust_requires_reason(db, part):
    with pytest.raises(ValidationException):
        InventoryLedgerService(db).adjust(part.id, 5, "   ")
    assert _log_count(db, part.id) == 0


def test_adjust_below_zero_is_rejected_and_changes_nothing(db, part):
    service = InventoryLedgerService(db)

    with pytest.raises(ValidationException, match="Cannot adjust below zero"):
        service.adjust(part.id, -101, "write-off")

    assert service.get_inventory(part.id).quantity_on_hand == 100
    assert _log_count(db, part.id) == 0


def test_ship_more_than_on_hand_is_rejected(db, part):
    service = InventoryLedgerService(db)

    with pytest.raises(ValidationException, match="Insufficient inventory"):
        service.ship(part.id, 150)

    assert service.get_inventory(part.id).quantity_on_hand == 100
    assert _log_count(db, part.id) == 0


def test_ship_logs_negative_change_with_default_reason(db, part):
    entry = InventoryLedgerService(db).ship(part.id, 40)

    assert entry.inventory.quantity_on_hand == 60
    assert entry.log.change_type == CHANGE_SHIP
    assert entry.log.quantity_change == -40
    assert entry.log.reason == "Shipped/consumed"


def test_ship_rejects_non_positive_quantity(db, part):
    with pytest.raises(ValidationException):
        InventoryLedgerService(db).ship(part.id, 0)


def test_receive_stamps_last_order_date(db, part):
    entry = InventoryLedgerService(db).receive(part.id, 25)

    assert entry.inventory.quantity_on_hand == 125
    assert entry.inventory.last_order_date is not None
    assert entry.log.change_type == CHANGE_RECEIVE
    assert entry.log.reason == "Manual receipt"


def test_receive_rejects_non_positive_quantity(db, part):
    with pytest.raises(ValidationException):
        InventoryLedgerService(db).receive(part.id, -5)
    assert _log_count(db, part.id) == 0


def test_receive_for_unknown_order_raises_not_found(db, part):
    service = InventoryLedgerService(db)

    with pytest.raises(EntityNotFoundException, match="Order with id 9999 not found"):
        service.receive(part.id, 5, order_id=9999)

    assert service.get_inventory(part.id).quantity_on_hand == 100
    assert _log_count(db, part.id) == 0


@pytest.mark.parametrize("actual, variance", [(80, -20), (130, 30), (100, 0)])
def test_count_sets_quantity_and_logs_variance(db, part, actual, variance):
    entry = InventoryLedgerService(db).count(part.id, actual, performed_by="auditor")

    assert entry.inventory.quantity_on_hand == actual
    assert entry.variance == variance
    assert entry.log.quantity_change == variance
    assert entry.log.new_qty == actual
    assert entry.log.reason == f"Physical count adjustment (variance: {variance})"
    assert entry.inventory.last_count_date is not None
    assert _log_count(db, part.id) == 1


def test_mutation_on_unknown_part_raises_not_found(db):
    with pytest.raises(EntityNotFoundException):
        InventoryLedgerService(db).adjust(999, 1, "typo")


def test_every_committed_log_balances(db, part):
    service = InventoryLedgerService(db)
    service.receive(part.id, 10)
    service.ship(part.id, 45)
    service.adjust(part.id, 3, "found in bin")
    service.count(part.id, 50)

    logs = service.list_logs(part.id)
    assert len(logs) == 4
    for log in logs:
        assert log.new_qty == log.previous_qty + log.quantity_change
    assert service.get_inventory(part.id).quantity_on_hand == 50


def test_list_logs_newest_first_with_paging(db, part):
    service = InventoryLedgerService(db)
    for qty in (1, 2, 3):
        service.receive(part.id, qty)

    first_page = service.list_logs(part.id, limit=2)
    assert [log.quantity_change for log in first_page] == [3, 2]
    assert [log.quantity_change for log in service.list_logs(part.id, limit=2, offset=2)] == [1]


def test_update_settings_only_touches_given_fields(db, part):
    inv = InventoryLedgerService(db).update_settings(
        part.id, InventorySettingsUpdate(reorder_point=25, location="Aisle 4"),
    )

    assert inv.reorder_point == 25
    assert inv.location == "Aisle 4"
    assert inv.reorder_quantity == 50
    assert _log_count(db, part.id) == 0


@pytest.mark.parametrize("field", ["reorder_point", "reorder_quantity"])
def test_settings_update_rejects_null_thresholds(field):
    with pytest.raises(ValidationError):
        InventorySettingsUpdate(**{field: None})


def test_settings_update_allows_clearing_optional_fields():
    data = InventorySettingsUpdate(max_quantity=None, location=None)
    assert data.model_dump(exclude_unset=True) == {"max_quantity": None, "location": None}


def test_low_stock_and_summary(db, vendor):
    make_part(db, "P-LOW", vendor=vendor, on_hand=5, reorder_point=10)
    make_part(db, "P-EDGE", vendor=vendor, on_hand=10, reorder_point=10)
    make_part(db, "P-EMPTY", vendor=vendor, on_hand=0, reorder_point=0, unit_price="9.99")
    make_part(db, "P-OK", vendor=vendor, on_hand=40, reorder_point=10, unit_price="1.00")
    service = InventoryLedgerService(db)

    low = service.get_low_stock()
    assert sorted(i.part.part_number for i in low) == ["P-EDGE", "P-EMPTY", "P-LOW"]

    summary = service.get_summary()
    assert summary.total_items == 4
    assert summary.low_stock_count == 3
    assert summary.out_of_stock_count == 1
    assert summary.healthy_stock_count == 1
    assert str(summary.total_value) == "77.50"


def test_list_inventory_filters_by_location(db, vendor):
    make_part(db, "P-A", vendor=vendor, location="Warehouse A")
    make_part(db, "P-B", vendor=vendor, location="Warehouse B")

    items = InventoryLedgerService(db).list_inventory(location="house a")
    assert [i.part.part_number for i in items] == ["P-A"]


def test_mutations_publish_inventory_changed(db, part, events):
    InventoryLedgerService(db).ship(part.id, 10, performed_by="bob")

    changed = [e for e in events if isinstance(e, InventoryChangedEvent)]
    assert len(changed) == 1
    assert changed[0].part_id == part.id
    assert changed[0].previous_qty == 100
    assert changed[0].new_qty == 90
    assert changed[0].performed_by == "bob"


def test_failed_mutation_publishes_nothing(db, part, events):
    with pytest.raises(ValidationException):
        InventoryLedgerService(db).ship(part.id, 500)
    assert events == []
