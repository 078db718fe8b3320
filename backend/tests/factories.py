from decimal import Decimal

from partsledger.models import Vendor, Part, Inventory


def make_vendor(db, code="ACME", name="Acme Supply", lead_time_days=7) -> Vendor:
    vendor = Vendor(code=code, name=name, lead_time_days=lead_time_days)
    db.add(vendor)
    db.commit()
    return vendor


def make_part(
    db,
    part_number="P-100",
    vendor=None,
    unit_price="2.50",
    on_hand=100,
    reorder_point=10,
    reorder_quantity=50,
    is_active=True,
    location=None,
) -> Part:
    part = Part(
        part_number=part_number,
        name=f"Part {part_number}",
        vendor_id=vendor.id if vendor else None,
        unit_price=Decimal(unit_price),
        is_active=is_active,
    )
    part.inventory = Inventory(
        quantity_on_hand=on_hand,
        quantity_reserved=0,
        reorder_point=reorder_point,
        reorder_quantity=reorder_quantity,
        location=location,
    )
    db.add(part)
    db.commit()
    return part
