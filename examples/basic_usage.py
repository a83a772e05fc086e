#!/usr/bin/env python3
"""
Basic Usage Example - IT Inventory Engine

This script demonstrates the basic usage of the inventory engine with the
bundled seed data. It shows how to:
- Load the engine from config/settings.yaml and config/seed.yaml
- Log a repair and watch the device status follow it
- Rename and delete categories
- Read the dashboard and financial summaries

Run: python examples/basic_usage.py
"""

from datetime import date

from itinv_app.engine import CommandError, InventoryEngine
from itinv_app.state.models import CategoryKind, RepairStatus


def print_device(engine: InventoryEngine, device_id: str) -> None:
    """Print a one-line device summary."""
    device = engine.get_device(device_id)
    if device is None:
        print(f"   Device {device_id}: not found")
        return
    print(f"   {device.id}: {device.name} [{device.category} @ {device.location}] -> {device.status.value}")


def main():
    """Run the inventory demo."""
    print("🚀 IT Inventory Engine - Basic Usage Demo")
    print("=" * 60)

    # 1. Engine
    print("1. Loading the engine from the bundled configuration...")
    engine = InventoryEngine.from_config(overrides={"logging": {"level": "WARNING"}})
    print(f"   Devices: {len(engine.state.devices)}, repairs: {len(engine.state.repairs)}")
    print()

    # 2. Repairs drive device status
    print("2. Logging a repair against the Dell XPS 15...")
    print_device(engine, "d002")
    repair = engine.create_repair({
        "deviceId": "d002",
        "issueDescription": "Keyboard keys sticking",
        "category": "Hardware Failure",
        "reportedDate": date.today().isoformat(),
        "status": "Pending",
        "cost": 120,
    })
    print(f"   Created repair {repair.id}")
    print_device(engine, "d002")

    engine.update_repair(repair.with_status(RepairStatus.COMPLETED, date.today()))
    print(f"   Completed repair {repair.id}")
    print_device(engine, "d002")
    print()

    # 3. Registry maintenance
    print("3. Renaming the LAPTOP category to Laptops...")
    change = engine.rename_category(CategoryKind.DEVICE, "LAPTOP", "Laptops")
    print(f"   Cascaded into: {', '.join(change.cascaded_ids)}")
    print(f"   CapEx budget for Laptops: ${engine.get_budget(CategoryKind.DEVICE)['Laptops']:,.2f}")

    print("   Trying to delete the Data Center A location...")
    try:
        engine.delete_category(CategoryKind.LOCATION, "Data Center A")
    except CommandError as e:
        print(f"   Refused: {e}")
    print()

    # 4. Reports
    print("4. Dashboard and financials:")
    summary = engine.dashboard()
    print(f"   Total devices: {summary.total_devices}, in repair: {summary.in_repair}")
    print(f"   Total CapEx: ${summary.total_capex:,.2f}, total OpEx: ${summary.total_opex:,.2f}")
    print(f"   Warranties expiring soon: {len(summary.expiring_warranties)}")

    financials = engine.financials()
    for row in financials.capex_allocations:
        if row.spent:
            print(f"   {row.category:<12} {row.spent:>10,.2f} / {row.allocated:>10,.2f} ({row.health})")

    print()
    print("✅ Demo complete")


if __name__ == "__main__":
    main()
