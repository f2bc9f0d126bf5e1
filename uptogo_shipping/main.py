#!/usr/bin/env python3
"""CLI entry point for Uptogo delivery quoting and dispatch."""

import argparse
import csv
import dataclasses
import json
import logging
import sys

from uptogo_shipping.exceptions import ConfigurationError
from uptogo_shipping.lifecycle import DeliveryManager, select_rate
from uptogo_shipping.models import InMemoryShippingMethod, Order, Package, PackageItem
from uptogo_shipping.quoting import calculate_shipping
from uptogo_shipping.settings import configure, load_settings, save_settings
from uptogo_shipping.uptogo_client import UptogoClient

_ORDER_FIELDS = {f.name for f in dataclasses.fields(Order)}


class OrderFile:
    """An order stored as JSON, with its shipping line metadata.

    Layout::

        {"order_id": "...", "shipping_postcode": "...", ...,
         "shipping_method": {"id": "...", "meta": {...}}}
    """

    def __init__(self, path: str):
        self.path = path
        with open(path) as f:
            self.data = json.load(f)
        self.order = Order(**{k: v for k, v in self.data.items() if k in _ORDER_FIELDS})
        method = self.data.get("shipping_method")
        self.shipping_method = (
            _FileShippingMethod(self, str(method.get("id", self.order.order_id)), method.get("meta"))
            if method is not None
            else None
        )

    def save(self) -> None:
        self.data.update(dataclasses.asdict(self.order))
        if self.shipping_method is not None:
            self.data["shipping_method"] = {
                "id": self.shipping_method.record_id,
                "meta": self.shipping_method.meta,
            }
        with open(self.path, "w") as f:
            json.dump(self.data, f, indent=2, ensure_ascii=False)


class _FileShippingMethod(InMemoryShippingMethod):
    def __init__(self, order_file: OrderFile, record_id: str, meta: dict | None):
        super().__init__(record_id, meta)
        self.order_file = order_file

    def save_meta_data(self) -> None:
        super().save_meta_data()
        self.order_file.save()


def _load_items(path):
    """Read package contents from a JSON list of item objects."""
    with open(path) as f:
        items = json.load(f)
    return [PackageItem(**item) for item in items]


def _print_offers(offers):
    """Print the quoted offers to stdout."""
    print(f"\n{'=' * 70}")
    print("  UPTOGO SHIPPING RATES")
    print(f"  {len(offers)} option(s)")
    print(f"{'=' * 70}\n")

    for i, offer in enumerate(offers, 1):
        print(f"  Option {i}: {offer.label}")
        print(f"    Modality: {offer.id}")
        print(f"    Cost:     {offer.cost}")
        print(f"    Proposal: {offer.meta.proposal_id} (request {offer.meta.inventory_id})")
        if offer.meta.warning:
            print(f"    Warning:  {offer.meta.warning}")
        print()


def _export_csv(offers, path):
    """Export the offers to a CSV file."""
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "option", "modality_id", "label", "cost",
            "inventory_id", "proposal_id", "warning",
        ])
        for i, offer in enumerate(offers, 1):
            writer.writerow([
                i, offer.id, offer.label, offer.cost,
                offer.meta.inventory_id, offer.meta.proposal_id, offer.meta.warning or "",
            ])
    print(f"Rates exported to {path}")


def _cmd_configure(args) -> int:
    client = UptogoClient(api_key=args.api_key)
    try:
        settings = configure(client, args.api_key)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    save_settings(settings, args.env_file)
    print(f"Store {settings.store_id} at {settings.store_location} saved to {args.env_file}")
    return 0


def _cmd_quote(args) -> int:
    settings = load_settings()
    client = UptogoClient(api_key=settings.api_key)
    package = Package(destination_postcode=args.postcode, contents=_load_items(args.items))

    print(f"Quoting delivery to {args.postcode}...")
    offers = calculate_shipping(client, settings, package)
    if not offers:
        print("No shipping options available.")
        return 0

    _print_offers(offers)
    if args.csv:
        _export_csv(offers, args.csv)

    if args.select:
        if not args.order:
            print("Error: --select requires --order.", file=sys.stderr)
            return 1
        chosen = next((o for o in offers if str(o.id) == args.select), None)
        if chosen is None:
            print(f"Error: no offer for modality {args.select}.", file=sys.stderr)
            return 1
        order_file = OrderFile(args.order)
        if order_file.shipping_method is None:
            print("Error: order has no shipping method.", file=sys.stderr)
            return 1
        select_rate(order_file.shipping_method, chosen)
        print(f"Selected {chosen.label} for order {order_file.order.order_id}")
    return 0


def _cmd_create(args) -> int:
    settings = load_settings()
    order_file = OrderFile(args.order)
    manager = DeliveryManager(UptogoClient(api_key=settings.api_key), settings)
    request_id = manager.create_delivery(order_file.order, order_file.shipping_method)
    if request_id is None:
        print("No delivery was requested.")
        return 0
    print(f"Delivery {request_id} requested.")
    return 0


def _cmd_cancel(args) -> int:
    settings = load_settings()
    order_file = OrderFile(args.order)
    manager = DeliveryManager(UptogoClient(api_key=settings.api_key), settings)
    if manager.cancel_delivery(order_file.order, order_file.shipping_method):
        print("Delivery cancelled.")
    else:
        print("No delivery was cancelled.")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Quote, request and cancel Uptogo deliveries for store orders.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every API step.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    configure_parser = subparsers.add_parser(
        "configure",
        help="Look up the store behind an access key and save the settings.",
    )
    configure_parser.add_argument("--api-key", required=True, help="Uptogo access key.")
    configure_parser.add_argument(
        "--env-file",
        default=".env",
        help='Settings file to write (default: ".env").',
    )
    configure_parser.set_defaults(func=_cmd_configure)

    quote_parser = subparsers.add_parser("quote", help="Quote shipping rates for a package.")
    quote_parser.add_argument("--postcode", required=True, help="Destination postal code.")
    quote_parser.add_argument(
        "--items",
        required=True,
        metavar="FILE",
        help="JSON list of package items (name, height, length, width, weight, price, quantity).",
    )
    quote_parser.add_argument("--csv", metavar="FILE", help="Export the rates to a CSV file.")
    quote_parser.add_argument(
        "--order",
        metavar="FILE",
        help="Order JSON file to record the selected rate on.",
    )
    quote_parser.add_argument(
        "--select",
        metavar="MODALITY_ID",
        help="Modality of the offer to select on --order.",
    )
    quote_parser.set_defaults(func=_cmd_quote)

    create_parser = subparsers.add_parser("create", help="Request a delivery for an order.")
    create_parser.add_argument("order", metavar="ORDER", help="Order JSON file.")
    create_parser.set_defaults(func=_cmd_create)

    cancel_parser = subparsers.add_parser("cancel", help="Cancel an order's delivery.")
    cancel_parser.add_argument("order", metavar="ORDER", help="Order JSON file.")
    cancel_parser.set_defaults(func=_cmd_cancel)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
