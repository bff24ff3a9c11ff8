from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .errors import DuplicateFieldError
from .synthetic import EXPORTED_TIMESTAMP


@dataclass(frozen=True)
class FieldDescriptor:
    label: str
    path: str


def _includes_search(haystack: str, needle: str) -> bool:
    if not needle:
        return True
    return needle.lower() in haystack.lower()


class FieldCatalogue:
    """Static registry of exportable fields, in presentation order.

    Entries are fixed at construction; a catalogue listing the same path
    twice is a deployment error and is rejected up front.
    """

    def __init__(self, entries: Iterable[FieldDescriptor]):
        entries = tuple(entries)
        seen = set()
        dupes = []
        for entry in entries:
            if entry.path in seen:
                dupes.append(entry.path)
            seen.add(entry.path)
        if dupes:
            raise DuplicateFieldError(dupes)

        self._entries: Tuple[FieldDescriptor, ...] = entries
        self._by_path = {entry.path: entry for entry in entries}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __contains__(self, path) -> bool:
        return path in self._by_path

    def all(self) -> Tuple[FieldDescriptor, ...]:
        return self._entries

    def find_by_path(self, path: str) -> Optional[FieldDescriptor]:
        if not isinstance(path, str):
            return None
        return self._by_path.get(path)

    def label_for(self, path: str, default: Optional[str] = None) -> Optional[str]:
        entry = self.find_by_path(path)
        return entry.label if entry is not None else default

    def search(self, query: str) -> Tuple[FieldDescriptor, ...]:
        """Case-insensitive substring match on labels; the query is used untrimmed."""
        needle = query if isinstance(query, str) else ''
        return tuple(e for e in self._entries if _includes_search(e.label, needle))


def _order_fields() -> Iterable[Tuple[str, str]]:
    # Order basics
    yield 'Order Number', 'raw.order_number'
    yield 'Order Name', 'raw.name'
    yield 'Order Created Date', 'raw.created_at'
    yield 'Order Processed Date', 'raw.processed_at'
    yield 'Order Close DateTime', 'raw.closed_at'
    yield 'Order Cancelled at', 'raw.cancelled_at'
    yield 'Financial Status', 'raw.financial_status'
    yield 'Fulfillment Status', 'raw.fulfillment_status'
    yield 'Currency', 'raw.currency'

    # Customer / contact
    yield 'Email (Order)', 'raw.email'
    yield 'Phone (Order)', 'raw.phone'
    yield 'Customer Email', 'raw.customer.email'
    yield 'Customer First Name', 'raw.customer.first_name'
    yield 'Customer Last Name', 'raw.customer.last_name'
    yield 'Customer Phone', 'raw.customer.phone'

    # Channel / source
    yield 'Sales Channel Name', 'raw.source_name'
    yield 'Source Identifier', 'raw.source_identifier'
    yield 'Checkout Token (GQL deprecated)', 'raw.checkout_token'

    for kind, key in (('Shipping', 'shipping_address'), ('Billing', 'billing_address')):
        yield f'{kind} Name', f'raw.{key}.name'
        yield f'{kind} Address 1', f'raw.{key}.address1'
        yield f'{kind} Address 2', f'raw.{key}.address2'
        yield f'{kind} City', f'raw.{key}.city'
        yield f'{kind} Province', f'raw.{key}.province'
        yield f'{kind} Country', f'raw.{key}.country'
        yield f'{kind} Zip', f'raw.{key}.zip'
        yield f'{kind} Phone', f'raw.{key}.phone'

    # Money
    yield 'Subtotal Price Set', 'raw.subtotal_price_set.shop_money.amount'
    yield 'Total Price Presentment Amount', 'raw.total_price_set.presentment_money.amount'
    yield 'Total Tax Presentment Amount', 'raw.total_tax_set.presentment_money.amount'

    yield 'Note', 'raw.note'
    # Positional: label numbers are 1-based, path indices 0-based
    for i in range(3):
        n = i + 1
        yield f'Note Attribute {n} Name', f'raw.note_attributes[{i}].name'
        yield f'Note Attribute {n} Value', f'raw.note_attributes[{i}].value'

    # Properties of the first line item
    for i in range(3):
        n = i + 1
        yield f'Order Line item Properties {n} Name', f'raw.line_items[0].properties[{i}].name'
        yield f'Order Line item Properties {n} Value', f'raw.line_items[0].properties[{i}].value'

    yield 'Exported Timestamp', EXPORTED_TIMESTAMP

    # Deprecated in the GraphQL Admin API, still present on REST payloads
    yield 'Token (GQL deprecated)', 'raw.token'
    yield 'Cart Token (GQL deprecated)', 'raw.cart_token'
    yield 'Referring Site (GQL deprecated)', 'raw.referring_site'
    yield 'Landing Site (GQL deprecated)', 'raw.landing_site'

    yield 'Test', 'raw.test'
    yield 'User ID (GQL deprecated)', 'raw.user_id'


ORDER_FIELDS: Tuple[FieldDescriptor, ...] = tuple(
    FieldDescriptor(label=label, path=path) for label, path in _order_fields()
)


def default_catalogue() -> FieldCatalogue:
    return FieldCatalogue(ORDER_FIELDS)
