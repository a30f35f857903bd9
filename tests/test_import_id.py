"""Tests for import id generation."""

import hashlib
from decimal import Decimal

from quickynab.domain.entities import Transaction
from quickynab.utils.import_id import (
    IMPORT_ID_MAX_LENGTH,
    generate_import_id,
    occurrence_for,
    to_milliunits,
)


def make_tx(**overrides):
    values = {
        "date": "2025-01-15",
        "amount": Decimal("-50.00"),
        "payee_name": "Store",
        "memo": "Purchase",
    }
    values.update(overrides)
    return Transaction(**values)


def test_to_milliunits():
    """Amounts are multiplied by 1000 and rounded."""
    assert to_milliunits(Decimal("-50.00")) == -50000
    assert to_milliunits(Decimal("3000")) == 3000000
    assert to_milliunits(Decimal("0.0005")) == 1
    assert to_milliunits(Decimal("-0.0005")) == -1
    assert to_milliunits(Decimal("12.3456")) == 12346


def test_import_id_format():
    """Import ids follow YNAB:<milliunits>:<date>:<occurrence>."""
    expected = int(hashlib.sha256(b"Store:Purchase").hexdigest()[-4:], 16)
    assert generate_import_id(make_tx()) == f"YNAB:-50000:2025-01-15:{expected}"


def test_import_id_is_stable():
    """Calling twice yields the same id."""
    tx = make_tx()
    assert generate_import_id(tx) == generate_import_id(tx)


def test_identical_content_yields_identical_id():
    """Separately built transactions with equal content share an id."""
    assert generate_import_id(make_tx()) == generate_import_id(make_tx())


def test_id_changes_with_content():
    """Amount, date, payee and memo each contribute to the id."""
    base = generate_import_id(make_tx())
    assert generate_import_id(make_tx(amount=Decimal("-50.01"))) != base
    assert generate_import_id(make_tx(date="2025-01-16")) != base
    assert occurrence_for("Store", "Other memo") != occurrence_for("Store", "Purchase")


def test_category_does_not_affect_id():
    """Only amount, date, payee and memo are hashed."""
    assert generate_import_id(make_tx(category_name="Groceries")) == generate_import_id(make_tx())


def test_missing_payee_and_memo():
    """Absent payee and memo hash as empty strings."""
    tx = make_tx(payee_name=None, memo=None)
    expected = int(hashlib.sha256(b":").hexdigest()[-4:], 16)
    assert generate_import_id(tx).endswith(f":{expected}")


def test_import_id_length_bounded():
    """Ids never exceed the YNAB limit, even for huge amounts."""
    tx = make_tx(amount=Decimal("-123456789012.99"))
    assert len(generate_import_id(tx)) <= IMPORT_ID_MAX_LENGTH
    assert len(generate_import_id(make_tx())) <= IMPORT_ID_MAX_LENGTH
