import pytest

from domain.idempotency.entity import fingerprint
from domain.payment.validator import validate


def test_valid_request(make_request):
    result = validate(make_request())
    assert result.ok
    assert result.message is None


def test_first_failure_wins(make_request):
    # Every field is wrong; the key is checked first
    result = validate(make_request(idempotency_key="", amount_minor=0, currency="x", order_id=""))
    assert result.field == "idempotency_key"
    assert result.message == "idempotency_key required"


def test_amount_checked_before_currency(make_request):
    result = validate(make_request(amount_minor=-1, currency="US"))
    assert result.message == "amount must be positive"


@pytest.mark.parametrize("currency", ["US", "usd", "USDX", "", "XYZ", "U$D"])
def test_invalid_currencies(make_request, currency):
    result = validate(make_request(currency=currency))
    assert not result.ok
    assert result.message == "invalid currency"


@pytest.mark.parametrize("amount", [True, 1.5, "100"])
def test_amount_must_be_an_integer(make_request, amount):
    assert validate(make_request(amount_minor=amount)).message == "amount must be positive"


def test_custom_allow_list(make_request):
    assert not validate(make_request(currency="EUR"), allowed_currencies={"USD"}).ok
    assert validate(make_request(currency="USD"), allowed_currencies={"USD"}).ok


def test_fingerprint_ignores_metadata_and_key(make_request):
    base = fingerprint(make_request())
    assert fingerprint(make_request(metadata={"a": "b"})) == base
    assert fingerprint(make_request(idempotency_key="other")) == base
    assert fingerprint(make_request(amount_minor=1001)) != base
    assert fingerprint(make_request(currency="EUR")) != base
    assert fingerprint(make_request(order_id="ord-2")) != base


def test_fingerprint_field_boundaries_are_unambiguous(make_request):
    a = fingerprint(make_request(currency="USD", order_id="1|x"))
    b = fingerprint(make_request(currency="USD|1", order_id="x"))
    assert a != b
