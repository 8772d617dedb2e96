import httpx
import pytest

from api.dependencies import get_processor
from core.settings import payment_settings
from domain.idempotency.entity import fingerprint
from main import create_app
from shared.codes import BusinessCode


pytestmark = pytest.mark.asyncio


@pytest.fixture
async def client(processor):
    app = create_app()
    app.dependency_overrides[get_processor] = lambda: processor
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def _body(**overrides) -> dict:
    body = {"amount_minor": 1000, "currency": "USD", "order_id": "ord-1", "idempotency_key": "key-1"}
    body.update(overrides)
    return body


async def test_request_payment_and_replay(client):
    first = await client.post("/api/v1/payments", json=_body())
    assert first.status_code == 200
    envelope = first.json()
    assert envelope["code"] == BusinessCode.SUCCESS
    assert envelope["data"]["status"] == "SUCCEEDED"
    assert envelope["data"]["payment_id"].startswith("pay_")

    second = await client.post("/api/v1/payments", json=_body())
    assert second.json()["data"] == envelope["data"]


async def test_idempotency_key_header(client):
    body = _body()
    del body["idempotency_key"]

    resp = await client.post("/api/v1/payments", json=body, headers={"Idempotency-Key": "hdr-1"})
    assert resp.status_code == 200
    assert resp.json()["data"]["idempotency_key"] == "hdr-1"


async def test_validation_error_is_400(client):
    resp = await client.post("/api/v1/payments", json=_body(currency="usd"))
    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == BusinessCode.PARAM_VALIDATION_ERROR
    assert body["message"] == "invalid currency"
    assert body["error"]["category"] == "INVALID_ARGUMENT"
    assert body["error"]["field"] == "currency"


async def test_wrong_json_type_is_400(client):
    resp = await client.post("/api/v1/payments", json=_body(amount_minor="1000"))
    assert resp.status_code == 400
    assert resp.json()["error"]["category"] == "INVALID_ARGUMENT"


async def test_key_reuse_is_409(client):
    await client.post("/api/v1/payments", json=_body())
    resp = await client.post("/api/v1/payments", json=_body(order_id="ord-2"))
    assert resp.status_code == 409
    assert resp.json()["code"] == BusinessCode.IDEMPOTENCY_CONFLICT


async def test_in_flight_key_is_503_with_retry_after(client, idempotency, make_request):
    req = make_request()
    await idempotency.reserve(req.idempotency_key, fingerprint(req))

    resp = await client.post("/api/v1/payments", json=_body())
    assert resp.status_code == 503
    assert resp.headers["Retry-After"] == str(payment_settings.in_progress_retry_after_seconds)
    assert resp.json()["error"]["retryable"] is True


async def test_get_payment(client):
    created = (await client.post("/api/v1/payments", json=_body())).json()["data"]

    resp = await client.get(f"/api/v1/payments/{created['payment_id']}")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["payment_id"] == created["payment_id"]
    assert data["amount_minor"] == 1000
    assert data["created_at"] == created["created_at"]


async def test_unknown_payment_is_404(client):
    resp = await client.get("/api/v1/payments/nonexistent-id")
    assert resp.status_code == 404
    assert resp.json()["code"] == BusinessCode.PAYMENT_NOT_FOUND


async def test_request_id_header_is_echoed(client):
    resp = await client.get("/api/v1/payments/missing", headers={"X-Request-ID": "req-9"})
    assert resp.headers["X-Request-ID"] == "req-9"
    assert resp.json()["error"]["request_id"] == "req-9"


async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
