import asyncio
import base64
import json

import httpx
import pytest

from dotmailer_api import ErrorKind, Request
from dotmailer_api.adapters.client import status_description

from conftest import BASE_URL, Account, AddressBook, Contact, OptInType, Status


def _request(path: str) -> Request:
    return Request.for_path(BASE_URL, path)


def test_post_returns_created_object(make_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        seen["content_type"] = request.headers["Content-Type"]
        return httpx.Response(201, json={"name": "A", "id": 7})

    async def scenario():
        async with make_client(handler) as client:
            return await client.post(_request("/v2/address-books"), AddressBook(name="A"))

    result = asyncio.run(scenario())

    assert result.succeeded
    assert result.value == AddressBook(name="A", id=7)
    assert result.error_message is None
    assert result.status_code == 201
    assert seen == {"method": "POST", "body": {"name": "A", "id": None}, "content_type": "application/json"}


def test_post_service_error_message_is_structured(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "Name already exists"})

    async def scenario():
        async with make_client(handler) as client:
            return await client.post(_request("/v2/address-books"), AddressBook(name="A"))

    result = asyncio.run(scenario())

    assert not result.succeeded
    assert result.value is None
    assert result.error_kind is ErrorKind.SERVICE
    assert result.status_code == 400
    assert result.error_message == (
        "Failed to POST object (Status Code: 400, Status Description: BadRequest, "
        "Detail: Name already exists)"
    )


@pytest.mark.parametrize(
    ("method", "status", "description"),
    [
        ("GET", 404, "NotFound"),
        ("DELETE", 403, "Forbidden"),
        ("PUT", 409, "Conflict"),
        ("GET", 500, "InternalServerError"),
    ],
)
def test_service_errors_for_every_verb(make_client, method, status, description):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json={"Message": "ERROR_CONTACT_NOT_FOUND"})

    async def scenario():
        async with make_client(handler) as client:
            if method == "PUT":
                return await client.put(_request("/v2/contacts/1"), Contact(email="a@b.c"))
            return await client.send(method, _request("/v2/contacts/1"), response_type=Contact)

    result = asyncio.run(scenario())

    assert not result.succeeded
    assert f"Failed to {method} object" in result.error_message
    assert f"Status Code: {status}" in result.error_message
    assert f"Status Description: {description}" in result.error_message
    assert "Detail: ERROR_CONTACT_NOT_FOUND" in result.error_message


def test_unparseable_error_body_falls_back_to_exception_message(make_client):
    # Known quirk: a non-JSON error body hides the service error behind the
    # generic exception message.
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    async def scenario():
        async with make_client(handler) as client:
            return await client.get(_request("/v2/account-info"))

    result = asyncio.run(scenario())

    assert not result.succeeded
    assert result.error_message.startswith("An exception occurred:")
    assert result.error_kind is ErrorKind.TRANSPORT
    assert result.status_code is None


def test_error_body_without_message_falls_back_to_exception_message(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "nope"})

    async def scenario():
        async with make_client(handler) as client:
            return await client.delete(_request("/v2/contacts/1"))

    result = asyncio.run(scenario())

    assert not result.succeeded
    assert result.error_message.startswith("An exception occurred:")


@pytest.mark.parametrize(
    "exc",
    [
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
    ],
)
def test_transport_failures_become_results(make_client, exc):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc

    async def scenario():
        async with make_client(handler) as client:
            return await client.get(_request("/v2/account-info"), Contact)

    result = asyncio.run(scenario())

    assert not result.succeeded
    assert result.value is None
    assert result.error_kind is ErrorKind.TRANSPORT
    assert result.error_message.startswith("An exception occurred:")
    assert str(exc) in result.error_message


def test_unreachable_endpoint_becomes_result():
    from dotmailer_api import DotmailerClient

    async def scenario():
        async with DotmailerClient("u", "p", "http://127.0.0.1:9") as client:
            return await client.get(Request(url="http://127.0.0.1:9/v2/account-info"))

    result = asyncio.run(scenario())

    assert not result.succeeded
    assert result.error_message.startswith("An exception occurred:")


def test_typed_body_that_does_not_parse_becomes_exception_result(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="not json")

    async def scenario():
        async with make_client(handler) as client:
            return await client.get(_request("/v2/contacts/1"), Contact)

    result = asyncio.run(scenario())

    assert not result.succeeded
    assert result.error_message.startswith("An exception occurred:")


def test_request_side_serialization_failure_is_not_sent(make_client):
    class Opaque:
        pass

    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    async def scenario():
        async with make_client(handler) as client:
            return await client.post(_request("/v2/contacts"), Opaque(), response_type=Contact)

    result = asyncio.run(scenario())

    assert not result.succeeded
    assert result.error_message.startswith("An exception occurred:")
    assert calls == []


def test_untyped_get_and_delete_report_success_only(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(200, text="pong")

    async def scenario():
        async with make_client(handler) as client:
            return (
                await client.get(_request("/v2/ping")),
                await client.delete(_request("/v2/contacts/1")),
            )

    got, deleted = asyncio.run(scenario())

    assert got.succeeded and got.value is None and got.raw == "pong"
    assert deleted.succeeded and deleted.value is None and deleted.status_code == 204


def test_typed_delete_parses_response(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"email": "a@b.c", "id": 3})

    async def scenario():
        async with make_client(handler) as client:
            return await client.delete(_request("/v2/contacts/3"), Contact)

    result = asyncio.run(scenario())

    assert result.succeeded
    assert result.value.id == 3


def test_post_without_input_sends_empty_body(make_client):
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(request.content)
        return httpx.Response(200, json={"name": "Resubscribed", "id": 1})

    async def scenario():
        async with make_client(handler) as client:
            return await client.post(_request("/v2/contacts/1/resubscribe"), response_type=AddressBook)

    result = asyncio.run(scenario())

    assert bodies == [b""]
    assert result.value == AddressBook(name="Resubscribed", id=1)


def test_post_with_distinct_input_and_output_types(make_client):
    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content) == {"email": "a@b.c", "optInType": "Single", "id": None}
        return httpx.Response(201, json={"name": "Imported", "id": 99})

    async def scenario():
        async with make_client(handler) as client:
            return await client.post(
                _request("/v2/address-books/1/contacts"),
                Contact(email="a@b.c", opt_in_type=OptInType.Single),
                response_type=AddressBook,
            )

    result = asyncio.run(scenario())

    assert result.value == AddressBook(name="Imported", id=99)


def test_put_round_trips_enum_names(make_client):
    sent = {}

    def handler(request: httpx.Request) -> httpx.Response:
        sent.update(json.loads(request.content))
        return httpx.Response(200, json={**sent, "id": 5})

    async def scenario():
        async with make_client(handler) as client:
            return await client.put(
                _request("/v2/contacts/5"),
                Contact(email="a@b.c", opt_in_type=OptInType.VerifiedDouble),
            )

    result = asyncio.run(scenario())

    assert sent["optInType"] == "VerifiedDouble"
    assert result.succeeded
    assert result.value.opt_in_type is OptInType.VerifiedDouble
    assert result.value.id == 5


def test_every_request_carries_basic_auth_header(make_client):
    headers = []

    def handler(request: httpx.Request) -> httpx.Response:
        headers.append(request.headers["Authorization"])
        return httpx.Response(200, json={})

    async def scenario():
        async with make_client(handler) as client:
            await client.get(_request("/v2/a"))
            await client.post(_request("/v2/b"), {"x": 1})
            await client.delete(_request("/v2/c"))

    asyncio.run(scenario())

    expected = "Basic " + base64.b64encode(b"apiuser-1@apiconnector.com:s3cret").decode()
    assert headers == [expected] * 3


def test_concurrent_gets_do_not_mix_results(make_client):
    async def handler(request: httpx.Request) -> httpx.Response:
        contact_id = int(request.url.path.rsplit("/", 1)[-1])
        await asyncio.sleep(0.001 * (20 - contact_id))
        return httpx.Response(200, json={"email": f"c{contact_id}@x.y", "id": contact_id})

    async def scenario():
        async with make_client(handler) as client:
            return await asyncio.gather(
                *(client.get(_request(f"/v2/contacts/{i}"), Contact) for i in range(20))
            )

    results = asyncio.run(scenario())

    assert [r.value.id for r in results] == list(range(20))
    assert all(r.value.email == f"c{r.value.id}@x.y" for r in results)


def test_cancelled_call_does_not_produce_a_result(make_client):
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(10)
        return httpx.Response(200)

    async def scenario():
        async with make_client(handler) as client:
            await asyncio.wait_for(client.get(_request("/v2/slow")), timeout=0.05)

    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(scenario())


@pytest.mark.parametrize(
    ("code", "expected"),
    [(200, "Ok"), (201, "Created"), (400, "BadRequest"), (401, "Unauthorized"), (429, "TooManyRequests"), (599, "599")],
)
def test_status_description(code, expected):
    assert status_description(code) == expected


def test_put_round_trips_plain_enum_names(make_client):
    sent = {}

    def handler(request: httpx.Request) -> httpx.Response:
        sent.update(json.loads(request.content))
        return httpx.Response(200, content=request.content)

    async def scenario():
        async with make_client(handler) as client:
            return await client.put(_request("/v2/accounts/1"), Account(id=1, status=Status.Suspended))

    result = asyncio.run(scenario())

    assert sent["status"] == "Suspended"
    assert result.succeeded, result.error_message
    assert result.value.status is Status.Suspended


@pytest.mark.parametrize("method", ["DELETE", "PUT"])
def test_typed_operation_with_no_content_succeeds_without_value(make_client, method):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    async def scenario():
        async with make_client(handler) as client:
            if method == "PUT":
                return await client.put(_request("/v2/contacts/1"), Contact(email="a@b.c"))
            return await client.delete(_request("/v2/contacts/1"), Contact)

    result = asyncio.run(scenario())

    assert result.succeeded
    assert result.value is None
    assert result.error_message is None
    assert result.status_code == 204
