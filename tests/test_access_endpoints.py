"""
Tests for identifier and access matching endpoints.
"""
from fastapi import status


PORT_FORWARD_SPEC = {
    "scope": {"group": "grp"},
    "address": "2001:db8::1",
    "port": "22",
    "principal": {"type": "protocol", "protocol": "portforward"},
    "remote_port": 8080,
    "proxy": {"address": "fd00::1", "port": "22", "user": "proxy_user"},
}


def test_encode_endpoint(client):
    response = client.post("/api/v1/identifiers/encode", json=PORT_FORWARD_SPEC)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "identifier": "grp:[2001:db8::1]:22::portforward:8080:[fd00::1]:22:proxy_user"
    }


def test_encode_endpoint_rejects_invalid_spec(client):
    """Body validation failures are reported by FastAPI as 422."""
    body = dict(PORT_FORWARD_SPEC, principal={"type": "user", "name": "root"})

    response = client.post("/api/v1/identifiers/encode", json=body)

    assert response.status_code == 422


def test_decode_endpoint(client):
    response = client.post(
        "/api/v1/identifiers/decode",
        json={"identifier": "grp:[2001:db8::1]:22::portforward:8080:[fd00::1]:22:proxy_user"},
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "scope": {"group": "grp", "account": None},
        "address": "2001:db8::1",
        "port": "22",
        "principal": {"type": "protocol", "protocol": "portforward"},
        "remote_port": 8080,
        "proxy": {"address": "fd00::1", "port": "22", "user": "proxy_user"},
    }


def test_decode_endpoint_guest_scope(client):
    response = client.post(
        "/api/v1/identifiers/decode",
        json={"identifier": "grp:alice:10.0.0.1:*:*", "scope_kind": "guest"},
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["scope"] == {"group": "grp", "account": "alice"}
    assert data["principal"] == {"type": "user", "name": "*"}


def test_decode_endpoint_rejects_malformed_identifier(client):
    response = client.post("/api/v1/identifiers/decode", json={"identifier": "g:1.2.3.4:22"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    detail = response.json()["detail"]
    assert detail["error"] == "InvalidArityError"
    assert detail["identifier"] == "g:1.2.3.4:22"
    assert "g:1.2.3.4:22" in detail["message"]


def test_decode_endpoint_rejects_bad_number(client):
    response = client.post("/api/v1/identifiers/decode", json={"identifier": "g:1.2.3.4:ssh:root"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["error"] == "InvalidNumberError"


def test_match_endpoint_present(client):
    response = client.post(
        "/api/v1/accesses/match",
        json={
            "specification": {
                "scope": {"group": "grp"},
                "address": "192.168.1.100",
                "port": "*",
                "principal": {"type": "user", "name": "*"},
            },
            "records": [
                {"ip": "192.168.1.100", "port": None, "user": None, "addedBy": "admin"},
            ],
        },
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "present"
    assert data["index"] == 0
    assert data["identifier"] == "grp:192.168.1.100:*:*"
    assert data["record"]["addedBy"] == "admin"


def test_match_endpoint_absent(client):
    response = client.post(
        "/api/v1/accesses/match",
        json={
            "specification": PORT_FORWARD_SPEC,
            "records": [
                {"ip": "2001:db8::1", "port": 22, "user": "!portforward", "remotePort": 8080},
            ],
        },
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "absent"
    assert data["record"] is None


def test_responses_carry_trace_id(client):
    response = client.post("/api/v1/identifiers/decode", json={"identifier": "g:1.2.3.4:22:root"})
    assert "X-Trace-ID" in response.headers


def test_match_endpoint_unknown_protocol_user(client):
    response = client.post(
        "/api/v1/accesses/match",
        json={
            "specification": {
                "scope": {"group": "grp"},
                "address": "1.2.3.4",
                "port": "22",
                "principal": {"type": "user", "name": "!telnet"},
            },
            "records": [{"ip": "1.2.3.4", "port": 22, "user": "!telnet"}],
        },
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "present"
    assert data["current"] is None
    assert data["drift"] is True
