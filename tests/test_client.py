import io
import json
import unittest

import pytest

from webclient.client import Client, run
from webclient.error import ConnectionFailedError, HTTPStatusError
from webclient.request import RequestIntent
from webclient.status import Status
from webclient.test import Route, Server, closed_port_url


def server() -> Server:
    return Server(
        {
            "/hello": Route(body="hello world"),
            "/object": Route(
                body='{"b": 2, "a": {"d": 1, "c": 2}}',
                content_type="application/json",
            ),
            "/array": Route(body="[3, 1, 2]", content_type="application/json"),
            "/teapot": Route(418, "short and stout"),
            "/moved": Route(302, headers={"Location": "/hello"}),
        }
    )


class TestClient(unittest.TestCase):
    def setUp(self):
        self.server = server()
        self.server.start()
        self.client = Client()

    def tearDown(self):
        self.client.close()
        self.server.stop()

    def test_get(self):
        intent = RequestIntent.from_args(self.server.url_for("/hello"))
        response = self.client.send(intent)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.status, Status.OK)
        self.assertEqual(response.text, "hello world")

        [request] = self.server.requests
        self.assertEqual(request.method, "GET")
        self.assertEqual(request.body, b"")
        self.assertTrue(request.headers["user-agent"].startswith("webclient/"))

    def test_get_follows_redirects(self):
        intent = RequestIntent.from_args(self.server.url_for("/moved"))
        response = self.client.send(intent)
        self.assertEqual(response.text, "hello world")
        self.assertEqual([r.path for r in self.server.requests], ["/moved", "/hello"])

    def test_post_form_is_sent_as_json(self):
        intent = RequestIntent.from_args(
            self.server.url_for("/object"), method="POST", data="a=1&b=2"
        )
        self.client.send(intent)

        [request] = self.server.requests
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.headers["content-type"], "application/json")
        self.assertEqual(json.loads(request.body), {"a": "1", "b": "2"})

    def test_post_urlencoded(self):
        intent = RequestIntent.from_args(
            self.server.url_for("/object"),
            method="POST",
            data="a=1&b=x y",
            urlencoded=True,
        )
        self.client.send(intent)

        [request] = self.server.requests
        self.assertEqual(
            request.headers["content-type"], "application/x-www-form-urlencoded"
        )
        self.assertEqual(request.body, b"a=1&b=x+y")

    def test_post_raw_json(self):
        intent = RequestIntent.from_args(
            self.server.url_for("/object"), json='{"nested": {"x": [1, null]}}'
        )
        self.client.send(intent)

        [request] = self.server.requests
        self.assertEqual(json.loads(request.body), {"nested": {"x": [1, None]}})

    def test_error_status(self):
        intent = RequestIntent.from_args(self.server.url_for("/teapot"))
        with self.assertRaises(HTTPStatusError) as mc:
            self.client.send(intent)
        self.assertEqual(mc.exception.status_code, 418)

    def test_not_found(self):
        intent = RequestIntent.from_args(self.server.url_for("/missing"))
        with self.assertRaises(HTTPStatusError) as mc:
            self.client.send(intent)
        self.assertEqual(mc.exception.status_code, 404)
        self.assertIs(mc.exception._status, Status.NOT_FOUND)


def test_connection_refused():
    with Client() as client:
        with pytest.raises(ConnectionFailedError) as mc:
            client.send(RequestIntent.from_args(closed_port_url()))
    assert mc.value._status is Status.TCP_ERROR
    assert isinstance(mc.value, ConnectionError)


def test_unsupported_scheme_is_a_connection_failure():
    with Client() as client:
        with pytest.raises(ConnectionFailedError):
            client.send(RequestIntent.from_args("ftp://127.0.0.1/file"))


def run_and_capture(intent: RequestIntent, **kwargs):
    out = io.StringIO()
    status = run(intent, file=out, **kwargs)
    return status, out.getvalue()


def test_run_get_prints_raw_body():
    with server() as api:
        status, output = run_and_capture(
            RequestIntent.from_args(api.url_for("/object"))
        )
    assert status is Status.OK
    assert output == (
        f"Requesting URL: {api.url}/object\n"
        "Method: GET\n"
        "Response body:\n"
        '{"b": 2, "a": {"d": 1, "c": 2}}'
    )


def test_run_post_prints_sorted_json():
    with server() as api:
        status, output = run_and_capture(
            RequestIntent.from_args(api.url_for("/object"), method="POST", data="")
        )
    assert status is Status.OK
    assert output == (
        f"Requesting URL: {api.url}/object\n"
        "Method: POST\n"
        "Response body:\n"
        "{\n"
        '  "a": {\n'
        '    "d": 1,\n'
        '    "c": 2\n'
        "  },\n"
        '  "b": 2\n'
        "}\n"
    )


def test_run_post_sort_nested():
    with server() as api:
        _, output = run_and_capture(
            RequestIntent.from_args(api.url_for("/object"), json="{}"),
            sort_nested=True,
        )
    assert output.index('"c"') < output.index('"d"')


def test_run_post_non_object_prints_raw_body():
    with server() as api:
        _, output = run_and_capture(
            RequestIntent.from_args(api.url_for("/array"), json="[]")
        )
        _, text = run_and_capture(
            RequestIntent.from_args(api.url_for("/hello"), json="[]")
        )
    assert output.endswith("Response body:\n[3, 1, 2]\n")
    assert text.endswith("Response body:\nhello world\n")


def test_run_error_status():
    with server() as api:
        status, output = run_and_capture(
            RequestIntent.from_args(api.url_for("/teapot"))
        )
    assert status is Status.PERMANENT_ERROR
    assert output.endswith("Error: Request failed with status code: 418.\n")
    assert "Response body" not in output


def test_run_unreachable_host():
    status, output = run_and_capture(RequestIntent.from_args(closed_port_url()))
    assert status is Status.TCP_ERROR
    assert output.endswith(
        "Error: Unable to connect to the server. Perhaps the network is offline "
        "or the server hostname cannot be resolved.\n"
    )


def test_run_invalid_url_sends_nothing():
    with server() as api:
        status, output = run_and_capture(RequestIntent.from_args("example.com"))
        assert api.requests == []
    assert status is Status.INVALID_ARGUMENT
    assert output == (
        "Requesting URL: example.com\n"
        "Method: GET\n"
        "Error: The URL does not have a valid base protocol.\n"
    )


def test_run_uses_given_client():
    with server() as api, Client(user_agent="custom/1.0") as client:
        run_and_capture(RequestIntent.from_args(api.url_for("/hello")), client=client)
        [request] = api.requests
    assert request.headers["user-agent"] == "custom/1.0"


def test_backslashes_in_path_are_sent_as_slashes():
    with server() as api:
        status, output = run_and_capture(
            RequestIntent.from_args(api.url + "\\hello")
        )
        [request] = api.requests
    assert status is Status.OK
    assert request.path == "/hello"
    assert output.endswith("Response body:\nhello world")
