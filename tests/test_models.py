"""Tests for the Headers, URL, Request and Response value types."""

import io

import pytest

from minihttp import (
    URL,
    ByteStream,
    Headers,
    InvalidHeader,
    InvalidInput,
    InvalidURL,
    IteratorByteStream,
    Request,
    Response,
    StreamClosed,
    codes,
)
from minihttp._streams import UntilCloseStream


class TestHeaders:
    """Test the case-insensitive header collection."""

    def test_lookup_is_case_insensitive(self):
        headers = Headers({"Content-Type": "text/html"})

        assert headers["content-type"] == "text/html"
        assert "CONTENT-TYPE" in headers

    def test_set_overwrites_in_place(self):
        headers = Headers([("A", "1"), ("B", "2")])
        headers.add("a", "3")

        headers["a"] = "new"

        assert headers.items() == [("a", "new"), ("B", "2")]

    def test_add_keeps_every_value(self):
        headers = Headers()
        headers.add("Via", "1.1 a")
        headers.add("via", "1.1 b")

        assert headers.get("VIA") == "1.1 a"
        assert headers.get_list("via") == ["1.1 a", "1.1 b"]

    def test_setdefault_and_delete(self):
        headers = Headers({"X-One": "1"})

        assert headers.setdefault("x-one", "other") == "1"
        assert headers.setdefault("X-Two", "2") == "2"
        del headers["x-one"]
        assert list(headers) == ["X-Two"]
        with pytest.raises(KeyError):
            del headers["x-one"]

    def test_values_are_stripped(self):
        assert Headers({"X": "  padded\t"})["x"] == "padded"

    @pytest.mark.parametrize("name", ["", "Bad Name", "colon:", "tab\t"])
    def test_invalid_name(self, name):
        with pytest.raises(InvalidHeader):
            Headers({name: "value"})

    @pytest.mark.parametrize("value", ["a\r\nInjected: 1", "nul\x00", "snow☃"])
    def test_invalid_value(self, value):
        with pytest.raises(InvalidHeader) as exc_info:
            Headers({"X": value})

        assert isinstance(exc_info.value, InvalidInput)

    def test_copy_is_independent(self):
        headers = Headers({"A": "1"})
        copy = headers.copy()
        copy["A"] = "2"

        assert headers["a"] == "1"
        assert copy == {"a": "2"}


class TestURL:
    """Test URL parsing and joining."""

    def test_components(self):
        url = URL("HTTPS://user@Example.com:8443/a/b?x=1#frag")

        assert url.scheme == "https"
        assert url.host == "example.com"
        assert url.port == 8443
        assert url.path == "/a/b"
        assert url.query == "x=1"
        assert url.fragment == "frag"
        assert url.target == "/a/b?x=1"
        assert url.authority == "example.com:8443"

    def test_port_is_none_when_absent(self):
        assert URL("http://example.com/").port is None

    def test_ipv6_authority(self):
        assert URL("http://[::1]:8080/").authority == "[::1]:8080"

    @pytest.mark.parametrize(
        "location, expected",
        [
            ("/b", "http://example.com/b"),
            ("c", "http://example.com/a/c"),
            ("../up", "http://example.com/up"),
            ("?page=2", "http://example.com/a/b?page=2"),
            ("//cdn.test/x", "http://cdn.test/x"),
            ("https://secure.test/", "https://secure.test/"),
            ("/my file.txt", "http://example.com/my%20file.txt"),
            ("?q=a b", "http://example.com/a/b?q=a%20b"),
            ("/already%20escaped", "http://example.com/already%20escaped"),
        ],
    )
    def test_join(self, location, expected):
        assert URL("http://example.com/a/b").join(location) == expected

    @pytest.mark.parametrize(
        "value",
        ["example.com/path", "http://example.com:99999/", "http://exa mple.com/", "http://exämple.com/"],
    )
    def test_invalid(self, value):
        with pytest.raises(InvalidURL):
            URL(value)

    def test_join_failure(self):
        with pytest.raises(InvalidURL):
            URL("http://example.com/").join("http://example.com:bad/")


class TestRequest:
    """Test request construction."""

    def test_method_is_upper_cased(self):
        request = Request("get", "http://example.com/")

        assert request.method == "GET"
        assert request.url == URL("http://example.com/")

    @pytest.mark.parametrize("method", ["", "GE T", "G\r\nET"])
    def test_invalid_method(self, method):
        with pytest.raises(InvalidInput):
            Request(method, "http://example.com/")

    @pytest.mark.parametrize(
        "method, safe",
        [("GET", True), ("HEAD", True), ("OPTIONS", True), ("TRACE", True),
         ("POST", False), ("PUT", False), ("DELETE", False), ("PATCH", False)],
    )
    def test_is_safe(self, method, safe):
        assert Request(method, "http://example.com/").is_safe is safe

    def test_content_types(self):
        assert Request("POST", "http://x.test/").stream is None
        assert isinstance(Request("POST", "http://x.test/", content=b"a").stream, ByteStream)
        assert isinstance(Request("POST", "http://x.test/", content=[b"a"]).stream, IteratorByteStream)
        with pytest.raises(TypeError):
            Request("POST", "http://x.test/", content=42)


class TestResponse:
    """Test the response value."""

    def test_text_uses_charset(self):
        response = Response(
            200,
            headers={"Content-Type": "text/plain; charset=latin-1"},
            content="café".encode("latin-1"),
        )

        assert response.text == "café"

    def test_default_reason_phrase(self):
        assert Response(codes.PERMANENT_REDIRECT).reason_phrase == "Permanent Redirect"
        assert Response(599).reason_phrase == ""

    def test_is_redirect(self):
        assert Response(302, headers={"Location": "/"}).is_redirect
        assert not Response(302).is_redirect
        assert not Response(200, headers={"Location": "/"}).is_redirect

    def test_context_manager_closes(self):
        with Response(200, stream=UntilCloseStream(io.BytesIO(b"body"))) as response:
            pass

        with pytest.raises(StreamClosed):
            response.read()
