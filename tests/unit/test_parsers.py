# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import base64
import json
import logging
from dataclasses import dataclass, field
from enum import Enum

from netext.errors import InvalidJsonError
from netext.http.models import HttpResponse
from netext.ip import IP
from netext.rest.parsers import NIL_PLACEHOLDER, RequestParser, ResponseParser
from netext.result import Err, Ok

RESPONSE = HttpResponse(status_code=200, headers={"Content-Type": "application/json"}, url="https://example.com/")


class Mode(Enum):
    ECO = "eco"


@dataclass
class Device:
    name: str
    mode: Mode = Mode.ECO
    tags: list[str] = field(default_factory=list)


@dataclass
class Reading:
    celsius: float
    room: str


def test_json_request_parser_encodes_compact_utf8():
    result = RequestParser.json().parse({"name": "Küche", "on": True})
    assert result == Ok('{"name":"Küche","on":true}'.encode("utf-8"))


def test_json_request_parser_erases_heterogeneous_values():
    parser = RequestParser.json()
    assert parser.parse(Device("speaker", tags=["a"])).value == b'{"name":"speaker","mode":"eco","tags":["a"]}'
    assert parser.parse([1, "two", None]).value == b'[1,"two",null]'
    expected_ip = base64.b64encode(bytes([10, 0, 0, 1])).decode("ascii")
    assert parser.parse({"ip": IP.parse("10.0.0.1")}).value == f'{{"ip":"{expected_ip}"}}'.encode()


def test_json_request_parser_surfaces_serialization_error_unmodified():
    result = RequestParser.json().parse({"handle": object()})
    assert isinstance(result, Err)
    assert isinstance(result.error, TypeError)

    boom = ValueError("cannot encode")

    def encoder(_value):
        raise boom

    assert RequestParser.json(encoder).parse({"a": 1}) == Err(boom)


def test_json_request_parser_accepts_str_encoder_output():
    assert RequestParser.json(lambda value: f"<{value}>").parse(1) == Ok(b"<1>")


def test_plain_text_request_parser():
    parser = RequestParser.plain_text()
    assert parser.parse("héllo") == Ok("héllo".encode("utf-8"))
    # Lenient fallback: no stringify function and not a string.
    assert parser.parse(42) == Ok(b"")


def test_plain_text_request_parser_with_stringify():
    assert RequestParser.plain_text(stringify=lambda value: f"n={value}").parse(42) == Ok(b"n=42")

    error = RuntimeError("nope")

    def stringify(_value):
        raise error

    assert RequestParser.plain_text(stringify=stringify).parse(42) == Err(error)


def test_ignore_request_parser_always_empty():
    assert RequestParser.ignore().parse({"anything": 1}) == Ok(b"")
    assert RequestParser.ignore().parse(None) == Ok(b"")


def test_custom_request_parser():
    parser = RequestParser(lambda value: Ok(bytes(value)))
    assert parser.parse([1, 2]) == Ok(b"\x01\x02")


def test_json_response_parser_decodes():
    assert ResponseParser.json().parse(b'{"a": [1, 2]}', RESPONSE) == Ok({"a": [1, 2]})


def test_json_response_parser_builds_dataclass_ignoring_extra_keys():
    result = ResponseParser.json(Reading).parse(b'{"celsius": 21.5, "room": "lab", "extra": 1}', RESPONSE)
    assert result == Ok(Reading(celsius=21.5, room="lab"))


def test_json_response_parser_missing_key_is_invalid_json():
    body = b'{"celsius": 21.5}'
    result = ResponseParser.json(Reading).parse(body, RESPONSE)
    assert isinstance(result.error, InvalidJsonError)
    assert isinstance(result.error.error, TypeError)
    assert result.error.data == body.decode("utf-8")


def test_json_response_parser_checks_container_types():
    assert ResponseParser.json(list).parse(b"[1]", RESPONSE) == Ok([1])
    assert ResponseParser.json(float).parse(b"3", RESPONSE) == Ok(3.0)
    result = ResponseParser.json(list).parse(b"{}", RESPONSE)
    assert isinstance(result.error, InvalidJsonError)
    assert result.error.data == "{}"


def test_json_response_parser_uses_from_dict():
    class Wrapper:
        def __init__(self, payload):
            self.payload = payload

        @classmethod
        def from_dict(cls, data):
            return cls(data["v"])

    result = ResponseParser.json(Wrapper).parse(b'{"v": 7}', RESPONSE)
    assert result.value.payload == 7


def test_json_response_parser_keeps_malformed_payload_text():
    body = b"<html>Bad Gateway</html>"
    result = ResponseParser.json().parse(body, RESPONSE)
    assert isinstance(result, Err)
    assert isinstance(result.error, InvalidJsonError)
    assert result.error.data == body.decode("utf-8")
    assert str(result.error).endswith("\n<html>Bad Gateway</html>")


def test_json_response_parser_uses_placeholder_for_invalid_utf8():
    result = ResponseParser.json().parse(b"\x80{", RESPONSE)
    assert isinstance(result.error, InvalidJsonError)
    assert result.error.data == NIL_PLACEHOLDER == "<nil>"


def test_plain_text_response_parser():
    assert ResponseParser.plain_text().parse("grüß".encode("utf-8"), RESPONSE) == Ok("grüß")
    assert ResponseParser.plain_text().parse(b"\xff", RESPONSE) == Ok("")


def test_identity_and_ignore_response_parsers():
    assert ResponseParser.identity().parse(b"\x00\x01", RESPONSE) == Ok(b"\x00\x01")
    assert ResponseParser.ignore().parse(b"whatever", RESPONSE) == Ok(None)


def test_dump_response_parser_logs_headers_and_body(caplog):
    logger = logging.getLogger("netext.tests.dump")
    with caplog.at_level(logging.DEBUG, logger="netext.tests.dump"):
        result = ResponseParser.dump(logger).parse(b"hello", RESPONSE)
    assert result == Ok(None)
    assert "Content-Type" in caplog.text
    assert "hello" in caplog.text


def test_json_request_parser_returns_hook_errors():
    class Broken:
        def to_dict(self):
            return {}["missing"]

    result = RequestParser.json().parse({"item": Broken()})
    assert isinstance(result, Err)
    assert isinstance(result.error, KeyError)


def test_request_parsers_reject_unencodable_text():
    lone_surrogate = "\ud800"
    encoded = RequestParser.json(lambda value: json.dumps(value, ensure_ascii=False)).parse(lone_surrogate)
    assert isinstance(encoded.error, UnicodeEncodeError)
    assert isinstance(RequestParser.plain_text().parse(lone_surrogate).error, UnicodeEncodeError)


def test_json_response_parser_wraps_deep_nesting():
    result = ResponseParser.json().parse(b"[" * 200000, RESPONSE)
    assert isinstance(result.error, InvalidJsonError)
    assert isinstance(result.error.error, RecursionError)


def test_json_response_parser_wraps_target_errors():
    def target(_decoded):
        raise RuntimeError("unsupported shape")

    result = ResponseParser.json(target).parse(b"{}", RESPONSE)
    assert isinstance(result.error, InvalidJsonError)
    assert str(result.error) == "unsupported shape:\n{}"
