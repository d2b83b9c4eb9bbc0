from __future__ import annotations

import base64
import binascii
import re
from urllib.parse import quote, unquote

from jsonata_strings.core.args.classify import require_string
from jsonata_strings.core.errors import ConversionError


# Characters left alone by JavaScript's encodeURI / encodeURIComponent.
_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"
_URI_COMPONENT_SAFE = "-_.!~*'()"

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def base64_encode(s: str) -> str:
    require_string(s, function="base64encode")
    return base64.b64encode(_utf8(s, function="base64encode", code="E_BASE64")).decode("ascii")


def base64_decode(s: str) -> str:
    require_string(s, function="base64decode")
    try:
        raw = base64.b64decode(s, validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ConversionError(
            code="E_BASE64",
            message=f"invalid base64 input: {e}",
            function="base64decode",
            argument="str",
        ) from e


def encode_url(s: str) -> str:
    require_string(s, function="encodeUrl")
    return quote(_url_bytes(s, function="encodeUrl"), safe=_URI_SAFE)


def encode_url_component(s: str) -> str:
    require_string(s, function="encodeUrlComponent")
    return quote(_url_bytes(s, function="encodeUrlComponent"), safe=_URI_COMPONENT_SAFE)


def decode_url(s: str) -> str:
    return _decode(s, function="decodeUrl")


def decode_url_component(s: str) -> str:
    return _decode(s, function="decodeUrlComponent")


def _decode(s: str, *, function: str) -> str:
    require_string(s, function=function)
    if _BAD_ESCAPE.search(s):
        raise ConversionError(
            code="E_URL_ENCODING",
            message="malformed percent-escape sequence",
            function=function,
            argument="str",
        )
    try:
        return unquote(s, errors="strict")
    except UnicodeDecodeError as e:
        raise ConversionError(
            code="E_URL_ENCODING",
            message=f"escaped bytes are not valid UTF-8: {e}",
            function=function,
            argument="str",
        ) from e


def _utf8(s: str, *, function: str, code: str) -> bytes:
    try:
        return s.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ConversionError(
            code=code,
            message=f"invalid character: {e.reason}",
            function=function,
            argument="str",
        ) from e


def _url_bytes(s: str, *, function: str) -> bytes:
    # A lone replacement character is rejected rather than percent-encoded.
    if s == "\ufffd":
        raise ConversionError(
            code="E_URL_ENCODING",
            message="invalid character",
            function=function,
            argument="str",
        )
    return _utf8(s, function=function, code="E_URL_ENCODING")
