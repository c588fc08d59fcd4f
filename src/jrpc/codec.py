"""JSON codec for JSON-RPC 2.0 requests, responses and error objects.

The wire layout does not map cleanly onto the models: ``id`` may be omitted,
null, a string or a number; ``params`` may be omitted or any shape; a
response carries exactly one of ``result``/``error``.  The codec therefore
reads and writes every envelope field by field.

Opaque payloads (``params``, ``result``, ``data``) are delegated to a
*payload encoder* on the way out (by default pydantic's
``to_jsonable_python``, which handles models, dataclasses, datetimes, …) and
optionally to a pydantic :class:`~pydantic.TypeAdapter` on the way in.

Usage::

    codec = JsonRpcCodec()
    text = codec.dumps(JsonRpcResponse.success(1, 19))
    # '{"jsonrpc":"2.0","result":19,"id":1}'
    request = codec.loads_request('{"jsonrpc":"2.0","method":"ping","id":"a"}')

A :class:`JsonRpcCodec` holds only immutable configuration, so one instance
can be shared between threads.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import IO, Any

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from jrpc.config import CodecConfig
from jrpc.errors import JsonRpcException
from jrpc.models import JsonRpcError, JsonRpcRequest, JsonRpcResponse, RequestId
from jrpc.standard_errors import internal_error, invalid_params, invalid_request, parse_error
from jrpc.utils.telemetry import (
    ATTR_MESSAGE_KIND,
    ATTR_METHOD,
    ATTR_NOTIFICATION,
    ATTR_OUTCOME,
    get_tracer,
    record_failure,
)
from jrpc.validation import AdvisorySink, validate_version

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

PayloadEncoder = Callable[[Any], Any]

Message = JsonRpcRequest[Any] | JsonRpcResponse[Any] | JsonRpcError


def default_payload_encoder(value: Any) -> Any:
    """Convert an arbitrary payload into plain JSON-compatible Python data."""
    return to_jsonable_python(value)


def _invalid(detail: str) -> JsonRpcException:
    return JsonRpcException(invalid_request(detail))


class JsonRpcCodec:
    """Bidirectional mapping between JSON-RPC models and JSON.

    ``encode_*``/``decode_*`` work on parsed trees (``dict``), ``dumps``/
    ``loads_*`` on text and ``dump``/``load_*`` on file objects.
    """

    def __init__(
        self,
        config: CodecConfig | None = None,
        payload_encoder: PayloadEncoder | None = None,
    ) -> None:
        self.config = config or CodecConfig()
        self._payload_encoder = payload_encoder or default_payload_encoder

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode_request(self, request: JsonRpcRequest[Any]) -> dict[str, Any]:
        tree: dict[str, Any] = {"jsonrpc": request.jsonrpc, "method": request.method}
        if request.has_params:
            tree["params"] = self._encode_payload(request.params)
        if request.has_id:
            tree["id"] = encode_id(request.id)
        return tree

    def encode_response(self, response: JsonRpcResponse[Any]) -> dict[str, Any]:
        tree: dict[str, Any] = {"jsonrpc": response.jsonrpc}
        if response.is_success:
            tree["result"] = self._encode_payload(response.result)
        else:
            assert response.error is not None
            tree["error"] = self.encode_error(response.error)
        tree["id"] = encode_id(response.id)
        return tree

    def encode_error(self, error: JsonRpcError) -> dict[str, Any]:
        tree: dict[str, Any] = {"code": error.code, "message": error.message}
        if error.has_data:
            tree["data"] = self._encode_payload(error.data)
        return tree

    def encode(self, message: Message) -> dict[str, Any]:
        """Encode any of the three message types into a wire tree."""
        if isinstance(message, JsonRpcRequest):
            return self.encode_request(message)
        if isinstance(message, JsonRpcResponse):
            return self.encode_response(message)
        if isinstance(message, JsonRpcError):
            return self.encode_error(message)
        msg = f"Cannot encode {type(message).__name__} as a JSON-RPC message"
        raise TypeError(msg)

    def dumps(self, message: Message) -> str:
        """Serialize a message to JSON text.

        Raises:
            JsonRpcException: ``-32603`` if a payload cannot be represented
                as JSON (e.g. ``NaN`` with ``allow_nan`` off).
        """
        tree = self.encode(message)
        try:
            return json.dumps(tree, **self.config.dumps_kwargs)
        except ValueError as exc:
            raise JsonRpcException(internal_error(str(exc))) from exc

    def dump(self, message: Message, fp: IO[str]) -> None:
        fp.write(self.dumps(message))

    def _encode_payload(self, value: Any) -> Any:
        try:
            return self._payload_encoder(value)
        except PydanticSerializationError as exc:
            raise JsonRpcException(internal_error(str(exc))) from exc

    # ------------------------------------------------------------------
    # Decoding trees
    # ------------------------------------------------------------------

    def decode_request(
        self,
        tree: Any,
        *,
        params_type: Any = None,
        sink: AdvisorySink | None = None,
    ) -> JsonRpcRequest[Any]:
        """Build a request from a parsed JSON tree.

        Only presence and JSON shape are checked here; method and id rules
        are enforced by the request model itself.
        """
        with self._decoding("request") as span:
            obj = _require_object(tree, "Request")
            _check_version(obj)

            if "method" not in obj:
                raise _invalid("Missing 'method' field")
            method = obj["method"]
            if not isinstance(method, str):
                raise _invalid("Invalid 'method' field: must be a string")
            span.set_attribute(ATTR_METHOD, method)

            builder = JsonRpcRequest.builder().method(method)
            if "params" in obj:
                builder.params(_adapt(obj["params"], params_type, invalid_params))
            if "id" in obj:
                builder.id(decode_id(obj["id"]))

            request = builder.build(sink=sink)
            span.set_attribute(ATTR_NOTIFICATION, request.is_notification)
            return request

    def decode_response(
        self,
        tree: Any,
        *,
        result_type: Any = None,
        sink: AdvisorySink | None = None,
    ) -> JsonRpcResponse[Any]:
        """Build a response from a parsed JSON tree.

        Unlike requests, a response must always carry an ``id`` key.
        """
        with self._decoding("response") as span:
            obj = _require_object(tree, "Response")
            _check_version(obj)

            if "id" not in obj:
                raise _invalid("Missing 'id' field")
            request_id = decode_id(obj["id"])

            has_result = "result" in obj
            has_error = "error" in obj
            if has_result and has_error:
                raise _invalid("Response cannot have both 'result' and 'error'")
            if not has_result and not has_error:
                raise _invalid("Response must have either 'result' or 'error'")

            if has_result:
                span.set_attribute(ATTR_OUTCOME, "success")
                result = obj["result"]
                if result is not None:
                    result = _adapt(result, result_type, internal_error)
                return JsonRpcResponse.success(request_id, result, sink=sink)

            span.set_attribute(ATTR_OUTCOME, "error")
            if not isinstance(obj["error"], dict):
                raise _invalid("Invalid 'error' field: must be an object")
            error = self.decode_error(obj["error"], sink=sink)
            return JsonRpcResponse.failure(request_id, error, sink=sink)

    def decode_error(self, tree: Any, *, sink: AdvisorySink | None = None) -> JsonRpcError:
        with self._decoding("error"):
            obj = _require_object(tree, "Error")

            if "code" not in obj:
                raise _invalid("Missing 'code' field in error object")
            code = obj["code"]
            if isinstance(code, bool) or not isinstance(code, (int, float)):
                raise _invalid("Invalid 'code' field: must be a number")
            if isinstance(code, float) and not math.isfinite(code):
                raise _invalid("Invalid 'code' field: must be a finite number")

            if "message" not in obj:
                raise _invalid("Missing 'message' field in error object")
            message = obj["message"]
            if not isinstance(message, str):
                raise _invalid("Invalid 'message' field: must be a string")

            return JsonRpcError.of(int(code), message, obj.get("data"), sink=sink)

    # ------------------------------------------------------------------
    # Decoding text and streams
    # ------------------------------------------------------------------

    def loads_request(
        self,
        text: str | bytes,
        *,
        params_type: Any = None,
        sink: AdvisorySink | None = None,
    ) -> JsonRpcRequest[Any]:
        return self.decode_request(parse_json(text), params_type=params_type, sink=sink)

    def loads_response(
        self,
        text: str | bytes,
        *,
        result_type: Any = None,
        sink: AdvisorySink | None = None,
    ) -> JsonRpcResponse[Any]:
        return self.decode_response(parse_json(text), result_type=result_type, sink=sink)

    def loads_error(self, text: str | bytes, *, sink: AdvisorySink | None = None) -> JsonRpcError:
        return self.decode_error(parse_json(text), sink=sink)

    def load_request(self, fp: IO[str], **kwargs: Any) -> JsonRpcRequest[Any]:
        return self.loads_request(fp.read(), **kwargs)

    def load_response(self, fp: IO[str], **kwargs: Any) -> JsonRpcResponse[Any]:
        return self.loads_response(fp.read(), **kwargs)

    def load_error(self, fp: IO[str], **kwargs: Any) -> JsonRpcError:
        return self.loads_error(fp.read(), **kwargs)

    @contextmanager
    def _decoding(self, kind: str) -> Iterator[Any]:
        with _tracer.start_as_current_span("jrpc.decode") as span:
            span.set_attribute(ATTR_MESSAGE_KIND, kind)
            try:
                yield span
            except JsonRpcException as exc:
                record_failure(span, exc)
                logger.debug("Failed to decode JSON-RPC %s: %s", kind, exc)
                raise


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def encode_id(request_id: RequestId) -> str | int | float | None:
    """Wire form of an id: strings and numbers as-is, anything else as null."""
    if isinstance(request_id, str):
        return request_id
    if isinstance(request_id, (int, float)) and not isinstance(request_id, bool):
        return request_id
    return None


def decode_id(value: Any) -> RequestId:
    """Accept a JSON null, string or number as an id.

    Raises:
        JsonRpcException: ``-32600`` for booleans, objects and arrays.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    raise _invalid("Invalid 'id' type")


def parse_json(text: str | bytes) -> Any:
    """Parse JSON text, failing with ``-32700`` Parse error on bad syntax.

    ``NaN``/``Infinity`` tokens and numbers outside the float range are
    rejected too, so every decoded tree can be encoded again.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise JsonRpcException(parse_error("Invalid JSON")) from exc


def _reject_constant(token: str) -> Any:
    raise JsonRpcException(parse_error(f"Invalid JSON: {token} is not a JSON value"))


def _finite_float(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise JsonRpcException(parse_error(f"Invalid JSON: number out of range: {token}"))
    return value


def _require_object(tree: Any, what: str) -> dict[str, Any]:
    if not isinstance(tree, dict):
        raise _invalid(f"{what} must be a JSON object")
    return tree


def _check_version(obj: dict[str, Any]) -> None:
    if "jsonrpc" not in obj:
        raise _invalid("Missing 'jsonrpc' field")
    version = obj["jsonrpc"]
    try:
        validate_version(version)
    except JsonRpcException as exc:
        raise _invalid(f"Invalid 'jsonrpc' version: {version}") from exc



def _adapt(
    value: Any,
    target: Any,
    on_error: Callable[[Any], JsonRpcError],
) -> Any:
    """Hand a raw payload to a pydantic ``TypeAdapter`` when a type is given."""
    if target is None or value is None:
        return value
    try:
        return TypeAdapter(target).validate_python(value)
    except ValidationError as exc:
        raise JsonRpcException(on_error(exc.errors(include_url=False, include_context=False))) from exc


# ---------------------------------------------------------------------------
# Module-level shortcuts bound to a default codec
# ---------------------------------------------------------------------------

_default_codec = JsonRpcCodec()

encode = _default_codec.encode
dumps = _default_codec.dumps
dump = _default_codec.dump
decode_request = _default_codec.decode_request
decode_response = _default_codec.decode_response
decode_error = _default_codec.decode_error
loads_request = _default_codec.loads_request
loads_response = _default_codec.loads_response
loads_error = _default_codec.loads_error
load_request = _default_codec.load_request
load_response = _default_codec.load_response
load_error = _default_codec.load_error
