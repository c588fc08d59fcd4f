"""JSON-RPC 2.0 value types — error objects, requests and responses.

All three are frozen pydantic models validated once, at construction.
Payloads (``params``, ``result``, ``data``) are opaque: they are stored and
handed to the codec's payload encoder without being inspected.

Presence is tracked through pydantic's ``model_fields_set``:

* a request whose ``id`` was never supplied is a notification, while an
  explicit ``id=None`` is a request with a null id;
* a response is a success exactly when ``result`` was supplied (possibly as
  ``None``) and an error exactly when ``error`` was supplied.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator, model_validator

from jrpc.errors import JsonRpcException
from jrpc.validation import (
    ADVISORY_SINK_KEY,
    JSONRPC_VERSION,
    AdvisorySink,
    validate_error_code,
    validate_id,
    validate_message,
    validate_method,
)

P = TypeVar("P")
R = TypeVar("R")

RequestId = str | int | float | None

_INTERNAL_ERROR = -32603


def advisory_context(sink: AdvisorySink | None) -> dict[str, Any] | None:
    """Pydantic validation context carrying an advisory sink."""
    if sink is None:
        return None
    return {ADVISORY_SINK_KEY: sink}


def _sink_from(info: ValidationInfo) -> AdvisorySink | None:
    if not info.context:
        return None
    return info.context.get(ADVISORY_SINK_KEY)


def _internal(message: str) -> JsonRpcException:
    return JsonRpcException(JsonRpcError.of(_INTERNAL_ERROR, message))


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.UNSET


# ---------------------------------------------------------------------------
# Error object
# ---------------------------------------------------------------------------


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object.

    ``code`` is any integer; the reserved ranges are advisory and checked
    only by :mod:`jrpc.standard_errors`.  ``message`` must be non-blank.
    ``data`` is optional and never interpreted (``None`` means absent).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: int
    message: str
    data: Any = None

    @field_validator("code", mode="before")
    @classmethod
    def _check_code(cls, value: Any) -> Any:
        validate_error_code(value)
        return value

    @field_validator("message", mode="before")
    @classmethod
    def _check_message(cls, value: Any, info: ValidationInfo) -> Any:
        validate_message(value, _sink_from(info))
        return value

    @classmethod
    def of(
        cls,
        code: int,
        message: str,
        data: Any = None,
        *,
        sink: AdvisorySink | None = None,
    ) -> JsonRpcError:
        """Create an error object; ``data`` is omitted on the wire when ``None``."""
        return cls.model_validate(
            {"code": code, "message": message, "data": data},
            context=advisory_context(sink),
        )

    @classmethod
    def builder(cls) -> ErrorBuilder:
        return ErrorBuilder()

    @property
    def has_data(self) -> bool:
        return self.data is not None


class ErrorBuilder:
    """Accumulates error fields; :meth:`build` requires code and message."""

    def __init__(self) -> None:
        self._code: int | None = None
        self._message: str | None = None
        self._data: Any = None

    def code(self, code: int) -> ErrorBuilder:
        self._code = code
        return self

    def message(self, message: str) -> ErrorBuilder:
        self._message = message
        return self

    def data(self, data: Any) -> ErrorBuilder:
        self._data = data
        return self

    def build(self, *, sink: AdvisorySink | None = None) -> JsonRpcError:
        if self._code is None:
            raise _internal("Internal Error: error code is required")
        if self._message is None:
            raise _internal("Internal Error: error message is required")
        return JsonRpcError.of(self._code, self._message, self._data, sink=sink)


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel, Generic[P]):
    """A JSON-RPC 2.0 request or notification.

    Usage::

        req = JsonRpcRequest.builder().method("subtract").params([42, 23]).id(1).build()
        note = JsonRpcRequest.notification("update", [1, 2, 3])
        assert note.is_notification and not req.is_notification
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    VERSION: ClassVar[str] = JSONRPC_VERSION

    method: str
    params: P | None = None
    id: str | int | float | None = None

    @field_validator("method", mode="before")
    @classmethod
    def _check_method(cls, value: Any) -> Any:
        validate_method(value)
        return value

    # Defaults are not validated, so this only runs when an id was supplied.
    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, value: Any, info: ValidationInfo) -> Any:
        validate_id(value, _sink_from(info))
        return value

    @classmethod
    def builder(cls) -> RequestBuilder[P]:
        return RequestBuilder(cls)

    @classmethod
    def notification(
        cls,
        method: str,
        params: P | None = None,
        *,
        sink: AdvisorySink | None = None,
    ) -> JsonRpcRequest[P]:
        """Build a request that never carries an id."""
        return cls.builder().method(method).params(params).build(sink=sink)

    @classmethod
    def call(
        cls,
        method: str,
        params: P | None = None,
        *,
        request_id: RequestId,
        sink: AdvisorySink | None = None,
    ) -> JsonRpcRequest[P]:
        """Build a request expecting a response under ``request_id``."""
        return cls.builder().method(method).params(params).id(request_id).build(sink=sink)

    @property
    def jsonrpc(self) -> str:
        return self.VERSION

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set

    @property
    def has_id(self) -> bool:
        """True when an id was supplied, including an explicit null."""
        return not self.is_notification

    @property
    def has_params(self) -> bool:
        return self.params is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonRpcRequest):
            return NotImplemented
        return super().__eq__(other) and self.is_notification == other.is_notification

    def __hash__(self) -> int:
        return hash((self.method, self.id, self.is_notification))


class RequestBuilder(Generic[P]):
    """Staged request builder: ``method`` → ``params`` → ``id`` → ``build``.

    The id is held as ``UNSET`` until :meth:`id` is called; only then does the
    built request carry an id (which may be ``None``).
    """

    def __init__(self, model: type[JsonRpcRequest[P]] = JsonRpcRequest) -> None:
        self._model = model
        self._method: str | None = None
        self._params: P | None = None
        self._id: RequestId | _Unset = UNSET

    def method(self, method: str) -> RequestBuilder[P]:
        self._method = method
        return self

    def params(self, params: P | None) -> RequestBuilder[P]:
        self._params = params
        return self

    def id(self, request_id: RequestId) -> RequestBuilder[P]:
        self._id = request_id
        return self

    def build(self, *, sink: AdvisorySink | None = None) -> JsonRpcRequest[P]:
        """Validate and freeze the accumulated fields.

        Raises:
            JsonRpcException: ``-32600`` for an invalid method or id.
        """
        fields: dict[str, Any] = {"method": self._method}
        if self._params is not None:
            fields["params"] = self._params
        if self._id is not UNSET:
            fields["id"] = self._id
        return self._model.model_validate(fields, context=advisory_context(sink))


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class JsonRpcResponse(BaseModel, Generic[R]):
    """A JSON-RPC 2.0 response holding exactly one of ``result`` or ``error``.

    Build with :meth:`success` or :meth:`failure`.  Keyword construction and
    ``model_validate`` go through the same exclusivity check.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    VERSION: ClassVar[str] = JSONRPC_VERSION

    id: str | int | float | None
    result: R | None = None
    error: JsonRpcError | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, value: Any, info: ValidationInfo) -> Any:
        validate_id(value, _sink_from(info))
        return value

    @model_validator(mode="after")
    def _check_exclusive(self) -> JsonRpcResponse[R]:
        has_result = "result" in self.model_fields_set
        has_error = "error" in self.model_fields_set
        if has_result and has_error:
            raise _internal("Internal Error: response cannot have both result and error")
        if has_error and self.error is None:
            raise _internal("Internal Error: error response must have an error object")
        if not has_result and not has_error:
            raise _internal("Internal Error: response must have either result or error")
        return self

    @classmethod
    def success(
        cls,
        request_id: RequestId,
        result: R | None,
        *,
        sink: AdvisorySink | None = None,
    ) -> JsonRpcResponse[R]:
        """Successful response; a ``None`` result is still a success."""
        return cls.model_validate(
            {"id": request_id, "result": result},
            context=advisory_context(sink),
        )

    @classmethod
    def failure(
        cls,
        request_id: RequestId,
        error: JsonRpcError | None,
        *,
        sink: AdvisorySink | None = None,
    ) -> JsonRpcResponse[R]:
        """Error response.  ``request_id`` may be ``None`` for parse errors."""
        if error is None:
            raise _internal("Internal Error: error object cannot be null")
        return cls.model_validate(
            {"id": request_id, "error": error},
            context=advisory_context(sink),
        )

    @property
    def jsonrpc(self) -> str:
        return self.VERSION

    @property
    def is_success(self) -> bool:
        return "result" in self.model_fields_set

    @property
    def is_error(self) -> bool:
        return not self.is_success
