"""Codec configuration — JSON text formatting options."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class CodecConfig(BaseModel):
    """Formatting knobs for :class:`~jrpc.codec.JsonRpcCodec`.

    The defaults produce compact wire text such as
    ``{"jsonrpc":"2.0","result":19,"id":1}``.  ``allow_nan`` stays off
    because ``NaN``/``Infinity`` are not valid JSON.
    """

    model_config = ConfigDict(frozen=True)

    compact: bool = True
    indent: int | None = None
    sort_keys: bool = False
    ensure_ascii: bool = False
    allow_nan: bool = False

    @property
    def dumps_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for :func:`json.dumps`."""
        kwargs: dict[str, Any] = {
            "indent": self.indent,
            "sort_keys": self.sort_keys,
            "ensure_ascii": self.ensure_ascii,
            "allow_nan": self.allow_nan,
        }
        if self.compact and self.indent is None:
            kwargs["separators"] = (",", ":")
        return kwargs
