"""
HTTP inspection service for TLV streams.

The service is stateless: each request carries its own stream or entry list.
Only the log ring buffer is shared between requests.
"""
from __future__ import annotations

import base64
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse

from tlvbox.domain import TlvBox, box_from_entries, read_typed_value
from tlvbox.errors import TlvError
from tlvbox.parsing.tlv import describe_records, iter_records
from tlvbox.service_app.config import ServiceSettings, get_settings
from tlvbox.service_app.logging import create_logger, ring_buffer
from tlvbox.service_app.models import (
    DecodeRequest,
    DecodeResponse,
    EncodeRequest,
    EncodeResponse,
    ErrorDetail,
    ErrorResponse,
)

FAULT_RESPONSES = {413: {"model": ErrorResponse}, 422: {"model": ErrorResponse}}


def _fault(status_code: int, error: str, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail=ErrorDetail(error=error, message=message).model_dump())


def create_app(settings: Optional[ServiceSettings] = None) -> FastAPI:
    settings = settings or get_settings()
    logger = create_logger("tlvbox.service", settings.log_ring_size, settings.log_level)
    app = FastAPI(title="tlvbox inspection service")
    app.state.settings = settings
    app.state.logger = logger

    def _check_size(size: int) -> None:
        if size > settings.max_request_bytes:
            logger.warning("request_too_large", extra={"details": {"size": size, "limit": settings.max_request_bytes}})
            raise _fault(413, "RequestTooLarge", f"{size} bytes exceeds {settings.max_request_bytes}")

    @app.get("/health", response_class=PlainTextResponse)
    async def health() -> str:
        return "ok"

    @app.get("/logs")
    async def logs() -> dict:
        return {"events": ring_buffer(logger).get_events()}

    @app.post("/encode", response_model=EncodeResponse, responses=FAULT_RESPONSES)
    async def encode(body: EncodeRequest) -> EncodeResponse:
        try:
            box = box_from_entries(entry.model_dump() for entry in body.entries)
            data = box.serialize()
        except ValueError as exc:
            logger.info("encode_failed", extra={"details": {"error": str(exc)}})
            raise _fault(422, type(exc).__name__, str(exc)) from exc
        _check_size(len(data))
        logger.info("encode_ok", extra={"details": {"entries": len(box), "length": len(data)}})
        return EncodeResponse(data=base64.b64encode(data).decode("ascii"), length=len(data), entries=len(box))

    @app.post("/decode", response_model=DecodeResponse, responses=FAULT_RESPONSES)
    async def decode(body: DecodeRequest) -> DecodeResponse:
        try:
            raw = base64.b64decode(body.data, validate=True)
        except ValueError as exc:
            raise _fault(422, "InvalidBase64", str(exc)) from exc
        _check_size(len(raw))
        try:
            records = list(iter_records(raw, body.offset, body.length))
            box = TlvBox.parse(raw, body.offset, body.length)
            values = {tag: read_typed_value(box, tag, type_name) for tag, type_name in body.types.items()}
        except TlvError as exc:
            logger.info("decode_failed", extra={"details": {"error": type(exc).__name__, "message": str(exc)}})
            raise _fault(422, type(exc).__name__, str(exc)) from exc
        logger.info("decode_ok", extra={"details": {"records": len(records), "length": len(raw)}})
        return DecodeResponse(records=describe_records(records), values=values, total_bytes=box.total_bytes)

    return app


__all__ = ["create_app", "ServiceSettings", "get_settings"]
