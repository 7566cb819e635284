"""HTTP 入口。

POST /api/message 接收 {input: {text}, context}，
返回远程 Assistant 的 message 响应原文。
"""

from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from assistant_core.api.service import forward_message
from assistant_core.domain.exceptions import BusinessError
from assistant_core.domain.models import InboundMessage


class MessageInput(BaseModel):
    model_config = ConfigDict(extra="allow")

    text: Optional[str] = None


class MessageRequest(BaseModel):
    """入站请求体，context 由调用方持有，原样转发。"""

    model_config = ConfigDict(extra="ignore")

    input: Optional[MessageInput] = None
    context: Optional[Dict[str, Any]] = None

    def to_inbound(self) -> Optional[InboundMessage]:
        if self.input is None and self.context is None:
            return None
        text = self.input.text if self.input is not None else None
        return InboundMessage(text=text or "", context=self.context)


app = FastAPI(title="Assistant Message Service", version="1.0.0")


@app.exception_handler(BusinessError)
def business_error_handler(request: Request, exc: BusinessError) -> JSONResponse:
    body = exc.extra.get("body")
    if body is None:
        body = {"code": exc.code, "message": exc.message}
    return JSONResponse(status_code=exc.http_status, content=body)


@app.post("/api/message")
def message(payload: Optional[MessageRequest] = Body(default=None)):
    inbound = payload.to_inbound() if payload is not None else None
    result = forward_message(inbound)
    if result is None:
        return Response(status_code=200)
    return JSONResponse(content=result)


@app.get("/health")
def health():
    return {"status": "ok"}
