"""FastAPI server exposing tab switching and navigation to the voice front end."""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from browser_controller.engine import CommandEngine
from browser_controller.intents import NoMatchError, WebExecutionError

engine = CommandEngine()

app = FastAPI(title="Voice Tab Navigator API", version="0.1.0")

# The browser extension and local dev UIs call from their own origins.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(WebExecutionError)
def browser_error(request: Request, exc: WebExecutionError):
    return JSONResponse(status_code=503, content={"code": exc.code, "detail": str(exc)})


class TabQueryRequest(BaseModel):
    query: str = Field(min_length=1)


class NavigateRequest(BaseModel):
    input: str = Field(min_length=1)
    tab_id: Optional[int] = None


class CommandRequest(BaseModel):
    text: str


def _require_text(value: str, field: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise HTTPException(status_code=400, detail=f"'{field}' must not be blank")
    return stripped


@app.get("/tabs")
def list_tabs():
    return {"items": [asdict(tab) for tab in engine.list_tabs()]}


@app.post("/tabs/resolve")
def resolve_tab(req: TabQueryRequest):
    query = _require_text(req.query, "query")
    try:
        selection = engine.resolve_tab(query)
    except NoMatchError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return selection.to_dict()


@app.post("/tabs/switch")
def switch_tab(req: TabQueryRequest):
    query = _require_text(req.query, "query")
    result = engine.run_steps(steps=[{"intent": "switch_tab", "query": query}])
    if result.get("code") == "TAB_NO_MATCH":
        raise HTTPException(status_code=404, detail=result)
    return result


@app.post("/navigate/resolve")
def resolve_url(req: NavigateRequest):
    text = _require_text(req.input, "input")
    return engine.resolve_url(text).to_dict()


@app.post("/navigate")
def navigate(req: NavigateRequest):
    text = _require_text(req.input, "input")
    step = {"intent": "navigate", "input": text}
    if req.tab_id is not None:
        step["tab_id"] = req.tab_id
    return engine.run_steps(steps=[step])


@app.post("/command")
def command(req: CommandRequest):
    return engine.run(text=req.text)


@app.get("/last")
def last_result():
    return engine.get_last_result() or {}


@app.get("/status")
def status():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.server:app", host="127.0.0.1", port=8000, reload=True)
