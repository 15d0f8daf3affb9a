import json
from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from personal_wiki_ui.controller import WikiActionController
from personal_wiki_ui.ui.clipboard import InMemoryClipboard
from personal_wiki_ui.ui.port import InMemoryUIPort
from personal_wiki_ui.ui.scheduler import ManualScheduler
from personal_wiki_ui.wiki.api_client import WikiResourceClient

BASE_URL = "http://test"


# ---------------------------------------------------------------------
# Scripted transport
# ---------------------------------------------------------------------

class ScriptedEndpoint:
    """
    Records every request and answers with queued responses (or a default).
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.queue: List[httpx.Response] = []
        self.default = {"success": True, "error": None, "url": "/wikis/x"}

    def reply(self, status_code: int = 200, json_body: Any = None, content: Optional[bytes] = None):
        if content is not None:
            self.queue.append(httpx.Response(status_code, content=content))
        else:
            self.queue.append(httpx.Response(status_code, json=json_body))

    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.queue:
            return self.queue.pop(0)
        return httpx.Response(200, json=self.default)


@pytest.fixture
def endpoint():
    return ScriptedEndpoint()


@pytest.fixture
def port():
    return InMemoryUIPort(
        labels={
            "createWiki": "Create Wiki",
            "updateWiki": "Update Wiki",
            "deleteWiki": "Delete Wiki",
            "copyButton": "Copy",
        }
    )


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def clipboard():
    return InMemoryClipboard()


@pytest.fixture
def controller(port, endpoint, scheduler, clipboard):
    client = WikiResourceClient(
        base_url=BASE_URL,
        public_wiki_base_url="https://personalwiki.com.de/wikis",
        transport=httpx.MockTransport(endpoint),
    )
    return WikiActionController(
        port,
        client=client,
        scheduler=scheduler,
        clipboard=clipboard,
        revert_delay=2.0,
        terminal_on_transport_error=False,
    )


def fill(port: InMemoryUIPort, username="alice", password="hunter2", wiki="# Hello"):
    port.set_field("username", username)
    port.set_field("password", password)
    port.set_field("wiki", wiki)


# ---------------------------------------------------------------------
# In-memory wikis resource
# ---------------------------------------------------------------------

class _WikiBody(BaseModel):
    username: str
    content: str
    password: str


class _DeleteBody(BaseModel):
    username: str
    password: str


def build_wiki_app() -> FastAPI:
    """
    Minimal stand-in for the wiki server: same routes, same reply shapes,
    same error strings, passwords compared in clear text.
    """
    app = FastAPI()
    wikis: Dict[str, Dict[str, str]] = {}

    @app.post("/wikis")
    async def create(body: _WikiBody):
        if body.username in wikis:
            return {"success": False, "error": "User already exists", "url": None}
        wikis[body.username] = {"content": body.content, "password": body.password}
        return {"success": True, "error": None, "url": f"/wikis/{body.username}"}

    @app.patch("/wikis")
    async def update(body: _WikiBody):
        record = wikis.get(body.username)
        if record is None:
            return {"success": False, "error": "User does not exists", "url": None}
        if record["password"] != body.password:
            return {"success": False, "error": "Wrong username or password", "url": None}
        record["content"] = body.content
        return {"success": True, "error": None, "url": f"/wikis/{body.username}"}

    @app.delete("/wikis")
    async def delete(body: _DeleteBody):
        record = wikis.get(body.username)
        if record is None:
            return {"success": False, "error": "User does not exist"}
        if record["password"] != body.password:
            return {"success": False, "error": "Wrong username or password"}
        del wikis[body.username]
        return {"success": True, "error": None}

    @app.get("/wikis/{username}", response_class=HTMLResponse)
    async def get_wiki(username: str):
        record = wikis.get(username)
        if record is None:
            return f"Wiki for user {username} not found... Please create one and try again!"
        return f"<html><body>{record['content']}</body></html>"

    app.state.wikis = wikis
    return app


@pytest.fixture
def wiki_app():
    return build_wiki_app()
