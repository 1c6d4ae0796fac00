"""Tests for the screening endpoints."""

import json
from unittest.mock import AsyncMock, patch

from fastapi import FastAPI
from fastapi.testclient import TestClient

from investor_screener.api.routes.screen import router
from investor_screener.pipeline.screener import ScreeningPipeline

CRITERIA = {
    "clientName": "Heliostat Labs",
    "sectors": ["Climate"],
    "checkSize": 2_000_000,
    "stages": ["Seed"],
    "geoFocus": ["UK"],
    "isHardware": True,
}


def _make_app(openai_client, web_client) -> FastAPI:
    app = FastAPI()
    app.include_router(router)
    app.state.openai = openai_client
    app.state.web = web_client
    return app


def _frames(body: str) -> list[dict]:
    return [
        json.loads(chunk.removeprefix("data: "))
        for chunk in body.split("\n\n")
        if chunk.strip()
    ]


class TestScreenStream:
    def test_streams_events_in_order(self, fake_openai, fake_web, make_page):
        fake_web.resolve_website.return_value = make_page()
        fake_openai.reply("enrich", {"noLongerInvesting": True})
        client = TestClient(_make_app(fake_openai, fake_web))

        response = client.post(
            "/screen-stream",
            json={
                "criteria": CRITERIA,
                "investors": [
                    {"name": "Northwind Ventures", "website": "northwind.vc"},
                    {"name": "Ghost Capital"},
                ],
            },
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"

        frames = _frames(response.text)
        assert [f["type"] for f in frames] == [
            "start",
            "progress",
            "result",
            "progress",
            "result",
            "complete",
        ]
        assert frames[0]["total"] == 2
        assert frames[2]["result"]["verdict"] == "Disqualified"
        assert frames[4]["result"]["verdict"] == "Needs review: website unavailable"
        assert frames[-1]["summary"] == {
            "qualified": 0,
            "disqualified": 1,
            "needsReview": 1,
            "total": 2,
        }

    def test_invalid_body_is_rejected(self, fake_openai, fake_web):
        client = TestClient(_make_app(fake_openai, fake_web))

        response = client.post("/screen-stream", json={"criteria": CRITERIA, "investors": []})

        assert response.status_code == 422

    def test_missing_check_size_is_rejected(self, fake_openai, fake_web):
        client = TestClient(_make_app(fake_openai, fake_web))
        criteria = {k: v for k, v in CRITERIA.items() if k != "checkSize"}

        response = client.post(
            "/screen-stream",
            json={"criteria": criteria, "investors": [{"name": "Northwind Ventures"}]},
        )

        assert response.status_code == 422

    def test_pipeline_failure_emits_error_frame(self, fake_openai, fake_web):
        client = TestClient(_make_app(fake_openai, fake_web))

        with patch.object(
            ScreeningPipeline,
            "resolve_client_profile",
            AsyncMock(side_effect=RuntimeError("profile store offline")),
        ):
            response = client.post(
                "/screen-stream",
                json={"criteria": CRITERIA, "investors": [{"name": "Northwind Ventures"}]},
            )

        frames = _frames(response.text)
        assert [f["type"] for f in frames] == ["start", "error"]
        assert frames[-1]["message"] == "profile store offline"


class TestScreenSingle:
    def test_returns_result(self, fake_openai, fake_web, make_page):
        fake_web.resolve_website.return_value = make_page()
        fake_openai.reply("enrich", {"isActualInvestor": False, "organizationType": "co-working"})
        client = TestClient(_make_app(fake_openai, fake_web))

        response = client.post(
            "/screen",
            json={
                "investor": {"name": "Hub Space", "website": "hubspace.io"},
                "criteria": CRITERIA,
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["investor_name"] == "Hub Space"
        assert body["verdict"] == "Disqualified"
        assert "co-working" in body["reasoning"]

    def test_invalid_body_is_rejected(self, fake_openai, fake_web):
        client = TestClient(_make_app(fake_openai, fake_web))

        response = client.post("/screen", json={"criteria": CRITERIA})

        assert response.status_code == 422
