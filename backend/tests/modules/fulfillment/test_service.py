"""Tests for the downloader client and fulfillment dispatcher."""

import asyncio
import json
import logging
from unittest.mock import AsyncMock

import httpx
import pytest

from modules.fulfillment.exceptions import DispatchError
from modules.fulfillment.interfaces import IDownloaderClient, IFulfillmentDispatcher
from modules.fulfillment.service import ArrClient, FulfillmentDispatcher
from shared.config import DownloaderTarget, Settings
from shared.models import MediaCategory, MediaItem

RADARR = DownloaderTarget(
    base_url="http://radarr:7878/",
    api_key="radarr-key",
    quality_profile_id=4,
    root_folder_path="/movies",
)
SONARR = DownloaderTarget(base_url="http://sonarr:8989", api_key="sonarr-key")


def make_client(handler, **targets) -> ArrClient:
    return ArrClient(
        targets={
            MediaCategory.MOVIE: targets.get("radarr", RADARR),
            MediaCategory.SHOW: targets.get("sonarr", SONARR),
        },
        transport=httpx.MockTransport(handler),
    )


class TestArrClient:
    def test_implements_interface(self):
        assert isinstance(make_client(lambda r: httpx.Response(201)), IDownloaderClient)

    @pytest.mark.asyncio
    async def test_movie_goes_to_radarr(self, movie):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={})

        sent = await make_client(handler).send(MediaCategory.MOVIE, movie)

        assert sent is True
        request = seen[0]
        assert str(request.url) == "http://radarr:7878/api/v3/movie"
        assert request.headers["X-Api-Key"] == "radarr-key"
        body = json.loads(request.content)
        assert body["id"] == movie.id
        assert body["title"] == movie.title
        assert body["qualityProfileId"] == 4
        assert body["rootFolderPath"] == "/movies"

    @pytest.mark.asyncio
    async def test_show_goes_to_sonarr(self, show):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={})

        await make_client(handler).send(MediaCategory.SHOW, show)

        assert str(seen[0].url) == "http://sonarr:8989/api/v3/series"
        assert seen[0].headers["X-Api-Key"] == "sonarr-key"
        assert "qualityProfileId" not in json.loads(seen[0].content)

    def test_item_fields_win_over_target_defaults(self):
        item = MediaItem.model_validate({"id": "tt1", "qualityProfileId": 9})

        payload = ArrClient.build_payload(RADARR, item)

        assert payload["qualityProfileId"] == 9
        assert payload["rootFolderPath"] == "/movies"

    @pytest.mark.asyncio
    async def test_unconfigured_target_is_noop(self, movie):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        client = make_client(handler, radarr=DownloaderTarget())

        assert await client.send(MediaCategory.MOVIE, movie) is False

    @pytest.mark.asyncio
    async def test_error_status_raises_dispatch_error(self, movie):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"errorMessage": "already added"})

        with pytest.raises(DispatchError) as exc_info:
            await make_client(handler).send(MediaCategory.MOVIE, movie)

        assert exc_info.value.code == "DISPATCH_FAILED"
        assert exc_info.value.service == "radarr"
        assert exc_info.value.details["status_code"] == 400

    @pytest.mark.asyncio
    async def test_network_error_raises_dispatch_error(self, show):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(DispatchError) as exc_info:
            await make_client(handler).send(MediaCategory.SHOW, show)

        assert exc_info.value.service == "sonarr"

    def test_from_settings(self):
        settings = Settings(radarr=RADARR, dispatch_timeout=3.0)

        client = ArrClient.from_settings(settings)

        assert client.target_for(MediaCategory.MOVIE).is_configured
        assert not client.target_for(MediaCategory.SHOW).is_configured


class TestFulfillmentDispatcher:
    def test_implements_interface(self):
        assert isinstance(FulfillmentDispatcher(AsyncMock()), IFulfillmentDispatcher)

    @pytest.mark.asyncio
    async def test_dispatch_does_not_wait_for_send(self, movie):
        release = asyncio.Event()
        client = AsyncMock()

        async def slow_send(category, item):
            await release.wait()
            return True

        client.send.side_effect = slow_send
        dispatcher = FulfillmentDispatcher(client)

        task = dispatcher.dispatch(MediaCategory.MOVIE, movie)

        assert not task.done()
        assert dispatcher.in_flight == 1
        release.set()
        assert await task is True
        await asyncio.sleep(0)
        assert dispatcher.in_flight == 0

    @pytest.mark.asyncio
    async def test_failure_is_logged_not_raised(self, movie, caplog):
        client = AsyncMock()
        client.send.side_effect = DispatchError("radarr", "boom", status_code=500)
        dispatcher = FulfillmentDispatcher(client)

        with caplog.at_level(logging.WARNING, logger="modules.fulfillment.service"):
            result = await dispatcher.dispatch(MediaCategory.MOVIE, movie)

        assert result is False
        assert "Fulfillment failed for movie/tt0111161" in caplog.text

    @pytest.mark.asyncio
    async def test_unconfigured_target_returns_false(self, show):
        client = AsyncMock()
        client.send.return_value = False
        dispatcher = FulfillmentDispatcher(client)

        assert await dispatcher.dispatch(MediaCategory.SHOW, show) is False

    @pytest.mark.asyncio
    async def test_drain_waits_for_in_flight(self, movie, show):
        finished = []
        client = AsyncMock()

        async def send(category, item):
            await asyncio.sleep(0.01)
            finished.append(item.id)
            return True

        client.send.side_effect = send
        dispatcher = FulfillmentDispatcher(client)
        dispatcher.dispatch(MediaCategory.MOVIE, movie)
        dispatcher.dispatch(MediaCategory.SHOW, show)

        await dispatcher.drain()

        assert sorted(finished) == sorted([movie.id, show.id])

    @pytest.mark.asyncio
    async def test_drain_with_nothing_in_flight(self):
        await FulfillmentDispatcher(AsyncMock()).drain()
