"""Pytest configuration and shared fixtures for tubepick tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from tubepick.config.loader import ConfigSource, TubepickConfig
from tubepick.exceptions import CatalogueUnavailableError
from tubepick.models.catalogue import BasicInfo, Catalogue, PlayabilityStatus, Thumbnail
from tubepick.models.variant import StreamVariant
from tubepick.resolver import Resolver

VIDEO_ID = "dQw4w9WgXcQ"

_VIDEO_MIME = {
    "h264": 'video/mp4; codecs="avc1.640028"',
    "vp9": 'video/webm; codecs="vp9"',
    "av1": 'video/mp4; codecs="av01.0.08M.08"',
}
_AUDIO_MIME = {
    "h264": 'audio/mp4; codecs="mp4a.40.2"',
    "opus": 'audio/webm; codecs="opus"',
}


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against the real yt-dlp / YouTube (requires network)",
    )


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--run-integration"):
        skip = pytest.mark.skip(reason="needs --run-integration flag")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip)


def _video(format_id, family="h264", width=1280, height=720, bitrate=1000, **kwargs):
    fields = {
        "format_id": format_id,
        "mime_type": _VIDEO_MIME[family],
        "has_video": True,
        "width": width,
        "height": height,
        "bitrate": bitrate,
        "content_length": 1_000_000,
        "url": f"https://cdn.example/{format_id}",
    }
    fields.update(kwargs)
    return StreamVariant(**fields)


def _audio(format_id, family="h264", bitrate=128, **kwargs):
    fields = {
        "format_id": format_id,
        "mime_type": _AUDIO_MIME["h264" if family == "h264" else "opus"],
        "has_audio": True,
        "bitrate": bitrate,
        "content_length": 500_000,
        "audio_quality": "AUDIO_QUALITY_MEDIUM",
        "url": f"https://cdn.example/{format_id}",
    }
    fields.update(kwargs)
    return StreamVariant(**fields)


def _muxed(format_id, width=640, height=360, bitrate=500, **kwargs):
    fields = {
        "format_id": format_id,
        "mime_type": 'video/mp4; codecs="avc1.42001E, mp4a.40.2"',
        "has_video": True,
        "has_audio": True,
        "width": width,
        "height": height,
        "bitrate": bitrate,
        "content_length": 2_000_000,
        "quality_label": f"{height}p",
        "url": f"https://cdn.example/{format_id}",
    }
    fields.update(kwargs)
    return StreamVariant(**fields)


@pytest.fixture()
def video():
    """Factory for video-only variants: video(id, family, width, height, bitrate)."""
    return _video


@pytest.fixture()
def audio():
    """Factory for audio-only variants: audio(id, family, bitrate)."""
    return _audio


@pytest.fixture()
def muxed():
    """Factory for muxed variants: muxed(id, width, height, bitrate)."""
    return _muxed


def _catalogue(variants=(), client="mobile", playability=None, **info):
    basic = {
        "title": "  Never Gonna Give You Up ",
        "author": "Rick Astley - Topic",
        "duration": 213,
        "description": "The official video",
        "thumbnails": (Thumbnail(url="https://i.ytimg.com/vi/x/hq720.jpg"),),
    }
    basic.update(info)
    return Catalogue(
        video_id=VIDEO_ID,
        client=client,
        variants=tuple(variants),
        basic_info=BasicInfo(**basic),
        playability=playability or PlayabilityStatus(),
    )


@pytest.fixture()
def catalogue():
    """Factory for catalogues: catalogue(variants, client=..., playability=...)."""
    return _catalogue


class FakeProvider:
    """In-memory catalogue provider.

    ``catalogues`` maps client -> Catalogue, or an exception to raise.
    URLs come from the variants themselves; a variant with ``url=None``
    cannot be materialized.
    """

    def __init__(self, catalogues):
        self.catalogues = catalogues
        self.fetches: list[str] = []
        self.sessions_created = 0

    def create_session(self):
        self.sessions_created += 1
        return object()

    def fetch_catalogue(self, video_id, client, session):
        self.fetches.append(client)
        entry = self.catalogues.get(client)
        if entry is None:
            raise CatalogueUnavailableError(f"no catalogue for {client}")
        if isinstance(entry, Exception):
            raise entry
        if callable(entry):
            return entry()
        return entry

    def materialize_url(self, variant, session):
        return variant.url


@pytest.fixture()
def fake_provider():
    return FakeProvider


@pytest.fixture()
def config(tmp_path: Path) -> TubepickConfig:
    return TubepickConfig(
        root_dir=tmp_path,
        primary_client="mobile",
        alternate_client="web",
        muxed_clients=("web", "android"),
        session_refresh_minutes=15,
        metadata_timeout=30,
        probe_timeout=5,
        source=ConfigSource.DEFAULT,
    )


@pytest.fixture()
def make_resolver(config):
    """Build a Resolver around a FakeProvider for the given client catalogues."""

    def _make(catalogues, probe=None):
        provider = FakeProvider(catalogues)
        resolver = Resolver(provider, config=config, probe=probe or (lambda url: False))
        return resolver, provider

    return _make
