"""Live resolution against YouTube through the real yt-dlp executable.

Run with: pytest tests/integration --run-integration -v

Results depend on YouTube and the installed yt-dlp version, so the
assertions stick to structure rather than exact formats.
"""

from __future__ import annotations

import pytest

from tubepick.exceptions import InvalidIdentifierError, ResolutionError
from tubepick.models.request import SelectionRequest
from tubepick.resolver import Resolver
from tubepick.tools.yt_dlp import YtDlpCatalogueProvider

pytestmark = pytest.mark.integration

# "Me at the zoo" - first YouTube upload, short and stable
TEST_VIDEO_ID = "jNQXAC9IVRw"


@pytest.fixture(scope="module")
def provider():
    tool = YtDlpCatalogueProvider()
    if not tool.is_available():
        pytest.skip("yt-dlp not installed")
    return tool


@pytest.fixture()
def resolver(provider, config):
    return Resolver(provider, config=config)


class TestLiveCatalogue:
    def test_catalogue_has_streams(self, provider):
        catalogue = provider.fetch_catalogue(TEST_VIDEO_ID, "web")
        assert catalogue.playability.is_ok
        assert catalogue.variants
        assert catalogue.basic_info.title


class TestLiveResolve:
    def test_default_resolve(self, resolver):
        try:
            media = resolver.resolve(f"https://www.youtube.com/watch?v={TEST_VIDEO_ID}")
        except ResolutionError as e:
            pytest.skip(f"YouTube refused the request: {e.message}")
        assert media.video_id == TEST_VIDEO_ID
        assert media.video.url.startswith("https://")
        assert media.audio.url.startswith("https://")

    def test_audio_only(self, resolver):
        try:
            media = resolver.resolve(TEST_VIDEO_ID, SelectionRequest(audio_only=True))
        except ResolutionError as e:
            pytest.skip(f"YouTube refused the request: {e.message}")
        assert media.video is None
        assert media.cover

    def test_invalid_identifier(self, resolver):
        with pytest.raises(InvalidIdentifierError):
            resolver.resolve("not a video")
