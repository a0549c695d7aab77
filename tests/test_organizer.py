"""Tests for the catalogue organizer."""

from tubepick.config.codecs import CODEC_FAMILIES
from tubepick.models.request import PinnedFormats
from tubepick.selection.organizer import organize


class TestOrganize:
    def test_builds_every_family(self, video):
        buckets = organize([video("137")])
        assert set(buckets) == set(CODEC_FAMILIES)
        assert buckets["vp9"].best_video is None
        assert buckets["av1"].best_audio is None

    def test_empty_catalogue(self):
        buckets = organize([])
        assert all(not b.video and not b.audio for b in buckets.values())

    def test_sorted_by_bitrate_descending(self, video):
        buckets = organize(
            [video("a", bitrate=100), video("b", bitrate=300), video("c", bitrate=200)]
        )
        assert [v.format_id for v in buckets["h264"].video] == ["b", "c", "a"]
        assert buckets["h264"].best_video.format_id == "b"

    def test_best_is_first_of_equal_bitrates(self, video):
        buckets = organize([video("first", bitrate=100), video("second", bitrate=100)])
        assert buckets["h264"].best_video.format_id == "first"

    def test_requires_content_length(self, video, audio):
        buckets = organize([video("137", content_length=None), audio("140", content_length=0)])
        assert buckets["h264"].video == ()
        assert buckets["h264"].audio == ()

    def test_partitions_by_family(self, video, audio):
        buckets = organize(
            [
                video("137", family="h264"),
                video("248", family="vp9"),
                video("399", family="av1"),
                audio("140", family="h264"),
                audio("251", family="opus"),
            ]
        )
        assert [v.format_id for v in buckets["h264"].video] == ["137"]
        assert [v.format_id for v in buckets["vp9"].video] == ["248"]
        assert [v.format_id for v in buckets["av1"].video] == ["399"]
        assert [a.format_id for a in buckets["h264"].audio] == ["140"]
        # opus audio serves both webm families
        assert [a.format_id for a in buckets["vp9"].audio] == ["251"]
        assert [a.format_id for a in buckets["av1"].audio] == ["251"]

    def test_unknown_codec_ignored(self, video):
        odd = video("x", mime_type='video/3gpp; codecs="mp4v.20.3"')
        buckets = organize([odd])
        assert all(not b.video for b in buckets.values())

    def test_pinned_video_admits_only_that_id(self, video, audio):
        variants = [video("137", bitrate=900), video("136", bitrate=500), audio("140")]
        buckets = organize(variants, PinnedFormats(video="136"))
        assert [v.format_id for v in buckets["h264"].video] == ["136"]
        # audio is not pinned
        assert [a.format_id for a in buckets["h264"].audio] == ["140"]

    def test_pinned_audio_admits_only_that_id(self, audio):
        variants = [audio("140", bitrate=128), audio("139", bitrate=48)]
        buckets = organize(variants, PinnedFormats(audio="139"))
        assert buckets["h264"].best_audio.format_id == "139"

    def test_pinned_missing_id_empties_role(self, video):
        buckets = organize([video("137")], PinnedFormats(video="999"))
        assert buckets["h264"].video == ()

    def test_idempotent(self, video, audio):
        variants = [
            video("137", bitrate=400),
            video("248", family="vp9", bitrate=400),
            audio("140", bitrate=128),
            audio("251", family="opus", bitrate=160),
            video("136", bitrate=250),
        ]
        assert organize(variants) == organize(variants)

    def test_does_not_mutate_input(self, video):
        variants = [video("a", bitrate=1), video("b", bitrate=2)]
        organize(variants)
        assert [v.format_id for v in variants] == ["a", "b"]
