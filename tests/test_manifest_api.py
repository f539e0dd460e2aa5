import pytest

from conftest import SMIL_DOCUMENT, watch_page

from cbc_streamlink.api.manifest_api import ManifestAPI, parse_smil, parse_stream_validation
from cbc_streamlink.errors import SchemaError, UpstreamError

PAGE_URL = "https://www.cbc.ca/player/play/video/9.6468131"
STREAM_URL = "https://services.radio-canada.ca/media/validation/v2/?idMedia=12345"


def clip_state(assets):
    return {"video": {"currentClip": {"title": "Final", "media": {"id": 12345, "assets": assets}}}}


def test_smil_first_video_under_seq():
    assert parse_smil(SMIL_DOCUMENT).url == "https://cdn/master.m3u8"


def test_smil_without_namespace():
    document = '<smil><body><seq><video src="a.m3u8"/><video src="b.m3u8"/></seq></body></smil>'
    assert parse_smil(document).url == "a.m3u8"


def test_smil_without_seq():
    with pytest.raises(SchemaError, match="seq"):
        parse_smil('<smil><body><video src="a.m3u8"/></body></smil>')


def test_smil_that_is_not_xml():
    with pytest.raises(SchemaError):
        parse_smil("<html><body>Access denied")


def test_stream_validation_success():
    stream = parse_stream_validation(
        {
            "url": "https://cdn/master.m3u8",
            "errorCode": 0,
            "message": None,
            "params": [{"name": "ad", "value": 0}, {"name": "format", "value": "hls"}],
        }
    )
    assert stream.url == "https://cdn/master.m3u8"
    assert [(p.name, p.value) for p in stream.params] == [("ad", 0), ("format", "hls")]


def test_stream_validation_error_code_is_upstream_failure():
    with pytest.raises(UpstreamError, match="errorCode 1"):
        parse_stream_validation({"url": None, "errorCode": 1, "message": "Geo-blocked", "params": []})


def test_stream_validation_missing_url():
    with pytest.raises(SchemaError, match="url"):
        parse_stream_validation({"errorCode": 0, "params": []})


def test_watch_page_medianet_asset(fake_http):
    fake_http.responses[PAGE_URL] = watch_page(
        clip_state([{"key": "https://pubads/dai", "type": "platform-dai"}, {"key": STREAM_URL, "type": "medianet"}])
    )
    asset = ManifestAPI(fake_http).fetch_watch_page_asset(PAGE_URL)
    assert asset.loader == "medianet"
    assert asset.key == STREAM_URL


def test_watch_page_without_medianet_names_it(fake_http):
    fake_http.responses[PAGE_URL] = watch_page(clip_state([{"key": "https://pubads/dai", "type": "platform-dai"}]))
    with pytest.raises(SchemaError, match="medianet"):
        ManifestAPI(fake_http).fetch_watch_page_asset(PAGE_URL)


def test_validated_stream_sends_referer(fake_http):
    fake_http.responses[STREAM_URL] = {"url": "https://cdn/master.m3u8", "errorCode": 0, "params": []}
    stream = ManifestAPI(fake_http).fetch_validated_stream(STREAM_URL, referer=PAGE_URL)
    assert stream.url == "https://cdn/master.m3u8"
    assert fake_http.requests[-1][3] == PAGE_URL
