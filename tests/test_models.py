import pytest
from datetime import datetime, timezone
from pydantic import ValidationError as PydanticValidationError

from clyp.exceptions import DecodingError, ValidationError
from clyp.models import AudioPost, Category, Eligibility, Playlist, PostStatus, Soundwave, SOUNDWAVE_LENGTH
from tests.payloads import post_json


def test_decode_audio_post_maps_wire_names():
    post = AudioPost.from_response(post_json())

    assert post.id == "abc"
    assert post.status is PostStatus.PUBLIC
    assert post.duration_seconds == 3.5
    assert post.duration_milliseconds == 3500
    assert post.success is True
    assert post.allows_comments is True
    assert post.category == "Music"
    assert post.url_mp3 == "https://audio.clyp.it/abc.mp3"
    assert post.url_ogg == "https://audio.clyp.it/abc.ogg"
    assert post.date_string == "2016-04-20T19:45:21.453Z"
    assert post.waveform is None


def test_decode_audio_post_optional_fields_default():
    body = {k: v for k, v in post_json().items() if k in ("AudioFileId", "Status", "Duration", "Url", "SecureMp3Url", "SecureOggUrl")}
    post = AudioPost.from_response(body)

    assert post.success is False
    assert post.playlist_id is None
    assert post.playlist_upload_token is None
    assert post.title is None
    assert post.date is None


@pytest.mark.parametrize("missing", ["AudioFileId", "Status", "Duration", "Url", "SecureMp3Url", "SecureOggUrl"])
def test_decode_audio_post_missing_required_field(missing):
    body = post_json()
    del body[missing]
    with pytest.raises(DecodingError):
        AudioPost.from_response(body)


def test_decode_audio_post_rejects_unknown_status():
    with pytest.raises(DecodingError):
        AudioPost.from_response(post_json(Status="Archived"))


def test_decode_audio_post_rejects_non_object():
    with pytest.raises(DecodingError):
        AudioPost.from_response([post_json()])


def test_decode_all_status_values():
    for wire in ("Public", "Private", "Deleted", "DownloadDisabled", "PrivateDownloadDisabled"):
        assert AudioPost.from_response(post_json(Status=wire)).status.value == wire


@pytest.mark.parametrize(
    "seconds,expected",
    [(12.345, 12345), (3.5, 3500), (0.0, 0), (0.0009, 0), (59.9999, 59999), (1.001, 1001)],
)
def test_duration_milliseconds_truncates(seconds, expected):
    post = AudioPost.from_response(post_json(Duration=seconds))
    assert post.duration_milliseconds == expected


def test_date_is_parsed_from_raw_string():
    post = AudioPost.from_response(post_json(DateCreated="2016-04-20T19:45:21.4533333Z"))
    assert post.date == datetime(2016, 4, 20, 19, 45, 21, 453333, tzinfo=timezone.utc)


def test_date_without_timezone():
    post = AudioPost.from_response(post_json(DateCreated="2015-07-24T22:08:47"))
    assert post.date == datetime(2015, 7, 24, 22, 8, 47)


def test_malformed_date_fails_at_decode_time():
    with pytest.raises(DecodingError):
        AudioPost.from_response(post_json(DateCreated="last tuesday"))


def test_server_assigned_fields_are_read_only():
    post = AudioPost.from_response(post_json())
    with pytest.raises(PydanticValidationError):
        post.id = "other"
    with pytest.raises(PydanticValidationError):
        post.duration_seconds = 1.0
    with pytest.raises(PydanticValidationError):
        post.status = PostStatus.PRIVATE
    assert post.id == "abc"


def test_editable_fields_can_change():
    post = AudioPost.from_response(post_json())
    post.title = "Evening demo"
    post.description = "second take"
    post.category = "Podcast"
    post.allows_comments = False
    post.waveform = Soundwave()

    assert post.title == "Evening demo"
    assert post.allows_comments is False
    assert len(post.waveform) == SOUNDWAVE_LENGTH


def test_direct_construction_by_attribute_name():
    post = AudioPost(
        id="xyz",
        status=PostStatus.PRIVATE,
        duration_seconds=1.25,
        url="u",
        url_mp3="m",
        url_ogg="o",
    )
    assert post.id == "xyz"
    assert post.duration_milliseconds == 1250


def test_summary_lists_post_details():
    text = AudioPost.from_response(post_json()).summary()
    assert "Title: Morning demo" in text
    assert "ID: abc" in text
    assert "Status: Public" in text
    assert "Duration in Seconds: 3.5" in text
    assert "Date Created: 2016-04-20 19:45:21.453000+00:00" in text


def test_soundwave_manual_construction_requires_400_points():
    wave = Soundwave([50] * SOUNDWAVE_LENGTH)
    assert len(wave) == 400
    assert wave[0] == 50
    assert isinstance(wave.datapoints, bytes)


@pytest.mark.parametrize("length", [0, 1, 399, 401, 800])
def test_soundwave_wrong_length_fails(length):
    with pytest.raises(ValidationError):
        Soundwave([1] * length)


def test_soundwave_rejects_values_outside_a_byte():
    with pytest.raises(ValidationError):
        Soundwave([256] * SOUNDWAVE_LENGTH)


def test_empty_soundwave_is_a_mutable_buffer():
    wave = Soundwave()
    wave.datapoints[10] = 99
    assert len(wave) == SOUNDWAVE_LENGTH
    assert wave[10] == 99
    assert sum(wave) == 99


def test_soundwave_from_response_trusts_length():
    wave = Soundwave.from_response([7] * 10)
    assert list(wave) == [7] * 10


@pytest.mark.parametrize("body", [{"points": []}, "abc", [1.5, 2.5], [-1, 3], None])
def test_soundwave_from_response_rejects_bad_shapes(body):
    with pytest.raises(DecodingError):
        Soundwave.from_response(body)


def test_soundwave_equality():
    assert Soundwave([3] * 400) == Soundwave.from_response([3] * 400)
    assert Soundwave([3] * 400) != Soundwave([4] * 400)


def test_category_from_listing_and_by_hand():
    listed = Category.list_from_response([
        {"Title": "Featured", "Location": "https://api.clyp.it/featuredlist/featured"},
        {"Location": "https://api.clyp.it/featuredlist/random"},
    ])
    assert listed[0].title == "Featured"
    assert listed[0].url == "https://api.clyp.it/featuredlist/featured"
    assert listed[1].title is None

    manual = Category(url="https://api.clyp.it/featuredlist/recent", title="Recent")
    assert manual.url.endswith("/recent")


def test_category_requires_location():
    with pytest.raises(DecodingError):
        Category.from_response({"Title": "No url"})


def test_list_decode_rejects_object():
    with pytest.raises(DecodingError):
        Category.list_from_response({"Title": "x", "Location": "y"})


def test_playlist_decode():
    playlist = Playlist.from_response({
        "AudioFiles": [post_json(), post_json(AudioFileId="def", Duration=1.0)],
        "PlaylistId": "pl1",
        "Modifiable": True,
        "ContentAdministrator": False,
        "FeatureSubmissionEligibility": "Ineligible",
        "PlaylistUploadToken": "tok",
    })

    assert playlist.id == "pl1"
    assert [p.id for p in playlist.posts] == ["abc", "def"]
    assert playlist.is_modifiable is True
    assert playlist.is_content_administrator is False
    assert playlist.feature_submission_eligibility is Eligibility.INELIGIBLE
    assert playlist.upload_token == "tok"


def test_playlist_with_bad_post_fails():
    with pytest.raises(DecodingError):
        Playlist.from_response({"PlaylistId": "pl1", "AudioFiles": [{"Title": "broken"}]})


def test_validated_soundwave_points_cannot_be_replaced_or_changed():
    wave = Soundwave([1] * SOUNDWAVE_LENGTH)
    with pytest.raises(AttributeError):
        wave.datapoints = b"\x01" * 3
    with pytest.raises(TypeError):
        wave[0] = 5
    assert len(wave) == SOUNDWAVE_LENGTH
    assert wave[0] == 1


def test_buffer_soundwave_cannot_change_length():
    wave = Soundwave()
    with pytest.raises(AttributeError):
        wave.datapoints.extend(b"\x00" * 10)
    with pytest.raises(AttributeError):
        wave.datapoints = bytearray(10)
    wave[399] = 100
    assert len(wave) == SOUNDWAVE_LENGTH
    assert wave[399] == 100
