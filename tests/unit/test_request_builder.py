"""Unit tests for RequestBuilder."""

import pytest

from music_catalog_sdk.config import CatalogConfig
from music_catalog_sdk.core.request_builder import RequestBuilder, is_valid_url, query_pairs
from music_catalog_sdk.errors import ErrorKind, StatusCode
from music_catalog_sdk.models import TokenPair
from music_catalog_sdk.types import AuthMode

BASE = "https://api.music.apple.com/v1/me/library/artists"
SERVICE_PAIR = TokenPair(service_token="dev")
USER_PAIR = TokenPair(service_token="dev", user_token="usr")


@pytest.fixture
def builder(base_config: CatalogConfig) -> RequestBuilder:
    return RequestBuilder(base_config)


class TestUrl:
    """Tests for URL construction."""

    def test_query_order_is_preserved(self, builder: RequestBuilder) -> None:
        result = builder.build(
            BASE, [("ids", "179934,463106"), ("l", "en-us")], USER_PAIR, AuthMode.USER
        )

        assert result.value.url == f"{BASE}?ids=179934,463106&l=en-us"

    def test_reversed_order_is_not_sorted(self, builder: RequestBuilder) -> None:
        result = builder.build(
            BASE, [("l", "en-us"), ("ids", "179934")], USER_PAIR, AuthMode.USER
        )

        assert result.value.url.endswith("?l=en-us&ids=179934")

    def test_empty_query_adds_no_question_mark(self, builder: RequestBuilder) -> None:
        result = builder.build(BASE, [], SERVICE_PAIR, AuthMode.SERVICE)

        assert result.value.url == BASE

    def test_values_are_stringified(self, builder: RequestBuilder) -> None:
        url = builder.build_url(BASE, [("limit", 2), ("offset", 4)])

        assert url == f"{BASE}?limit=2&offset=4"

    @pytest.mark.parametrize("base_path", ["not a url", "/v1/storefronts", "https://", "ftp://host/x"])
    def test_malformed_url(self, builder: RequestBuilder, base_path: str) -> None:
        result = builder.build(base_path, [], SERVICE_PAIR, AuthMode.SERVICE)

        assert not result.ok
        assert result.error.kind is ErrorKind.MALFORMED_URL
        assert result.error.status is None


class TestHeaders:
    """Tests for authorization headers."""

    def test_service_mode_sets_bearer(self, builder: RequestBuilder) -> None:
        result = builder.build(BASE, [], USER_PAIR, AuthMode.SERVICE)

        assert result.value.headers == {"Authorization": "Bearer dev"}

    def test_user_mode_adds_user_token_verbatim(self, builder: RequestBuilder) -> None:
        result = builder.build(BASE, [], USER_PAIR, AuthMode.USER)

        assert result.value.headers == {
            "Authorization": "Bearer dev",
            "Music-User-Token": "usr",
        }

    def test_custom_user_token_header(self, base_config: CatalogConfig) -> None:
        builder = RequestBuilder(base_config.with_overrides(user_token_header="X-User-Token"))

        result = builder.build(BASE, [], USER_PAIR, AuthMode.USER)

        assert result.value.headers["X-User-Token"] == "usr"

    @pytest.mark.parametrize(
        ("tokens", "mode"),
        [
            (TokenPair(), AuthMode.SERVICE),
            (TokenPair(), AuthMode.USER),
            (TokenPair(service_token="dev"), AuthMode.USER),
            (TokenPair(user_token="usr"), AuthMode.USER),
        ],
    )
    def test_incomplete_tokens_fail(
        self, builder: RequestBuilder, tokens: TokenPair, mode: AuthMode
    ) -> None:
        result = builder.build(BASE, [("l", "en-us")], tokens, mode)

        assert result.value is None
        assert result.error.status == "401"
        assert result.error.code is StatusCode.UNAUTHORIZED
        assert result.error.title == "Unauthorized request"
        assert result.error.detail == (
            "Missing token, refresh current token or request a new token"
        )
        assert result.error.kind is ErrorKind.AUTH


class TestQueryPairs:
    """Tests for the conventional query helper."""

    def test_all_parameters_in_service_order(self) -> None:
        pairs = query_pairs(ids=["us", "es", "jp"], lang="en-us", limit=2, offset=4)

        assert pairs == [("ids", "us,es,jp"), ("l", "en-us"), ("limit", 2), ("offset", 4)]

    def test_absent_values_are_skipped(self) -> None:
        assert query_pairs() == []
        assert query_pairs(lang="en-gb") == [("l", "en-gb")]
        assert query_pairs(offset=0) == [("offset", 0)]


class TestIsValidUrl:
    def test_accepts_http_and_https(self) -> None:
        assert is_valid_url("https://api.music.apple.com/v1/storefronts")
        assert is_valid_url("http://localhost:8080/v1")

    def test_rejects_relative(self) -> None:
        assert not is_valid_url("storefronts/us")
