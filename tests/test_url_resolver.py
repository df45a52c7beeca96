"""Tests for well-known URL resolution and trailing-slash normalization."""

import pytest

from smart_discovery.errors import MalformedInputError
from smart_discovery.url_resolver import (
    is_well_known_url,
    issuers_match,
    openid_configuration_url,
    resolve_document_url,
    strip_trailing_slash,
    validate_url,
)


class TestStripTrailingSlash:
    def test_strips_one_slash(self):
        assert strip_trailing_slash("https://op.example.com/") == "https://op.example.com"

    def test_leaves_url_without_slash(self):
        assert strip_trailing_slash("https://op.example.com") == "https://op.example.com"

    def test_strips_exactly_one(self):
        assert strip_trailing_slash("https://op.example.com//") == "https://op.example.com/"


class TestIssuersMatch:
    @pytest.mark.parametrize(
        "first,second",
        [
            ("https://op.example.com", "https://op.example.com"),
            ("https://op.example.com/", "https://op.example.com"),
            ("https://op.example.com", "https://op.example.com/"),
            ("https://op.example.com/tenant/", "https://op.example.com/tenant"),
        ],
    )
    def test_match_tolerates_trailing_slash(self, first, second):
        assert issuers_match(first, second)

    def test_different_issuers_do_not_match(self):
        assert not issuers_match("https://op.example.com", "https://other.example.com")
        assert not issuers_match("https://op.example.com/a", "https://op.example.com/b")


class TestResolveDocumentUrl:
    """Test capability document URL resolution."""

    @pytest.mark.parametrize(
        "seed",
        ["https://op.example.com", "https://op.example.com/"],
    )
    def test_appends_default_document_once(self, seed):
        """Bare and slash-terminated seeds resolve identically."""
        resolved = resolve_document_url(seed, "smart-configuration")
        assert resolved == "https://op.example.com/.well-known/smart-configuration"
        assert resolved.count("/.well-known/") == 1

    def test_keeps_issuer_path(self):
        assert (
            resolve_document_url("https://op.example.com/fhir/r4/", "smart-configuration")
            == "https://op.example.com/fhir/r4/.well-known/smart-configuration"
        )

    def test_well_known_url_is_used_unchanged(self):
        url = "https://op.example.com/.well-known/example-configuration"
        assert resolve_document_url(url, "smart-configuration") == url

    def test_explicit_openid_configuration_is_used_unchanged(self):
        url = "https://op.example.com/.well-known/openid-configuration"
        assert resolve_document_url(url, "smart-configuration") == url

    def test_query_string_is_preserved(self):
        assert (
            resolve_document_url("https://op.example.com/?tenant=a", "smart-configuration")
            == "https://op.example.com/.well-known/smart-configuration?tenant=a"
        )

    @pytest.mark.parametrize(
        "seed",
        ["https://op.example.com/.well-known/", "https://op.example.com/.well-known"],
    )
    def test_bare_well_known_segment_is_not_doubled(self, seed):
        assert (
            resolve_document_url(seed, "smart-configuration")
            == "https://op.example.com/.well-known/smart-configuration"
        )

    def test_resolution_is_idempotent(self):
        once = resolve_document_url("https://op.example.com", "smart-configuration")
        assert resolve_document_url(once, "smart-configuration") == once

    @pytest.mark.parametrize(
        "seed",
        ["", "   ", "not a url", "op.example.com", "ftp://op.example.com", "https://", None, 42],
    )
    def test_malformed_seed_raises(self, seed):
        with pytest.raises(MalformedInputError) as exc_info:
            resolve_document_url(seed, "smart-configuration")

        assert exc_info.value.kind == "malformed_input"
        assert exc_info.value.body is None

    def test_malformed_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_url("https://op.example.com:notaport")


class TestIsWellKnownUrl:
    def test_detects_document(self):
        assert is_well_known_url("https://op.example.com/.well-known/smart-configuration")

    def test_segment_without_document_is_not_well_known(self):
        assert not is_well_known_url("https://op.example.com/.well-known/")

    def test_plain_issuer_is_not_well_known(self):
        assert not is_well_known_url("https://op.example.com/fhir")


class TestOpenIDConfigurationUrl:
    def test_from_issuer(self):
        assert (
            openid_configuration_url("https://op.example.com")
            == "https://op.example.com/.well-known/openid-configuration"
        )

    def test_strips_trailing_slash_from_issuer(self):
        assert (
            openid_configuration_url("https://op.example.com/")
            == "https://op.example.com/.well-known/openid-configuration"
        )

    def test_issuer_with_path(self):
        assert (
            openid_configuration_url("https://op.example.com/realms/fhir/")
            == "https://op.example.com/realms/fhir/.well-known/openid-configuration"
        )

    def test_well_known_issuer_is_used_unchanged(self):
        url = "https://op.example.com/.well-known/openid-configuration"
        assert openid_configuration_url(url) == url

    def test_invalid_issuer_raises(self):
        with pytest.raises(MalformedInputError):
            openid_configuration_url("urn:example:issuer")
