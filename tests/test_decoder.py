"""Tests for response decoding."""

import json

import pytest

from bing_geocoder import LegacyDialect, RestDialect
from bing_geocoder.decoder import decode_body, decode_response, is_success

from conftest import make_response

REST_BODY = json.dumps({"resourceSets": [{"resources": [{"address": {"postalCode": 90028}}]}]})
LEGACY_BODY = json.dumps({"d": {"Results": [{"Address": {"PostalCode": "90028"}}]}})


class TestStatus:
    def test_200_is_success(self):
        assert is_success(make_response(status=200))

    @pytest.mark.parametrize("status", [204, 299])
    def test_other_2xx_is_success(self, status):
        assert is_success(make_response(status=status))

    @pytest.mark.parametrize("status", [301, 404, 500, 503])
    def test_non_2xx_is_failure(self, status):
        assert not is_success(make_response(status=status))


class TestDecodeBody:
    def test_declared_charset_is_used(self):
        resp = make_response("Château".encode("iso-8859-1"), content_type="application/json; charset=iso-8859-1")
        assert decode_body(resp) == "Château"

    def test_generic_json_type_decodes_as_utf8(self):
        resp = make_response("Château".encode("utf-8"), content_type="application/json")
        assert decode_body(resp) == "Château"

    def test_missing_content_type_decodes_as_utf8(self):
        resp = make_response("Ussé".encode("utf-8"), content_type=None)
        assert decode_body(resp) == "Ussé"

    def test_unknown_charset_falls_back_to_utf8(self):
        resp = make_response("Ussé".encode("utf-8"), content_type="application/json; charset=bogus-42")
        assert decode_body(resp) == "Ussé"


class TestDecodeResponse:
    def test_rest_envelope(self):
        results = decode_response(make_response(REST_BODY), RestDialect("k"))
        assert results == [{"address": {"postalCode": 90028}}]

    def test_legacy_envelope(self):
        results = decode_response(make_response(LEGACY_BODY), LegacyDialect())
        assert results[0]["Address"]["PostalCode"] == "90028"

    def test_legacy_trailer_is_repaired(self):
        body = LEGACY_BODY[:-1] + "}.d"
        assert body.endswith("}}.d")
        results = decode_response(make_response(body), LegacyDialect())
        assert len(results) == 1

    def test_rest_trailer_is_not_repaired(self):
        body = REST_BODY[:-1] + "}.d"
        assert decode_response(make_response(body), RestDialect("k")) == []

    def test_non_ascii_survives(self):
        body = json.dumps({"d": {"Results": [{"Name": "Château d'Ussé"}]}}, ensure_ascii=False)
        resp = make_response(body.encode("utf-8"), content_type="application/json")
        assert decode_response(resp, LegacyDialect())[0]["Name"] == "Château d'Ussé"

    def test_error_status_ignores_body(self):
        assert decode_response(make_response(REST_BODY, status=500), RestDialect("k")) == []

    def test_empty_body(self):
        assert decode_response(make_response(b""), RestDialect("k")) == []

    @pytest.mark.parametrize("body", ["not json", "{", "<html></html>"])
    def test_malformed_json(self, body):
        assert decode_response(make_response(body), RestDialect("k")) == []

    def test_valid_json_without_envelope(self):
        assert decode_response(make_response('{"statusCode": 401}'), RestDialect("k")) == []

    def test_failures_are_logged(self):
        messages = []
        decode_response(make_response("nope"), RestDialect("k"), logger=messages.append)
        decode_response(make_response(status=404), LegacyDialect(), logger=messages.append)
        assert messages[0].startswith("Bing rest parse error")
        assert messages[1] == "Bing legacy HTTP 404"
