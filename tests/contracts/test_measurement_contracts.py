"""Behavioral guarantees of the decode-and-derive pipeline, end to end."""

from unittest.mock import patch

import pytest

from sky_height import (
    CalculationResult,
    ErrorKind,
    Failure,
    MeasurementError,
    Success,
    decode_and_calculate,
)


def _ok(raw: str, cfg) -> CalculationResult:
    result = decode_and_calculate(raw, cfg=cfg)
    assert isinstance(result, Success), result
    return result.value


def _kind(raw: str, cfg) -> ErrorKind:
    result = decode_and_calculate(raw, cfg=cfg)
    assert isinstance(result, Failure), result
    assert isinstance(result.error, MeasurementError)
    return result.error.kind


class TestMeasurementContracts:
    """Properties every caller can rely on."""

    @pytest.mark.contract
    def test_canonical_payload(self, frozen_config, canonical_payload):
        value = _ok(canonical_payload, frozen_config)

        assert value.raw_fields.height_raw == pytest.approx(0.1234)
        assert value.raw_fields.scale_raw == pytest.approx(0.15)
        assert value.scale == pytest.approx(0.15)
        assert value.current == pytest.approx(7.6 - 8.3 * 0.15 - 3 * 0.1234)
        assert value.current == pytest.approx(5.9848)
        assert value.tallest == pytest.approx(0.355)
        assert value.shortest == pytest.approx(12.355)
        assert value.note == ""

    @pytest.mark.contract
    def test_payload_inside_surrounding_text(self, frozen_config, make_payload):
        raw = make_payload(
            '"body":{"height":-0.5,"scale":0.2}',
            prefix="Copied from the app >> https://example.invalid/share?d=",
        )
        value = _ok(raw, frozen_config)

        assert value.raw_fields.height_raw == -0.5
        assert value.current == pytest.approx(7.6 - 8.3 * 0.2 + 1.5)

    @pytest.mark.contract
    @pytest.mark.parametrize("trailer", ["\n", " ", "\r\n", "\t"])
    def test_whitespace_after_the_block_is_a_decode_failure(
        self, frozen_config, make_payload, trailer
    ):
        raw = make_payload('"body":{"height":-0.5,"scale":0.2}') + trailer

        assert _kind(raw, frozen_config) is ErrorKind.DECODE_FAILURE

    @pytest.mark.contract
    def test_url_safe_and_standard_alphabets_agree(self, frozen_config, make_payload):
        plaintext = '"body":{"height":1.0,"note":"??>>??~~","scale":0.2}'
        url_safe = _ok(make_payload(plaintext), frozen_config)
        standard = _ok(make_payload(plaintext, url_safe=False), frozen_config)

        assert url_safe.current == standard.current
        assert url_safe.scale == standard.scale == 0.2

    @pytest.mark.contract
    @pytest.mark.parametrize("raw", ["", "hello", '{"body": 1}', "ImJvZHk"])
    def test_missing_anchor_never_decodes(self, frozen_config, raw):
        with patch("sky_height.pipeline.decoder.base64.b64decode") as b64decode:
            assert _kind(raw, frozen_config) is ErrorKind.ANCHOR_NOT_FOUND
        b64decode.assert_not_called()

    @pytest.mark.contract
    @pytest.mark.parametrize(
        "raw", ["ImJvZHki!!!!", "xx ImJvZHkiA", "ImJvZHki\x00\x01", "ImJvZHkiOns=}"]
    )
    def test_malformed_base64_is_a_decode_failure(self, frozen_config, raw):
        assert _kind(raw, frozen_config) is ErrorKind.DECODE_FAILURE

    @pytest.mark.contract
    @pytest.mark.parametrize(
        ("plaintext", "kind"),
        [
            ('"body"', ErrorKind.HEIGHT_KEY_NOT_FOUND),
            ('"body":{"scale":0.1}', ErrorKind.HEIGHT_KEY_NOT_FOUND),
            ('"body":{"scale":0.1,"height":"n/a"}', ErrorKind.HEIGHT_VALUE_NOT_FOUND),
            ('"body":{"height":0.1}', ErrorKind.SCALE_KEY_NOT_FOUND),
            ('"body":{"height":0.1,"scale":"none"}', ErrorKind.SCALE_VALUE_NOT_FOUND),
        ],
    )
    def test_each_failure_kind(self, frozen_config, make_payload, plaintext, kind):
        assert _kind(make_payload(plaintext), frozen_config) is kind

    @pytest.mark.contract
    def test_all_kinds_share_user_message(self, frozen_config, make_payload):
        anchor = decode_and_calculate("nope", cfg=frozen_config)
        scale = decode_and_calculate(make_payload('"body":{"height":0.1}'), cfg=frozen_config)

        assert anchor.error.kind != scale.error.kind
        assert anchor.error.user_message == scale.error.user_message

    @pytest.mark.contract
    def test_scientific_tier_precedes_plain_decimal(self, frozen_config, make_payload):
        value = _ok(
            make_payload('"body":{"height":-0.25,"scale":0.5,"ratio":2.5e-1}'),
            frozen_config,
        )

        assert value.scale == pytest.approx(0.25)

    @pytest.mark.contract
    def test_bare_integer_scale_is_fixed_point(self, frozen_config, make_payload):
        value = _ok(make_payload('"body":{"height":0.5,"scale":123456789}'), frozen_config)

        assert value.scale == pytest.approx(0.123456789)

    @pytest.mark.contract
    def test_shortest_exceeds_tallest(self, frozen_config, canonical_payload):
        value = _ok(canonical_payload, frozen_config)

        assert value.shortest == pytest.approx(7.6 - 8.3 * value.scale + 6)
        assert value.tallest == pytest.approx(7.6 - 8.3 * value.scale - 6)
        assert value.shortest > value.tallest

    @pytest.mark.contract
    def test_out_of_domain_height_is_not_clamped(self, frozen_config, make_payload):
        value = _ok(make_payload('"body":{"height":5.0,"scale":0.1}'), frozen_config)

        assert value.current < value.tallest < value.shortest

    @pytest.mark.contract
    def test_repeat_invocations_differ_only_in_timestamp(
        self, frozen_config, canonical_payload
    ):
        with patch(
            "sky_height.pipeline.result_builder.epoch_millis",
            side_effect=[1_000_000_000_000, 2_000_000_000_000],
        ):
            first = _ok(canonical_payload, frozen_config)
            second = _ok(canonical_payload, frozen_config)

        assert (first.timestamp, second.timestamp) == (1_000_000_000_000, 2_000_000_000_000)
        first_dict, second_dict = first.to_dict(), second.to_dict()
        first_dict.pop("timestamp")
        second_dict.pop("timestamp")
        assert first_dict == second_dict

    @pytest.mark.contract
    def test_note_is_caller_editable_and_timestamp_fixed(
        self, frozen_config, canonical_payload
    ):
        value = _ok(canonical_payload, frozen_config)
        noted = value.with_note("  after the storm  ")

        assert noted.note == "after the storm"
        assert noted.timestamp == value.timestamp
        assert value.note == ""
