from __future__ import annotations

import pydantic
import pytest

from jetsplash.error_mapper import (
    BasicError,
    ErrorMapper,
    basic_error_decoder,
    model_decoder,
)

pytestmark = pytest.mark.unit


def test_basic_error_joins_messages() -> None:
    assert BasicError(errors=["a", "b"]).map_error() == "a, b"


def test_basic_error_blank_maps_to_none() -> None:
    assert BasicError(errors=[]).map_error() is None
    assert BasicError(errors=["  "]).map_error() is None


def test_basic_error_blank_check_applies_to_the_joined_text() -> None:
    # Separators count: two blank entries join to a non-blank message.
    assert BasicError(errors=[" ", ""]).map_error() == " , "


def test_basic_error_satisfies_error_mapper() -> None:
    assert isinstance(BasicError(errors=[]), ErrorMapper)


def test_basic_error_decoder_ignores_unknown_fields() -> None:
    decoded = basic_error_decoder(b'{"errors": ["Rate Limit Exceeded"], "status": 403}')
    assert decoded == BasicError(errors=["Rate Limit Exceeded"])


def test_basic_error_requires_errors_field() -> None:
    with pytest.raises(pydantic.ValidationError):
        basic_error_decoder(b'{"message": "rate limited"}')


def test_decoder_raises_on_shape_mismatch() -> None:
    with pytest.raises(pydantic.ValidationError):
        basic_error_decoder(b'{"errors": "not a list"}')


def test_enveloped_decoder_skips_outer_field() -> None:
    decode = model_decoder(BasicError, enveloped=True)
    assert decode(b'{"error": {"errors": ["bad token"]}}') == BasicError(errors=["bad token"])


@pytest.mark.parametrize("body", [b"[]", b"{}", b'"text"'])
def test_enveloped_decoder_rejects_non_envelopes(body: bytes) -> None:
    decode = model_decoder(BasicError, enveloped=True)
    with pytest.raises(ValueError):
        decode(body)


def test_model_decoder_accepts_plain_types() -> None:
    decode = model_decoder(dict[str, int])
    assert decode(b'{"remaining": 0}') == {"remaining": 0}
