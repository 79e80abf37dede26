from __future__ import annotations

import pytest

from tokenauth.core.cors import parse_origins


@pytest.mark.parametrize("raw", [None, "", " ", "*", " * "])
def test_any_origin(raw):
    assert parse_origins(raw) is None


def test_explicit_origins():
    assert parse_origins("http://a.test, http://b.test,") == ["http://a.test", "http://b.test"]
