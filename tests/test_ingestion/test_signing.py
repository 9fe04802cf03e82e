"""Tests for HMAC request signing."""

import hashlib
import hmac

from crypto_ledger.ingestion.signing import (
    SignedQuery,
    build_query_string,
    hmac_sha256_hex,
    sign,
    sign_bybit_v5,
)

SECRET = "NhqPtmdSJYdKjVHjA7PZj4Mge3R5YNiP1e3UZjInClVN65XAbvqqM6A7H5fATj0j"


class TestBuildQueryString:
    def test_keys_are_sorted(self):
        assert build_query_string({"timestamp": 1, "limit": 100, "coin": "USDT"}) == (
            "coin=USDT&limit=100&timestamp=1"
        )

    def test_values_are_percent_encoded(self):
        assert build_query_string({"note": "a b/c", "x": "1&2"}) == (
            "note=a%20b%2Fc&x=1%262"
        )

    def test_booleans_are_lowercase(self):
        assert build_query_string({"only_to": True, "only_from": False}) == (
            "only_from=false&only_to=true"
        )

    def test_empty_params(self):
        assert build_query_string({}) == ""


class TestSign:
    def test_known_vector(self):
        """Published Binance example: query string and secret give a fixed digest."""
        query = (
            "symbol=LTCBTC&side=BUY&type=LIMIT&timeInForce=GTC&quantity=1"
            "&price=0.1&recvWindow=5000&timestamp=1499827319559"
        )
        assert hmac_sha256_hex(query, SECRET) == (
            "c8db56825ae71d6d79447849e617115f4a920fa2acdcab2b053c4b2838bd6b71"
        )

    def test_signature_is_lowercase_hex_of_sorted_query(self):
        signed = sign({"timestamp": 1700000000000, "recvWindow": 5000}, SECRET)

        assert signed.query_string == "recvWindow=5000&timestamp=1700000000000"
        expected = hmac.new(
            SECRET.encode(), signed.query_string.encode(), hashlib.sha256
        ).hexdigest()
        assert signed.signature == expected
        assert len(signed.signature) == 64
        assert signed.signature == signed.signature.lower()

    def test_parameter_order_does_not_matter(self):
        a = sign({"a": 1, "b": "two", "c": 3}, SECRET)
        b = sign({"c": 3, "a": 1, "b": "two"}, SECRET)
        assert a == b

    def test_deterministic(self):
        params = {"coin": "USDT", "timestamp": 1700000000000}
        assert sign(params, SECRET) == sign(params, SECRET)

    def test_different_secret_changes_signature(self):
        params = {"timestamp": 1700000000000}
        assert sign(params, SECRET).signature != sign(params, "other").signature

    def test_signed_query_string_appends_signature(self):
        signed = SignedQuery("a=1&b=2", "deadbeef")
        assert signed.signed_query_string == "a=1&b=2&signature=deadbeef"


class TestSignBybitV5:
    def test_signs_concatenated_prefix(self):
        signature = sign_bybit_v5(
            1700000000000, "key123", 5000, "coin=USDT&limit=50", SECRET
        )
        assert signature == hmac_sha256_hex(
            "1700000000000key1235000coin=USDT&limit=50", SECRET
        )

    def test_string_and_int_inputs_agree(self):
        assert sign_bybit_v5(1, "k", 5000, "", SECRET) == sign_bybit_v5(
            "1", "k", "5000", "", SECRET
        )
