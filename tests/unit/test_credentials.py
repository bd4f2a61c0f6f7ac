"""Tests for dsngate.credentials — header and query string key extraction."""

import pytest
from yarl import URL

from dsngate.credentials import Credential, extract_from_header, extract_from_query
from dsngate.errors import ErrorKind, MissingCredential

PK = "4784fbc50de2473f9977cfce8a9adce5"
SK = "0c3a6f1e2b9d48f7a5e6c1d2b3a4f5e6"


class TestCredential:
    def test_public_key_only(self) -> None:
        cred = Credential(public_key=PK)
        assert cred.secret_key == ""

    def test_empty_public_key_rejected(self) -> None:
        with pytest.raises(ValueError):
            Credential(public_key="", secret_key=SK)


class TestExtractFromHeader:
    def test_scheme_prefixed_both_keys(self) -> None:
        header = f"Sentry sentry_version=7, sentry_key={PK}, sentry_secret={SK}"
        cred = extract_from_header([header])
        assert cred == Credential(public_key=PK, secret_key=SK)

    def test_scheme_prefixed_key_first(self) -> None:
        cred = extract_from_header([f"Sentry sentry_key={PK},sentry_secret={SK}"])
        assert cred.public_key == PK
        assert cred.secret_key == SK

    def test_public_key_only(self) -> None:
        cred = extract_from_header([f"Sentry sentry_key={PK}, sentry_version=7"])
        assert cred.public_key == PK
        assert cred.secret_key == ""

    def test_bare_list(self) -> None:
        header = ",".join([
            "sentry_version=7",
            "sentry_client=<client version, arbitrary>",
            "sentry_timestamp=1614144877.269",
            f"sentry_secret={SK}",
            f"sentry_key={PK}",
        ])
        cred = extract_from_header([header])
        assert cred == Credential(public_key=PK, secret_key=SK)

    def test_bare_list_rejected_when_disabled(self) -> None:
        with pytest.raises(MissingCredential):
            extract_from_header([f"sentry_key={PK}"], allow_bare=False)

    def test_only_first_value_is_read(self) -> None:
        with pytest.raises(MissingCredential):
            extract_from_header(["Sentry sentry_version=7", f"Sentry sentry_key={PK}"])

    def test_secret_without_public_key(self) -> None:
        with pytest.raises(MissingCredential) as exc_info:
            extract_from_header([f"Sentry sentry_secret={SK}"])
        assert exc_info.value.kind is ErrorKind.MISSING_CREDENTIAL

    def test_non_hex_key_ignored(self) -> None:
        with pytest.raises(MissingCredential):
            extract_from_header(["Sentry sentry_key=not-a-hex-key"])

    def test_uppercase_hex_ignored(self) -> None:
        with pytest.raises(MissingCredential):
            extract_from_header([f"Sentry sentry_key={PK.upper()}"])

    def test_unknown_tokens_ignored(self) -> None:
        cred = extract_from_header([f"Sentry foo=bar, sentry_key={PK}, baz"])
        assert cred.public_key == PK

    @pytest.mark.parametrize("values", [[], [""]])
    def test_missing_header(self, values) -> None:
        with pytest.raises(MissingCredential):
            extract_from_header(values)


class TestExtractFromQuery:
    def test_both_keys(self) -> None:
        url = URL(f"https://sentry.io/api/1/store/?sentry_key={PK}&sentry_secret={SK}")
        assert extract_from_query(url) == Credential(public_key=PK, secret_key=SK)

    def test_public_key_only(self) -> None:
        url = URL(f"https://sentry.io/api/1/store/?sentry_key={PK}&sentry_version=7")
        cred = extract_from_query(url)
        assert cred.public_key == PK
        assert cred.secret_key == ""

    def test_values_taken_verbatim(self) -> None:
        url = URL("https://sentry.io/api/1/store/?sentry_key=NotHex")
        assert extract_from_query(url).public_key == "NotHex"

    def test_secret_without_public_key(self) -> None:
        url = URL(f"https://sentry.io/api/1/store/?sentry_secret={SK}")
        with pytest.raises(MissingCredential):
            extract_from_query(url)

    def test_empty_public_key(self) -> None:
        with pytest.raises(MissingCredential):
            extract_from_query(URL("https://sentry.io/api/1/store/?sentry_key="))
