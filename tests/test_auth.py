"""
Unit tests for caller identity: token parsing and bearer verification.
"""

from app.core.auth import CallerIdentity, StaticTokenVerifier, bearer_token, parse_caller_tokens


class TestParseCallerTokens:
    def test_empty(self) -> None:
        assert parse_caller_tokens("") == {}

    def test_pairs_and_whitespace(self) -> None:
        assert parse_caller_tokens(" alice:tok1 , bob:tok2") == {"tok1": "alice", "tok2": "bob"}

    def test_malformed_entries_skipped(self) -> None:
        assert parse_caller_tokens("alice,:tok,bob:,carol:tok3,,") == {"tok3": "carol"}


class TestBearerToken:
    def test_extracts_token(self) -> None:
        assert bearer_token("Bearer abc") == "abc"
        assert bearer_token("bearer  abc ") == "abc"

    def test_other_schemes_and_missing(self) -> None:
        assert bearer_token(None) == ""
        assert bearer_token("") == ""
        assert bearer_token("Basic abc") == ""
        assert bearer_token("abc") == ""


class TestStaticTokenVerifier:
    def test_known_token(self) -> None:
        verifier = StaticTokenVerifier({"tok1": "alice"})
        assert verifier.verify("tok1") == CallerIdentity(uid="alice")

    def test_unknown_or_empty_token(self) -> None:
        verifier = StaticTokenVerifier({"tok1": "alice"})
        assert verifier.verify("tok2") is None
        assert verifier.verify("") is None
