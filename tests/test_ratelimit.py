import pytest

from bookfromhub.ratelimit import detect_rate_limit, format_reset_time, is_rate_limited


def test_forbidden_with_zero_remaining_reports_reset_time() -> None:
    message = detect_rate_limit(
        403, {"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"}
    )
    assert message is not None
    assert message.startswith("GitHub API rate limit exceeded.")
    assert "22:13:20 UTC" in message
    assert "BOOKFROMHUB_GITHUB_TOKEN" in message


def test_missing_reset_header_omits_reset_clause() -> None:
    message = detect_rate_limit(403, {"X-RateLimit-Remaining": "0"})
    assert message is not None
    assert "resets at" not in message
    assert message.endswith("to raise the limit.")


def test_unparsable_reset_header_omits_reset_clause() -> None:
    message = detect_rate_limit(
        403, {"x-ratelimit-remaining": "0", "x-ratelimit-reset": "soon"}
    )
    assert message is not None
    assert "UTC" not in message


def test_too_many_requests_is_always_rate_limited() -> None:
    assert detect_rate_limit(429, {}) is not None


@pytest.mark.parametrize(
    ("status", "headers"),
    [
        (403, {}),
        (403, {"X-RateLimit-Remaining": "12"}),
        (403, {"X-RateLimit-Remaining": "none"}),
        (404, {"X-RateLimit-Remaining": "0"}),
        (500, {}),
    ],
)
def test_other_responses_are_not_rate_limited(status: int, headers: dict[str, str]) -> None:
    assert not is_rate_limited(status, headers)
    assert detect_rate_limit(status, headers) is None


def test_format_reset_time() -> None:
    assert format_reset_time("0") == "00:00:00 UTC"
    assert format_reset_time(None) is None
    assert format_reset_time("99999999999999999999") is None
