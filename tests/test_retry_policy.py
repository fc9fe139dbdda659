import pytest

from intentpy.utils import RetryPolicy, extract_json_from_text


def test_retry_policy_attempts_and_delays():
    policy = RetryPolicy(max_retries=3, base_delay=0.5, max_delay=1.5)

    assert policy.max_attempts == 4
    assert policy.get_delay(0) == 0.5
    assert policy.get_delay(1) == 1.0
    assert policy.get_delay(2) == 1.5


def test_zero_base_delay_means_no_wait():
    assert RetryPolicy().get_delay(5) == 0.0


def test_negative_retries_rejected():
    with pytest.raises(ValueError):
        RetryPolicy(max_retries=-1)


@pytest.mark.parametrize(
    "text, expected",
    [
        ('{"action": "x"}', {"action": "x"}),
        ('```json\n{"action": "x"}\n```', {"action": "x"}),
        ('Here is the intent: {"action": "x"} hope it helps', {"action": "x"}),
        ("no json here", None),
    ],
)
def test_extract_json_from_text(text, expected):
    assert extract_json_from_text(text) == expected
