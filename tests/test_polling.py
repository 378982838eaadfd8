import unittest
from unittest.mock import Mock, call, patch

from probe_relay.polling import Exhausted, Found, PollPolicy, poll_until

POLICY = PollPolicy(
    initial_delay_s=2.5,
    attempt_timeout_s=5.0,
    interval_s=1.5,
    max_attempts=6,
)


class PollUntilTests(unittest.TestCase):
    def test_stops_on_first_available_value(self) -> None:
        fetch = Mock(side_effect=[None, None, "ready", "never-read"])

        with patch("probe_relay.polling.time.sleep") as mock_sleep:
            result = poll_until(fetch, POLICY)

        self.assertEqual(result, Found(value="ready", attempts=3))
        self.assertEqual(fetch.call_count, 3)
        fetch.assert_called_with(5.0)
        self.assertEqual(mock_sleep.call_args_list, [call(2.5), call(1.5), call(1.5)])

    def test_value_on_first_attempt_only_waits_initial_delay(self) -> None:
        fetch = Mock(return_value={"a": 1})

        with patch("probe_relay.polling.time.sleep") as mock_sleep:
            result = poll_until(fetch, POLICY)

        self.assertIsInstance(result, Found)
        self.assertEqual(result.attempts, 1)
        mock_sleep.assert_called_once_with(2.5)

    def test_exhausts_after_max_attempts(self) -> None:
        fetch = Mock(return_value=None)

        with patch("probe_relay.polling.time.sleep") as mock_sleep:
            result = poll_until(fetch, POLICY)

        self.assertEqual(result, Exhausted(attempts=6))
        self.assertEqual(fetch.call_count, 6)
        # initial delay plus a gap between each pair of attempts
        self.assertEqual(mock_sleep.call_count, 6)

    def test_fetch_errors_propagate(self) -> None:
        fetch = Mock(side_effect=[None, RuntimeError("boom")])

        with patch("probe_relay.polling.time.sleep"):
            with self.assertRaises(RuntimeError):
                poll_until(fetch, POLICY)

        self.assertEqual(fetch.call_count, 2)

    def test_zero_attempt_budget_is_exhausted_without_fetching(self) -> None:
        fetch = Mock()
        policy = PollPolicy(
            initial_delay_s=0, attempt_timeout_s=1, interval_s=0, max_attempts=0
        )

        with patch("probe_relay.polling.time.sleep"):
            result = poll_until(fetch, policy)

        self.assertEqual(result, Exhausted(attempts=0))
        fetch.assert_not_called()


if __name__ == "__main__":
    unittest.main()
