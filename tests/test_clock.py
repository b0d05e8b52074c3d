from reddit_client.clock import FixedClock, SystemClock, is_expired, now_millis


def test_fixed_clock_advances_by_millis_and_seconds():
    clock = FixedClock(1_000)

    clock.advance(500)
    clock.advance(seconds=2)

    assert clock.now_millis() == 3_500


def test_fixed_clock_set_overrides_time():
    clock = FixedClock()
    clock.set(42)
    assert clock.now_millis() == 42


def test_system_clock_reports_epoch_millis():
    before = now_millis()
    current = SystemClock().now_millis()
    # Sanity bound: after 2020-01-01 in milliseconds.
    assert current >= before > 1_577_836_800_000


def test_is_expired_boundary_is_inclusive():
    assert is_expired(None, 0) is True
    assert is_expired(1_000, 999) is False
    assert is_expired(1_000, 1_000) is True
    assert is_expired(1_000, 1_001) is True
