from donorlink.services.ids import MonotonicIdGenerator, id_sort_key


def test_ids_follow_the_clock():
    generator = MonotonicIdGenerator(clock=lambda: 1000)
    assert generator.next_id() == "1000"


def test_ids_within_same_millisecond_are_distinct_and_increasing():
    generator = MonotonicIdGenerator(clock=lambda: 1000)
    ids = [generator.next_id() for _ in range(5)]
    assert ids == ["1000", "1001", "1002", "1003", "1004"]


def test_ids_skip_past_existing_records():
    generator = MonotonicIdGenerator(clock=lambda: 1000)
    assert generator.next_id(["500", "2000", "legacy-id"]) == "2001"


def test_id_sort_key_orders_numerically():
    ids = ["1675209600000", "999", "1672444800000", "abc"]
    assert sorted(ids, key=id_sort_key) == ["999", "1672444800000", "1675209600000", "abc"]
