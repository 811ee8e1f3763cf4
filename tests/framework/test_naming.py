"""Tests for run-wide job names."""

from concurrent.futures import ThreadPoolExecutor

from jobspine.framework.naming import JobNameCounter


class TestJobNameCounter:
    def test_sequential_names(self):
        names = JobNameCounter()
        assert names.next_name("Q-7") == "Q-7-1"
        assert names.next_name("Q-7") == "Q-7-2"
        assert names.issued == 2

    def test_counter_shared_across_prefixes(self):
        names = JobNameCounter()
        assert names.next_name("align") == "align-1"
        assert names.next_name("sort") == "sort-2"

    def test_start(self):
        assert JobNameCounter(start=41).next_name("Q") == "Q-42"

    def test_counters_are_independent(self):
        first, second = JobNameCounter(), JobNameCounter()
        first.next_name("Q")
        assert second.next_name("Q") == "Q-1"

    def test_concurrent_names_are_unique(self):
        names = JobNameCounter()
        with ThreadPoolExecutor(max_workers=8) as pool:
            issued = list(pool.map(lambda _: names.next_name("Q"), range(500)))
        assert len(set(issued)) == 500
        assert names.issued == 500
