"""
ProjectHub Backend — Pagination Resolver Tests
================================================

What we test:
    ✅ Defaults when parameters are absent
    ✅ Fallback on non-numeric, zero and negative values
    ✅ Leading-integer parsing ("2.5" → 2, "10abc" → 10)
    ✅ 64-bit cap
    ✅ No upper bound on limit
    ✅ Configurable default page size
"""

import pytest

from projecthub.pagination import DEFAULT_LIMIT, MAX_WINDOW, Pagination, resolve_pagination


class TestResolvePagination:

    def test_absent_parameters_use_defaults(self):
        assert resolve_pagination() == Pagination(limit=25, offset=0)

    def test_valid_values_pass_through(self):
        assert resolve_pagination("10", "30") == Pagination(limit=10, offset=30)

    @pytest.mark.parametrize("raw", ["abc", "", ".5", "0", "-5", "0.9"])
    def test_unusable_limit_falls_back(self, raw):
        assert resolve_pagination(limit=raw).limit == DEFAULT_LIMIT

    @pytest.mark.parametrize("raw", ["abc", "", "-1", "-3.5"])
    def test_unusable_offset_falls_back(self, raw):
        assert resolve_pagination(offset=raw).offset == 0

    @pytest.mark.parametrize(
        "raw, expected",
        [("2.5", 2), ("10abc", 10), ("1e3", 1), ("+4", 4), ("  8 items", 8)],
    )
    def test_leading_integer_is_used(self, raw, expected):
        assert resolve_pagination(limit=raw).limit == expected
        assert resolve_pagination(offset=raw).offset == expected

    def test_trailing_text_after_zero_offset(self):
        assert resolve_pagination(offset="0px").offset == 0

    def test_zero_offset_is_kept(self):
        assert resolve_pagination(offset="0").offset == 0

    def test_surrounding_whitespace_is_ignored(self):
        assert resolve_pagination(" 7 ", " 14 ") == Pagination(limit=7, offset=14)

    def test_limit_has_no_upper_bound(self):
        assert resolve_pagination(limit="100000").limit == 100000

    def test_values_capped_at_64_bit(self):
        huge = "9" * 30
        assert resolve_pagination(huge, huge) == Pagination(limit=MAX_WINDOW, offset=MAX_WINDOW)

    def test_custom_default_limit(self):
        assert resolve_pagination(limit="nope", default_limit=50).limit == 50
