"""Property-based tests for date handling."""

from datetime import UTC, datetime, timedelta, timezone

from hypothesis import given
from hypothesis import strategies as st

from syndbind.date_parser import format_rfc822, format_w3c, parse_date, parse_rfc822, parse_w3c

# Whole seconds: neither format carries fractions
moments = st.datetimes(
    min_value=datetime(1971, 1, 1), max_value=datetime(2999, 12, 31)
).map(lambda d: d.replace(microsecond=0, tzinfo=UTC))

offsets = st.integers(min_value=-12 * 60, max_value=14 * 60).map(
    lambda minutes: timezone(timedelta(minutes=minutes))
)


class TestDateParserProperties:
    """Property-based tests for RFC 822 and W3C dates."""

    @given(moments)
    def test_rfc822_preserves_instant(self, moment):
        """
        For any UTC instant, formatting as RFC 822 and parsing gives it back.
        """
        assert parse_rfc822(format_rfc822(moment)) == moment

    @given(moments)
    def test_w3c_preserves_instant(self, moment):
        """
        For any UTC instant, formatting as W3C and parsing gives it back.
        """
        assert parse_w3c(format_w3c(moment)) == moment
        assert parse_date(format_w3c(moment)) == moment

    @given(moments, offsets)
    def test_parsed_dates_are_utc(self, moment, offset):
        """
        For any instant written in any offset, the parsed value is in UTC.
        """
        text = moment.astimezone(offset).isoformat()
        parsed = parse_w3c(text)

        assert parsed == moment
        assert parsed.utcoffset() == timedelta(0)
