"""
Property-based tests for normalization and delta invariants using Hypothesis.
"""

from hypothesis import given
from hypothesis import strategies as st

from dispute_delta.engines.delta import find_anomalies
from dispute_delta.models.records import LedgerRecord
from dispute_delta.normalization.values import clean_amount, clean_identifier, resolve_calendar_date

cell_values = st.one_of(
    st.none(),
    st.text(max_size=40),
    st.integers(min_value=-10**12, max_value=10**12),
    st.floats(allow_nan=False),
)

# Small alphabet so baseline and updated references actually collide.
references = st.one_of(
    st.sampled_from(["", "  ", "N/A", " N/A "]),
    st.text(alphabet="AB1 ", max_size=4),
)


# ============================================================================
# Value cleaning
# ============================================================================


@given(cell_values)
def test_clean_identifier_idempotent(value):
    """Cleaning an already clean identifier changes nothing."""
    once = clean_identifier(value)
    assert clean_identifier(once) == once


@given(st.text(alphabet="0123456789.", min_size=1, max_size=8), st.sampled_from([".0", ".00", " .0"]))
def test_clean_identifier_ignores_zero_fraction(digits, suffix):
    """A trailing zero fraction never changes the identifier."""
    assert clean_identifier(digits + suffix) == clean_identifier(digits)


@given(cell_values)
def test_clean_amount_never_raises(value):
    assert isinstance(clean_amount(value), float)


@given(st.integers(min_value=10000, max_value=99999))
def test_serial_conversion_bounds(serial):
    text = str(serial)
    converted = resolve_calendar_date(text)
    if 29000 < serial < 60000:
        assert converted != text
    else:
        assert converted == text


# ============================================================================
# Delta detection
# ============================================================================


@given(st.lists(references, max_size=8), st.lists(references, max_size=8))
def test_delta_is_exactly_the_unknown_references(baseline_refs, updated_refs):
    """Anomalies are the updated records with a new, non-empty reference, in order."""
    baseline = [LedgerRecord(case_reference=ref) for ref in baseline_refs]
    updated = [LedgerRecord(case_reference=ref) for ref in updated_refs]

    known = {ref.strip() for ref in baseline_refs}
    expected = [
        record
        for record in updated
        if record.case_reference.strip() not in known | {"", "N/A"}
    ]

    anomalies = find_anomalies(baseline, updated)
    assert [id(r) for r in anomalies] == [id(r) for r in expected]
