"""Tests for cells and columns."""

import numpy as np
import pandas as pd
import pytest

from tfsframe import (
    DataKind,
    DataValue,
    DataVector,
    IndexOutOfRangeError,
    LengthMismatchError,
    TypeMismatchError,
    WrongVariantError,
)


class TestDataValue:
    """Test owned cells."""

    def test_text_narrowing(self):
        value = DataValue.text("sample")
        assert value.kind is DataKind.TEXT
        assert value.is_text and not value.is_real
        assert value.as_text() == "sample"
        with pytest.raises(WrongVariantError):
            value.as_real()

    def test_real_narrowing(self):
        value = DataValue.real(3.5)
        assert value.as_real() == 3.5
        with pytest.raises(WrongVariantError):
            value.as_text()

    def test_display(self):
        assert str(DataValue.text("BPM1")) == "'BPM1'"
        assert str(DataValue.real(2.5)) == "2.5"

    def test_no_coercion(self):
        """A numeric-looking text stays text."""
        value = DataValue.text("1.0")
        with pytest.raises(WrongVariantError):
            value.as_real()
        assert DataValue.text("1.0") != DataValue.real(1.0)

    def test_equality_and_hash(self):
        assert DataValue.real(1.0) == DataValue.real(1)
        assert hash(DataValue.text("a")) == hash(DataValue.text("a"))


class TestDataView:
    """Test views into columns."""

    def test_view_reads_column(self):
        vec = DataVector.real([1.0, 2.0, 3.0])
        view = vec.at(1)
        assert view.kind is DataKind.REAL
        assert view.position == 1
        assert view.as_real() == 2.0
        assert isinstance(view.as_real(), float)

    def test_view_narrowing_fails_on_wrong_variant(self):
        view = DataVector.text(["a", "b"]).at(0)
        assert view.as_text() == "a"
        with pytest.raises(WrongVariantError):
            view.as_real()

    def test_to_value_and_equality(self):
        view = DataVector.text(["a", "b"]).at(1)
        owned = view.to_value()
        assert isinstance(owned, DataValue)
        assert owned == view
        assert view == DataVector.text(["x", "b"]).at(1)
        assert str(view) == "'b'"


class TestDataVector:
    """Test column storage and arithmetic."""

    def test_constructors(self):
        real = DataVector.real([1, 2, 3])
        assert real.kind is DataKind.REAL
        assert real.as_real().dtype == np.float64
        assert len(real) == 3

        text = DataVector.text(["a", "b"])
        assert text.kind is DataKind.TEXT
        assert text.as_text() == ["a", "b"]

    def test_text_rejects_non_strings(self):
        with pytest.raises(TypeError):
            DataVector.text(["a", 1])

    def test_real_rejects_strings(self):
        with pytest.raises(TypeError):
            DataVector.real(["1.5"])
        with pytest.raises(TypeError):
            DataVector.real(np.array(["1.5"]))

    def test_init_checks_kind_matches_data(self):
        with pytest.raises(TypeError):
            DataVector(DataKind.REAL, ("a",))
        with pytest.raises(TypeError):
            DataVector(DataKind.TEXT, np.array([1.0]))
        with pytest.raises(TypeError):
            DataVector(DataKind.TEXT, ("a", 1))

    def test_init_keeps_caller_array_independent(self):
        data = np.array([1.0, 2.0])
        vec = DataVector(DataKind.REAL, data)
        data[0] = 9.0
        assert vec.at(0).as_real() == 1.0

    def test_real_storage_is_read_only(self):
        real = DataVector.real([1.0, 2.0])
        with pytest.raises(ValueError):
            real.as_real()[0] = 5.0

    def test_narrowing(self):
        with pytest.raises(WrongVariantError):
            DataVector.real([1.0]).as_text()
        with pytest.raises(WrongVariantError):
            DataVector.text(["a"]).as_real()

    def test_at_bounds(self):
        vec = DataVector.real([1.0, 2.0, 3.0])
        assert vec.at(2).as_real() == 3.0
        assert vec[0].as_real() == 1.0
        with pytest.raises(IndexOutOfRangeError):
            vec.at(3)
        with pytest.raises(IndexOutOfRangeError):
            vec.at(-1)

    def test_iteration(self):
        vec = DataVector.text(["a", "b", "c"])
        assert [v.as_text() for v in vec] == ["a", "b", "c"]

    def test_add(self):
        a = DataVector.real([1, 2, 3])
        b = DataVector.real([10, 10, 10])
        c = a + b
        assert c.kind is DataKind.REAL
        assert np.array_equal(c.as_real(), [11.0, 12.0, 13.0])
        assert a.add(b) == c

    def test_add_long_columns(self):
        a = DataVector.real(np.arange(100, dtype=float))
        b = DataVector.real(np.ones(100))
        assert a + b == DataVector.real(np.arange(100) + 1.0)

    def test_subtract(self):
        a = DataVector.real([5.0, 7.0])
        b = DataVector.real([1.0, 2.0])
        assert np.array_equal((a - b).as_real(), [4.0, 5.0])
        assert a.subtract(b) == a - b

    def test_length_mismatch_rejected_by_both_operators(self):
        a = DataVector.real([1.0, 2.0, 3.0])
        b = DataVector.real([1.0, 2.0])
        with pytest.raises(LengthMismatchError):
            a - b
        with pytest.raises(LengthMismatchError):
            a + b

    def test_text_arithmetic_rejected(self):
        real = DataVector.real([1.0])
        text = DataVector.text(["a"])
        with pytest.raises(TypeMismatchError):
            real + text
        with pytest.raises(TypeMismatchError):
            text - real
        with pytest.raises(TypeMismatchError):
            text + text

    def test_operands_unchanged(self):
        a = DataVector.real([1.0, 2.0])
        b = DataVector.real([3.0, 4.0])
        a + b
        assert np.array_equal(a.as_real(), [1.0, 2.0])
        assert np.array_equal(b.as_real(), [3.0, 4.0])

    def test_equality(self):
        assert DataVector.real([1.0]) == DataVector.real([1.0])
        assert DataVector.real([1.0]) != DataVector.real([2.0])
        assert DataVector.text(["1.0"]) != DataVector.real([1.0])

    def test_repr_is_bounded(self):
        vec = DataVector.real(range(100))
        text = repr(vec)
        assert text.startswith("RealVector[100]")
        assert "4.0" in text
        assert "5.0" not in text
        assert text.endswith("...}")

        short = DataVector.text(["BPM1", "BPM2"])
        assert repr(short) == "TextVector[2] {'BPM1', 'BPM2'}"

    def test_to_series(self):
        series = DataVector.real([1.0, 2.0]).to_series("BETX")
        assert isinstance(series, pd.Series)
        assert series.name == "BETX"
        assert series.dtype == np.float64
        assert DataVector.text(["a"]).to_series().tolist() == ["a"]
