import pytest

from flagalgebra.sdpa import SdpaCoeff, SdpaError, SdpaParseError, SdpNotSolved


def test_parse_reads_fields():
    coeff = SdpaCoeff.parse("2 3 4 5 -0.5")
    assert coeff == SdpaCoeff(2, 3, 4, 5, -0.5)


def test_parse_accepts_extra_whitespace():
    assert SdpaCoeff.parse("  1\t1  2 2   3.25 \n") == SdpaCoeff(1, 1, 2, 2, 3.25)


@pytest.mark.parametrize(
    "coeff",
    [
        SdpaCoeff(0, 1, 1, 1, 1.0),
        SdpaCoeff(3, 2, 5, 7, -0.125),
        SdpaCoeff(1, 1, 1, 2, 1e20),
        SdpaCoeff(1, 1, 1, 2, 1e-7),
        SdpaCoeff(2, 4, 3, 3, 0.1),
    ],
)
def test_str_parse_round_trip(coeff):
    assert SdpaCoeff.parse(str(coeff)) == coeff


def test_str_writes_integral_values_without_fraction():
    assert str(SdpaCoeff(1, 2, 3, 4, 1.0)) == "1 2 3 4 1"


def test_str_never_uses_exponent():
    text = str(SdpaCoeff(1, 1, 1, 1, 1e20))
    assert "e" not in text
    assert text.split()[4] == "1" + "0" * 20


@pytest.mark.parametrize("line", ["1 2 3 4", "1 2 3 4 5 6", "", "a 1 1 1 1.0", "-1 1 1 1 1.0", "1 1 1 1 x"])
def test_parse_rejects_malformed_lines(line):
    with pytest.raises(SdpaParseError):
        SdpaCoeff.parse(line)


def test_parse_error_message():
    with pytest.raises(SdpaParseError) as info:
        SdpaCoeff.parse("1 2")
    assert str(info.value) == "Error while parsing matrix coefficient: Less than 5 elements"
    assert isinstance(info.value, SdpaError)


def test_indices_order_coefficients():
    coeffs = [SdpaCoeff(2, 1, 1, 1, 0.0), SdpaCoeff(1, 2, 1, 1, 0.0), SdpaCoeff(1, 1, 3, 1, 0.0)]
    assert [c.indices() for c in sorted(coeffs, key=SdpaCoeff.indices)] == [
        (1, 1, 3, 1),
        (1, 2, 1, 1),
        (2, 1, 1, 1),
    ]


def test_not_solved_keeps_code():
    error = SdpNotSolved(3)
    assert error.code == 3
    assert str(error) == "Solver returned with code 3"