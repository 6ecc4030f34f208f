import contextvars

import pytest

import config
from config import Settings, check_width, configure, get_settings, settings
from decimal_parser import parse
from errors import IntegerOverflow
from rational import Rational


@pytest.fixture(autouse=True)
def _unbounded():
    with settings(int_bits=None):
        yield


class TestSettings:
    def test_default_is_unbounded(self):
        assert get_settings().int_bits is None
        assert Rational(2**70, 3).numerator() == 2**70

    @pytest.mark.parametrize("bits", [8, 16, 32, 64])
    def test_bounds_come_from_numpy(self, bits):
        info = Settings(int_bits=bits).bounds()
        assert info.min == -(2 ** (bits - 1))
        assert info.max == 2 ** (bits - 1) - 1

    @pytest.mark.parametrize("bits", [0, 7, 128, -8])
    def test_rejects_unsupported_width(self, bits):
        with pytest.raises(ValueError):
            Settings(int_bits=bits)

    def test_context_manager_restores(self):
        with settings(int_bits=16) as s:
            assert s.int_bits == 16
            assert get_settings().int_bits == 16
        assert get_settings().int_bits is None

    def test_configure_is_context_local(self):
        ctx = contextvars.copy_context()
        ctx.run(configure, int_bits=32)
        assert ctx.run(get_settings).int_bits == 32
        assert get_settings().int_bits is None

    def test_env_default(self, monkeypatch):
        monkeypatch.setenv(config.ENV_INT_BITS, "32")
        assert config._from_env() == Settings(int_bits=32)
        monkeypatch.setenv(config.ENV_INT_BITS, "")
        assert config._from_env() == Settings()
        monkeypatch.setenv(config.ENV_INT_BITS, "wide")
        with pytest.raises(ValueError):
            config._from_env()


class TestCheckedWidth:
    def test_check_width(self):
        with settings(int_bits=8):
            check_width(127, -128)
            with pytest.raises(IntegerOverflow) as info:
                check_width(128)
        assert info.value.bits == 8
        assert info.value.value == 128
        assert str(info.value) == "128 does not fit in a signed 8-bit integer"

    def test_overflow_message_for_long_literal(self):
        with settings(int_bits=64):
            with pytest.raises(IntegerOverflow, match="bit value does not fit") as info:
                parse("1" * 5000)
        assert info.value.value == (10**5000 - 1) // 9

    def test_construction_overflow(self):
        Rational(200, 1)
        with settings(int_bits=8):
            with pytest.raises(IntegerOverflow):
                Rational(200, 1)
            with pytest.raises(OverflowError):
                Rational.new_unchecked(1, 300)

    def test_arithmetic_overflow(self):
        with settings(int_bits=8):
            a = Rational(100, 1)
            with pytest.raises(IntegerOverflow):
                a + a
            with pytest.raises(IntegerOverflow):
                a * Rational(2, 1)

    def test_comparison_overflow(self):
        with settings(int_bits=8):
            a, b = Rational(100, 1), Rational(1, 100)
            with pytest.raises(IntegerOverflow):
                a == b
            with pytest.raises(IntegerOverflow):
                a < b

    def test_negating_the_minimum(self):
        with settings(int_bits=8):
            with pytest.raises(IntegerOverflow):
                -Rational(-128, 1)

    def test_parse_overflow(self):
        with settings(int_bits=16):
            assert parse("0.(3)") == Rational(1, 3)
            with pytest.raises(IntegerOverflow):
                parse("0.(12345)")

    def test_64_bit_mode(self):
        with settings(int_bits=64):
            big = Rational(2**62, 1)
            assert big + Rational(1, 1) > big
            with pytest.raises(IntegerOverflow):
                big + big
