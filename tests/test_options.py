from __future__ import annotations

import pytest

from throttle_async import CANCELED, Computed, Fixed, ThrottleOptions, duration

pytestmark = [pytest.mark.unit]


class TestThrottleOptions:
    def test_defaults(self):
        options = ThrottleOptions()
        assert options.leading is True
        assert options.cancel_obj == CANCELED == "canceled"

    def test_frozen(self):
        options = ThrottleOptions()
        with pytest.raises(AttributeError):
            options.leading = False  # type: ignore[misc]


class TestDuration:
    def test_number_becomes_fixed(self):
        provider = duration(0.5)
        assert provider == Fixed(0.5)
        assert provider() == 0.5

    def test_int_is_converted_to_float(self):
        provider = duration(2)
        assert provider() == 2.0
        assert isinstance(provider(), float)

    def test_callable_becomes_computed(self):
        values = iter([0.1, 0.2])
        provider = duration(lambda: next(values))
        assert isinstance(provider, Computed)
        assert provider() == 0.1
        assert provider() == 0.2

    def test_providers_pass_through(self):
        fixed = Fixed(1.0)
        assert duration(fixed) is fixed
        computed = Computed(lambda: 1.0)
        assert duration(computed) is computed

    def test_negative_wait_is_accepted(self):
        assert duration(-1)() == -1.0

    @pytest.mark.parametrize("wait", ["1", None, True, [1]])
    def test_rejects_non_durations(self, wait):
        with pytest.raises(TypeError):
            duration(wait)
