import pytest

from matrixclock.adc import ADC_MAX, AVERAGE_SIZE, AdcAverager


def test_initial_value_is_zero():
    assert AdcAverager().value() == 0


@pytest.mark.parametrize("sample", [0, 17, 128, ADC_MAX])
def test_constant_samples_average_to_themselves(sample):
    a = AdcAverager()
    for _ in range(AVERAGE_SIZE):
        a.add_sample(sample)
    assert a.value() == sample


def test_oldest_sample_is_replaced():
    a = AdcAverager()
    for s in (200, 10, 20, 30):
        a.add_sample(s)
    b = AdcAverager()
    for s in (10, 20, 30):
        b.add_sample(s)
    assert a.value() == b.value()


def test_value_within_sample_bounds():
    a = AdcAverager()
    samples = [5, 250, 100, 60, 7]
    for s in samples:
        a.add_sample(s)
    recent = samples[-AVERAGE_SIZE:]
    assert min(recent) <= a.value() <= max(recent)


@pytest.mark.parametrize("value", [-1, ADC_MAX + 1])
def test_rejects_out_of_range(value):
    with pytest.raises(ValueError):
        AdcAverager().add_sample(value)