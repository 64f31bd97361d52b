"""Anti-alias filter coefficients and the preset table.

Coefficients are not designed at runtime. Each preset is a 2 kHz, 3rd-order
Butterworth low-pass synthesized offline for one specific input sample rate,
so the table is keyed by that rate.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from waveprep.exceptions import InvalidCoefficientsError, UnsupportedSampleRateError


@dataclass(frozen=True, slots=True)
class FilterCoefficients:
    """Rational transfer function ``numerator / denominator`` of an IIR filter.

    Args:
        numerator: Feed-forward coefficients (b).
        denominator: Feedback coefficients (a). ``denominator[0]`` must be non-zero.
        design_rate: Input sample rate (Hz) the coefficients were designed for,
            or None when unknown.
        description: Human-readable summary of the design.
    """

    numerator: tuple[float, ...]
    denominator: tuple[float, ...]
    design_rate: float | None = None
    description: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "numerator", tuple(float(c) for c in self.numerator))
        object.__setattr__(self, "denominator", tuple(float(c) for c in self.denominator))
        if not self.numerator:
            raise InvalidCoefficientsError("numerator is empty")
        if not self.denominator:
            raise InvalidCoefficientsError("denominator is empty")
        if self.denominator[0] == 0.0:
            raise InvalidCoefficientsError("denominator[0] must be non-zero")

    def matches_rate(self, sample_rate: float) -> bool:
        """True when the design rate is known and equals ``sample_rate``."""
        return self.design_rate is not None and float(self.design_rate) == float(sample_rate)


_BUTTER3_2KHZ = "2 kHz, 3rd order Butterworth"

PRESETS: dict[int, FilterCoefficients] = {
    44100: FilterCoefficients(
        numerator=(2.21770132e-03, 6.65310395e-03, 6.65310395e-03, 2.21770132e-03),
        denominator=(1.0, -2.43191667, 2.01412566, -0.564467379),
        design_rate=44100,
        description=f"{_BUTTER3_2KHZ} @ 44100 Hz",
    ),
    22050: FilterCoefficients(
        numerator=(1.40997088e-02, 4.22991263e-02, 4.22991263e-02, 1.40997088e-02),
        denominator=(1.0, -1.87302725, 1.30032695, -0.314502036),
        design_rate=22050,
        description=f"{_BUTTER3_2KHZ} @ 22050 Hz",
    ),
    11025: FilterCoefficients(
        numerator=(7.818039e-02, 0.23454117, 0.23454117, 7.818039e-02),
        denominator=(1.0, -0.793433605, 0.501017505, -8.21407799e-02),
        design_rate=11025,
        description=f"{_BUTTER3_2KHZ} @ 11025 Hz",
    ),
}


def supported_rates() -> tuple[int, ...]:
    """Input sample rates with a preset, ascending."""
    return tuple(sorted(PRESETS))


def preset_for_rate(sample_rate: float) -> FilterCoefficients:
    """Return the preset designed for ``sample_rate``.

    Raises:
        UnsupportedSampleRateError: If no preset exists for the rate.
    """
    if float(sample_rate).is_integer():
        preset = PRESETS.get(int(sample_rate))
        if preset is not None:
            return preset
    raise UnsupportedSampleRateError(sample_rate, supported_rates())
