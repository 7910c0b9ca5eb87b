"""ConvKin core package."""

from convkin.consistency import (
    ThermodynamicParameters,
    build_consistent_rate,
    consistent_kinetics,
)
from convkin.errors import ConvKinError, InvalidArgumentError, NumericFaultError
from convkin.kinetics import (
    ConvenienceKinetics,
    activation_factor,
    build_rate,
    convenience_rate,
    inhibition_factor,
    saturation_polynomial,
)
from convkin.models import Participant, Reaction, SideTerm, build_side

__all__ = [
    "ConvKinError",
    "InvalidArgumentError",
    "NumericFaultError",
    "ConvenienceKinetics",
    "activation_factor",
    "build_rate",
    "convenience_rate",
    "inhibition_factor",
    "saturation_polynomial",
    "Participant",
    "Reaction",
    "SideTerm",
    "build_side",
    "ThermodynamicParameters",
    "build_consistent_rate",
    "consistent_kinetics",
]
